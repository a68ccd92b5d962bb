"""
Day Planner - Main Application Entry Point

Timeline layout and plan optimization backend for a personal day planner.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dayplan import __version__
from dayplan.core.config import get_settings
from dayplan.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Day Planner in {settings.ENVIRONMENT} mode...")

    from dayplan.infrastructure.local.database import init_db

    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Day Planner...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Day Planner",
        description="Timeline layout and plan optimization for a personal day planner",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from dayplan.api import optimization, planner

    app.include_router(planner.router, prefix="/api", tags=["planner"])
    app.include_router(optimization.router, prefix="/api", tags=["optimization"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": __version__,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
