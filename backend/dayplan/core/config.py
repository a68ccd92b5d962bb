"""
Application configuration using Pydantic Settings.

Advisor and scheduling options are read once and passed explicitly
to the services that need them.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local"] = "local"
    DEBUG: bool = False

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./planner.db"

    # Seed demo tags/tasks into an empty database on startup
    SEED_DEMO_DATA: bool = True

    # ===========================================
    # Advisor (LLM used by plan optimization)
    # ===========================================
    # When disabled, optimization always uses the local fallback scheduler.
    ADVISOR_ENABLED: bool = True

    # Base URL of the inference endpoint.
    # Ollama: "http://localhost:11434"
    # OpenAI-compatible runtime (llama-server etc.): "http://127.0.0.1:11435/v1"
    ADVISOR_ENDPOINT: str = "http://localhost:11434"

    # LiteLLM model identifier, e.g. "ollama/llama3:8b-instruct-q4_K_M"
    # or "openai/embedded" for an OpenAI-compatible runtime
    ADVISOR_MODEL: str = "ollama/llama3:8b-instruct-q4_K_M"

    # Optional API key for the endpoint
    ADVISOR_API_KEY: str = ""

    ADVISOR_TIMEOUT_MS: int = Field(default=60_000, gt=0)
    ADVISOR_TEMPERATURE: float = 0.4

    # ===========================================
    # Scheduling policy overrides
    # ===========================================
    PLACEMENT_START: str = "07:00"
    PLACEMENT_END: str = "23:00"
    ADVISOR_WINDOW_START: str = "07:00"
    ADVISOR_WINDOW_END: str = "22:00"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:5173"]
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
