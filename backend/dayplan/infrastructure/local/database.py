"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from datetime import date

from sqlalchemy import Boolean, Column, Date, ForeignKey, String, Text, func, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from dayplan.core.config import get_settings
from dayplan.core.logger import logger


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class TagORM(Base):
    """Tag ORM model."""

    __tablename__ = "tags"

    id = Column(String(36), primary_key=True)
    name = Column(String(100), nullable=False)
    color = Column(String(20), nullable=False)


class TaskORM(Base):
    """Task ORM model."""

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True)
    title = Column(String(500), nullable=False)
    task_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    tag_id = Column(String(36), ForeignKey("tags.id"), nullable=True)
    notes = Column(Text, nullable=False, default="")
    fixed = Column(Boolean, nullable=False, default=False)
    done = Column(Boolean, nullable=False, default=False)


def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(session_factory=None):
    """Initialize database tables and seed demo data into an empty database."""
    settings = get_settings()
    session_factory = session_factory or get_session_factory()
    async with session_factory() as session:
        connection = await session.connection()
        await connection.run_sync(Base.metadata.create_all)
        await session.commit()

    if settings.SEED_DEMO_DATA:
        await seed_if_empty(session_factory)


async def seed_if_empty(session_factory) -> bool:
    """
    Insert demo tags and tasks for today when no tags exist.

    Returns:
        True if data was inserted
    """
    async with session_factory() as session:
        tag_count = await session.scalar(select(func.count()).select_from(TagORM))
        if tag_count:
            return False

        today = date.today()
        session.add_all(
            [
                TagORM(id="tag-work", name="Work", color="#6C8CFF"),
                TagORM(id="tag-family", name="Family", color="#FF8CCF"),
                TagORM(id="tag-errands", name="Errands", color="#7CFFB2"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                TaskORM(
                    id="task-1", title="Deep work block", task_date=today,
                    start_time="08:00", end_time="10:30", tag_id="tag-work",
                    notes="Focus mode, no meetings", fixed=True,
                ),
                TaskORM(
                    id="task-2", title="Family call", task_date=today,
                    start_time="12:30", end_time="13:00", tag_id="tag-family",
                    notes="Check in and plan weekend", fixed=True,
                ),
                TaskORM(
                    id="task-3", title="Grocery pickup", task_date=today,
                    start_time="17:30", end_time="18:00", tag_id="tag-errands",
                    notes="Bring reusable bags", fixed=False,
                ),
                TaskORM(
                    id="task-4", title="Creative learning", task_date=today,
                    start_time="19:00", end_time="20:00", tag_id="tag-work",
                    notes="Portfolio improvements", fixed=False,
                ),
            ]
        )
        await session.commit()
    logger.info("Seeded demo tags and tasks")
    return True
