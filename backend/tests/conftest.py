"""
Shared fixtures for Day Planner tests.
"""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from dayplan.infrastructure.local.database import Base


@pytest.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'planner.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def plan_date() -> date:
    return date(2026, 3, 14)
