"""Pytest configuration and shared fixtures for API tests."""

import os
import tempfile
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete

# Set test DB before app imports so config/engine use it
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "activity_tracker_test.db"),
)
os.environ.setdefault("RATE_LIMIT_DEFAULT", "10000/minute")

from activity_tracker.api.deps import get_now
from activity_tracker.db.base import Base
from activity_tracker.db.session import engine, init_db
from activity_tracker.main import app

# Friday; current week is Sun 2024-03-10 .. Sat 2024-03-16
FIXED_NOW = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


async def _clear_all():
    """Delete all rows in reverse dependency order so tests start clean."""
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(delete(table))


@pytest_asyncio.fixture
async def clean_db():
    """Create tables if needed and empty them so the test has a clean DB."""
    await init_db()
    await _clear_all()
    yield


@pytest.fixture
def fixed_now():
    """Pin the API clock to FIXED_NOW."""
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    yield FIXED_NOW
    app.dependency_overrides.pop(get_now, None)


@pytest_asyncio.fixture
async def client(clean_db, fixed_now):
    """Yield AsyncClient against a clean DB with a pinned clock."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
