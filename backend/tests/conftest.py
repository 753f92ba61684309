"""
NoteKeeper Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── fixed_clock: Controllable clock for timestamp assertions
    ├── note_store: Empty NoteStore driven by fixed_clock
    ├── sample_note_data: Valid create payload (camelCase, as a client sends it)
    ├── test_app: FastAPI app owning its own empty NoteStore
    └── test_client: HTTPX AsyncClient wired to test_app
"""

import os
from datetime import datetime, timedelta, timezone

# Override settings for testing BEFORE any notekeeper imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_PREFIX"] = "/api/v1"
os.environ["DEFAULT_PAGE_LIMIT"] = "10"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notekeeper.main import create_app
from notekeeper.schemas.note import NoteCreate
from notekeeper.services.note_store import NoteStore


class FixedClock:
    """Returns the same instant until advanced; call it like datetime.now."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def fixed_clock():
    return FixedClock(datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def note_store(fixed_clock):
    return NoteStore(clock=fixed_clock)


@pytest.fixture
def make_note(note_store):
    """
    Factory that creates notes directly in `note_store`.

    Usage:
        def test_x(make_note):
            note = make_note(title="foobar", tags=["work"])
    """

    def _make(title="Note", content="Body", tags=None, due_date=None):
        return note_store.create(
            NoteCreate(title=title, content=content, tags=tags or [], due_date=due_date)
        )

    return _make


@pytest.fixture
def sample_note_data():
    return {
        "title": "Buy milk",
        "content": "2%",
        "tags": ["errand"],
    }


@pytest.fixture
def test_app():
    return create_app()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight to the app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
