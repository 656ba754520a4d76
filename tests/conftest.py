"""Shared test fixtures and configuration."""

import os
from collections.abc import AsyncGenerator
from datetime import timedelta

import pendulum
import pytest
from httpx import ASGITransport, AsyncClient

# Tests never talk to a configured database unless they ask for one
os.environ.setdefault("STORAGE_BACKEND", "memory")

from mythoughts.api.main import app  # noqa: E402
from mythoughts.domain import ThoughtRepository  # noqa: E402
from mythoughts.infrastructure.auth import InMemorySessionManager  # noqa: E402
from mythoughts.storage import InMemoryThoughtStore  # noqa: E402
from tests.fixtures.identities import ALICE, ALICE_TOKEN, BOB, BOB_TOKEN  # noqa: E402


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start=None):
        self.current = start or pendulum.datetime(2026, 1, 1, 12, 0, 0, tz="UTC")

    def __call__(self):
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """A frozen clock starting at 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def store() -> InMemoryThoughtStore:
    """Fresh in-memory backend."""
    return InMemoryThoughtStore()


@pytest.fixture
def repository(store: InMemoryThoughtStore) -> ThoughtRepository:
    """Repository over the in-memory backend with the real clock."""
    return ThoughtRepository(store)


@pytest.fixture
async def session_manager() -> InMemorySessionManager:
    """Session manager knowing Alice and Bob."""
    manager = InMemorySessionManager()
    await manager.register(ALICE_TOKEN, ALICE)
    await manager.register(BOB_TOKEN, BOB)
    return manager


@pytest.fixture
async def client(
    repository: ThoughtRepository, session_manager: InMemorySessionManager
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against the app with in-memory state."""
    app.state.thought_repository = repository
    app.state.session_manager = session_manager

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def alice_headers() -> dict:
    """Headers carrying Alice's session."""
    return {"Authorization": f"Bearer {ALICE_TOKEN}"}


@pytest.fixture
def bob_headers() -> dict:
    """Headers carrying Bob's session."""
    return {"Authorization": f"Bearer {BOB_TOKEN}"}
