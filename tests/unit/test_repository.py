"""Tests for ThoughtRepository against the in-memory backend."""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from prometheus_client import REGISTRY

from mythoughts.domain import (
    MAX_CONTENT_LENGTH,
    InvalidIdentifier,
    NotFound,
    ObjectIdScheme,
    ThoughtRepository,
    ValidationError,
)
from mythoughts.storage import InMemoryThoughtStore

MISSING_ID = "0123456789abcdef01234567"


@pytest.fixture
def clocked_repository(store, clock) -> ThoughtRepository:
    """Repository whose clock only moves when the test says so."""
    return ThoughtRepository(store, clock=clock)


@pytest.fixture
def mock_store() -> AsyncMock:
    """Backend that records calls and stores nothing."""
    backend = AsyncMock()
    backend.name = "mock"
    backend.identifiers = ObjectIdScheme()
    return backend


class TestCreate:
    """Creating thoughts."""

    @pytest.mark.asyncio
    async def test_create_then_get_roundtrip(self, repository):
        created = await repository.create("user_alice", "Hello\nWorld")
        fetched = await repository.get(created.id)

        assert fetched == created
        assert fetched.content == "Hello\nWorld"
        assert fetched.owner_id == "user_alice"
        assert fetched.created_at == fetched.updated_at

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, repository):
        ids = {(await repository.create("user_alice", f"thought {i}")).id for i in range(50)}
        assert len(ids) == 50

    @pytest.mark.asyncio
    async def test_content_at_limit_accepted(self, repository):
        thought = await repository.create("user_alice", "x" * MAX_CONTENT_LENGTH)
        assert len(thought.content) == MAX_CONTENT_LENGTH

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", None, "x" * (MAX_CONTENT_LENGTH + 1)])
    async def test_invalid_content_stores_nothing(self, mock_store, content):
        repository = ThoughtRepository(mock_store)

        with pytest.raises(ValidationError):
            await repository.create("user_alice", content)

        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_required(self, mock_store):
        repository = ThoughtRepository(mock_store)

        with pytest.raises(ValidationError):
            await repository.create("", "content")

        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_counts_metric(self, repository):
        before = REGISTRY.get_sample_value("mythoughts_thoughts_created_total") or 0

        await repository.create("user_alice", "counted")

        after = REGISTRY.get_sample_value("mythoughts_thoughts_created_total")
        assert after == before + 1


class TestList:
    """Listing an owner's thoughts."""

    @pytest.mark.asyncio
    async def test_list_is_owner_scoped_and_newest_first(self, clocked_repository, clock):
        first = await clocked_repository.create("user_alice", "first")
        clock.advance(minutes=1)
        await clocked_repository.create("user_bob", "bob's")
        clock.advance(minutes=1)
        second = await clocked_repository.create("user_alice", "second")
        clock.advance(minutes=1)
        third = await clocked_repository.create("user_alice", "third")

        thoughts = await clocked_repository.list_by_owner("user_alice")

        assert [t.id for t in thoughts] == [third.id, second.id, first.id]
        assert all(t.owner_id == "user_alice" for t in thoughts)

    @pytest.mark.asyncio
    async def test_same_timestamp_lists_latest_first(self, clocked_repository):
        first = await clocked_repository.create("user_alice", "first")
        second = await clocked_repository.create("user_alice", "second")

        thoughts = await clocked_repository.list_by_owner("user_alice")
        assert [t.id for t in thoughts] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_list_empty_for_unknown_owner(self, repository):
        assert await repository.list_by_owner("nobody") == []


class TestIdentifierCheck:
    """Malformed ids never reach the backend."""

    @pytest.mark.asyncio
    async def test_get_short_circuits(self, mock_store):
        repository = ThoughtRepository(mock_store)

        with pytest.raises(InvalidIdentifier, match="Invalid thought ID format"):
            await repository.get("abc123defg")

        mock_store.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_short_circuits(self, mock_store):
        repository = ThoughtRepository(mock_store)

        with pytest.raises(InvalidIdentifier):
            await repository.update_content("abc123defg", "new content")

        mock_store.update_content.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_short_circuits(self, mock_store):
        repository = ThoughtRepository(mock_store)

        with pytest.raises(InvalidIdentifier):
            await repository.delete("abc123defg")

        mock_store.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_id_check_runs_before_content_check(self, mock_store):
        repository = ThoughtRepository(mock_store)

        with pytest.raises(InvalidIdentifier):
            await repository.update_content("bad", "")

    @pytest.mark.asyncio
    async def test_uppercase_id_finds_record(self, repository):
        created = await repository.create("user_alice", "shout")
        fetched = await repository.get(created.id.upper())
        assert fetched.id == created.id


class TestNotFound:
    """Well-formed ids with no record."""

    @pytest.mark.asyncio
    async def test_get_missing(self, repository):
        with pytest.raises(NotFound, match="Thought not found"):
            await repository.get(MISSING_ID)

    @pytest.mark.asyncio
    async def test_update_missing(self, repository):
        with pytest.raises(NotFound):
            await repository.update_content(MISSING_ID, "content")

    @pytest.mark.asyncio
    async def test_delete_missing(self, repository):
        with pytest.raises(NotFound):
            await repository.delete(MISSING_ID)


class TestUpdate:
    """Replacing content."""

    @pytest.mark.asyncio
    async def test_update_changes_content_and_bumps_updated_at(self, clocked_repository, clock):
        created = await clocked_repository.create("user_alice", "Hello\nWorld")
        clock.advance(seconds=30)

        updated = await clocked_repository.update_content(created.id, "Hi\nThere")

        assert updated.content == "Hi\nThere"
        assert updated.updated_at == created.updated_at + timedelta(seconds=30)
        assert updated.id == created.id
        assert updated.owner_id == created.owner_id
        assert updated.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_updated_at_strictly_advances_with_frozen_clock(self, clocked_repository):
        created = await clocked_repository.create("user_alice", "one")

        updated = await clocked_repository.update_content(created.id, "two")
        again = await clocked_repository.update_content(created.id, "three")

        assert created.updated_at < updated.updated_at < again.updated_at

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", None, "x" * (MAX_CONTENT_LENGTH + 1)])
    async def test_invalid_update_leaves_record_untouched(self, repository, content):
        created = await repository.create("user_alice", "keep me")

        with pytest.raises(ValidationError):
            await repository.update_content(created.id, content)

        assert await repository.get(created.id) == created


class TestDelete:
    """Removing thoughts."""

    @pytest.mark.asyncio
    async def test_delete_returns_pre_deletion_state(self, repository):
        created = await repository.create("user_alice", "Hello")
        updated = await repository.update_content(created.id, "Hi\nThere")

        deleted = await repository.delete(created.id)

        assert deleted == updated
        with pytest.raises(NotFound):
            await repository.get(created.id)

    @pytest.mark.asyncio
    async def test_delete_twice(self, repository):
        created = await repository.create("user_alice", "once")
        await repository.delete(created.id)

        with pytest.raises(NotFound):
            await repository.delete(created.id)


class TestOwnershipScope:
    """Optional owner scoping on single-record operations."""

    @pytest.mark.asyncio
    async def test_other_owner_sees_not_found(self, repository):
        created = await repository.create("user_alice", "private")

        with pytest.raises(NotFound):
            await repository.get(created.id, owner_id="user_bob")
        with pytest.raises(NotFound):
            await repository.update_content(created.id, "hijacked", owner_id="user_bob")
        with pytest.raises(NotFound):
            await repository.delete(created.id, owner_id="user_bob")

        # Still there, unchanged
        assert (await repository.get(created.id)).content == "private"

    @pytest.mark.asyncio
    async def test_owner_can_use_scoped_operations(self, repository):
        created = await repository.create("user_alice", "mine")

        assert await repository.get(created.id, owner_id="user_alice") == created
        updated = await repository.update_content(created.id, "still mine", owner_id="user_alice")
        assert updated.content == "still mine"
        deleted = await repository.delete(created.id, owner_id="user_alice")
        assert deleted.content == "still mine"


@pytest.mark.asyncio
async def test_health_check_delegates_to_backend():
    repository = ThoughtRepository(InMemoryThoughtStore())
    await repository.create("user_alice", "one")

    health = await repository.health_check()

    assert health == {"healthy": True, "backend": "memory", "thought_count": 1}
