"""Tests for the storage backend factory."""

from unittest.mock import MagicMock

import pytest

from mythoughts.config import get_settings
from mythoughts.infrastructure.database import DatabasePool
from mythoughts.storage import InMemoryThoughtStore, PostgresThoughtStore, get_thought_store


def test_memory_backend(monkeypatch):
    monkeypatch.setattr(get_settings(), "storage_backend", "memory")

    store = get_thought_store()

    assert isinstance(store, InMemoryThoughtStore)
    assert store.name == "memory"
    assert store.identifiers.name == "objectid"


def test_postgres_backend_uses_given_pool(monkeypatch):
    monkeypatch.setattr(get_settings(), "storage_backend", "postgres")
    pool = MagicMock(spec=DatabasePool)

    store = get_thought_store(pool)

    assert isinstance(store, PostgresThoughtStore)
    assert store.db_pool is pool


def test_postgres_backend_without_pool(monkeypatch):
    monkeypatch.setattr(get_settings(), "storage_backend", "postgres")

    with pytest.raises(ValueError, match="requires a database pool"):
        get_thought_store()


def test_uninitialized_pool_fails_loudly():
    with pytest.raises(RuntimeError, match="not initialized"):
        _ = DatabasePool("postgresql://localhost/nowhere").pool
