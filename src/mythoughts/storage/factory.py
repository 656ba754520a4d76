"""Factory for creating thought storage backends."""

from mythoughts.config import settings
from mythoughts.infrastructure.database import DatabasePool

from .base import ThoughtStore
from .memory import InMemoryThoughtStore
from .postgres import PostgresThoughtStore


def get_thought_store(db_pool: DatabasePool | None = None) -> ThoughtStore:
    """Get the configured storage backend.

    Uses STORAGE_BACKEND from settings to determine which backend to
    instantiate. The postgres backend needs the application's pool.

    Raises:
        ValueError: If postgres is configured but no pool was given
    """
    # Settings already validates the backend name
    if settings.storage_backend == "postgres":
        if db_pool is None:
            raise ValueError("STORAGE_BACKEND=postgres requires a database pool")
        return PostgresThoughtStore(db_pool)
    elif settings.storage_backend == "memory":
        return InMemoryThoughtStore()
    else:
        # This should never happen due to validation in settings
        raise ValueError(
            f"Unknown storage backend: {settings.storage_backend}. "
            f"Valid options: postgres, memory"
        )
