"""Storage backends for thought records."""

from .base import StorageError, ThoughtStore
from .factory import get_thought_store
from .memory import InMemoryThoughtStore
from .postgres import PostgresThoughtStore

__all__ = [
    "InMemoryThoughtStore",
    "PostgresThoughtStore",
    "StorageError",
    "ThoughtStore",
    "get_thought_store",
]
