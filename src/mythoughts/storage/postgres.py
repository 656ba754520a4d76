"""PostgreSQL thought store on top of asyncpg."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

import asyncpg
from asyncpg import Connection

from mythoughts.domain.identifiers import IdentifierScheme, ObjectIdScheme
from mythoughts.domain.thought import Thought
from mythoughts.infrastructure.database import DatabasePool

from .base import StorageError

logger = logging.getLogger(__name__)

_COLUMNS = "id, content, user_id, created_at, updated_at"


class PostgresThoughtStore:
    """Thought store persisting to the ``thoughts`` table."""

    def __init__(
        self, db_pool: DatabasePool, identifiers: IdentifierScheme | None = None
    ):
        """Initialize with database pool."""
        self.db_pool = db_pool
        self._identifiers = identifiers or ObjectIdScheme()

    @property
    def name(self) -> str:
        """Return the backend name."""
        return "postgres"

    @property
    def identifiers(self) -> IdentifierScheme:
        """Return the key scheme."""
        return self._identifiers

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[Connection]:
        """Acquire a connection, wrapping driver failures in StorageError."""
        try:
            async with self.db_pool.acquire() as conn:
                yield conn
        except (asyncpg.PostgresError, OSError) as e:
            raise StorageError(f"PostgreSQL operation failed: {e}") from e

    async def insert(self, thought: Thought) -> Thought:
        """Insert a new row and return it as stored."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO thoughts (id, content, user_id, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_COLUMNS}
                """,
                thought.id,
                thought.content,
                thought.owner_id,
                thought.created_at,
                thought.updated_at,
            )
            return self._row_to_thought(row)

    async def find_by_owner(self, owner_id: str) -> list[Thought]:
        """Return an owner's thoughts, newest first."""
        async with self._connection() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {_COLUMNS}
                FROM thoughts
                WHERE user_id = $1
                ORDER BY created_at DESC, id DESC
                """,
                owner_id,
            )
            return [self._row_to_thought(row) for row in rows]

    async def find_by_id(
        self, thought_id: str, owner_id: str | None = None
    ) -> Thought | None:
        """Return one thought or None."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {_COLUMNS}
                FROM thoughts
                WHERE id = $1
                AND ($2::text IS NULL OR user_id = $2)
                """,
                thought_id,
                owner_id,
            )
            return self._row_to_thought(row) if row else None

    async def update_content(
        self,
        thought_id: str,
        content: str,
        now: datetime,
        owner_id: str | None = None,
    ) -> Thought | None:
        """Replace content in a single statement; last write wins."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE thoughts
                SET content = $2,
                    updated_at = GREATEST($3::timestamptz, updated_at + interval '1 microsecond')
                WHERE id = $1
                AND ($4::text IS NULL OR user_id = $4)
                RETURNING {_COLUMNS}
                """,
                thought_id,
                content,
                now,
                owner_id,
            )
            return self._row_to_thought(row) if row else None

    async def delete(
        self, thought_id: str, owner_id: str | None = None
    ) -> Thought | None:
        """Delete a row and return it as it was."""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"""
                DELETE FROM thoughts
                WHERE id = $1
                AND ($2::text IS NULL OR user_id = $2)
                RETURNING {_COLUMNS}
                """,
                thought_id,
                owner_id,
            )
            return self._row_to_thought(row) if row else None

    async def health_check(self) -> dict[str, Any]:
        """Ping the database."""
        try:
            async with self.db_pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return {"healthy": True, "backend": self.name}
        except Exception as e:
            logger.warning(f"PostgreSQL health check failed: {e}")
            return {"healthy": False, "backend": self.name, "error": str(e)}

    def _row_to_thought(self, row: Any) -> Thought:
        """Convert a database row to a Thought object."""
        return Thought(
            id=row["id"],
            content=row["content"],
            owner_id=row["user_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
