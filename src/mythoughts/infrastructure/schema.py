"""Database schema management."""

import logging

from asyncpg import Connection

from mythoughts.domain.base import MAX_CONTENT_LENGTH

logger = logging.getLogger(__name__)


async def ensure_schema(conn: Connection) -> None:
    """Ensure all tables and indexes exist.

    This function is idempotent - safe to call multiple times.
    """
    logger.info("Ensuring database schema exists")

    await conn.execute(f"""
        CREATE TABLE IF NOT EXISTS thoughts (
            id CHAR(24) PRIMARY KEY,
            content TEXT NOT NULL,
            user_id TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

            CONSTRAINT content_not_empty CHECK (char_length(content) > 0),
            CONSTRAINT content_max_length CHECK (char_length(content) <= {MAX_CONTENT_LENGTH}),
            CONSTRAINT user_id_not_empty CHECK (char_length(user_id) > 0)
        )
    """)

    # For listing an owner's thoughts newest-first
    await conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_thoughts_user_created_at
        ON thoughts (user_id, created_at DESC)
    """)

    await conn.execute("""
        CREATE TABLE IF NOT EXISTS sessions (
            id SERIAL PRIMARY KEY,
            token_hash VARCHAR(255) NOT NULL UNIQUE,
            user_id TEXT NOT NULL,
            description TEXT,
            created_at TIMESTAMPTZ DEFAULT NOW(),
            last_used TIMESTAMPTZ,
            active BOOLEAN DEFAULT true
        )
    """)

    await conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_sessions_user_id
        ON sessions (user_id)
    """)

    logger.info("Database schema is ready")


async def schema_exists(conn: Connection) -> bool:
    """Check if the thoughts table exists."""
    exists = await conn.fetchval(
        """
        SELECT EXISTS (
            SELECT 1
            FROM information_schema.tables
            WHERE table_schema = current_schema()
            AND table_name = $1
        )
    """,
        "thoughts",
    )
    return exists


async def get_stats(conn: Connection) -> dict:
    """Get store statistics.

    Returns:
        Dict with thought_count, owner_count, oldest_thought, newest_thought
    """
    stats = await conn.fetchrow("""
        SELECT
            COUNT(*) as thought_count,
            COUNT(DISTINCT user_id) as owner_count,
            MIN(created_at) as oldest_thought,
            MAX(created_at) as newest_thought
        FROM thoughts
    """)

    return (
        dict(stats)
        if stats
        else {
            "thought_count": 0,
            "owner_count": 0,
            "oldest_thought": None,
            "newest_thought": None,
        }
    )
