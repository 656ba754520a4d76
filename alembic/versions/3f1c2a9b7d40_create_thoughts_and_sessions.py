"""Create thoughts and sessions tables

Revision ID: 3f1c2a9b7d40
Revises:
Create Date: 2026-10-19 20:40:00.000000

"""
from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d40'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the thoughts and sessions tables with their indexes."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS thoughts (
            id CHAR(24) PRIMARY KEY,
            content TEXT NOT NULL,
            user_id TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

            CONSTRAINT content_not_empty CHECK (char_length(content) > 0),
            CONSTRAINT content_max_length CHECK (char_length(content) <= 20000),
            CONSTRAINT user_id_not_empty CHECK (char_length(user_id) > 0)
        )
    """)

    # Owner listing, newest first
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_thoughts_user_created_at
        ON thoughts (user_id, created_at DESC)
    """)

    op.execute("""
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

    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_sessions_user_id
        ON sessions (user_id)
    """)


def downgrade() -> None:
    """Drop both tables."""
    op.execute("DROP TABLE IF EXISTS sessions")
    op.execute("DROP TABLE IF EXISTS thoughts")
