"""Session tokens for resolving the calling user."""

from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timezone
from typing import Protocol

from mythoughts.config import settings
from mythoughts.domain.base import Unauthenticated
from mythoughts.infrastructure.database import DatabasePool


class SessionResolver(Protocol):
    """Anything that can turn a bearer token into a user id."""

    async def resolve(self, token: str) -> str:
        """Return the user id for ``token`` or raise Unauthenticated."""
        ...


def generate_token() -> str:
    """Generate a new session token."""
    random_part = secrets.token_urlsafe(SessionManager.TOKEN_LENGTH)
    return f"{SessionManager.TOKEN_PREFIX}{random_part}"


def hash_token(token: str) -> str:
    """Hash a session token for storage."""
    return hashlib.sha256(token.encode()).hexdigest()


class SessionManager:
    """Manage session tokens stored in PostgreSQL."""

    # Prefix for all issued tokens to make them identifiable
    TOKEN_PREFIX = "mt_sess_"
    TOKEN_LENGTH = 32  # Number of random bytes (will be longer in base64)

    def __init__(self, db_pool: DatabasePool):
        """Initialize with database pool."""
        self.db_pool = db_pool

    async def create_session(self, user_id: str, description: str | None = None) -> str:
        """Create a new session for a user.

        Returns:
            The session token (only shown once!)
        """
        token = generate_token()
        await self.register(token, user_id, description)
        return token

    async def register(
        self, token: str, user_id: str, description: str | None = None
    ) -> None:
        """Store a known token for a user, reactivating it if present."""
        if not token or not user_id:
            raise ValueError("Token and user id are required")

        async with self.db_pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO sessions (token_hash, user_id, description, active)
                VALUES ($1, $2, $3, true)
                ON CONFLICT (token_hash)
                DO UPDATE SET user_id = EXCLUDED.user_id, active = true
                """,
                hash_token(token),
                user_id,
                description
                or f"Session created at {datetime.now(timezone.utc).isoformat()}",
            )

    async def resolve(self, token: str) -> str:
        """Resolve a session token to its user id.

        Raises:
            Unauthenticated: If the token is empty, unknown or revoked
        """
        if not token:
            raise Unauthenticated("Missing session token")

        async with self.db_pool.acquire() as conn:
            # Update last_used and read the owner in one statement
            user_id = await conn.fetchval(
                """
                UPDATE sessions
                SET last_used = NOW()
                WHERE token_hash = $1 AND active = true
                RETURNING user_id
                """,
                hash_token(token),
            )

        if user_id is None:
            raise Unauthenticated("Session not found or inactive")
        return user_id

    async def list_sessions(self, user_id: str) -> list[dict]:
        """List a user's sessions (without the tokens).

        Returns:
            List of session metadata (id, description, created_at, last_used, active)
        """
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT id, description, created_at, last_used, active
                FROM sessions
                WHERE user_id = $1
                ORDER BY created_at DESC
                """,
                user_id,
            )
            return [dict(row) for row in rows]

    async def revoke(self, token: str) -> bool:
        """Deactivate a session.

        Returns:
            True if a session was deactivated, False if not found
        """
        async with self.db_pool.acquire() as conn:
            result = await conn.execute(
                """
                UPDATE sessions
                SET active = false
                WHERE token_hash = $1 AND active = true
                """,
                hash_token(token),
            )
            return result != "UPDATE 0"


class InMemorySessionManager:
    """Session tokens kept in process memory, for development and tests."""

    def __init__(self):
        self._sessions: dict[str, dict] = {}
        self._next_id = 1

    async def create_session(self, user_id: str, description: str | None = None) -> str:
        """Create a new session for a user and return its token."""
        token = generate_token()
        await self.register(token, user_id, description)
        return token

    async def register(
        self, token: str, user_id: str, description: str | None = None
    ) -> None:
        """Store a known token for a user."""
        if not token or not user_id:
            raise ValueError("Token and user id are required")

        key = hash_token(token)
        existing = self._sessions.get(key)
        if existing:
            existing.update(user_id=user_id, active=True)
            return

        self._sessions[key] = {
            "id": self._next_id,
            "user_id": user_id,
            "description": description,
            "created_at": datetime.now(timezone.utc),
            "last_used": None,
            "active": True,
        }
        self._next_id += 1

    async def resolve(self, token: str) -> str:
        """Resolve a session token to its user id."""
        if not token:
            raise Unauthenticated("Missing session token")

        session = self._sessions.get(hash_token(token))
        if not session or not session["active"]:
            raise Unauthenticated("Session not found or inactive")

        session["last_used"] = datetime.now(timezone.utc)
        return session["user_id"]

    async def list_sessions(self, user_id: str) -> list[dict]:
        """List a user's sessions (without the tokens)."""
        sessions = [
            {k: v for k, v in s.items() if k != "user_id"}
            for s in self._sessions.values()
            if s["user_id"] == user_id
        ]
        return sorted(sessions, key=lambda s: s["created_at"], reverse=True)

    async def revoke(self, token: str) -> bool:
        """Deactivate a session."""
        session = self._sessions.get(hash_token(token))
        if not session or not session["active"]:
            return False
        session["active"] = False
        return True


async def build_session_manager(
    db_pool: DatabasePool | None,
) -> SessionManager | InMemorySessionManager:
    """Create the session manager matching the storage backend.

    Tokens from SESSION_TOKENS are registered on the way.
    """
    if settings.storage_backend == "postgres":
        if db_pool is None:
            raise ValueError("STORAGE_BACKEND=postgres requires a database pool")
        manager: SessionManager | InMemorySessionManager = SessionManager(db_pool)
    else:
        manager = InMemorySessionManager()

    for token, user_id in settings.session_tokens.items():
        await manager.register(token, user_id, description="Configured session")

    return manager
