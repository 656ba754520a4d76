"""Dependency injection for API endpoints."""

from fastapi import Request

from mythoughts.config import settings
from mythoughts.domain import ThoughtRepository, Unauthenticated


async def get_repository(request: Request) -> ThoughtRepository:
    """Get the singleton repository from app state."""
    return request.app.state.thought_repository


async def get_owner_id(request: Request) -> str:
    """Get the authenticated user id.

    The AuthenticationMiddleware has already tried to resolve the
    caller's session; this dependency only insists that it succeeded.

    Raises:
        Unauthenticated: no identity was resolved for this request
    """
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise Unauthenticated("Unauthorized")
    return user_id


async def get_scope_owner_id(request: Request) -> str | None:
    """Owner to scope single-record operations to, if any.

    Returns None (unscoped) unless ENFORCE_OWNERSHIP is on, in which
    case the caller must be authenticated.
    """
    if not settings.enforce_ownership:
        return None
    return await get_owner_id(request)
