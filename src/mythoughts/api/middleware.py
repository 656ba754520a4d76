"""API middleware for identity, request tracking, and error handling."""

import time
import uuid
from collections.abc import Callable
from typing import ClassVar

import structlog
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from mythoughts.domain.base import Unauthenticated
from mythoughts.infrastructure.auth import SessionResolver

logger = structlog.get_logger()

# Session cookie set by the browser front end's identity provider
SESSION_COOKIE = "__session"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add request ID to all requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and add request ID."""
        request_id = str(uuid.uuid4())

        # Store in request state for other middleware/handlers
        request.state.request_id = request_id

        # Add to structlog context
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            # Clear context after request
            structlog.contextvars.clear_contextvars()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log all requests and responses."""

    QUIET_PATHS: ClassVar[set[str]] = {"/api/health", "/metrics"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log request details and response status."""
        start_time = time.time()

        # Skip logging for health checks and scrapes (too noisy)
        if request.url.path in self.QUIET_PATHS:
            return await call_next(request)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else None,
        )

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000

        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Global error handler for consistent error responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Catch exceptions and return consistent error format."""
        try:
            return await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", "unknown")

            # Log the full exception internally
            logger.exception(
                "unhandled_exception",
                exc_type=type(exc).__name__,
                exc_message=str(exc),
            )

            # Return user-friendly error
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "success": False,
                    "message": "Internal Server Error",
                    "request_id": request_id,
                },
            )


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Resolve the caller's session into a user id.

    Never rejects a request: routes that need an identity ask for it
    through the ``get_owner_id`` dependency.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Read the session token and store the user id on the request."""
        request.state.user_id = None

        token = self._extract_token(request)
        if token:
            resolver: SessionResolver = request.app.state.session_manager
            try:
                request.state.user_id = await resolver.resolve(token)
            except Unauthenticated as e:
                # Unknown token is the same as no token
                logger.info("session_not_resolved", reason=str(e))

        return await call_next(request)

    @staticmethod
    def _extract_token(request: Request) -> str | None:
        """Bearer header first, then the session cookie."""
        authorization = request.headers.get("Authorization", "")
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
        return request.cookies.get(SESSION_COOKIE)
