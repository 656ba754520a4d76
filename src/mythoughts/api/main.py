"""Main FastAPI application."""

import sys
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import REGISTRY, generate_latest
from prometheus_fastapi_instrumentator import Instrumentator

from mythoughts.config import settings
from mythoughts.domain import ThoughtRepository, Unauthenticated
from mythoughts.infrastructure.auth import build_session_manager
from mythoughts.infrastructure.database import DatabasePool
from mythoughts.infrastructure.schema import ensure_schema
from mythoughts.log_config import configure_logging
from mythoughts.startup_check import check_configuration, run_startup_checks
from mythoughts.storage import get_thought_store

from .middleware import (
    AuthenticationMiddleware,
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    RequestIDMiddleware,
)

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    if not await run_startup_checks():
        # Startup checks failed - exit cleanly
        print("\nStartup failed. Exiting.\n", flush=True)
        sys.exit(1)

    check_configuration()

    app.state.db_pool = None
    if settings.storage_backend == "postgres":
        logger.info("initializing_database_pool")
        app.state.db_pool = DatabasePool()
        await app.state.db_pool.initialize()
        async with app.state.db_pool.acquire() as conn:
            await ensure_schema(conn)
        logger.info("database_pool_ready")

    store = get_thought_store(app.state.db_pool)
    app.state.thought_repository = ThoughtRepository(store)
    app.state.session_manager = await build_session_manager(app.state.db_pool)
    logger.info(
        "thought_repository_ready",
        backend=store.name,
        identifiers=store.identifiers.name,
        enforce_ownership=settings.enforce_ownership,
    )

    yield

    if app.state.db_pool is not None:
        logger.info("closing_database_pool")
        await app.state.db_pool.close()


# Create the JSON API app
api = FastAPI(
    title="MyThoughts API",
    description="Personal thoughts, stored per user",
    version="0.1.0",
    docs_url="/docs",
    openapi_url="/openapi.json",
)


@api.exception_handler(Unauthenticated)
async def unauthenticated_handler(request: Request, exc: Unauthenticated) -> JSONResponse:
    """Anonymous caller on an endpoint that needs an identity."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "message": "Unauthorized"},
    )


@api.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are a client error (400), not FastAPI's 422."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.info("request_validation_failed", path=request.url.path, error=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": message},
    )


from .routes import contact, health, thoughts  # noqa: E402

api.include_router(health.router)
api.include_router(thoughts.router)
api.include_router(contact.router)

# Create main app and mount the API
app = FastAPI(
    title="MyThoughts",
    description="Personal thoughts, stored per user",
    lifespan=lifespan,
    docs_url=None,  # Disable docs at root
    openapi_url=None,  # Disable openapi at root
    redoc_url=None,  # Disable redoc at root
)

# Share the main app's state with the sub-app
api.state = app.state
app.mount("/api", api)

# Add middleware to main app
app.add_middleware(AuthenticationMiddleware)
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)

# Add Prometheus instrumentation for automatic HTTP metrics
instrumentator = Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    should_respect_env_var=True,  # Respects ENABLE_METRICS env var
    should_instrument_requests_inprogress=True,
    excluded_handlers=["/metrics"],  # Don't track metrics endpoint itself
    env_var_name="ENABLE_METRICS",
    inprogress_name="mythoughts_http_requests_inprogress",
    inprogress_labels=True,
)

instrumentator.instrument(app)


@app.get("/metrics", include_in_schema=False)
async def get_metrics() -> Response:
    """Prometheus metrics endpoint."""
    metrics = generate_latest(REGISTRY)
    return Response(content=metrics, media_type="text/plain; version=0.0.4")
