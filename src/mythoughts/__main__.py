"""Entry point for running MyThoughts as a module: python -m mythoughts"""

import uvicorn

from mythoughts.config import settings


def main():
    """Run the MyThoughts API server."""
    print(f"Starting MyThoughts on {settings.host}:{settings.port} ({settings.storage_backend} store)")

    # Application logs go through structlog; uvicorn only reports its own problems
    uvicorn.run(
        "mythoughts.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "warning",
        access_log=settings.debug,
    )


if __name__ == "__main__":
    main()
