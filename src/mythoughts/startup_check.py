"""Startup configuration checks."""

import sys

import asyncpg
import structlog

logger = structlog.get_logger()


async def check_database() -> bool:
    """Check PostgreSQL connectivity and permissions."""
    from mythoughts.config import settings

    print("  Checking PostgreSQL...", flush=True)

    try:
        conn = await asyncpg.connect(settings.database_url)
    except asyncpg.InvalidCatalogNameError:
        print("    ✗ Database does not exist", flush=True)
        print(f"      Create it with: createdb {settings.db_name}", flush=True)
        return False
    except Exception as e:
        print(f"    ✗ Cannot connect to PostgreSQL: {e}", flush=True)
        print("      Check DATABASE_URL environment variable", flush=True)
        return False

    try:
        # Table creation happens at startup, so the user needs CREATE
        can_create = await conn.fetchval(
            "SELECT has_schema_privilege(current_schema(), 'CREATE')"
        )
        if not can_create:
            print("    ✗ Insufficient database permissions", flush=True)
            print("      User needs CREATE privilege on the current schema", flush=True)
            return False
        print("    ✓ Database connection established", flush=True)
        print("    ✓ Table creation permissions verified", flush=True)
        return True
    finally:
        await conn.close()


async def run_startup_checks() -> bool:
    """Run all vital sign checks and return success status."""
    from mythoughts.config import settings

    print("\nStarting MyThoughts - Checking vital signs...\n", flush=True)
    sys.stdout.flush()

    print(f"  Storage backend: {settings.storage_backend}", flush=True)
    if settings.storage_backend == "postgres":
        if not await check_database():
            return False
    else:
        print("    ✓ In-memory store always ready (data is not persisted)", flush=True)

    print("\n✓ All vital signs normal - MyThoughts is ready!\n", flush=True)
    sys.stdout.flush()
    return True


def check_configuration() -> bool:
    """Warn about settings that are legal but probably unintended."""
    from mythoughts.config import settings

    if settings.storage_backend == "memory" and not settings.debug:
        logger.warning(
            "memory_backend_in_production",
            help="Set STORAGE_BACKEND=postgres to persist thoughts",
        )
    if not settings.enforce_ownership:
        logger.info(
            "ownership_not_enforced",
            help="Set ENFORCE_OWNERSHIP=true to scope read/update/delete by id to the owner",
        )
    return True
