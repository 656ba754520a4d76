"""MyThoughts CLI main entry point."""

import asyncio
import sys

import click
import structlog

from mythoughts.config import settings
from mythoughts.domain import ThoughtRepository
from mythoughts.infrastructure.auth import SessionManager
from mythoughts.infrastructure.database import DatabasePool
from mythoughts.infrastructure.schema import ensure_schema, get_stats, schema_exists
from mythoughts.log_config import configure_logging
from mythoughts.presentation import split_title
from mythoughts.storage import PostgresThoughtStore
from mythoughts.utils.time_service import TimeService

configure_logging(with_context=False)

logger = structlog.get_logger()


async def _open_pool() -> DatabasePool:
    """Open a pool against a database that already has the schema."""
    pool = DatabasePool()
    await pool.initialize()
    async with pool.acquire() as conn:
        exists = await schema_exists(conn)

    if not exists:
        # close() waits for checked-out connections, so release first
        await pool.close()
        click.echo("Error: Database schema missing. Run 'mythoughts-admin db init'.", err=True)
        sys.exit(1)
    return pool


@click.group()
@click.pass_context
def cli(ctx):
    """MyThoughts - personal thoughts, stored per user.

    Administration tool for the PostgreSQL store: schema, sessions and data.
    """
    ctx.ensure_object(dict)
    if settings.storage_backend != "postgres":
        click.echo(
            "Error: the admin tool manages the PostgreSQL store; "
            "set STORAGE_BACKEND=postgres.",
            err=True,
        )
        sys.exit(1)


@cli.group()
@click.pass_context
def db(ctx):
    """Manage the database."""
    pass


@db.command(name="init")
@click.pass_context
def db_init(ctx):
    """Create tables and indexes (safe to run repeatedly)."""
    async def _init():
        pool = DatabasePool()
        try:
            await pool.initialize()
            async with pool.acquire() as conn:
                await ensure_schema(conn)
            click.echo("✓ Database schema is ready")
        finally:
            await pool.close()

    asyncio.run(_init())


@db.command(name="stats")
@click.pass_context
def db_stats(ctx):
    """Show how many thoughts are stored."""
    async def _stats():
        pool = await _open_pool()
        try:
            async with pool.acquire() as conn:
                stats = await get_stats(conn)
            time_service = TimeService(settings.mythoughts_timezone)
            click.echo(f"Thoughts: {stats['thought_count']}")
            click.echo(f"Owners:   {stats['owner_count']}")
            if stats["oldest_thought"]:
                click.echo(f"Oldest:   {time_service.format_datetime(stats['oldest_thought'])}")
                click.echo(f"Newest:   {time_service.format_datetime(stats['newest_thought'])}")
        finally:
            await pool.close()

    asyncio.run(_stats())


@cli.group()
@click.pass_context
def session(ctx):
    """Manage session tokens."""
    pass


@session.command(name="create")
@click.argument("user_id")
@click.option("--description", "-d", help="Description for the session")
@click.pass_context
def session_create(ctx, user_id: str, description: str | None):
    """Create a session token for a user."""
    async def _create():
        pool = await _open_pool()
        try:
            manager = SessionManager(pool)
            token = await manager.create_session(user_id, description)

            click.echo(f"Created session for user '{user_id}':")
            click.echo(f"  {token}")
            click.echo("\n⚠️  Save this token now! It cannot be retrieved later.")
        finally:
            await pool.close()

    asyncio.run(_create())


@session.command(name="list")
@click.argument("user_id")
@click.pass_context
def session_list(ctx, user_id: str):
    """List a user's sessions."""
    async def _list():
        pool = await _open_pool()
        try:
            manager = SessionManager(pool)
            sessions = await manager.list_sessions(user_id)

            if not sessions:
                click.echo(f"No sessions found for user '{user_id}'.")
            else:
                click.echo(f"Sessions for user '{user_id}':")
                for s in sessions:
                    status = "active" if s["active"] else "inactive"
                    last_used = s["last_used"] or "never"
                    click.echo(f"  ID: {s['id']} | {status} | Last used: {last_used}")
                    if s["description"]:
                        click.echo(f"      {s['description']}")
        finally:
            await pool.close()

    asyncio.run(_list())


@session.command(name="revoke")
@click.argument("token")
@click.pass_context
def session_revoke(ctx, token: str):
    """Revoke a session token."""
    async def _revoke():
        pool = await _open_pool()
        try:
            manager = SessionManager(pool)
            if await manager.revoke(token):
                click.echo("✓ Session revoked")
            else:
                click.echo("Error: Session not found or already inactive.", err=True)
                sys.exit(1)
        finally:
            await pool.close()

    asyncio.run(_revoke())


@cli.group()
@click.pass_context
def thoughts(ctx):
    """Inspect stored thoughts."""
    pass


@thoughts.command(name="list")
@click.argument("user_id")
@click.pass_context
def thoughts_list(ctx, user_id: str):
    """List a user's thoughts, newest first."""
    async def _list():
        pool = await _open_pool()
        try:
            repository = ThoughtRepository(PostgresThoughtStore(pool))
            found = await repository.list_by_owner(user_id)
            if not found:
                click.echo(f"No thoughts found for user '{user_id}'.")
                return

            time_service = TimeService(settings.mythoughts_timezone)
            click.echo(f"Found {len(found)} thought(s) for user '{user_id}':")
            for thought in found:
                title, _ = split_title(thought.content)
                created = time_service.format_datetime(thought.created_at)
                click.echo(f"  {thought.id} | {created} | {title}")
        finally:
            await pool.close()

    asyncio.run(_list())


if __name__ == "__main__":
    cli()
