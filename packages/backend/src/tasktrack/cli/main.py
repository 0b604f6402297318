"""TaskTrack CLI — run the server and manage the development database.

Usage:
    tasktrack serve                     # Run the API with uvicorn
    tasktrack init-db                   # Create all tables (dev only; use alembic elsewhere)
    tasktrack seed                      # Wipe and load sample users/projects/tasks
    tasktrack purge-sessions            # Delete expired login sessions

The database commands take --database-url (default: TASKTRACK_DATABASE_URL).
"""

from __future__ import annotations

import asyncio
import sys
from typing import Awaitable, Callable, Optional

import click
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tasktrack.config import settings

database_url_option = click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy async URL (default: TASKTRACK_DATABASE_URL).",
)


def _with_session(
    database_url: Optional[str], fn: Callable[[AsyncSession], Awaitable]
):
    """Open a throwaway engine, run fn with a session, dispose the engine."""
    from tasktrack.db.engine import build_engine

    async def runner():
        engine = build_engine(database_url or settings.database_url)
        try:
            factory = async_sessionmaker(engine, expire_on_commit=False)
            async with factory() as session:
                return await fn(session)
        finally:
            await engine.dispose()

    try:
        return asyncio.run(runner())
    except SQLAlchemyError as e:
        click.secho(f"Database error: {e}", fg="red", err=True)
        sys.exit(1)


@click.group()
def cli():
    """TaskTrack — projects and tasks, per user."""


@cli.command()
@click.option("--host", default=None, help="Bind address.")
@click.option("--port", default=None, type=int, help="Bind port.")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "tasktrack.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
@database_url_option
def init_db(database_url: Optional[str]):
    """Create all tables from the ORM models."""
    from tasktrack.db.models import Base

    async def create(session: AsyncSession):
        conn = await session.connection()
        await conn.run_sync(Base.metadata.create_all)
        await session.commit()

    _with_session(database_url, create)
    click.secho("Tables created.", fg="green")


@cli.command()
@database_url_option
def seed(database_url: Optional[str]):
    """Wipe all data and insert the sample dataset."""
    from tasktrack.db.seed import seed_database

    counts = _with_session(database_url, seed_database)
    click.secho(
        f"Seeding complete: {counts['users']} users, "
        f"{counts['projects']} projects, {counts['tasks']} tasks.",
        fg="green",
    )


@cli.command("purge-sessions")
@database_url_option
def purge_sessions(database_url: Optional[str]):
    """Delete expired login sessions."""
    from tasktrack.auth.sessions import purge_expired_sessions

    async def purge(session: AsyncSession):
        removed = await purge_expired_sessions(session)
        await session.commit()
        return removed

    removed = _with_session(database_url, purge)
    click.echo(f"Removed {removed} expired session(s).")


if __name__ == "__main__":
    cli()
