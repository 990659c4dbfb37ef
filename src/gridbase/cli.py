"""Command-line interface for gridbase.

This module provides the CLI commands for running the API server and
managing tables from the shell.
"""

import asyncio
from typing import NoReturn

import click

from gridbase import __version__
from gridbase.core.config import get_settings
from gridbase.core.logging import LoggingContext, configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="gridbase")
def cli() -> None:
    """gridbase - tables of typed columns with filtered views and boards.

    Settings are read from GRIDBASE_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the gridbase API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting gridbase server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "gridbase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the database tables.

    Use this only in development. In production, run migrations instead.
    """
    from gridbase.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = get_db_manager()
        try:
            if not await db.check_connection():
                raise click.ClickException("Failed to connect to database")
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    # Importing the models registers them on Base.metadata
    import gridbase.infrastructure.persistence.models  # noqa: F401

    with LoggingContext(command="init-db"):
        asyncio.run(initialize())


@cli.command()
def tables() -> None:
    """List tables, newest first."""
    from gridbase.domain.services import TableService
    from gridbase.infrastructure.persistence.database import get_db_manager
    from gridbase.infrastructure.persistence.sql_record_store import SqlRecordStore

    settings = get_settings()
    configure_logging(settings)

    async def run() -> None:
        db = get_db_manager()
        try:
            result = await TableService(SqlRecordStore(db), settings).list_tables()
        finally:
            await db.disconnect()

        if not result.ok:
            raise click.ClickException(result.error.message)
        if not result.value:
            click.echo("No tables.")
            return
        for table in result.value:
            click.echo(f"{table.id}  {table.created_at:%Y-%m-%d %H:%M}  {table.title}")

    with LoggingContext(command="tables"):
        asyncio.run(run())


@cli.command()
@click.argument("title", required=False)
@click.option("--user", "user_id", default=None, help="User id recorded as creator")
def create_table(title: str | None, user_id: str | None) -> None:
    """Create a table with a default 'Name' column."""
    from gridbase.domain.services import TableService
    from gridbase.infrastructure.persistence.database import get_db_manager
    from gridbase.infrastructure.persistence.sql_record_store import SqlRecordStore

    settings = get_settings()
    configure_logging(settings)

    async def run() -> None:
        db = get_db_manager()
        try:
            result = await TableService(SqlRecordStore(db), settings).create_table(
                title, created_by=user_id or settings.default_user_id
            )
        finally:
            await db.disconnect()

        if not result.ok:
            raise click.ClickException(result.error.message)
        click.echo(f"Created table {result.value.id} ({result.value.title})")

    with LoggingContext(command="create-table"):
        asyncio.run(run())


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `gridbase` command and by `python -m gridbase`.
    """
    cli()


if __name__ == "__main__":
    main()
