#!/usr/bin/env python3
"""
Main CLI entry point for the Membergraph server.
"""

import os
import sys
from typing import Any

import click
import uvicorn

from membergraph import __version__
from membergraph.config import settings
from membergraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="membergraph")
def cli() -> None:
    """Membergraph CLI - manage server and database."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, show_default=True, help="Port to bind to")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--backend",
    type=click.Choice(["sqlalchemy", "memory"]),
    default=settings.repository_backend,
    show_default=True,
    help="Repository backend serving the GraphQL resolvers",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    show_default=True,
)
def serve(host: str, port: int, reload: bool, backend: str, log_level: str) -> None:
    """Start the Membergraph API server."""
    configure_logging(debug=(log_level == "debug"))
    logger.info("Starting Membergraph API server", host=host, port=port, backend=backend)

    # The reloader imports the app in a child process, which only sees the environment
    os.environ["MEMBERGRAPH_REPOSITORY_BACKEND"] = backend
    os.environ.setdefault("MEMBERGRAPH_DEBUG", str(log_level == "debug").lower())
    settings.repository_backend = backend

    app: Any = "membergraph.api.app:app"
    if not reload:
        from membergraph.api.app import app

    try:
        uvicorn.run(app, host=host, port=port, reload=reload, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
@click.option(
    "--database-url",
    default=None,
    help="Database URL (default: MEMBERGRAPH_DATABASE_URL)",
)
def init_db(database_url: str | None) -> None:
    """Create the database tables and seed the member types."""
    import asyncio

    from membergraph.database.connection import (
        create_schema,
        get_async_engine,
        get_async_session,
        init_database,
    )
    from membergraph.database.seed_data import ensure_member_types

    configure_logging()

    async def do_init():
        try:
            init_database(database_url)
            await create_schema()
            async with get_async_session() as db:
                await ensure_member_types(db)
            click.echo("✓ Database schema created")
        except Exception as e:
            logger.error("Failed to create database schema", error=str(e))
            click.echo(f"✗ Error creating schema: {e}", err=True)
            sys.exit(1)
        finally:
            await get_async_engine().dispose()

    asyncio.run(do_init())


@cli.command()
@click.option(
    "--database-url",
    default=None,
    help="Database URL (default: MEMBERGRAPH_DATABASE_URL)",
)
def seed(database_url: str | None) -> None:
    """Seed the database with initial data."""
    import asyncio

    from membergraph.database.connection import get_async_engine, get_async_session, init_database
    from membergraph.database.seed_data import seed_initial_data

    configure_logging()

    async def do_seed():
        try:
            init_database(database_url)
            async with get_async_session() as db:
                await seed_initial_data(db)
            click.echo("✓ Database seeded successfully")
        except Exception as e:
            logger.error("Failed to seed database", error=str(e))
            click.echo(f"✗ Error seeding database: {e}", err=True)
            sys.exit(1)
        finally:
            await get_async_engine().dispose()

    asyncio.run(do_seed())


@cli.command("print-schema")
def print_schema() -> None:
    """Print the GraphQL schema in SDL form."""
    from membergraph.graphql.schema import schema

    click.echo(str(schema))


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
