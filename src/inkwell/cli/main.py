"""Inkwell CLI: run the API server and manage the database.

Usage:
    inkwell serve                 # Run the API with uvicorn
    inkwell init-db               # Create tables from the ORM models
    inkwell gen-secret            # Print a value for INKWELL_JWT_SECRET
"""

from __future__ import annotations

import asyncio
import secrets

import click

from inkwell import __version__


def _run(coro):
    """Run an async coroutine from a synchronous Click handler."""
    return asyncio.run(coro)


@click.group()
@click.version_option(__version__, prog_name="inkwell")
def cli():
    """Inkwell blogging platform backend."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", default=None, type=int, help="Port (default from settings).")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    from inkwell.config import settings

    uvicorn.run(
        "inkwell.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
def init_db():
    """Create all tables that do not exist yet."""
    from inkwell.config import settings
    from inkwell.db.engine import create_tables, engine

    async def _init():
        try:
            await create_tables()
        finally:
            await engine.dispose()

    _run(_init())
    url = settings.database_url
    click.secho(
        f"Tables created ({url.split('@')[1] if '@' in url else url})",
        fg="green",
    )


@cli.command("gen-secret")
@click.option("--bytes", "nbytes", default=32, show_default=True, type=int)
def gen_secret(nbytes: int):
    """Print a random signing secret.

    Changing the secret logs every user out.
    """
    click.echo(secrets.token_urlsafe(nbytes))


def main():
    cli()


if __name__ == "__main__":
    main()
