"""VoyageHub CLI — run the API server and prepare its database.

Usage:
    voyagehub serve                  # Run the API with uvicorn
    voyagehub serve --port 9000 --reload
    voyagehub init-db                # Create tables from the ORM models

Configuration comes from VOYAGEHUB_* env vars (or .env), exactly as for
the server itself. VOYAGEHUB_JWT_SECRET must be set.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import click
from pydantic import ValidationError as SettingsError

from voyagehub.config import Settings


def _load_settings() -> Settings:
    try:
        return Settings()
    except SettingsError as e:
        click.secho(f"Error: invalid configuration\n{e}", fg="red", err=True)
        sys.exit(1)


async def _create_tables(settings: Settings) -> None:
    from voyagehub.db.engine import build_engine
    from voyagehub.db.models import Base

    engine = build_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


@click.group()
def cli():
    """VoyageHub travel-journal API."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default from settings).")
@click.option("--port", default=None, type=int, help="Port (default from settings).")
@click.option("--reload", is_flag=True, help="Reload on code changes (development).")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    settings = _load_settings()
    uvicorn.run(
        "voyagehub.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
def init_db():
    """Create all tables (development shortcut for `alembic upgrade head`)."""
    settings = _load_settings()
    asyncio.run(_create_tables(settings))
    click.secho("Database tables created.", fg="green")


if __name__ == "__main__":
    cli()
