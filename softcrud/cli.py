"""CLI entry point: softcrud.

Subcommands:
    softcrud serve --host 0.0.0.0 --port 8000   # Run the API under uvicorn
    softcrud init-db                            # Create all tables
"""

from __future__ import annotations

import asyncio

import click
import uvicorn
from dotenv import load_dotenv

from softcrud.api.deps import create_engine, get_database_url
from softcrud.core.database import Base
from softcrud.core.logging import RENDERERS, setup_logging


async def _init_db(database_url: str) -> list[str]:
    """Create every mapped table and return their names."""
    import softcrud.models  # noqa: F401  (registers tables on Base.metadata)

    engine = create_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()
    return sorted(Base.metadata.tables)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option(
    "--log-format",
    type=click.Choice(sorted(RENDERERS)),
    default=None,
    help="Override SOFTCRUD_LOG_FORMAT",
)
def main(verbose: bool, log_format: str | None) -> None:
    """softcrud — soft-delete CRUD API."""
    load_dotenv()
    setup_logging(level="DEBUG" if verbose else None, fmt=log_format)


@main.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the API server."""
    uvicorn.run(
        "softcrud.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@main.command("init-db")
@click.option("--database-url", default=None, help="Override SOFTCRUD_DATABASE_URL")
def init_db(database_url: str | None) -> None:
    """Create all tables in the configured database."""
    url = database_url or get_database_url()
    tables = asyncio.run(_init_db(url))
    click.echo(f"Created tables: {', '.join(tables)}")


if __name__ == "__main__":
    main()
