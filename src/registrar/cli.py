"""CLI entry point for Registrar."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from registrar.config import ConfigError, load_settings
from registrar.logging import setup_logging
from registrar.state_store import StateStore


@click.group()
@click.version_option(package_name="registrar")
def main() -> None:
    """Registrar - student registration and class enrollment service."""
    pass


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a YAML settings file",
)
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
def serve(config_path: Path | None, host: str, port: int) -> None:
    """Run the API server."""
    import uvicorn  # noqa: PLC0415

    from registrar.api import create_app  # noqa: PLC0415

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    uvicorn.run(create_app(settings), host=host, port=port, log_level="info")


@main.command("init-db")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a YAML settings file",
)
def init_db(config_path: Path | None) -> None:
    """Create the database tables if they don't exist."""
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    store = StateStore(settings.db_path, timeout_seconds=settings.db_timeout_seconds)
    store.close()
    click.echo(f"Database ready: {settings.db_path}")


if __name__ == "__main__":
    main()
