"""CLI commands for schema management."""

from __future__ import annotations

import click

from commerce.infrastructure.bootstrap import engine
from commerce.infrastructure.persistence.database import create_schema


@click.command("init")
def db_init() -> None:
    """Create any missing tables."""
    create_schema(engine())
    click.echo("Schema is up to date.")
