"""Database schema commands."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from authcore.core.extensions import db

LOGGER = logging.getLogger(__name__)


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    if not config.get("DEBUG") and not config.get("TESTING"):
        raise click.UsageError("The 'flask schema drop' command is restricted to non-production environments.")


@click.group("schema")
def schema_cli() -> None:
    """Create or drop the authentication tables."""


@schema_cli.command("create")
@with_appcontext
def create_command() -> None:
    """Create missing tables (existing ones are left untouched)."""
    db.create_all()
    click.echo("Schema created.")


@schema_cli.command("drop")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def drop_command(yes: bool) -> None:
    """Drop every authentication table."""
    _ensure_non_production()
    if not yes:
        click.confirm("This will DROP all authentication tables. Continue?", abort=True)
    LOGGER.info("Dropping database schema...")
    db.session.remove()
    db.drop_all()
    click.echo("Schema dropped.")
