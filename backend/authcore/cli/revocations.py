"""Maintenance commands for the revocation list."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

LOGGER = logging.getLogger(__name__)


@click.group("revocations")
def revocations_cli() -> None:
    """Inspect and maintain revoked tokens."""


@revocations_cli.command("purge")
@with_appcontext
def purge_command() -> None:
    """Delete revocations whose token has already expired."""
    deps = current_app.extensions["authcore"]
    purged = deps.revocations.purge_expired()
    LOGGER.info("revocations.purged", extra={"event": "revocations.purged", "purged": purged})
    click.echo(f"Purged {purged} expired revocation(s).")
