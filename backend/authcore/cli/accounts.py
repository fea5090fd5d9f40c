"""Administrative account commands."""

from __future__ import annotations

import dataclasses

import click
from flask import current_app
from flask.cli import with_appcontext

from authcore.services._shared.errors import AuthError
from authcore.services.auth.dto import Account


def _lookup(email: str) -> Account:
    account = current_app.extensions["authcore"].accounts.find_by_email(email)
    if account is None:
        raise click.ClickException(f"No account registered for {email!r}.")
    return account


@click.group("accounts")
def accounts_cli() -> None:
    """Manage accounts outside the login flow."""


@accounts_cli.command("create")
@click.argument("email")
@click.argument("username")
@click.password_option()
@with_appcontext
def create_command(email: str, username: str, password: str) -> None:
    """Register an active account."""
    from authcore.core.dependencies import build_auth_service

    service = build_auth_service(current_app.extensions["authcore"])
    try:
        account = service.register(email, username, password)
    except AuthError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo(f"Created account {account.id} <{account.email}>.")


@accounts_cli.command("deactivate")
@click.argument("email")
@with_appcontext
def deactivate_command(email: str) -> None:
    """Block logins and refreshes for an account."""
    account = _lookup(email)
    current_app.extensions["authcore"].accounts.update(dataclasses.replace(account, active=False))
    click.echo(f"Deactivated {account.email}.")


@accounts_cli.command("activate")
@click.argument("email")
@with_appcontext
def activate_command(email: str) -> None:
    """Re-enable a deactivated account."""
    account = _lookup(email)
    current_app.extensions["authcore"].accounts.update(dataclasses.replace(account, active=True))
    click.echo(f"Activated {account.email}.")
