# authcore/infra/sqlalchemy/account_store.py
from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any
from uuid import UUID

from flask import Flask
from sqlalchemy.exc import IntegrityError

from authcore.infra.appctx import ensure_app_context
from authcore.models.account import AccountModel
from authcore.services._shared.errors import (
    AccountNotFoundError,
    EmailAlreadyExistsError,
    violates,
)
from authcore.services._shared.ports import AccountStore, normalize_email
from authcore.services.auth.dto import Account
from authcore.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

EMAIL_CONSTRAINT = "uq_accounts_email"


class SqlAlchemyAccountStore(AccountStore):
    """
    :class:`AccountStore` backed by the ``accounts`` table.

    Each call runs in its own Unit of Work and returns detached domain
    snapshots, never ORM rows.

    :param app: Application whose context is pushed when the caller has none.
    """

    def __init__(self, app: Flask | None = None) -> None:
        self.app = app

    def _context(self) -> AbstractContextManager[Any]:
        return ensure_app_context(self.app)

    def find_by_id(self, account_id: UUID) -> Account | None:
        with self._context(), SQLAlchemyReadOnlyUnitOfWork() as uow:
            model = uow.accounts.get(account_id)
            return model.to_domain() if model else None

    def find_by_email(self, email: str) -> Account | None:
        with self._context(), SQLAlchemyReadOnlyUnitOfWork() as uow:
            model = uow.accounts.get_by_email(email)
            return model.to_domain() if model else None

    def create(self, account: Account) -> Account:
        """
        Insert ``account``.

        :raises EmailAlreadyExistsError: If the normalized email is taken,
            including when a concurrent insert wins the race.
        """
        try:
            with self._context(), SQLAlchemyUnitOfWork() as uow:
                model = uow.accounts.add(AccountModel.from_domain(account))
                return model.to_domain()
        except IntegrityError as exc:
            if violates(exc, EMAIL_CONSTRAINT):
                raise EmailAlreadyExistsError() from exc
            raise

    def update(self, account: Account) -> Account:
        """
        Persist mutable fields of an existing account.

        :raises ValueError: If ``account.id`` is missing.
        :raises AccountNotFoundError: If no row has that id.
        :raises EmailAlreadyExistsError: If the new email belongs to another account.
        """
        if account.id is None:
            raise ValueError("Account id is required for update.")
        try:
            with self._context(), SQLAlchemyUnitOfWork() as uow:
                model = uow.accounts.get(account.id)
                if model is None:
                    raise AccountNotFoundError()
                uow.accounts.assign_updates(
                    model,
                    {
                        "email": normalize_email(account.email),
                        "username": account.username,
                        "password_hash": account.password_hash,
                        "active": account.active,
                    },
                )
                return model.to_domain()
        except IntegrityError as exc:
            if violates(exc, EMAIL_CONSTRAINT):
                raise EmailAlreadyExistsError() from exc
            raise

    def delete(self, account_id: UUID) -> None:
        """
        :raises AccountNotFoundError: If no row has that id.
        """
        with self._context(), SQLAlchemyUnitOfWork() as uow:
            model = uow.accounts.get(account_id)
            if model is None:
                raise AccountNotFoundError()
            uow.accounts.delete(model)
