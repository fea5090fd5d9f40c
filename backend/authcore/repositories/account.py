"""Account repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from authcore.models.account import AccountModel
from authcore.repositories.base import BaseRepository


class AccountRepository(BaseRepository[AccountModel]):
    """Persistence-only repository for :class:`AccountModel`.

    Never hashes passwords or issues tokens; those live in the services.
    """

    model = AccountModel

    def _filterable_fields(self):
        return {
            "email": AccountModel.email,
            "username": AccountModel.username,
            "active": AccountModel.active,
        }

    def _updatable_fields(self):
        return {"email", "username", "password_hash", "active"}

    def get_by_email(self, email: str) -> AccountModel | None:
        """Fetch an account by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Account row or ``None`` when not found.
        :rtype: AccountModel | None
        """
        stmt = select(AccountModel).where(AccountModel.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(AccountModel | None, result)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when an account with the provided email exists."""
        stmt = select(AccountModel.id).where(AccountModel.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())
