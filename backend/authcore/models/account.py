"""Account model backing the authentication core."""

from __future__ import annotations

from sqlalchemy import Boolean, String, UniqueConstraint, true
from sqlalchemy.orm import Mapped, mapped_column, validates

from authcore.core.extensions import db
from authcore.services.auth.dto import Account

from .base import ReprMixin, TimestampMixin, UUIDPKMixin, as_utc


class AccountModel(UUIDPKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Persistent login identity.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    username : str
        Display name. Not unique.
    password_hash : str
        bcrypt hash; the raw password never reaches this table.
    active : bool
        Disabled accounts cannot log in or refresh.
    created_at / updated_at : datetime
        Timestamps (from mixin).
    """

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())

    __table_args__ = (UniqueConstraint("email", name="uq_accounts_email"),)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize email.

        :raises ValueError: If email is missing.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        return value.strip().lower()

    @classmethod
    def from_domain(cls, account: Account) -> AccountModel:
        """Build a transient row from a domain :class:`Account`."""
        model = cls(
            email=account.email,
            username=account.username,
            password_hash=account.password_hash,
            active=account.active,
        )
        if account.id is not None:
            model.id = account.id
        return model

    def to_domain(self) -> Account:
        """Snapshot the row as an immutable domain :class:`Account`."""
        return Account(
            id=self.id,
            email=self.email,
            username=self.username,
            password_hash=self.password_hash,
            active=self.active,
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
        )
