"""Revoked token ids (both access and refresh kinds)."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from authcore.core.extensions import db
from authcore.services.auth.dto import RevocationRecord

from .base import ReprMixin, UUIDPKMixin, as_utc, utcnow


class RevokedTokenModel(UUIDPKMixin, ReprMixin, db.Model):
    """
    One row per revoked ``jti``.

    Fields
    ------
    token_id : str
        The token's ``jti``. Unique.
    account_id : uuid.UUID
        Owner of the token. Not a foreign key so revocations survive
        account deletion until they expire.
    revoked_at : datetime
        When the revocation was recorded.
    expires_at : datetime
        The revoked token's own ``exp``; rows past it may be purged.
    """

    __tablename__ = "revoked_tokens"

    token_id: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    revoked_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("token_id", name="uq_revoked_tokens_token_id"),
        Index("ix_revoked_tokens_expires_at", "expires_at"),
    )

    @classmethod
    def from_domain(cls, record: RevocationRecord) -> RevokedTokenModel:
        return cls(
            token_id=record.token_id,
            account_id=record.account_id,
            revoked_at=as_utc(record.revoked_at),
            expires_at=as_utc(record.expires_at),
        )

    def to_domain(self) -> RevocationRecord:
        return RevocationRecord(
            token_id=self.token_id,
            account_id=self.account_id,
            revoked_at=as_utc(self.revoked_at),  # type: ignore[arg-type]
            expires_at=as_utc(self.expires_at),  # type: ignore[arg-type]
        )
