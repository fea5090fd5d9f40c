"""Revoked-token repository."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import delete, select

from authcore.models.base import as_utc
from authcore.models.revoked_token import RevokedTokenModel
from authcore.repositories.base import BaseRepository


class RevokedTokenRepository(BaseRepository[RevokedTokenModel]):
    """Persistence-only repository for :class:`RevokedTokenModel`."""

    model = RevokedTokenModel

    def _filterable_fields(self):
        return {
            "token_id": RevokedTokenModel.token_id,
            "account_id": RevokedTokenModel.account_id,
        }

    def get_by_token_id(self, token_id: str) -> RevokedTokenModel | None:
        stmt = select(RevokedTokenModel).where(RevokedTokenModel.token_id == token_id)
        return cast(RevokedTokenModel | None, self.session.execute(stmt).scalars().first())

    def exists_by_token_id(self, token_id: str) -> bool:
        stmt = select(RevokedTokenModel.id).where(RevokedTokenModel.token_id == token_id)
        return bool(self.session.execute(stmt).first())

    def purge_expired(self, now: datetime) -> int:
        """Delete rows whose ``expires_at`` is at or before ``now``.

        :param now: Cut-off instant (aware).
        :returns: Number of deleted rows.
        :rtype: int
        """
        stmt = delete(RevokedTokenModel).where(RevokedTokenModel.expires_at <= as_utc(now))
        result = self.session.execute(stmt, execution_options={"synchronize_session": False})
        return int(result.rowcount or 0)
