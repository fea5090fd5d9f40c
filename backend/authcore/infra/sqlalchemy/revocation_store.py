# authcore/infra/sqlalchemy/revocation_store.py
from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from datetime import UTC, datetime
from typing import Any

from flask import Flask
from sqlalchemy.exc import IntegrityError

from authcore.infra.appctx import ensure_app_context
from authcore.models.revoked_token import RevokedTokenModel
from authcore.services._shared.errors import violates
from authcore.services._shared.ports import RevocationStore
from authcore.services.auth.dto import RevocationRecord
from authcore.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

TOKEN_ID_CONSTRAINT = "uq_revoked_tokens_token_id"

log = logging.getLogger(__name__)


class SqlAlchemyRevocationStore(RevocationStore):
    """
    :class:`RevocationStore` backed by the ``revoked_tokens`` table.

    :param app: Application whose context is pushed when the caller has none.
    :param purge_on_write: Delete expired rows in the same transaction as
        every insert, keeping the table bounded without a scheduler.
    """

    def __init__(self, app: Flask | None = None, *, purge_on_write: bool = True) -> None:
        self.app = app
        self.purge_on_write = purge_on_write

    def _context(self) -> AbstractContextManager[Any]:
        return ensure_app_context(self.app)

    def contains(self, token_id: str) -> bool:
        with self._context(), SQLAlchemyReadOnlyUnitOfWork() as uow:
            return uow.revoked_tokens.exists_by_token_id(token_id)

    def get(self, token_id: str) -> RevocationRecord | None:
        with self._context(), SQLAlchemyReadOnlyUnitOfWork() as uow:
            model = uow.revoked_tokens.get_by_token_id(token_id)
            return model.to_domain() if model else None

    def add(self, record: RevocationRecord) -> bool:
        """
        Store ``record`` unless its id is already revoked.

        :returns: ``True`` if this call inserted the row, ``False`` when a
            revocation for the same ``token_id`` already existed.
        """
        try:
            with self._context(), SQLAlchemyUnitOfWork() as uow:
                if uow.revoked_tokens.exists_by_token_id(record.token_id):
                    return False
                uow.revoked_tokens.add(RevokedTokenModel.from_domain(record))
                if self.purge_on_write:
                    purged = uow.revoked_tokens.purge_expired(datetime.now(UTC))
                    if purged:
                        log.debug("revocations.purged", extra={"event": "revocations.purged", "purged": purged})
        except IntegrityError as exc:
            # A concurrent revocation of the same id committed first.
            if not violates(exc, TOKEN_ID_CONSTRAINT):
                raise
            return False
        return True

    def purge_expired(self, now: datetime | None = None) -> int:
        """
        Delete revocations whose token has expired.

        :param now: Cut-off instant. Defaults to the current UTC time.
        :returns: Number of deleted rows.
        """
        cutoff = now or datetime.now(UTC)
        with self._context(), SQLAlchemyUnitOfWork() as uow:
            return uow.revoked_tokens.purge_expired(cutoff)
