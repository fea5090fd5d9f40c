# tests/unit/models/test_model_revoked_token.py
from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from authcore.models.revoked_token import RevokedTokenModel
from sqlalchemy.exc import IntegrityError

from tests.factories.account import RevokedTokenFactory


def test_to_domain_returns_aware_datetimes(session):
    row = RevokedTokenFactory()
    session.expire_all()

    record = session.get(RevokedTokenModel, row.id).to_domain()
    assert record.revoked_at.tzinfo is not None
    assert record.expires_at.tzinfo is not None
    assert record.expires_at > record.revoked_at


def test_token_id_is_unique(session):
    RevokedTokenFactory(token_id="same")
    session.add(
        RevokedTokenModel(
            token_id="same",
            account_id=uuid.uuid4(),
            revoked_at=datetime.now(UTC),
            expires_at=datetime.now(UTC) + timedelta(hours=1),
        )
    )
    with pytest.raises(IntegrityError):
        session.flush()
    session.rollback()
