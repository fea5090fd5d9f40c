# tests/unit/repositories/test_repository_revoked_token.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from authcore.repositories.revoked_token import RevokedTokenRepository

from tests.factories.account import RevokedTokenFactory


@pytest.fixture()
def repo(session) -> RevokedTokenRepository:
    return RevokedTokenRepository(session=session)


def test_lookup_by_token_id(repo):
    row = RevokedTokenFactory(token_id="abc")
    assert repo.exists_by_token_id("abc") is True
    assert repo.get_by_token_id("abc") is row
    assert repo.exists_by_token_id("zzz") is False


def test_purge_expired_uses_inclusive_cutoff(repo):
    now = datetime.now(UTC)
    RevokedTokenFactory(token_id="at-cutoff", expires_at=now)
    RevokedTokenFactory(token_id="before", expires_at=now - timedelta(seconds=1))
    RevokedTokenFactory(token_id="after", expires_at=now + timedelta(seconds=1))

    assert repo.purge_expired(now) == 2
    assert repo.exists_by_token_id("after") is True
    assert repo.exists_by_token_id("at-cutoff") is False


def test_purge_expired_accepts_naive_utc(repo):
    RevokedTokenFactory(token_id="old", expires_at=datetime.now(UTC) - timedelta(hours=1))
    assert repo.purge_expired(datetime.now(UTC).replace(tzinfo=None)) == 1
