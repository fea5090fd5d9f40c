"""Factory Boy definitions for the auth tables."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import bcrypt
import factory
from authcore.models.account import AccountModel
from authcore.models.revoked_token import RevokedTokenModel

from tests.factories import BaseFactory


DEFAULT_PASSWORD = "Passw0rd!"


def hash_password(raw: str) -> str:
    """Hash at minimum cost so factories stay fast."""
    return bcrypt.hashpw(raw.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


class AccountFactory(BaseFactory):
    """Build persisted :class:`AccountModel` rows (password ``Passw0rd!`` by default)."""

    class Meta:
        model = AccountModel

    class Params:
        password = DEFAULT_PASSWORD

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Faker("user_name")
    password_hash = factory.LazyAttribute(lambda o: hash_password(o.password))
    active = True


class RevokedTokenFactory(BaseFactory):
    """Build persisted :class:`RevokedTokenModel` rows expiring in one hour."""

    class Meta:
        model = RevokedTokenModel

    token_id = factory.LazyFunction(lambda: uuid.uuid4().hex)
    account_id = factory.LazyFunction(uuid.uuid4)
    revoked_at = factory.LazyFunction(lambda: datetime.now(UTC))
    expires_at = factory.LazyAttribute(lambda o: o.revoked_at + timedelta(hours=1))
