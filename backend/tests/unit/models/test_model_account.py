# tests/unit/models/test_model_account.py
from __future__ import annotations

import uuid

import pytest
from authcore.models.account import AccountModel
from authcore.services.auth.dto import Account
from sqlalchemy.exc import IntegrityError

from tests.factories.account import AccountFactory


def test_email_is_normalized_on_assignment():
    model = AccountModel(email="  MiXeD@Example.COM ", username="m", password_hash="h")
    assert model.email == "mixed@example.com"


def test_email_is_required():
    with pytest.raises(ValueError):
        AccountModel(email="", username="m", password_hash="h")


def test_defaults_after_insert(session):
    row = AccountFactory()
    assert isinstance(row.id, uuid.UUID)
    assert row.active is True
    assert row.created_at is not None


def test_unique_email_constraint(session):
    AccountFactory(email="dup@example.com")
    session.add(AccountModel(email="DUP@example.com", username="x", password_hash="h"))
    with pytest.raises(IntegrityError):
        session.flush()
    session.rollback()


def test_domain_round_trip_keeps_id():
    account = Account(id=uuid.uuid4(), email="a@example.com", username="a", password_hash="h", active=False)
    model = AccountModel.from_domain(account)

    snapshot = model.to_domain()
    assert snapshot.id == account.id
    assert snapshot.active is False
    assert snapshot.password_hash == "h"


def test_repr_is_short():
    model = AccountModel(email="a@example.com", username="a", password_hash="h")
    assert repr(model).startswith("<AccountModel id=")
