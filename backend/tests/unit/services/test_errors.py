# tests/unit/services/test_errors.py
from __future__ import annotations

import pytest
from authcore.services._shared.errors import (
    AuthError,
    AuthErrorKind,
    AuthenticationError,
    HashingFailureError,
    InputValidationError,
    InvalidCredentialsError,
    InvalidEmailFormatError,
    InvalidTokenError,
    ServiceError,
    TokenExpiredError,
    TokenRevokedError,
    WeakPasswordError,
    violates,
)
from sqlalchemy.exc import IntegrityError


def _integrity(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


def test_errors_carry_kind_and_message():
    err = InvalidCredentialsError()
    assert err.kind is AuthErrorKind.INVALID_CREDENTIALS
    assert err.message == "Invalid email or password"
    assert str(err) == err.message
    assert "invalid_credentials" in repr(err)


def test_message_can_be_overridden():
    assert InvalidTokenError("Refresh token required").message == "Refresh token required"


@pytest.mark.parametrize(
    ("cls", "base"),
    [
        (InvalidEmailFormatError, InputValidationError),
        (WeakPasswordError, InputValidationError),
        (TokenExpiredError, InvalidTokenError),
        (TokenRevokedError, AuthenticationError),
        (HashingFailureError, AuthError),
        (AuthError, ServiceError),
    ],
)
def test_taxonomy(cls, base):
    assert issubclass(cls, base)


def test_every_error_kind_is_distinct():
    kinds = [member.value for member in AuthErrorKind]
    assert len(kinds) == len(set(kinds))


def test_violates_matches_constraint_name():
    exc = _integrity('duplicate key value violates unique constraint "uq_accounts_email"')
    assert violates(exc, "uq_accounts_email")


def test_violates_matches_sqlite_column_form():
    assert violates(_integrity("UNIQUE constraint failed: accounts.email"), "uq_accounts_email")
    assert violates(
        _integrity("UNIQUE constraint failed: revoked_tokens.token_id"), "uq_revoked_tokens_token_id"
    )


def test_violates_rejects_other_constraints():
    assert not violates(_integrity("UNIQUE constraint failed: accounts.username"), "uq_accounts_email")
    assert not violates(_integrity("NOT NULL constraint failed: accounts.email"), "ck_accounts_x")
