# tests/unit/services/test_credential_policies.py
from __future__ import annotations

import pytest
from authcore.services._shared.policies.credentials import is_strong_password, is_valid_email


@pytest.mark.parametrize(
    "email",
    ["user@example.com", "first.last+tag@sub.example.org", "  padded@example.com  ", "UPPER@EXAMPLE.COM"],
)
def test_valid_emails(email):
    assert is_valid_email(email) is True


@pytest.mark.parametrize("email", ["", "   ", "no-at-sign", "two@@example.com", "user@", "user@nodot", None])
def test_invalid_emails(email):
    assert is_valid_email(email) is False


@pytest.mark.parametrize("password", ["Passw0rd", "Str0ngEnough", "aB3aB3aB3", "Ünïcode9x"])
def test_strong_passwords(password):
    assert is_strong_password(password) is True


@pytest.mark.parametrize(
    "password",
    ["", "Pa1", "password1", "PASSWORD1", "Password", "Abcdefg", None],
)
def test_weak_passwords(password):
    assert is_strong_password(password) is False
