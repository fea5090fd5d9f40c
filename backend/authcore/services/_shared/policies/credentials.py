"""Credential input policies: email grammar and password strength."""

from __future__ import annotations

from marshmallow import ValidationError, validate

MIN_PASSWORD_LENGTH = 8

_email_validator = validate.Email()


def is_valid_email(email: str) -> bool:
    """Return True if ``email`` matches a standard address grammar."""
    if not isinstance(email, str) or not email.strip():
        return False
    try:
        _email_validator(email.strip())
    except ValidationError:
        return False
    return True


def is_strong_password(password: str) -> bool:
    """
    Return True when the password has at least 8 characters and contains
    an uppercase letter, a lowercase letter and a digit.
    """
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return False
    return (
        any(c.isupper() for c in password)
        and any(c.islower() for c in password)
        and any(c.isdigit() for c in password)
    )
