"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between stores, the token codec and
the authentication service. Mapping them to transport status codes is the
job of whatever boundary layer consumes :mod:`authcore`.

Every authentication error carries a machine-readable ``kind`` and a
human-readable ``message``.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_accounts_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.

    Notes
    -----
    PostgreSQL reports the constraint name; SQLite only reports the columns
    (``UNIQUE constraint failed: accounts.email``), so the column form derived
    from the ``uq_<table>_<column>`` naming convention is matched as well.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_"):
        body = name[3:]
        # Table and column names may themselves contain underscores.
        return any(
            f"{body[:i]}.{body[i + 1:]}" in message for i, ch in enumerate(body) if ch == "_"
        )
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from stores, the codec or domain logic.
    """

    pass


class AuthErrorKind(str, Enum):
    """Stable identifiers for every authentication failure."""

    INVALID_EMAIL_FORMAT = "invalid_email_format"
    WEAK_PASSWORD = "weak_password"
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_INACTIVE = "account_inactive"
    ACCOUNT_NOT_FOUND = "account_not_found"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_REVOKED = "token_revoked"
    HASHING_FAILURE = "hashing_failure"


class AuthError(ServiceError):
    """
    Structured authentication error.

    :param message: Optional override of the default human-readable message.
    :type message: str | None
    :ivar kind: Machine-readable error identifier.
    :ivar message: Human-readable explanation, safe to show to clients.
    """

    kind: ClassVar[AuthErrorKind]
    default_message: ClassVar[str] = "Authentication error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


# --------------------------------------------------------------------------- #
# Input validation (caller's fault, detected before any store access)
# --------------------------------------------------------------------------- #


class InputValidationError(AuthError):
    """Raised when the request is locally detectable as malformed."""


class InvalidEmailFormatError(InputValidationError):
    kind = AuthErrorKind.INVALID_EMAIL_FORMAT
    default_message = "Invalid email format"


class WeakPasswordError(InputValidationError):
    kind = AuthErrorKind.WEAK_PASSWORD
    default_message = "Password does not meet security requirements"


# --------------------------------------------------------------------------- #
# Authentication state (well-formed but rejected)
# --------------------------------------------------------------------------- #


class AuthenticationError(AuthError):
    """Raised when a well-formed request is rejected."""


class InvalidCredentialsError(AuthenticationError):
    """Used for both unknown email and wrong password (no account enumeration)."""

    kind = AuthErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid email or password"


class AccountInactiveError(AuthenticationError):
    kind = AuthErrorKind.ACCOUNT_INACTIVE
    default_message = "Account is not active"


class AccountNotFoundError(AuthenticationError):
    kind = AuthErrorKind.ACCOUNT_NOT_FOUND
    default_message = "Account not found"


class EmailAlreadyExistsError(AuthenticationError):
    kind = AuthErrorKind.EMAIL_ALREADY_EXISTS
    default_message = "Email address is already registered"


class InvalidTokenError(AuthenticationError):
    kind = AuthErrorKind.INVALID_TOKEN
    default_message = "Invalid token"


class TokenExpiredError(InvalidTokenError):
    """Expired tokens are a specialisation of invalid ones."""

    kind = AuthErrorKind.TOKEN_EXPIRED
    default_message = "Token has expired"


class TokenRevokedError(AuthenticationError):
    kind = AuthErrorKind.TOKEN_REVOKED
    default_message = "Token has been revoked"


# --------------------------------------------------------------------------- #
# Infrastructure-adjacent
# --------------------------------------------------------------------------- #


class HashingFailureError(AuthError):
    """Raised when the password hashing library fails or a stored hash is malformed."""

    kind = AuthErrorKind.HASHING_FAILURE
    default_message = "Password hashing failed"
