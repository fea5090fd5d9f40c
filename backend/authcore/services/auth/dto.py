# authcore/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from uuid import UUID

from authcore.services._shared.errors import InvalidTokenError

BEARER_TOKEN_TYPE = "Bearer"


class TokenKind(str, Enum):
    """Discriminator stored in the ``type`` claim of every token."""

    ACCESS = "access"
    REFRESH = "refresh"


# ----------------------------- Entities ----------------------------------- #


@dataclass(frozen=True, slots=True)
class Account:
    """
    Registered identity as seen by the authentication core.

    :param email: Login email, normalized to lowercase.
    :type email: str
    :param username: Public handle.
    :type username: str
    :param password_hash: Opaque bcrypt hash (never the plaintext).
    :type password_hash: str
    :param active: Whether the account may authenticate.
    :type active: bool
    :param id: Store-assigned identifier (``None`` until persisted).
    :type id: uuid.UUID | None
    :param created_at: Creation timestamp set by the store.
    :type created_at: datetime | None
    :param updated_at: Last update timestamp set by the store.
    :type updated_at: datetime | None
    """

    email: str
    username: str
    password_hash: str = field(repr=False)
    active: bool = True
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class RevocationRecord:
    """
    Persisted marker for a token revoked before its natural expiration.

    :param token_id: The token's ``jti`` claim.
    :type token_id: str
    :param account_id: Owner of the revoked token.
    :type account_id: uuid.UUID
    :param revoked_at: When the revocation happened (UTC).
    :type revoked_at: datetime
    :param expires_at: The token's own expiration; bounds how long the record is kept.
    :type expires_at: datetime
    """

    token_id: str
    account_id: UUID
    revoked_at: datetime
    expires_at: datetime


# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class Credentials:
    """
    Input DTO for login. Exists only for the duration of the call.

    :param email: Email as typed by the user.
    :type email: str
    :param password: Raw password (to be verified, never stored or logged).
    :type password: str
    """

    email: str
    password: str = field(repr=False)


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param expires_in: Access token lifetime in seconds.
    :type expires_in: int
    :param token_type: Always ``"Bearer"``.
    :type token_type: str
    """

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    expires_in: int
    token_type: str = BEARER_TOKEN_TYPE


@dataclass(frozen=True, slots=True)
class ValidatedToken:
    """Result of a successful token validation."""

    account_id: UUID
    kind: TokenKind


# ------------------------- Parsed token variants -------------------------- #


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Claims shared by both token kinds, decoded from a verified JWT."""

    subject: UUID
    token_id: str
    issued_at: datetime
    expiration: datetime
    issuer: str | None
    audience: str | None


@dataclass(frozen=True, slots=True)
class AccessClaims(TokenClaims):
    """Access token claims; carry identity details for convenience."""

    email: str
    username: str

    @property
    def kind(self) -> TokenKind:
        return TokenKind.ACCESS


@dataclass(frozen=True, slots=True)
class RefreshClaims(TokenClaims):
    """Refresh token claims."""

    @property
    def kind(self) -> TokenKind:
        return TokenKind.REFRESH


@dataclass(frozen=True, slots=True)
class MalformedToken:
    """A token that failed verification or does not match any known shape."""

    error: InvalidTokenError


ParsedToken = AccessClaims | RefreshClaims | MalformedToken


# ------------------------------- Config ----------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta = timedelta(hours=1)
    refresh_expires: timedelta = timedelta(days=7)

    @property
    def expires_in(self) -> int:
        """Access lifetime in whole seconds, as reported in :class:`TokenPair`."""
        return int(self.access_expires.total_seconds())
