# authcore/services/auth/token_codec.py
"""
TokenCodec
==========

Issues, classifies, validates and revokes the two token kinds of the
authentication core.

Classification reads the ``type`` discriminator from a claim set that the
:class:`~authcore.services._shared.ports.TokenProvider` has already verified
(signature, ``exp``, ``iss``, ``aud``) exactly once, and produces a tagged
variant:

- :class:`~authcore.services.auth.dto.AccessClaims`
- :class:`~authcore.services.auth.dto.RefreshClaims`
- :class:`~authcore.services.auth.dto.MalformedToken`

Both kinds carry a ``jti`` and revocation is always keyed by it; the raw
token string is never stored.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from authcore.services._shared.base import BaseService, ServiceContext
from authcore.services._shared.errors import (
    InvalidTokenError,
    TokenExpiredError,
    TokenRevokedError,
)
from authcore.services._shared.ports import RevocationStore, TokenProvider
from authcore.services.auth.dto import (
    AccessClaims,
    Account,
    AuthTokenConfig,
    MalformedToken,
    ParsedToken,
    RefreshClaims,
    RevocationRecord,
    TokenKind,
    ValidatedToken,
)


class TokenCodec(BaseService):
    """
    Token issuer and validator backed by a signing port and a revocation store.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        revocations: RevocationStore,
        token_cfg: AuthTokenConfig | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param token_provider: Adapter that signs and verifies JWTs.
        :param revocations: Store of revoked token ids.
        :param token_cfg: Access/refresh lifetimes (1 hour / 7 days by default).
        :param ctx: Optional call-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.revocations = revocations
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue_access(self, account: Account) -> str:
        """
        Sign an access token for ``account``.

        :raises ValueError: If the account has not been persisted yet.
        """
        return self.tokens.create_access_token(
            identity=self._identity(account),
            jti=self.new_token_id(),
            additional_claims={"email": account.email, "username": account.username},
            expires_delta=self.cfg.access_expires,
        )

    def issue_refresh(self, account: Account) -> str:
        """
        Sign a refresh token for ``account`` with a fresh random ``jti``.

        :raises ValueError: If the account has not been persisted yet.
        """
        return self.tokens.create_refresh_token(
            identity=self._identity(account),
            jti=self.new_token_id(),
            expires_delta=self.cfg.refresh_expires,
        )

    @staticmethod
    def new_token_id() -> str:
        """Generate a new random token identifier."""
        return uuid4().hex

    # ------------------------------------------------------------------ #
    # Classification
    # ------------------------------------------------------------------ #

    def parse(self, token: str) -> ParsedToken:
        """
        Verify ``token`` once and classify it by its ``type`` claim.

        Never raises for bad input: every failure is reported as a
        :class:`MalformedToken` carrying the error to surface.
        """
        if not isinstance(token, str) or not token:
            return MalformedToken(InvalidTokenError())
        try:
            claims = self.tokens.decode(token)
        except InvalidTokenError as exc:
            return MalformedToken(exc)

        try:
            return self._build_claims(claims)
        except (KeyError, TypeError, ValueError):
            return MalformedToken(InvalidTokenError())

    def _build_claims(self, claims: dict[str, Any]) -> ParsedToken:
        kind = claims.get("type")
        common = {
            "subject": UUID(str(claims["sub"])),
            "token_id": _required_str(claims, "jti"),
            "issued_at": _timestamp(claims["iat"]),
            "expiration": _timestamp(claims["exp"]),
            "issuer": _optional_str(claims.get("iss")),
            "audience": _optional_str(claims.get("aud")),
        }
        if kind == TokenKind.ACCESS.value:
            return AccessClaims(
                **common,
                email=_required_str(claims, "email"),
                username=_required_str(claims, "username"),
            )
        if kind == TokenKind.REFRESH.value:
            return RefreshClaims(**common)
        return MalformedToken(InvalidTokenError("Unknown token type"))

    # ------------------------------------------------------------------ #
    # Validation / revocation
    # ------------------------------------------------------------------ #

    def validate(self, token: str) -> ValidatedToken:
        """
        Validate ``token`` of either kind.

        :returns: The owning account id and the recognized kind.
        :raises TokenExpiredError: If the token's ``exp`` has passed.
        :raises InvalidTokenError: If the token is not a well-formed signed token.
        :raises TokenRevokedError: If the token's ``jti`` has been revoked.
        """
        parsed = self.parse(token)
        if isinstance(parsed, MalformedToken):
            self._event(
                logging.INFO,
                "auth.token.rejected",
                reason=parsed.error.kind.value,
            )
            raise parsed.error

        if self.revocations.contains(parsed.token_id):
            self._event(
                logging.INFO,
                "auth.token.rejected",
                reason=TokenRevokedError.kind.value,
                account_id=str(parsed.subject),
                token_kind=parsed.kind.value,
            )
            raise TokenRevokedError()

        return ValidatedToken(account_id=parsed.subject, kind=parsed.kind)

    def revoke(self, token: str, *, exclusive: bool = False) -> RevocationRecord:
        """
        Revoke ``token`` (either kind) until its own expiration.

        :param exclusive: Require this call to be the one that stores the
            revocation. Used to consume single-use tokens.
        :returns: The revocation record built for ``token``.
        :raises InvalidTokenError: If the token is malformed, unsigned or expired.
        :raises TokenRevokedError: If ``exclusive`` and the token was already revoked.
        """
        parsed = self.parse(token)
        if isinstance(parsed, MalformedToken):
            raise InvalidTokenError()

        record = RevocationRecord(
            token_id=parsed.token_id,
            account_id=parsed.subject,
            revoked_at=self.now_utc(),
            expires_at=parsed.expiration,
        )
        inserted = self.revocations.add(record)
        if exclusive and not inserted:
            self._event(
                logging.INFO,
                "auth.token.rejected",
                reason=TokenRevokedError.kind.value,
                account_id=str(parsed.subject),
                token_kind=parsed.kind.value,
            )
            raise TokenRevokedError()
        self._event(
            logging.INFO,
            "auth.token.revoked",
            account_id=str(parsed.subject),
            token_kind=parsed.kind.value,
        )
        return record

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _identity(account: Account) -> str:
        if account.id is None:
            raise ValueError("Cannot issue tokens for an account without an id.")
        return str(account.id)


def _required_str(claims: dict[str, Any], key: str) -> str:
    value = claims[key]
    if not isinstance(value, str) or not value:
        raise ValueError(f"Claim {key!r} must be a non-empty string.")
    return value


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, list | tuple):
        return str(value[0]) if value else None
    return str(value)


def _timestamp(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeError("Time claims must be numeric.")
    return datetime.fromtimestamp(value, tz=UTC)
