from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """
    Port for signing and verifying JWTs.

    ``decode`` MUST verify signature, expiry, issuer and audience, and MUST
    translate library failures into
    :class:`~authcore.services._shared.errors.TokenExpiredError` (expired) or
    :class:`~authcore.services._shared.errors.InvalidTokenError` (anything else).
    """

    def create_access_token(
        self,
        *,
        identity: str,
        jti: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: str,
        jti: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...
