# authcore/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask import Flask
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import ExpiredSignatureError, PyJWTError

from authcore.infra.appctx import ensure_app_context
from authcore.services._shared.errors import InvalidTokenError, TokenExpiredError
from authcore.services._shared.ports import TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Signing key, algorithm, issuer and audience come from the Flask config
    (``JWT_SECRET_KEY``, ``JWT_ALGORITHM``, ``JWT_ENCODE_ISSUER``,
    ``JWT_DECODE_AUDIENCE``...).

    :param app: Application whose context is pushed when the caller has none
        (e.g. worker threads). Optional inside request/app contexts.
    """

    app: Flask | None = None

    def _context(self) -> AbstractContextManager[Any]:
        return ensure_app_context(self.app)

    def _merge_claims(self, base: dict[str, Any] | None, extra: dict[str, Any]) -> dict[str, Any]:
        """Merge claim dictionaries without mutating inputs."""
        merged = dict(base or {})
        merged.update(extra)
        return merged

    def create_access_token(
        self,
        *,
        identity: str,
        jti: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        # Claim overrides replace the library's own random jti.
        claims = self._merge_claims(additional_claims, {"jti": jti})
        with self._context():
            return cast(
                str,
                _create_access(
                    identity=identity,
                    additional_claims=claims,
                    expires_delta=expires_delta,
                    fresh=True,
                ),
            )

    def create_refresh_token(
        self,
        *,
        identity: str,
        jti: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        from flask_jwt_extended import create_refresh_token as _create_refresh

        claims = self._merge_claims(additional_claims, {"jti": jti})
        with self._context():
            return cast(
                str,
                _create_refresh(
                    identity=identity,
                    additional_claims=claims,
                    expires_delta=expires_delta,
                ),
            )

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature, ``exp``, ``iss`` and ``aud`` and return the claims.

        :raises TokenExpiredError: If the signature is valid but ``exp`` passed.
        :raises InvalidTokenError: For any other verification failure.
        """
        from flask_jwt_extended import decode_token

        try:
            with self._context():
                return cast(dict[str, Any], decode_token(token))
        except ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError() from exc
