# authcore/services/auth/service.py
from __future__ import annotations

import logging
import secrets

from authcore.services._shared.base import BaseService, ServiceContext
from authcore.services._shared.errors import (
    AccountInactiveError,
    AccountNotFoundError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidEmailFormatError,
    InvalidTokenError,
    WeakPasswordError,
)
from authcore.services._shared.policies.credentials import is_strong_password, is_valid_email
from authcore.services._shared.ports import AccountStore, PasswordHasher, normalize_email
from authcore.services.auth.dto import Account, Credentials, TokenKind, TokenPair
from authcore.services.auth.token_codec import TokenCodec


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / register / refresh / logout).

    This service verifies credentials via a pluggable PasswordHasher, issues
    and validates JWTs through the TokenCodec, and reads/writes accounts via
    the AccountStore. It performs at most one store mutation per call
    (account insert on register, revocation insert on refresh/logout).
    """

    def __init__(
        self,
        *,
        accounts: AccountStore,
        hasher: PasswordHasher,
        codec: TokenCodec,
        dummy_hash: str | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param accounts: Account persistence port.
        :param hasher: Password hashing port.
        :param codec: Token issuer/validator (owns the revocation store).
        :param dummy_hash: Hash verified when the email is unknown. Generated
            on first use when omitted.
        :param ctx: Optional call-scoped context.
        """
        super().__init__(ctx=ctx)
        self.accounts = accounts
        self.hasher = hasher
        self.codec = codec
        self._dummy_hash = dummy_hash

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, credentials: Credentials) -> TokenPair:
        """
        Authenticate credentials and issue a fresh token pair.

        :param credentials: Email and raw password.
        :returns: Access/Refresh token pair.
        :raises InvalidEmailFormatError: If the email is syntactically invalid.
        :raises InvalidCredentialsError: If the email is unknown or the password is wrong.
        :raises AccountInactiveError: If the account is disabled.
        """
        if not is_valid_email(credentials.email):
            raise InvalidEmailFormatError()

        account = self.accounts.find_by_email(normalize_email(credentials.email))
        if account is None:
            # Same bcrypt cost as a wrong password.
            self.hasher.verify(credentials.password, self._get_dummy_hash())
            self._event(logging.INFO, "auth.login.rejected", reason="invalid_credentials")
            raise InvalidCredentialsError()

        if not account.active:
            self._event(
                logging.INFO,
                "auth.login.rejected",
                reason="account_inactive",
                account_id=str(account.id),
            )
            raise AccountInactiveError()

        if not self.hasher.verify(credentials.password, account.password_hash):
            self._event(
                logging.INFO,
                "auth.login.rejected",
                reason="invalid_credentials",
                account_id=str(account.id),
            )
            raise InvalidCredentialsError()

        pair = self._issue_pair(account)
        self._event(logging.INFO, "auth.login.succeeded", account_id=str(account.id))
        return pair

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, email: str, username: str, password: str) -> Account:
        """
        Create a new active account.

        Does not issue tokens; callers log in explicitly afterwards.

        :returns: The persisted account (normalized email, store-assigned id).
        :raises InvalidEmailFormatError: If the email is syntactically invalid.
        :raises WeakPasswordError: If the password fails the strength policy.
        :raises EmailAlreadyExistsError: If the normalized email is taken.
        """
        if not is_valid_email(email):
            raise InvalidEmailFormatError()
        if not is_strong_password(password):
            raise WeakPasswordError()

        norm_email = normalize_email(email)
        if self.accounts.find_by_email(norm_email) is not None:
            raise EmailAlreadyExistsError()

        # Concurrent duplicates are caught by the store's unique constraint.
        account = self.accounts.create(
            Account(
                email=norm_email,
                username=username,
                password_hash=self.hasher.hash(password),
                active=True,
            )
        )
        self._event(logging.INFO, "auth.register.succeeded", account_id=str(account.id))
        return account

    # ------------------------------------------------------------------ #
    # Refresh with single-use rotation
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new pair and revoke the consumed one.

        :raises InvalidTokenError: If the token is invalid, expired or not a refresh token.
        :raises TokenRevokedError: If the token was already used or logged out.
        :raises AccountNotFoundError: If the owning account no longer exists.
        :raises AccountInactiveError: If the owning account is disabled.
        """
        validated = self.codec.validate(refresh_token)
        if validated.kind is not TokenKind.REFRESH:
            raise InvalidTokenError("Refresh token required")

        account = self._active_account(validated.account_id)
        pair = self._issue_pair(account)
        # Only the caller whose revocation lands gets the pair.
        self.codec.revoke(refresh_token, exclusive=True)
        self._event(logging.INFO, "auth.refresh.succeeded", account_id=str(account.id))
        return pair

    # ------------------------------------------------------------------ #
    # Access validation
    # ------------------------------------------------------------------ #

    def validate_access_token(self, token: str) -> Account:
        """
        Resolve an access token to its active account.

        Refresh tokens are rejected here even when valid.

        :raises InvalidTokenError: If the token is invalid, expired or not an access token.
        :raises TokenRevokedError: If the token was logged out.
        :raises AccountNotFoundError: If the owning account no longer exists.
        :raises AccountInactiveError: If the owning account is disabled.
        """
        validated = self.codec.validate(token)
        if validated.kind is not TokenKind.ACCESS:
            raise InvalidTokenError("Access token required")
        return self._active_account(validated.account_id)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, token: str) -> None:
        """
        Revoke the provided token (access or refresh).

        :raises InvalidTokenError: If the token cannot be recognized.
        """
        self.codec.revoke(token)

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _active_account(self, account_id) -> Account:
        account = self.accounts.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError()
        if not account.active:
            raise AccountInactiveError()
        return account

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(secrets.token_urlsafe(32))
        return self._dummy_hash

    def _issue_pair(self, account: Account) -> TokenPair:
        return TokenPair(
            access_token=self.codec.issue_access(account),
            refresh_token=self.codec.issue_refresh(account),
            expires_in=self.codec.cfg.expires_in,
        )
