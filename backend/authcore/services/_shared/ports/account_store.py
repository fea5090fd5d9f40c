from __future__ import annotations

import dataclasses
import threading
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from authcore.services._shared.errors import AccountNotFoundError, EmailAlreadyExistsError
from authcore.services.auth.dto import Account


def normalize_email(email: str) -> str:
    """Return the canonical (trimmed, lowercase) form used for storage and lookups."""
    return email.strip().lower()


class AccountStore(Protocol):
    """
    Persistence port for :class:`~authcore.services.auth.dto.Account`.

    Implementations MUST normalize emails before matching and MUST enforce
    email uniqueness, raising
    :class:`~authcore.services._shared.errors.EmailAlreadyExistsError` from
    :meth:`create` when the normalized email is taken.
    """

    def find_by_id(self, account_id: UUID) -> Account | None: ...
    def find_by_email(self, email: str) -> Account | None: ...
    def create(self, account: Account) -> Account: ...
    def update(self, account: Account) -> Account: ...
    def delete(self, account_id: UUID) -> None: ...


class InMemoryAccountStore(AccountStore):
    """Thread-safe dict-backed account store used in unit tests and local runs."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Account] = {}
        self._by_email: dict[str, UUID] = {}
        self._lock = threading.Lock()

    def find_by_id(self, account_id: UUID) -> Account | None:
        with self._lock:
            return self._by_id.get(account_id)

    def find_by_email(self, email: str) -> Account | None:
        with self._lock:
            account_id = self._by_email.get(normalize_email(email))
            return self._by_id.get(account_id) if account_id else None

    def create(self, account: Account) -> Account:
        email = normalize_email(account.email)
        now = datetime.now(UTC)
        with self._lock:
            if email in self._by_email:
                raise EmailAlreadyExistsError()
            stored = dataclasses.replace(
                account,
                id=account.id or uuid4(),
                email=email,
                created_at=now,
                updated_at=now,
            )
            self._by_id[stored.id] = stored
            self._by_email[email] = stored.id
            return stored

    def update(self, account: Account) -> Account:
        if account.id is None:
            raise ValueError("Account id is required for update.")
        email = normalize_email(account.email)
        with self._lock:
            current = self._by_id.get(account.id)
            if current is None:
                raise AccountNotFoundError()
            owner = self._by_email.get(email)
            if owner is not None and owner != account.id:
                raise EmailAlreadyExistsError()
            stored = dataclasses.replace(
                account,
                email=email,
                created_at=current.created_at,
                updated_at=datetime.now(UTC),
            )
            del self._by_email[current.email]
            self._by_email[email] = account.id
            self._by_id[account.id] = stored
            return stored

    def delete(self, account_id: UUID) -> None:
        with self._lock:
            current = self._by_id.pop(account_id, None)
            if current is None:
                raise AccountNotFoundError()
            self._by_email.pop(current.email, None)
