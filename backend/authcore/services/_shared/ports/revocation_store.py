from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Protocol

from authcore.services.auth.dto import RevocationRecord


class RevocationStore(Protocol):
    """
    Abstraction for the set of revoked token identifiers (``jti``).

    ``add`` is an insert-if-absent: it reports whether this call stored the
    record, so exactly one of several concurrent revocations of the same
    ``jti`` sees ``True``. Records whose ``expires_at`` has
    passed carry no information (the token is rejected for expiry anyway) and
    may be dropped at any time.
    """

    def contains(self, token_id: str) -> bool: ...
    def add(self, record: RevocationRecord) -> bool: ...
    def purge_expired(self, now: datetime | None = None) -> int: ...


class InMemoryRevocationStore(RevocationStore):
    """
    Process-local revocation set keyed by ``jti``.

    Expired records are purged on every write so the dict stays bounded by
    the number of live revoked tokens.
    """

    def __init__(self) -> None:
        self._records: dict[str, RevocationRecord] = {}
        self._lock = threading.Lock()

    def contains(self, token_id: str) -> bool:
        with self._lock:
            return token_id in self._records

    def add(self, record: RevocationRecord) -> bool:
        with self._lock:
            self._purge_locked(datetime.now(UTC))
            if record.token_id in self._records:
                return False
            self._records[record.token_id] = record
            return True

    def purge_expired(self, now: datetime | None = None) -> int:
        with self._lock:
            return self._purge_locked(now or datetime.now(UTC))

    def get(self, token_id: str) -> RevocationRecord | None:
        """Return the stored record (if any); handy for inspection in tests."""
        with self._lock:
            return self._records.get(token_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _purge_locked(self, now: datetime) -> int:
        expired = [jti for jti, rec in self._records.items() if rec.expires_at <= now]
        for jti in expired:
            del self._records[jti]
        return len(expired)
