from datetime import UTC, datetime
from typing import cast

import redis  # type: ignore[import-untyped]

from authcore.services.auth.dto import RevocationRecord


class RedisRevocationStore:
    """
    Revocation list for both token kinds, keyed by ``jti``.

    Each entry expires with the token it revokes, so Redis does the purging.
    """

    def __init__(self, r: redis.Redis):
        self.r = r

    @staticmethod
    def _k(token_id: str) -> str:
        return f"revoked:{token_id}"

    def contains(self, token_id: str) -> bool:
        return cast(int, self.r.exists(self._k(token_id))) == 1

    def add(self, record: RevocationRecord) -> bool:
        now = datetime.now(UTC).timestamp()
        ttl = max(1, int(record.expires_at.timestamp() - now))
        # nx keeps the first record on repeated revocation
        return bool(self.r.set(self._k(record.token_id), str(record.account_id), ex=ttl, nx=True))

    def purge_expired(self, now: datetime | None = None) -> int:
        """Entries carry their own TTL; nothing to sweep."""
        return 0
