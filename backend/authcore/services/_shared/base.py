# authcore/services/_shared/base.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting call-scoped data (request ids, caller identity).

    :param request_id: Correlation id for logging/tracing.
    :param actor_id: Authenticated caller identifier, when known.
    """

    request_id: str | None = None
    actor_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hold the optional call-scoped :class:`ServiceContext`.
    * Provide a UTC clock and a structured logging helper.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services hold only injected collaborators and immutable settings, so a
      single instance can be shared across threads.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional call-scoped context (tracing, caller).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()
        self.log = logging.getLogger(type(self).__module__)

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(UTC)

    def _event(self, level: int, event: str, **fields: Any) -> None:
        """Emit ``event`` with structured ``extra`` fields (never secrets)."""
        fields.setdefault("event", event)
        if self.ctx.request_id is not None:
            fields.setdefault("request_id", self.ctx.request_id)
        self.log.log(level, event, extra=fields)
