from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Awaitable, Callable

from domain_failover.metrics import increment_probe

logger = logging.getLogger(__name__)

Prober = Callable[[str], Awaitable[bool]]


class AliasState(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class AliasRecord:
    """Health state of one alias endpoint.

    Two records are equal when their alias names are equal, so a directory can
    carry a record over from one alias list to the next regardless of object
    identity. Mutations go through a per-record lock; the probe collaborator
    itself is awaited outside of it.
    """

    def __init__(
        self,
        alias: str,
        primary: str,
        prober: Prober,
        offline_after_failures: int = 1,
    ):
        self._alias = alias
        self._primary = primary
        self._prober = prober
        self._offline_after_failures = max(1, int(offline_after_failures))
        self._lock = threading.Lock()
        self._state = AliasState.ONLINE
        self._failed_attempts = 0
        self._last_checked_at: datetime | None = None
        self._last_error: str | None = None

    @property
    def alias(self) -> str:
        return self._alias

    @property
    def primary(self) -> str:
        return self._primary

    @property
    def state(self) -> AliasState:
        return self._state

    @property
    def failed_attempts(self) -> int:
        return self._failed_attempts

    @property
    def is_online(self) -> bool:
        return self._state is AliasState.ONLINE

    @property
    def last_checked_at(self) -> datetime | None:
        return self._last_checked_at

    @property
    def last_error(self) -> str | None:
        return self._last_error

    async def probe(self) -> bool:
        """Check reachability of the alias and record the outcome.

        A falsy result or an exception from the prober both count as a failed
        attempt. Returns whether the alias was reachable.
        """
        error: str | None = None
        try:
            reachable = bool(await self._prober(self._alias))
        except Exception as exc:
            reachable = False
            error = f"{type(exc).__name__}: {exc}"

        if reachable:
            self._record_success()
            logger.debug("Alias reachable: primary=%s alias=%s", self._primary, self._alias)
        else:
            failures = self._record_failure(error or "unreachable")
            logger.warning(
                "Alias probe failed: primary=%s alias=%s failed_attempts=%d error=%s",
                self._primary, self._alias, failures, error or "unreachable",
            )

        increment_probe(primary=self._primary, reachable=reachable)
        return reachable

    def mark_offline(self) -> None:
        with self._lock:
            self._state = AliasState.OFFLINE

    def reset(self) -> None:
        with self._lock:
            self._state = AliasState.ONLINE
            self._failed_attempts = 0
            self._last_error = None

    def _record_success(self) -> None:
        with self._lock:
            self._state = AliasState.ONLINE
            self._failed_attempts = 0
            self._last_error = None
            self._last_checked_at = datetime.now(tz=UTC)

    def _record_failure(self, error: str) -> int:
        with self._lock:
            self._failed_attempts += 1
            if self._failed_attempts >= self._offline_after_failures:
                self._state = AliasState.OFFLINE
            self._last_error = error[:200]
            self._last_checked_at = datetime.now(tz=UTC)
            return self._failed_attempts

    def to_dict(self) -> dict[str, Any]:
        return {
            "alias": self._alias,
            "primary": self._primary,
            "state": self._state.value,
            "failed_attempts": self._failed_attempts,
            "last_checked_at": self._last_checked_at.isoformat() if self._last_checked_at else None,
            "last_error": self._last_error,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasRecord):
            return NotImplemented
        return self._alias == other._alias

    def __hash__(self) -> int:
        return hash(self._alias)

    def __repr__(self) -> str:
        return (
            f"AliasRecord(alias={self._alias!r}, state={self._state.value}, "
            f"failed_attempts={self._failed_attempts})"
        )
