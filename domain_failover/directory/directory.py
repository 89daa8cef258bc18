from __future__ import annotations

import asyncio
import logging
import random
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from domain_failover.config import DirectoryConfig
from domain_failover.directory.probes import DnsResolutionProbe
from domain_failover.directory.record import AliasRecord, AliasState, Prober
from domain_failover.metrics import (
    clear_alias_state,
    increment_evictions,
    increment_offline_report,
    increment_reset,
    set_alias_state,
    set_primary_online,
)
from domain_failover.models.errors import InvalidDomainError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    records: tuple[AliasRecord, ...]
    index: Mapping[str, AliasRecord]

    @classmethod
    def build(cls, records: Iterable[AliasRecord]) -> _Snapshot:
        ordered = tuple(records)
        return cls(records=ordered, index=MappingProxyType({record.alias: record for record in ordered}))


@dataclass
class SweepResult:
    probed: list[str] = field(default_factory=list)
    reachable: list[str] = field(default_factory=list)
    evicted: list[str] = field(default_factory=list)
    reset: bool = False


class FailoverDirectory:
    """Picks the domain name to use for one primary and its aliases.

    Readers (``domain_name_to_use``, ``current_records``) only ever read the
    published snapshot and never block. Writers build a new snapshot under
    ``_lock`` and publish it with a single assignment.
    """

    def __init__(
        self,
        primary_name: str,
        initial_aliases: Iterable[str] | None = None,
        *,
        prober: Prober | None = None,
        config: DirectoryConfig | None = None,
    ):
        if not isinstance(primary_name, str) or not primary_name.strip():
            raise InvalidDomainError(param="primary_name")

        self._primary_name = primary_name
        self._primary_online = True
        self.config = config or DirectoryConfig()
        self.prober = prober or DnsResolutionProbe()
        self._lock = threading.Lock()

        records = [self._new_record(alias) for alias in _unique_names(initial_aliases or [])]
        self._snapshot = _Snapshot.build(records)
        set_primary_online(primary=self._primary_name, online=True)

    @property
    def primary_name(self) -> str:
        return self._primary_name

    @property
    def primary_online(self) -> bool:
        return self._primary_online

    def current_records(self) -> tuple[AliasRecord, ...]:
        return self._snapshot.records

    def get_record(self, alias: str) -> AliasRecord | None:
        return self._snapshot.index.get(alias)

    def online_aliases(self) -> list[str]:
        return [record.alias for record in self._snapshot.records if record.state is AliasState.ONLINE]

    def update_alias_set(self, names: Iterable[str] | None) -> None:
        """Replace the alias list, keeping learned health for known aliases.

        An empty or missing list is ignored so a failed fetch of a fresh list
        never wipes out working failover targets. A single string is taken
        as a one-alias list.
        """
        if isinstance(names, str):
            names = [names]
        candidates = _unique_names(names or [])
        if not candidates:
            return

        with self._lock:
            current = self._snapshot
            records = [current.index.get(alias) or self._new_record(alias) for alias in candidates]
            if self.config.shuffle_on_update:
                random.shuffle(records)
            self._snapshot = _Snapshot.build(records)

            kept = {record.alias for record in records}
            for alias in current.index:
                if alias not in kept:
                    clear_alias_state(primary=self._primary_name, alias=alias)

        logger.info(
            "Alias set updated: primary=%s aliases=%d carried_over=%d",
            self._primary_name, len(records), sum(1 for alias in candidates if alias in current.index),
        )

    def mark_domain_offline(self, name: str) -> None:
        if name == self._primary_name:
            if self._primary_online:
                logger.info("Primary domain marked offline: %s", name)
            self._primary_online = False
            set_primary_online(primary=self._primary_name, online=False)
            increment_offline_report(primary=self._primary_name, kind="primary")
            return

        record = self._snapshot.index.get(name)
        if record is None:
            return
        record.mark_offline()
        self._publish_alias_state([record])
        increment_offline_report(primary=self._primary_name, kind="alias")
        logger.info("Alias marked offline: primary=%s alias=%s", self._primary_name, name)

    def domain_name_to_use(self) -> str:
        """Return the primary while trusted, else the first online alias.

        Falls back to the primary when no alias is online, so the result is
        never empty but may still be unreachable.
        """
        if self._primary_online:
            return self._primary_name

        for record in self._snapshot.records:
            if record.state is AliasState.ONLINE:
                return record.alias

        return self._primary_name

    async def check_statuses(self) -> SweepResult:
        """Probe live aliases and evict the ones past the eviction threshold.

        Probes run concurrently; evictions are applied in one swap after every
        probe has finished. With no aliases left, the directory resets and the
        primary is trusted again.
        """
        snapshot = self._snapshot
        if not snapshot.records:
            self.reset()
            return SweepResult(reset=True)

        threshold = self.config.eviction_threshold
        to_probe = [record for record in snapshot.records if record.failed_attempts <= threshold]
        to_evict = [record for record in snapshot.records if record.failed_attempts > threshold]

        outcomes = await asyncio.gather(*(record.probe() for record in to_probe))

        self._publish_alias_state(to_probe)
        evicted = self._evict(to_evict) if to_evict else []

        return SweepResult(
            probed=[record.alias for record in to_probe],
            reachable=[record.alias for record, ok in zip(to_probe, outcomes, strict=True) if ok],
            evicted=evicted,
        )

    def reset(self) -> None:
        self._primary_online = True
        for record in self._snapshot.records:
            record.reset()
        set_primary_online(primary=self._primary_name, online=True)
        increment_reset(primary=self._primary_name)
        logger.info("Directory reset: primary=%s aliases=%d", self._primary_name, len(self._snapshot.records))

    def snapshot(self) -> dict[str, Any]:
        records = self._snapshot.records
        return {
            "primary": self._primary_name,
            "primary_online": self._primary_online,
            "domain_name_to_use": self.domain_name_to_use(),
            "aliases": [record.to_dict() for record in records],
        }

    def _evict(self, records: list[AliasRecord]) -> list[str]:
        # Only the exact record objects picked at the start of the sweep go; an
        # alias re-added in the meantime is a fresh record and stays.
        with self._lock:
            current = self._snapshot
            removed = [record for record in records if current.index.get(record.alias) is record]
            if not removed:
                return []
            removed_ids = {id(record) for record in removed}
            self._snapshot = _Snapshot.build(record for record in current.records if id(record) not in removed_ids)
            for record in removed:
                clear_alias_state(primary=self._primary_name, alias=record.alias)

        aliases = [record.alias for record in removed]
        increment_evictions(primary=self._primary_name, count=len(aliases))
        logger.info("Evicted aliases: primary=%s aliases=%s", self._primary_name, ", ".join(aliases))
        return aliases

    def _publish_alias_state(self, records: list[AliasRecord]) -> None:
        with self._lock:
            live = self._snapshot.index
            for record in records:
                if live.get(record.alias) is not record:
                    continue
                set_alias_state(
                    primary=self._primary_name,
                    alias=record.alias,
                    online=record.is_online,
                    failed_attempts=record.failed_attempts,
                )

    def _new_record(self, alias: str) -> AliasRecord:
        return AliasRecord(
            alias=alias,
            primary=self._primary_name,
            prober=self.prober,
            offline_after_failures=self.config.offline_after_failures,
        )


def _unique_names(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for name in names:
        if not isinstance(name, str) or not name.strip() or name in seen:
            continue
        seen.add(name)
        unique.append(name)
    return unique
