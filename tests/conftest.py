from __future__ import annotations

import asyncio
from collections import defaultdict

import pytest

from domain_failover.config import DirectoryConfig
from domain_failover.directory import FailoverDirectory


class FakeProbe:
    """Scripted reachability probe.

    Names are reachable unless listed in ``down``; names in ``errors`` raise.
    """

    def __init__(self, down: set[str] | None = None, errors: dict[str, Exception] | None = None, delay: float = 0.0):
        self.down: set[str] = set(down or ())
        self.errors: dict[str, Exception] = dict(errors or {})
        self.delay = delay
        self.calls: dict[str, int] = defaultdict(int)
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, name: str) -> bool:
        self.calls[name] += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if name in self.errors:
                raise self.errors[name]
            return name not in self.down
        finally:
            self.in_flight -= 1


async def _fail_record(record, times: int) -> None:
    original = record._prober  # noqa: SLF001 - test-only override

    async def always_down(name: str) -> bool:
        return False

    record._prober = always_down  # noqa: SLF001
    try:
        for _ in range(times):
            await record.probe()
    finally:
        record._prober = original  # noqa: SLF001


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def ordered_config() -> DirectoryConfig:
    return DirectoryConfig(shuffle_on_update=False)


@pytest.fixture
def directory(probe, ordered_config) -> FailoverDirectory:
    return FailoverDirectory(
        "example.com",
        ["m1.example.com", "m2.example.com", "m3.example.com"],
        prober=probe,
        config=ordered_config,
    )


@pytest.fixture
def fail_record():
    """Drive a record's failure counter up through real failed probes."""
    return _fail_record
