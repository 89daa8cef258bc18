from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from domain_failover.config import SweepConfig
from domain_failover.directory.directory import FailoverDirectory, SweepResult

logger = logging.getLogger(__name__)


class BackgroundSweeper:
    def __init__(
        self,
        config: SweepConfig,
        directories: Iterable[FailoverDirectory],
    ):
        self.config = config
        self.directories = list(directories)
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if not self.config.enabled:
            return

        self._running = True
        while self._running:
            await self.sweep_once()
            await asyncio.sleep(self.config.interval_seconds)

    def stop(self) -> None:
        self._running = False

    async def sweep_once(self) -> dict[str, SweepResult]:
        directories = list(self.directories)
        if not directories:
            return {}

        results = await asyncio.gather(
            *(directory.check_statuses() for directory in directories),
            return_exceptions=True,
        )

        outcomes: dict[str, SweepResult] = {}
        for directory, result in zip(directories, results, strict=False):
            if isinstance(result, Exception):
                logger.error("Sweep failed for primary=%s: %s", directory.primary_name, result)
                continue
            outcomes[directory.primary_name] = result
        return outcomes
