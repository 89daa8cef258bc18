from __future__ import annotations

import time
from typing import Any, Iterable

from domain_failover.directory.directory import FailoverDirectory
from domain_failover.metrics import set_alias_state, set_primary_online


class DirectoryHealthHandler:
    def __init__(self, directories: Iterable[FailoverDirectory]):
        self.directories = list(directories)

    async def get_health_status(self, primary_filter: str | None = None) -> dict[str, Any]:
        directories = self.directories
        if primary_filter:
            directories = [d for d in directories if d.primary_name == primary_filter]

        items: list[dict[str, Any]] = []
        healthy_count = 0

        for directory in directories:
            records = directory.current_records()
            online = [record.alias for record in records if record.is_online]

            if directory.primary_online:
                status = "healthy"
                healthy_count += 1
            elif online:
                status = "degraded"
            else:
                status = "unhealthy"

            set_primary_online(primary=directory.primary_name, online=directory.primary_online)
            for record in records:
                set_alias_state(
                    primary=directory.primary_name,
                    alias=record.alias,
                    online=record.is_online,
                    failed_attempts=record.failed_attempts,
                )

            items.append(
                {
                    "primary": directory.primary_name,
                    "status": status,
                    "primary_online": directory.primary_online,
                    "domain_name_to_use": directory.domain_name_to_use(),
                    "online_aliases": online,
                    "total_aliases": len(records),
                    "aliases": [record.to_dict() for record in records],
                }
            )

        total = len(directories)
        if total == 0 or healthy_count == total:
            status = "healthy"
        elif healthy_count == 0:
            status = "unhealthy"
        else:
            status = "degraded"

        return {
            "status": status,
            "timestamp": int(time.time()),
            "healthy_count": healthy_count,
            "total_count": total,
            "directories": items,
        }
