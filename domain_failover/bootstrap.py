from __future__ import annotations

import logging
from typing import Iterable

import httpx

from domain_failover.config import FailoverConfig, FailoverSettings, ProbeConfig, get_settings, load_yaml_config
from domain_failover.directory import (
    BackgroundSweeper,
    DnsResolutionProbe,
    FailoverDirectory,
    HttpHeadProbe,
    ReachabilityProbe,
)

logger = logging.getLogger(__name__)


def configure_logging(level: str | int | None = None) -> None:
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level)


def load_config(settings: FailoverSettings | None = None) -> FailoverConfig:
    settings = settings or get_settings()
    return load_yaml_config(settings.config_path, defaults=settings.to_failover_config())


def build_probe(config: ProbeConfig, client: httpx.AsyncClient | None = None) -> ReachabilityProbe:
    if config.kind == "http":
        return HttpHeadProbe(
            scheme=config.scheme,
            path=config.path,
            timeout=config.timeout_seconds,
            client=client,
        )
    return DnsResolutionProbe(port=config.port, timeout=config.timeout_seconds)


def build_directory(
    primary_name: str,
    aliases: Iterable[str] | None = None,
    config: FailoverConfig | None = None,
    prober: ReachabilityProbe | None = None,
) -> FailoverDirectory:
    cfg = config or load_config()
    directory = FailoverDirectory(
        primary_name,
        aliases,
        prober=prober or build_probe(cfg.probe),
        config=cfg.directory,
    )
    logger.info(
        "Failover directory ready: primary=%s aliases=%d probe=%s",
        primary_name, len(directory.current_records()), cfg.probe.kind,
    )
    return directory


def build_sweeper(
    directories: Iterable[FailoverDirectory],
    config: FailoverConfig | None = None,
) -> BackgroundSweeper:
    cfg = config or load_config()
    return BackgroundSweeper(config=cfg.sweep, directories=directories)
