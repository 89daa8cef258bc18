from __future__ import annotations

import contextlib

from prometheus_client import Gauge

from domain_failover.metrics.prometheus import domain_label, get_prometheus_registry, metric_name

domain_failover_primary_online_metric = Gauge(
    metric_name("primary_online"),
    "Whether the primary domain is currently trusted (0/1)",
    ["primary"],
    registry=get_prometheus_registry(),
)

domain_failover_alias_state_metric = Gauge(
    metric_name("alias_state"),
    "Alias health state (0=online, 1=offline)",
    ["primary", "alias"],
    registry=get_prometheus_registry(),
)

domain_failover_alias_failed_attempts_metric = Gauge(
    metric_name("alias_failed_attempts"),
    "Consecutive failed probes per alias",
    ["primary", "alias"],
    registry=get_prometheus_registry(),
)


def set_primary_online(*, primary: str, online: bool) -> None:
    domain_failover_primary_online_metric.labels(primary=domain_label(primary)).set(1.0 if online else 0.0)


def set_alias_state(*, primary: str, alias: str, online: bool, failed_attempts: int) -> None:
    labels = {"primary": domain_label(primary), "alias": domain_label(alias)}
    domain_failover_alias_state_metric.labels(**labels).set(0.0 if online else 1.0)
    domain_failover_alias_failed_attempts_metric.labels(**labels).set(max(0, int(failed_attempts)))


def clear_alias_state(*, primary: str, alias: str) -> None:
    labelvalues = (domain_label(primary), domain_label(alias))
    for metric in (domain_failover_alias_state_metric, domain_failover_alias_failed_attempts_metric):
        with contextlib.suppress(KeyError):
            metric.remove(*labelvalues)
