from __future__ import annotations

from prometheus_client import Counter

from domain_failover.metrics.prometheus import (
    domain_label,
    get_prometheus_registry,
    metric_name,
    sanitize_label,
)

domain_failover_probes_metric = Counter(
    metric_name("probes_total"),
    "Total alias reachability probes",
    ["primary", "outcome"],
    registry=get_prometheus_registry(),
)

domain_failover_evictions_metric = Counter(
    metric_name("evictions_total"),
    "Total aliases evicted after exhausting their retry budget",
    ["primary"],
    registry=get_prometheus_registry(),
)

domain_failover_resets_metric = Counter(
    metric_name("resets_total"),
    "Total directory resets",
    ["primary"],
    registry=get_prometheus_registry(),
)

domain_failover_offline_reports_metric = Counter(
    metric_name("offline_reports_total"),
    "Total caller-reported offline domains",
    ["primary", "kind"],
    registry=get_prometheus_registry(),
)


def increment_probe(*, primary: str, reachable: bool) -> None:
    domain_failover_probes_metric.labels(
        primary=domain_label(primary),
        outcome="reachable" if reachable else "unreachable",
    ).inc()


def increment_evictions(*, primary: str, count: int = 1) -> None:
    if count <= 0:
        return
    domain_failover_evictions_metric.labels(primary=domain_label(primary)).inc(count)


def increment_reset(*, primary: str) -> None:
    domain_failover_resets_metric.labels(primary=domain_label(primary)).inc()


def increment_offline_report(*, primary: str, kind: str) -> None:
    domain_failover_offline_reports_metric.labels(
        primary=domain_label(primary),
        kind=sanitize_label(kind),
    ).inc()
