from __future__ import annotations

import asyncio

import pytest

from domain_failover.directory import DirectoryHealthHandler, FailoverDirectory
from domain_failover.metrics import domain_label, get_prometheus_registry, metric_name, sanitize_label


def sample(name: str, **labels: str) -> float:
    return get_prometheus_registry().get_sample_value(name, labels) or 0.0


def test_primary_online_gauge_follows_offline_reports(probe):
    directory = FailoverDirectory("metrics-primary.example.com", ["m1"], prober=probe)
    assert sample("domain_failover_primary_online", primary="metrics-primary.example.com") == 1.0

    before = sample("domain_failover_offline_reports_total", primary="metrics-primary.example.com", kind="primary")
    directory.mark_domain_offline("metrics-primary.example.com")

    assert sample("domain_failover_primary_online", primary="metrics-primary.example.com") == 0.0
    after = sample("domain_failover_offline_reports_total", primary="metrics-primary.example.com", kind="primary")
    assert after == before + 1


@pytest.mark.asyncio
async def test_sweep_updates_probe_counters_and_alias_gauges(probe):
    primary = "metrics-sweep.example.com"
    probe.down.add("down.example.com")
    directory = FailoverDirectory(primary, ["up.example.com", "down.example.com"], prober=probe)
    reachable_before = sample("domain_failover_probes_total", primary=primary, outcome="reachable")
    unreachable_before = sample("domain_failover_probes_total", primary=primary, outcome="unreachable")

    await directory.check_statuses()

    assert sample("domain_failover_probes_total", primary=primary, outcome="reachable") == reachable_before + 1
    assert sample("domain_failover_probes_total", primary=primary, outcome="unreachable") == unreachable_before + 1
    assert sample("domain_failover_alias_state", primary=primary, alias="down.example.com") == 1.0
    assert sample("domain_failover_alias_failed_attempts", primary=primary, alias="down.example.com") == 1.0
    assert sample("domain_failover_alias_state", primary=primary, alias="up.example.com") == 0.0


@pytest.mark.asyncio
async def test_eviction_counts_and_clears_alias_gauges(probe, fail_record):
    primary = "metrics-evict.example.com"
    directory = FailoverDirectory(primary, ["gone.example.com"], prober=probe)
    await DirectoryHealthHandler([directory]).get_health_status()
    await fail_record(directory.get_record("gone.example.com"), 4)
    before = sample("domain_failover_evictions_total", primary=primary)

    await directory.check_statuses()

    assert sample("domain_failover_evictions_total", primary=primary) == before + 1
    registry = get_prometheus_registry()
    assert registry.get_sample_value(
        "domain_failover_alias_state", {"primary": primary, "alias": "gone.example.com"}
    ) is None


@pytest.mark.asyncio
async def test_reset_is_counted(probe):
    primary = "metrics-reset.example.com"
    directory = FailoverDirectory(primary, prober=probe)
    before = sample("domain_failover_resets_total", primary=primary)

    await directory.check_statuses()

    assert sample("domain_failover_resets_total", primary=primary) == before + 1


def test_sanitize_label():
    assert sanitize_label(None) == "unknown"
    assert sanitize_label("   ") == "unknown"
    assert sanitize_label("a\nb") == "a b"
    assert len(sanitize_label("x" * 500)) == 128


def test_domain_label_folds_case_and_root_dot():
    assert domain_label("M1.Example.COM.") == "m1.example.com"
    assert domain_label(".") == "unknown"
    assert domain_label(None) == "unknown"
    assert metric_name("alias_state") == "domain_failover_alias_state"


def test_gauges_use_folded_domain_labels(probe):
    FailoverDirectory("Metrics-Case.Example.COM.", prober=probe)
    assert sample("domain_failover_primary_online", primary="metrics-case.example.com") == 1.0


@pytest.mark.asyncio
async def test_alias_dropped_mid_sweep_leaves_no_gauge(probe):
    primary = "metrics-dropped.example.com"
    probe.delay = 0.02
    directory = FailoverDirectory(primary, ["x1.example.com", "x2.example.com"], prober=probe)

    async def drop_mid_sweep():
        directory.update_alias_set(["x2.example.com"])

    await asyncio.gather(directory.check_statuses(), drop_mid_sweep())

    registry = get_prometheus_registry()
    assert [r.alias for r in directory.current_records()] == ["x2.example.com"]
    assert registry.get_sample_value(
        "domain_failover_alias_state", {"primary": primary, "alias": "x1.example.com"}
    ) is None
    assert registry.get_sample_value(
        "domain_failover_alias_state", {"primary": primary, "alias": "x2.example.com"}
    ) == 0.0
