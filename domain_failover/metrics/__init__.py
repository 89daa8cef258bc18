from domain_failover.metrics.counters import (
    increment_evictions,
    increment_offline_report,
    increment_probe,
    increment_reset,
)
from domain_failover.metrics.gauges import clear_alias_state, set_alias_state, set_primary_online
from domain_failover.metrics.prometheus import domain_label, get_prometheus_registry, metric_name, sanitize_label

__all__ = [
    "get_prometheus_registry",
    "sanitize_label",
    "domain_label",
    "metric_name",
    "increment_probe",
    "increment_evictions",
    "increment_reset",
    "increment_offline_report",
    "set_primary_online",
    "set_alias_state",
    "clear_alias_state",
]
