from __future__ import annotations

from typing import Any

from prometheus_client import CollectorRegistry

NAMESPACE = "domain_failover"
UNKNOWN_LABEL = "unknown"
MAX_LABEL_LENGTH = 128

_registry = CollectorRegistry()


def get_prometheus_registry() -> CollectorRegistry:
    return _registry


def metric_name(suffix: str) -> str:
    return f"{NAMESPACE}_{suffix}"


def sanitize_label(value: Any, fallback: str = UNKNOWN_LABEL) -> str:
    if value is None:
        return fallback
    text = " ".join(str(value).split())
    return text[:MAX_LABEL_LENGTH] if text else fallback


def domain_label(value: Any) -> str:
    """Label value for a domain name: case-folded, without the root dot."""
    text = sanitize_label(value).lower().rstrip(".")
    return text or UNKNOWN_LABEL
