from domain_failover.config import (
    DirectoryConfig,
    FailoverConfig,
    FailoverSettings,
    ProbeConfig,
    SweepConfig,
    get_settings,
    load_yaml_config,
)
from domain_failover.directory import (
    AliasRecord,
    AliasState,
    BackgroundSweeper,
    DirectoryHealthHandler,
    DnsResolutionProbe,
    FailoverDirectory,
    HttpHeadProbe,
    ReachabilityProbe,
    SweepResult,
    blocking_probe,
)
from domain_failover.models.errors import ConfigurationError, FailoverError, InvalidDomainError

__version__ = "0.1.0"

__all__ = [
    "AliasRecord",
    "AliasState",
    "BackgroundSweeper",
    "ConfigurationError",
    "DirectoryConfig",
    "DirectoryHealthHandler",
    "DnsResolutionProbe",
    "FailoverConfig",
    "FailoverDirectory",
    "FailoverError",
    "FailoverSettings",
    "HttpHeadProbe",
    "InvalidDomainError",
    "ProbeConfig",
    "ReachabilityProbe",
    "SweepConfig",
    "SweepResult",
    "blocking_probe",
    "get_settings",
    "load_yaml_config",
]
