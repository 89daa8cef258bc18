from domain_failover.directory.directory import FailoverDirectory, SweepResult
from domain_failover.directory.health import DirectoryHealthHandler
from domain_failover.directory.probes import DnsResolutionProbe, HttpHeadProbe, ReachabilityProbe, blocking_probe
from domain_failover.directory.record import AliasRecord, AliasState
from domain_failover.directory.sweeper import BackgroundSweeper

__all__ = [
    "AliasRecord",
    "AliasState",
    "BackgroundSweeper",
    "DirectoryHealthHandler",
    "DnsResolutionProbe",
    "FailoverDirectory",
    "HttpHeadProbe",
    "ReachabilityProbe",
    "SweepResult",
    "blocking_probe",
]
