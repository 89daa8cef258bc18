from domain_failover.models.errors import ConfigurationError, FailoverError, InvalidDomainError

__all__ = [
    "ConfigurationError",
    "FailoverError",
    "InvalidDomainError",
]
