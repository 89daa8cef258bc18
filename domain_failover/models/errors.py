from __future__ import annotations


class FailoverError(Exception):
    error_type: str = "failover_error"
    message: str = "Domain failover error"

    def __init__(self, message: str | None = None, param: str | None = None):
        self.message = message or self.message
        self.param = param
        super().__init__(self.message)


class InvalidDomainError(FailoverError, ValueError):
    error_type = "invalid_domain"
    message = "Domain name must be a non-empty string"


class ConfigurationError(FailoverError):
    error_type = "configuration_error"
    message = "Invalid failover configuration"
