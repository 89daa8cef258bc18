from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain_failover.models.errors import ConfigurationError


class DirectoryConfig(BaseModel):
    eviction_threshold: int = Field(default=3, ge=0)
    offline_after_failures: int = Field(default=1, ge=1)
    shuffle_on_update: bool = True


class ProbeConfig(BaseModel):
    kind: Literal["dns", "http"] = "dns"
    timeout_seconds: float = Field(default=5.0, gt=0)
    port: int = Field(default=443, gt=0, le=65535)
    scheme: Literal["http", "https"] = "https"
    path: str = "/"


class SweepConfig(BaseModel):
    enabled: bool = True
    interval_seconds: float = Field(default=60.0, gt=0)


class FailoverConfig(BaseModel):
    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    sweep: SweepConfig = Field(default_factory=SweepConfig)


class FailoverSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOMAIN_FAILOVER_", extra="ignore")

    log_level: str = "INFO"
    config_path: str = "domain_failover.yaml"
    eviction_threshold: int = Field(default=3, ge=0)
    offline_after_failures: int = Field(default=1, ge=1)
    shuffle_on_update: bool = True
    sweep_interval_seconds: float = Field(default=60.0, gt=0)
    probe_kind: Literal["dns", "http"] = "dns"
    probe_timeout_seconds: float = Field(default=5.0, gt=0)
    probe_port: int = Field(default=443, gt=0, le=65535)
    probe_scheme: Literal["http", "https"] = "https"
    probe_path: str = "/"

    def to_failover_config(self) -> FailoverConfig:
        return FailoverConfig(
            directory=DirectoryConfig(
                eviction_threshold=self.eviction_threshold,
                offline_after_failures=self.offline_after_failures,
                shuffle_on_update=self.shuffle_on_update,
            ),
            probe=ProbeConfig(
                kind=self.probe_kind,
                timeout_seconds=self.probe_timeout_seconds,
                port=self.probe_port,
                scheme=self.probe_scheme,
                path=self.probe_path,
            ),
            sweep=SweepConfig(interval_seconds=self.sweep_interval_seconds),
        )


def _resolve_env_token(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("os.environ/"):
        env_name = value.split("/", 1)[1]
        return os.getenv(env_name)
    if isinstance(value, dict):
        return {k: _resolve_env_token(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env_token(v) for v in value]
    return value


def load_yaml_config(path: str | Path, defaults: FailoverConfig | None = None) -> FailoverConfig:
    """Load failover tunables from a YAML file.

    Sections missing from the file fall back to ``defaults`` (or the model
    defaults); a missing file yields the defaults unchanged.
    """
    base = defaults or FailoverConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return base

    data = yaml.safe_load(cfg_path.read_text()) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(message=f"Config file '{cfg_path}' must contain a mapping", param=str(cfg_path))

    resolved = _resolve_env_token(data)
    merged = base.model_dump()
    for section, values in resolved.items():
        if section in merged and isinstance(values, dict):
            merged[section].update(values)
        else:
            merged[section] = values
    try:
        return FailoverConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigurationError(message=f"Invalid config file '{cfg_path}': {exc}", param=str(cfg_path)) from exc


@lru_cache
def get_settings() -> FailoverSettings:
    return FailoverSettings()
