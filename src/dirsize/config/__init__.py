"""Configuration system for dirsize."""

from __future__ import annotations

from .exceptions import ConfigurationError, EnvironmentVariableError
from .loader import env_overrides, load_config, merge_overrides, resolve_env_var
from .models import (
    DEFAULT_MAX_CONCURRENCY,
    AppConfig,
    LoggingSettings,
    ScanSettings,
    SizeUnit,
)

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "DEFAULT_MAX_CONCURRENCY",
    "EnvironmentVariableError",
    "LoggingSettings",
    "ScanSettings",
    "SizeUnit",
    "env_overrides",
    "load_config",
    "merge_overrides",
    "resolve_env_var",
]
