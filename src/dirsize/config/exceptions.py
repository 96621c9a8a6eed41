"""Configuration errors."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails.

    Carries a detailed, actionable message covering missing files, YAML
    parsing errors, missing environment variables and validation failures.
    """


class EnvironmentVariableError(ConfigurationError):
    """Exception raised when an environment variable reference cannot be resolved."""
