"""Configuration loading from YAML files and the environment.

Values are layered in this order, later layers winning:
1. Model defaults
2. YAML configuration file (with ${VARIABLE} references resolved)
3. ``DIRSIZE_*`` environment variables
4. CLI options (applied by the caller through :func:`merge_overrides`)
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Final

import yaml
from pydantic import BaseModel, ValidationError

from dirsize.config.exceptions import ConfigurationError, EnvironmentVariableError
from dirsize.config.models import AppConfig

# Matches ${VARIABLE_NAME} references inside string values
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

# Environment variables mapped onto (section, field)
ENV_OVERRIDES: Final[Mapping[str, tuple[str, str]]] = {
    "DIRSIZE_MAX_CONCURRENCY": ("scan", "max_concurrency"),
    "DIRSIZE_SIZE_UNIT": ("scan", "size_unit"),
    "DIRSIZE_MIN_SIZE": ("scan", "min_size"),
    "DIRSIZE_PROPAGATE_MATCHES": ("scan", "propagate_matches"),
    "DIRSIZE_TIMEOUT_SECONDS": ("scan", "timeout_seconds"),
    "DIRSIZE_LOG_LEVEL": ("logging", "level"),
    "DIRSIZE_LOG_FORMAT": ("logging", "format"),
}


def resolve_env_var(value: str) -> str:
    """Resolve ${VARIABLE_NAME} references in a string value.

    Args:
        value: String potentially containing environment variable references

    Returns:
        String with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced variable is not set

    Examples:
        >>> os.environ["SCAN_ROOT"] = "/data"
        >>> resolve_env_var("${SCAN_ROOT}/projects")
        '/data/projects'
    """

    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            msg = f"Required environment variable '{var_name}' is not set."
            raise EnvironmentVariableError(msg)
        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def resolve_env_vars(data: object) -> object:
    """Recursively resolve environment variable references in YAML data.

    Non-string scalars are preserved as-is.
    """
    if isinstance(data, str):
        return resolve_env_var(data)
    if isinstance(data, dict):
        return {key: resolve_env_vars(value) for key, value in data.items()}  # pyright: ignore[reportUnknownVariableType]  # YAML boundary
    if isinstance(data, list):
        return [resolve_env_vars(item) for item in data]  # pyright: ignore[reportUnknownVariableType]  # YAML boundary
    return data


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, dict[str, str]]:
    """Collect ``DIRSIZE_*`` overrides grouped by configuration section.

    Args:
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Nested mapping suitable for :func:`merge_overrides`
    """
    source = os.environ if environ is None else environ
    overrides: dict[str, dict[str, str]] = {}
    for env_name, (section, field) in ENV_OVERRIDES.items():
        value = source.get(env_name)
        if value is not None and value.strip():
            overrides.setdefault(section, {})[field] = value.strip()
    return overrides


def format_validation_error(error: ValidationError, source: str) -> str:
    """Format a pydantic validation error with field-level diagnostics."""
    error_lines = ["Configuration validation failed:", ""]
    for item in error.errors():
        field_path = " → ".join(str(loc) for loc in item["loc"])
        error_lines.append(f"  Field: {field_path}")
        error_lines.append(f"  Error: {item['msg']}")
        error_lines.append("")
    error_lines.append(f"Source: {source}")
    error_lines.append("Please fix the above errors and try again.")
    return "\n".join(error_lines)


def merge_overrides[T: BaseModel](
    config: T,
    overrides: Mapping[str, object],
    *,
    source: str = "overrides",
) -> T:
    """Return a validated copy of ``config`` with nested overrides applied.

    Args:
        config: Base configuration
        overrides: Nested mapping of values; ``None`` values are ignored
        source: Name of the override source for error messages

    Returns:
        New validated configuration instance

    Raises:
        ConfigurationError: If the merged configuration is invalid
    """
    merged = _deep_merge(config.model_dump(), overrides)
    try:
        return type(config).model_validate(merged)
    except ValidationError as e:
        raise ConfigurationError(format_validation_error(e, source)) from e


def load_config(config_path: Path | None = None, *, use_env: bool = True) -> AppConfig:
    """Load and validate application configuration.

    Args:
        config_path: Optional YAML configuration file
        use_env: Whether to apply ``DIRSIZE_*`` environment overrides

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigurationError: If the file cannot be loaded or is invalid
    """
    config = AppConfig()

    if config_path is not None:
        config = merge_overrides(config, _read_yaml(config_path), source=str(config_path))

    if use_env:
        overrides = env_overrides()
        if overrides:
            config = merge_overrides(config, overrides, source="environment")

    return config


def _read_yaml(config_path: Path) -> dict[str, object]:
    if not config_path.exists():
        msg = (
            f"Configuration file not found: {config_path}\n"
            f"Please create a configuration file at this location."
        )
        raise ConfigurationError(msg)

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    # An empty file is a valid, empty configuration
    if raw_data is None:
        return {}

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at root level, got: {type(raw_data).__name__}"
        )
        raise ConfigurationError(msg)

    try:
        resolved = resolve_env_vars(raw_data)
    except EnvironmentVariableError as e:
        msg = f"Environment variable resolution failed in: {config_path}\n{e}"
        raise EnvironmentVariableError(msg) from e

    return resolved  # pyright: ignore[reportReturnType]  # dict after resolution


def _deep_merge(base: Mapping[str, object], overrides: Mapping[str, object]) -> dict[str, object]:
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(current, value)  # pyright: ignore[reportUnknownArgumentType]
        else:
            result[key] = value
    return result
