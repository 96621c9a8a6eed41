"""Configuration schema for dirsize.

Pydantic models validate settings from YAML files, environment overrides and
CLI options with fail-fast, field-level error messages.
"""

from enum import Enum
from typing import Annotated, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Default concurrency cap for filesystem reads during a scan
DEFAULT_MAX_CONCURRENCY: Final[int] = 10

# Upper bound accepted for the concurrency cap
MAX_CONCURRENCY_LIMIT: Final[int] = 256


class SizeUnit(str, Enum):
    """Binary size units accepted for thresholds."""

    B = "B"
    KB = "KB"
    MB = "MB"
    GB = "GB"
    TB = "TB"

    @property
    def bytes(self) -> int:
        """Number of bytes in one unit (1024-based)."""
        return 1024 ** list(SizeUnit).index(self)

    @classmethod
    def parse(cls, value: str) -> "SizeUnit":
        """Parse a unit name case-insensitively.

        Raises:
            ValueError: If value is not a known unit
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            valid = ", ".join(unit.value for unit in cls)
            msg = f"Invalid size unit '{value}'. Valid options: {valid}"
            raise ValueError(msg) from None


class BaseSettings(BaseModel):
    """Base configuration model with common settings."""

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
        frozen=True,
    )


class ScanSettings(BaseSettings):
    """Settings for the directory scanner and its default size filter."""

    max_concurrency: Annotated[
        int,
        Field(
            ge=1,
            le=MAX_CONCURRENCY_LIMIT,
            description="Maximum number of concurrent filesystem reads",
        ),
    ] = DEFAULT_MAX_CONCURRENCY
    size_unit: Annotated[
        SizeUnit,
        Field(description="Unit used to interpret min_size"),
    ] = SizeUnit.GB
    min_size: Annotated[
        float,
        Field(
            ge=0,
            description="Directories must exceed this size (in size_unit) to be reported",
        ),
    ] = 10.0
    propagate_matches: Annotated[
        bool,
        Field(
            description="Keep matching descendants of directories rejected by the filter",
        ),
    ] = False
    timeout_seconds: Annotated[
        float | None,
        Field(
            gt=0,
            description="Deadline for a whole scan in seconds (None for no deadline)",
        ),
    ] = None

    @field_validator("size_unit", mode="before")
    @classmethod
    def normalize_size_unit(cls, v: object) -> object:
        """Accept unit names in any case (e.g. "mb").

        Args:
            v: Raw unit value

        Returns:
            Normalized unit value
        """
        if isinstance(v, str):
            return SizeUnit.parse(v)
        return v

    @property
    def threshold_bytes(self) -> int:
        """The minimum size converted to bytes."""
        return int(self.min_size * self.size_unit.bytes)


class LoggingSettings(BaseSettings):
    """Settings for diagnostic logging."""

    level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"
    format: Annotated[
        str,
        Field(
            description="Log output format",
            pattern=r"^(text|keyvalue|json)$",
        ),
    ] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def uppercase_level(cls, v: object) -> object:
        """Normalize log level names to uppercase."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class AppConfig(BaseSettings):
    """Top-level configuration container.

    Sections:
    - scan: Scanner concurrency, size threshold and filter behaviour
    - logging: Diagnostic logging
    """

    scan: Annotated[
        ScanSettings,
        Field(description="Directory scan configuration"),
    ] = ScanSettings()
    logging: Annotated[
        LoggingSettings,
        Field(description="Logging configuration"),
    ] = LoggingSettings()
