"""Command-line interface for dirsize."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from dirsize.app.runner import ScanRunner
from dirsize.config.exceptions import ConfigurationError
from dirsize.config.loader import load_config, merge_overrides
from dirsize.config.models import AppConfig, SizeUnit
from dirsize.core.errors import ScanError
from dirsize.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def validate_config_path(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Validate configuration file path.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Path value to validate

    Returns:
        Validated Path object

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    if value.exists() and value.is_dir():
        raise click.BadParameter('Configuration path must be a file, not a directory')

    valid_extensions = {'.yaml', '.yml'}
    if value.suffix.lower() not in valid_extensions:
        extensions_str = ", ".join(sorted(valid_extensions))
        raise click.BadParameter(
            f'Invalid configuration file extension. Supported extensions: {extensions_str}'
        )

    return value


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Log level value to validate

    Returns:
        Normalized log level (uppercase)

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()

    valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR'}
    if normalized_value not in valid_levels:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(valid_levels))}'
        )

    return normalized_value


def validate_size_unit(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> SizeUnit | None:
    """Parse a size unit name case-insensitively.

    Raises:
        click.BadParameter: If the unit is unknown
    """
    if value is None:
        return value

    try:
        return SizeUnit.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


# Import version from package
try:
    from importlib.metadata import PackageNotFoundError, version
    __version__ = version("dirsize")
except PackageNotFoundError:
    __version__ = "unknown"


@click.group()
@click.option(
    '--config', '-c',
    type=click.Path(path_type=Path),
    default=None,
    callback=validate_config_path,
    help='Configuration file path (.yaml or .yml).'
)
@click.option(
    '--log-level', '-l',
    type=str,
    default=None,
    callback=validate_log_level,
    help='Logging verbosity level (DEBUG, INFO, WARNING, ERROR)'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Enable debug logging (same as --log-level DEBUG)'
)
@click.version_option(version=__version__, prog_name='dirsize')
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    log_level: str | None,
    verbose: bool,
) -> None:
    """dirsize - Find the directories that take up the most disk space.

    Scans a directory tree concurrently, sums up directory sizes and lists
    the directories above a size threshold, largest first.

    Examples:

        # List directories larger than 10 GB below the current directory
        dirsize folder-list

        # List directories larger than 500 MB below /var
        dirsize folder-list --dir /var --min-size 500 --unit MB

        # List the files of a directory, largest first
        dirsize file-list --dir ~/Downloads

        # Enable debug logging
        dirsize --verbose folder-list
    """
    try:
        app_config = load_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        log_level = 'DEBUG'
    if log_level is not None:
        app_config = _apply_overrides(app_config, {'logging': {'level': log_level}}, source='command line')

    configure_logging(
        log_level=app_config.logging.level,
        log_format=app_config.logging.format,
    )
    logger.debug(
        "Configuration loaded",
        extra={"config_path": str(config) if config else None},
    )

    ctx.obj = app_config


@cli.command('folder-list')
@click.option(
    '--dir', '-d', 'directory',
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help='Directory to scan (defaults to the current directory)'
)
@click.option(
    '--min-size',
    type=click.FloatRange(min=0),
    default=None,
    help='Only list directories larger than this size (in --unit)'
)
@click.option(
    '--unit', '-u',
    type=str,
    default=None,
    callback=validate_size_unit,
    help='Size unit for --min-size (B, KB, MB, GB, TB)'
)
@click.option(
    '--max-concurrency', '-k',
    type=click.IntRange(min=1),
    default=None,
    help='Maximum number of concurrent directory reads'
)
@click.option(
    '--propagate-matches',
    is_flag=True,
    default=None,
    help='Keep large directories nested inside smaller ones'
)
@click.option(
    '--timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Abort the scan after this many seconds'
)
@click.option(
    '--limit', '-n',
    type=click.IntRange(min=1),
    default=None,
    help='Print at most this many directories'
)
@click.pass_obj
def folder_list(
    app_config: AppConfig,
    directory: Path | None,
    min_size: float | None,
    unit: SizeUnit | None,
    max_concurrency: int | None,
    propagate_matches: bool | None,
    timeout: float | None,
    limit: int | None,
) -> None:
    """List directories above a size threshold, largest first.

    Examples:

        dirsize folder-list --dir /home --min-size 1 --unit GB --limit 20
    """
    app_config = _apply_overrides(
        app_config,
        {
            'scan': {
                'min_size': min_size,
                'size_unit': unit,
                'max_concurrency': max_concurrency,
                'propagate_matches': propagate_matches,
                'timeout_seconds': timeout,
            }
        },
        source='command line',
    )

    runner = ScanRunner(app_config, limit=limit)
    try:
        _ = runner.folder_list(directory if directory is not None else Path.cwd())
    except ScanError as e:
        raise click.ClickException(str(e)) from e


@cli.command('file-list')
@click.option(
    '--dir', '-d', 'directory',
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help='Directory to list (defaults to the current directory)'
)
@click.option(
    '--limit', '-n',
    type=click.IntRange(min=1),
    default=None,
    help='Print at most this many files'
)
@click.pass_obj
def file_list(app_config: AppConfig, directory: Path | None, limit: int | None) -> None:
    """List the files of a directory, largest first."""
    runner = ScanRunner(app_config, limit=limit)
    try:
        _ = runner.file_list(directory if directory is not None else Path.cwd())
    except ScanError as e:
        raise click.ClickException(str(e)) from e


def _apply_overrides(config: AppConfig, overrides: dict[str, object], *, source: str) -> AppConfig:
    try:
        return merge_overrides(config, overrides, source=source)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == '__main__':
    main()
