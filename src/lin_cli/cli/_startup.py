"""Startup loading shared by the dashboard and ``lin issues``.

Anything that fails here is a fatal startup condition: the error is logged,
printed, and the process exits with ``ExitCode.CONFIG_ERROR``.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import structlog
from rich.console import Console

from lin_cli.core.config import LinConfig, load_config
from lin_cli.core.constants import ExitCode
from lin_cli.core.exceptions import ConfigError, LinError
from lin_cli.linear.cache import IssueCache
from lin_cli.linear.client import LinearClient

logger = structlog.get_logger()


def build_client(config: LinConfig) -> LinearClient:
    """Return a Linear client for *config*; a missing API key is a config error."""
    if not config.api_key:
        raise ConfigError("No Linear API key configured. Run 'lin auth' or set LIN_API_KEY.")
    return LinearClient(
        config.api_key,
        api_url=config.linear.api_url,
        timeout=config.linear.timeout_seconds,
    )


def build_cache(config: LinConfig) -> IssueCache:
    return IssueCache(config.cache_path, ttl_seconds=config.cache.ttl_seconds)


def fail_startup(exc: LinError, console: Console) -> NoReturn:
    """Log and print a fatal startup error, then exit."""
    logger.error("startup_failed", error=str(exc), error_type=type(exc).__name__)
    console.print(f"[red]Error:[/red] {exc}")
    raise SystemExit(ExitCode.CONFIG_ERROR)


def load_startup_config(console: Console, path: Path | None = None) -> LinConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        fail_startup(exc, console)
