"""lin / lin ui — launch the interactive dashboard."""

from __future__ import annotations

import sys
from typing import Any

import click
import structlog
from rich.console import Console

err_console = Console(stderr=True)
logger = structlog.get_logger()


@click.command("ui")
@click.pass_context
def ui_cmd(ctx: click.Context) -> None:
    """Launch the interactive dashboard (requires a TTY)."""
    if not sys.stdout.isatty():
        err_console.print("[red]Error:[/red] 'lin ui' requires an interactive terminal (TTY).")
        raise SystemExit(1)
    run_dashboard(console=err_console, log_overrides=ctx.obj)


def run_dashboard(console: Console, log_overrides: dict[str, Any] | None = None) -> None:
    """Load config and cache, run the dashboard, report a checkout on exit.

    *log_overrides* holds logging options passed explicitly on the command
    line (``level``, ``json_output``); they win over the ``[logging]`` section.
    """
    from lin_cli.cli._startup import build_cache, build_client, fail_startup, load_startup_config
    from lin_cli.core.exceptions import CacheError, ConfigError
    from lin_cli.core.logging import configure_logging
    from lin_cli.linear import fetch_and_cache
    from lin_cli.tui.app import run as tui_run
    from lin_cli.tui.theme import Theme

    config = load_startup_config(console)

    # The dashboard owns the terminal; logs go to a file while it runs
    overrides = log_overrides or {}
    configure_logging(
        level=overrides.get("level", config.logging.level),
        json_output=overrides.get("json_output", config.logging.format == "json"),
        log_file=config.log_path,
    )

    try:
        client = build_client(config)
        cache = build_cache(config)
        issues, needs_refresh = cache.load()
        needs_refresh = needs_refresh or not issues
    except (ConfigError, CacheError) as exc:
        fail_startup(exc, console)

    logger.info("dashboard_started", issues=len(issues), needs_refresh=needs_refresh)
    outcome = tui_run(
        issues,
        fetch_issues=lambda: fetch_and_cache(client, cache),
        needs_refresh=needs_refresh,
        theme=Theme.from_config(config.ui),
    )
    if outcome is not None:
        click.echo(f"Checked out branch '{outcome.branch_name}'")
