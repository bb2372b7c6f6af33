"""
lin CLI entry point.

Commands:
  lin                           — launch the dashboard (if stdout is a TTY)
  lin ui                        — launch the dashboard (explicit)
  lin auth [--api-key] [--keyring] — store the Linear API key
  lin issues [--refresh] [--json]  — list assigned issues
"""

from __future__ import annotations

import sys

from typing import Any

import click
from click.core import ParameterSource
from rich.console import Console

from lin_cli import __version__
from lin_cli.cli._auth import auth_cmd
from lin_cli.cli._dashboard import ui_cmd
from lin_cli.cli._issues import issues_cmd

err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(__version__, "--version", "-V", message="lin %(version)s")
@click.option(
    "--log-level", default="WARNING", hidden=True, help="Log level for structured logging."
)
@click.option("--log-json", is_flag=True, default=False, hidden=True, help="Emit JSON log lines.")
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_json: bool) -> None:
    """lin — your assigned Linear issues in the terminal."""
    from lin_cli.core.logging import configure_logging

    configure_logging(level=log_level, json_output=log_json)
    ctx.obj = explicit_log_options(ctx, log_level, log_json)

    if ctx.invoked_subcommand is None:
        if sys.stdout.isatty():
            from lin_cli.cli._dashboard import run_dashboard

            run_dashboard(console=err_console, log_overrides=ctx.obj)
        else:
            click.echo(ctx.get_help())


def explicit_log_options(ctx: click.Context, log_level: str, log_json: bool) -> dict[str, Any]:
    """Logging flags given on the command line; these take precedence over ``[logging]``."""
    explicit: dict[str, Any] = {}
    if ctx.get_parameter_source("log_level") is not ParameterSource.DEFAULT:
        explicit["level"] = log_level
    if ctx.get_parameter_source("log_json") is not ParameterSource.DEFAULT:
        explicit["json_output"] = log_json
    return explicit


cli.add_command(ui_cmd)
cli.add_command(auth_cmd)
cli.add_command(issues_cmd)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
