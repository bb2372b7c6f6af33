"""lin issues — print assigned issues without starting the dashboard."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from lin_cli.linear.models import Issue

console = Console()
err_console = Console(stderr=True)


@click.command("issues")
@click.option(
    "--refresh", is_flag=True, default=False, help="Fetch from Linear, ignoring the cache"
)
@click.option("--json", "as_json", is_flag=True, default=False)
def issues_cmd(refresh: bool, as_json: bool) -> None:
    """List issues assigned to you."""
    cmd_issues(refresh=refresh, as_json=as_json, console=console)


def cmd_issues(refresh: bool, as_json: bool, console: Console) -> None:
    from lin_cli.cli._startup import build_cache, build_client, fail_startup, load_startup_config
    from lin_cli.core.constants import ExitCode
    from lin_cli.core.exceptions import CacheError, ConfigError, DataSourceError
    from lin_cli.linear import fetch_and_cache

    config = load_startup_config(err_console)
    try:
        cache = build_cache(config)
        issues, needs_refresh = cache.load()
        if refresh or needs_refresh:
            issues = fetch_and_cache(build_client(config), cache)
    except (ConfigError, CacheError) as exc:
        fail_startup(exc, err_console)
    except DataSourceError as exc:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(exc)}), err=True)
        else:
            err_console.print(f"[red]Error retrieving issues:[/red] {exc}")
        raise SystemExit(ExitCode.NETWORK_ERROR) from exc

    if as_json:
        click.echo(json.dumps([_issue_to_dict(issue) for issue in issues], indent=2))
        return

    if not issues:
        console.print("[dim]No issues assigned to you.[/dim]")
        return

    table = Table(title="Assigned Issues", show_lines=False)
    table.add_column("ID", style="bold")
    table.add_column("Title")
    table.add_column("State")
    table.add_column("Branch", style="dim")
    for issue in issues:
        table.add_row(issue.identifier, issue.title, issue.state_name, issue.branch_name)
    console.print(table)


def _issue_to_dict(issue: Issue) -> dict:
    return {
        "identifier": issue.identifier,
        "title": issue.title,
        "state": issue.state_name,
        "priority": issue.priority_label,
        "url": issue.url,
        "branch_name": issue.branch_name,
        "attachments": [a.url for a in issue.attachments],
    }
