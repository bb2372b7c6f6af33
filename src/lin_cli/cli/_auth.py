"""lin auth — store the Linear API key in the config file."""

from __future__ import annotations

import click
from rich.console import Console
from rich.prompt import Prompt

console = Console()


@click.command("auth")
@click.option("--api-key", default="", help="Linear personal API key (prompted if omitted)")
@click.option(
    "--keyring", "use_keyring", is_flag=True, default=False, help="Store the key in the OS keyring"
)
def auth_cmd(api_key: str, use_keyring: bool) -> None:
    """Save your Linear API key."""
    cmd_auth(api_key=api_key, use_keyring=use_keyring, console=console)


def cmd_auth(api_key: str, use_keyring: bool, console: Console) -> None:
    from lin_cli.core.config import read_config_data, save_config
    from lin_cli.core.constants import ExitCode
    from lin_cli.core.exceptions import ConfigError

    api_key = api_key.strip()
    if not api_key:
        api_key = Prompt.ask("Linear API key", password=True, console=console).strip()
    if not api_key:
        console.print("[red]Error:[/red] An API key is required.")
        raise SystemExit(ExitCode.CONFIG_ERROR)

    try:
        data = read_config_data()
        data.setdefault("linear", {})["api_key"] = api_key
        path = save_config(data, use_keyring=use_keyring)
    except ConfigError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(ExitCode.CONFIG_ERROR) from exc

    where = "OS keyring" if use_keyring else str(path)
    console.print(f"[green]API key saved[/green] ({where}).")
