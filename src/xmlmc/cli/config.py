"""CLI: xmlmc config show|set|clear"""

import click
from rich.console import Console
from rich.table import Table

console = Console()

KEYS = ("instance", "api_key", "user_agent", "timeout")


def _load_config() -> dict:
    from xmlmc.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from xmlmc.cli.main import _save_config
    _save_config(cfg)


@click.group()
def config():
    """Saved defaults (~/.xmlmc/config.json)."""


@config.command("show")
def config_show():
    """Show saved settings. The API key is masked."""
    cfg = _load_config()
    if not cfg:
        console.print("[yellow]No saved settings.[/yellow]")
        return
    table = Table()
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key in KEYS:
        if key not in cfg:
            continue
        value = str(cfg[key])
        if key == "api_key" and value:
            value = value[:4] + "..."
        table.add_row(key, value)
    console.print(table)


@config.command("set")
@click.argument("key", type=click.Choice(KEYS))
@click.argument("value")
def config_set(key, value):
    """Save a default."""
    cfg = _load_config()
    if key == "timeout":
        try:
            cfg[key] = float(value)
        except ValueError:
            raise click.BadParameter(f"{value!r} is not a number", param_hint="VALUE")
    else:
        cfg[key] = value
    _save_config(cfg)
    console.print(f"[green]Saved {key}.[/green]")


@config.command("clear")
def config_clear():
    """Forget all saved settings."""
    _save_config({})
    console.print("[green]Settings cleared.[/green]")
