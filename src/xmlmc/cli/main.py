"""
XMLMC CLI — `xmlmc` command.

Commands:
  xmlmc zone <instance>               Show zone info for an instance
  xmlmc invoke <service> <method>     Call an XMLMC method and print the response
  xmlmc config show|set|clear         Manage saved defaults
"""

import json
import os
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install xmlmc-api[cli]")

from xmlmc.client import XmlmcInstance

console = Console()
err_console = Console(stderr=True)
CONFIG_FILE = Path(os.environ.get("XMLMC_CONFIG", Path.home() / ".xmlmc" / "config.json"))


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client(instance: Optional[str] = None, api_key: Optional[str] = None,
                timeout: Optional[float] = None) -> XmlmcInstance:
    cfg = _load_config()
    server = instance or cfg.get("instance")
    if not server:
        err_console.print("[red]No instance given. Pass --instance or run `xmlmc config set instance NAME`.[/red]")
        raise SystemExit(1)
    conn = XmlmcInstance(server)
    if conn.zone_error is not None:
        err_console.print(f"[red]Unable to resolve {server}: {conn.zone_error}[/red]")
        raise SystemExit(1)
    conn.api_key = api_key or cfg.get("api_key", "")
    if cfg.get("user_agent"):
        conn.user_agent = cfg["user_agent"]
    if timeout is not None:
        conn.timeout = timeout
    elif cfg.get("timeout") is not None:
        conn.timeout = float(cfg["timeout"])
    return conn


@click.group()
@click.version_option("0.1.0")
def main():
    """XMLMC CLI — call XMLMC methods from the shell."""


# Register subcommands from separate modules
from xmlmc.cli.config import config
from xmlmc.cli.invoke import invoke_cmd
from xmlmc.cli.zone import zone_cmd

main.add_command(config)
main.add_command(invoke_cmd)
main.add_command(zone_cmd)


if __name__ == "__main__":
    main()
