"""CLI: xmlmc invoke <service> <method> [-p name=value ...]"""

from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from xmlmc.errors import NetworkError, XmlmcError

console = Console()


def _get_client(**kwargs):
    from xmlmc.cli.main import _get_client
    return _get_client(**kwargs)


def _split_param(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep:
        raise click.BadParameter(f"expected name=value, got {raw!r}", param_hint="--param")
    return name, value


@click.command("invoke")
@click.argument("service")
@click.argument("method")
@click.option("-p", "--param", "params", multiple=True, help="Parameter as name=value (repeatable, order kept)")
@click.option("--instance", envvar="XMLMC_INSTANCE", default=None, help="Instance name or endpoint URL")
@click.option("--api-key", envvar="XMLMC_API_KEY", default=None)
@click.option("--timeout", type=float, default=None, help="Seconds; 0 disables the timeout")
@click.option("--json-response", is_flag=True, help="Ask the server for JSON instead of XML")
@click.option("--show-envelope", is_flag=True, help="Print the params block before sending")
def invoke_cmd(service: str, method: str, params: tuple[str, ...], instance: Optional[str],
               api_key: Optional[str], timeout: Optional[float], json_response: bool, show_envelope: bool):
    """Call SERVICE::METHOD and print the raw response."""
    pairs = [_split_param(p) for p in params]
    conn = _get_client(instance=instance, api_key=api_key, timeout=timeout)
    try:
        conn.json_response = json_response
        for name, value in pairs:
            conn.set_param(name, value)
        if show_envelope:
            console.print(f"[dim]{escape(conn.get_param())}[/dim]", highlight=False)
        with console.status(f"Calling {service}::{method}..."):
            body = conn.invoke(service, method)
    except NetworkError as e:
        console.print(f"[red]{e}[/red] (HTTP status {conn.status_code})")
        raise SystemExit(1)
    except XmlmcError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    finally:
        conn.close()
    click.echo(body)
