"""CLI: xmlmc zone <instance>"""

import json

import click
from rich.console import Console
from rich.table import Table

from xmlmc.errors import XmlmcError
from xmlmc.zone import ZoneResolver

console = Console()


@click.command("zone")
@click.argument("instance_id")
@click.option("--json-output", "--json", is_flag=True)
def zone_cmd(instance_id, json_output):
    """Show zone info for an instance."""
    resolver = ZoneResolver()
    try:
        with console.status(f"Looking up {instance_id}..."):
            info = resolver.resolve(instance_id)
    except XmlmcError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    finally:
        resolver.close()

    if json_output:
        click.echo(json.dumps(info.model_dump(by_alias=True), indent=2))
        return
    table = Table(title=f"Zone info: {instance_id}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Name", info.name)
    table.add_row("Zone", info.zone)
    table.add_row("Endpoint", info.endpoint)
    table.add_row("Release stream", info.stream)
    if info.message:
        table.add_row("Message", info.message)
    console.print(table)
