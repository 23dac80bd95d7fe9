"""Targets command - list the AI tools council can sync to."""

import json
from pathlib import Path

import click
from rich.table import Table

from council.adapters import default_registry
from council.branding import print_section_header
from council.cli.colors import console


@click.command()
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def targets(json_output: bool):
    """
    List supported targets and whether each is detected here.

    Example:
        council targets
    """
    root = Path(".")
    rows = []
    for adapter in default_registry():
        paths = adapter.paths()
        rows.append({
            "name": adapter.name,
            "display_name": adapter.display_name,
            "detected": False if adapter.is_fallback else adapter.detect(root),
            "fallback": adapter.is_fallback,
            "agents_dir": paths.agents_dir,
            "commands_dir": paths.commands_dir,
            "deprecated": list(paths.deprecated),
        })

    if json_output:
        click.echo(json.dumps(rows, indent=2))
        return

    print_section_header("Targets")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="target")
    table.add_column("Tool")
    table.add_column("Detected")
    table.add_column("Agents")
    table.add_column("Commands")
    for row in rows:
        detected = "fallback" if row["fallback"] else ("yes" if row["detected"] else "no")
        table.add_row(row["name"], row["display_name"], detected, row["agents_dir"], row["commands_dir"])
    console.print(table)
