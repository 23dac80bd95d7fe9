"""Expert commands - list, show and remove council members."""

import json
import sys
from pathlib import Path

import click
from rich.markup import escape

from council.branding import CHECK, print_section_header
from council.cli.colors import console, print_command, print_error, print_warning
from council.config import council_exists
from council.core.errors import CouncilNotInitializedError, ExpertError
from council.experts.store import ExpertStore


@click.command(name="list")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def list_experts(json_output: bool):
    """
    List experts from the project, custom and installed councils.

    Example:
        council list
    """
    listing = ExpertStore(Path(".")).list_with_warnings()

    if json_output:
        click.echo(json.dumps({
            "experts": [expert.to_dict() for expert in listing.experts],
            "warnings": listing.warnings,
        }, indent=2))
        return

    print_section_header("Council Members")

    for warning in listing.warnings:
        print_warning(warning)

    if not listing.experts:
        click.echo("No experts in the council yet.")
        click.echo("\nAdd one in .council/experts/, then run:")
        print_command("council sync")
        return

    for expert in listing.experts:
        console.print(f"  [highlight]{escape(expert.name)}[/highlight]{escape(expert.source_marker)} ({expert.id})")
        console.print(f"    [dim]{escape(expert.focus)}[/dim]")

    click.echo(f"\n{len(listing.experts)} expert(s)")


@click.command()
@click.argument("expert_id")
def remove(expert_id: str):
    """
    Remove an expert from the project council.

    Generated agent files are cleaned up by the next `council sync --clean`.

    Example:
        council remove kent-beck
    """
    store = ExpertStore(Path("."))
    try:
        removed = store.delete(expert_id)
    except ExpertError as e:
        print_error(e.message)
        sys.exit(1)

    if not removed:
        print_error(f"Expert not found in {store.experts_dir}: {expert_id}")
        sys.exit(1)

    click.echo(f"{CHECK} Removed {expert_id}")
    print_command("council sync --clean")


@click.command()
@click.argument("expert_id")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def show(expert_id: str, json_output: bool):
    """
    Show the full details of a project expert.

    Example:
        council show kent-beck
    """
    root = Path(".")
    if not council_exists(root):
        print_error(CouncilNotInitializedError(str(root)).message)
        sys.exit(1)

    store = ExpertStore(root)
    try:
        expert = store.load(expert_id)
    except ExpertError as e:
        print_error(e.message)
        sys.exit(1)

    if expert is None:
        print_error(f"Expert '{expert_id}' not found - run 'council list' to see available experts")
        sys.exit(1)

    path = store.path_for(expert_id)
    if json_output:
        data = expert.to_dict()
        data["path"] = str(path)
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"ID:       {expert.id}")
    click.echo(f"Name:     {expert.name}")
    click.echo(f"Focus:    {expert.focus}")
    if expert.category:
        click.echo(f"Category: {expert.category}")
    if expert.priority:
        click.echo(f"Priority: {expert.priority}")

    if expert.philosophy.strip():
        click.echo("\nPhilosophy:")
        for line in expert.philosophy.strip().splitlines():
            click.echo(f"  {line}")

    if expert.principles:
        click.echo("\nPrinciples:")
        for principle in expert.principles:
            click.echo(f"  - {principle}")

    if expert.red_flags:
        click.echo("\nRed Flags:")
        for flag in expert.red_flags:
            click.echo(f"  - {flag}")

    click.echo(f"\nFile: {path}")
