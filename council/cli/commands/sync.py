"""Sync command - mirror the council into every configured AI tool."""

import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from council.adapters import default_registry
from council.branding import CHECK, CROSS, print_section_header
from council.cli.colors import console, print_error, print_info, print_warning
from council.config import load_config
from council.core.errors import CouncilError
from council.experts.store import ExpertStore
from council.sync import SyncOptions, SyncOrchestrator, SyncReport, TargetResult


@click.command()
@click.argument("target", required=False)
@click.option("--dry-run", is_flag=True, help="Show what would change without writing anything")
@click.option("--clean", is_flag=True, help="Remove stale generated files and deprecated paths")
@click.option("--force", "-f", is_flag=True, help="Overwrite and remove files without asking")
@click.option("--json", "json_output", is_flag=True, help="Output the report as JSON")
def sync(target: Optional[str], dry_run: bool, clean: bool, force: bool, json_output: bool):
    """
    Sync council experts to AI tool configurations.

    Syncs every configured target, or only TARGET when given.

    Examples:
        council sync
        council sync claude --dry-run
        council sync --clean --force
    """
    root = Path(".")
    options = SyncOptions(dry_run=dry_run, clean=clean, force=force)

    try:
        config = load_config(root)
        orchestrator = SyncOrchestrator(default_registry(), ExpertStore(root), root)

        if _should_confirm(options, json_output):
            plans = orchestrator.plan_all(config, options, target=target)
            if any(plan.is_destructive for plan in plans):
                click.confirm("Existing generated files will be overwritten or removed. Continue?", abort=True)

        if target:
            report = orchestrator.sync_target(target, config, options)
        else:
            report = orchestrator.sync_all(config, options)

    except CouncilError as e:
        if json_output:
            click.echo(json.dumps({"ok": False, "error": e.to_dict()}, indent=2))
        else:
            print_error(e.message)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)

    if not report.ok:
        sys.exit(1)


def _should_confirm(options: SyncOptions, json_output: bool) -> bool:
    if options.dry_run or options.force or json_output:
        return False
    return click.get_text_stream("stdin").isatty()


def _print_report(report: SyncReport):
    print_section_header("Council Sync (dry run)" if report.dry_run else "Council Sync")

    for warning in report.warnings:
        print_warning(warning)

    for result in report.results:
        _print_result(result, report.dry_run)

    totals = report.totals()
    prefix = "Would sync" if report.dry_run else "Synced"
    console.print(
        f"\n{prefix} {len(report.results)} target(s): "
        f"{totals['created']} created, {totals['updated']} updated, "
        f"{totals['deleted']} deleted, {totals['skipped']} unchanged"
    )
    if report.failed_targets:
        print_error(f"Failed targets: {', '.join(report.failed_targets)}")


def _print_result(result: TargetResult, dry_run: bool):
    symbol = CHECK if result.ok else CROSS
    console.print(f"\n{symbol} [target]{escape(result.display_name)}[/target] ({result.target})")

    if not result.ok:
        print_error(result.fatal or "target failed")
        return

    would = "would " if dry_run else ""
    for path in result.created:
        console.print(f"  [created]+[/created] {escape(path)} [dim]({would}create)[/dim]")
    for path in result.updated:
        console.print(f"  [updated]~[/updated] {escape(path)} [dim]({would}update)[/dim]")
    for path in result.deleted + result.deprecated_removed:
        console.print(f"  [deleted]-[/deleted] {escape(path)} [dim]({would}remove)[/dim]")

    for path in result.stale:
        print_warning(f"{path} is no longer generated (use --clean to remove)")
    for path in result.deprecated_found:
        print_warning(f"deprecated path {path} found (use --clean to remove)")
    for error in result.errors:
        print_error(f"{error.path}: {error.message}")

    if not result.changed and not dry_run:
        print_info("Already up to date")
