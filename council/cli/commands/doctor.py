"""Doctor command - check council health and per-target sync status."""

import json
import shutil
import sys
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape

from council.adapters import AdapterRegistry, default_registry
from council.branding import CHECK, CROSS, print_section_header
from council.cli.colors import console
from council.config import CouncilConfig, council_exists, load_config
from council.core.errors import CouncilError, ExpertValidationError
from council.experts.store import ExpertStore
from council.sync import Plan, SyncOptions, SyncOrchestrator


class DiagnosticCheck:
    """A single diagnostic check.

    Failed required checks make the council unhealthy. Optional checks
    (sync status, AI CLI) only ask for attention.
    """

    def __init__(self, name: str, category: str, required: bool = True):
        self.name = name
        self.category = category
        self.required = required
        self.passed = False
        self.message = ""
        self.details = []

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": self.category,
            "required": self.required,
            "passed": self.passed,
            "message": self.message,
            "details": list(self.details),
        }


def check_council(root: Path) -> tuple[list[DiagnosticCheck], Optional[CouncilConfig]]:
    """Check the council directory and its configuration."""
    checks = []

    check = DiagnosticCheck(".council directory", "Council")
    checks.append(check)
    if not council_exists(root):
        check.message = "Not found"
        check.details.append("Run 'council init' to create it")
        return checks, None
    check.passed = True
    check.message = "Found"

    check = DiagnosticCheck("config.yaml", "Council")
    checks.append(check)
    try:
        config = load_config(root)
    except CouncilError as e:
        check.message = "Invalid"
        check.details.append(e.message)
        return checks, None
    check.passed = True
    check.message = "Valid"
    return checks, config


def check_experts(store: ExpertStore) -> list[DiagnosticCheck]:
    """Check that experts load and can be synced."""
    listing = store.list_with_warnings()
    checks = []

    check = DiagnosticCheck("Experts", "Experts")
    if listing.experts:
        check.passed = True
        check.message = f"{len(listing.experts)} expert(s) loaded"
        check.details.extend(f"{e.name} ({e.id}){e.source_marker}" for e in listing.experts)
    else:
        check.message = "No experts"
        check.details.append("Add expert files to .council/experts/")
    checks.append(check)

    for warning in listing.warnings:
        check = DiagnosticCheck("Expert file", "Experts")
        check.message = warning
        checks.append(check)

    for expert in listing.experts:
        try:
            expert.validate()
        except ExpertValidationError as e:
            check = DiagnosticCheck("Expert record", "Experts")
            check.message = e.message
            check.details.append("It is skipped by every target until fixed")
            checks.append(check)

    return checks


def _describe_plan(plan: Plan) -> list[str]:
    details = []
    details.extend(f"create {f.path}" for f in plan.to_create)
    details.extend(f"update {f.path}" for f in plan.to_update)
    details.extend(f"stale {path} (council sync --clean)" for path in plan.stale)
    details.extend(f"deprecated {path} (council sync --clean)" for path in plan.deprecated_found)
    details.extend(f"error {e.path}: {e.message}" for e in plan.errors)
    return details


def check_targets(
    root: Path,
    config: CouncilConfig,
    registry: AdapterRegistry,
    store: ExpertStore,
) -> list[DiagnosticCheck]:
    """Compare every resolved target with what a sync would write."""
    orchestrator = SyncOrchestrator(registry, store, root)
    try:
        plans = orchestrator.plan_all(config, SyncOptions())
    except CouncilError as e:
        check = DiagnosticCheck("Targets", "Sync targets")
        check.message = e.message
        return [check]

    checks = []
    for plan in plans:
        adapter = registry.require(plan.target)
        check = DiagnosticCheck(f"{adapter.display_name} ({plan.target})", "Sync targets", required=False)
        check.details = _describe_plan(plan)
        if check.details:
            check.message = "Out of sync - run 'council sync'"
        else:
            check.passed = True
            check.message = "In sync"
        checks.append(check)
    return checks


def check_ai_command(config: CouncilConfig) -> list[DiagnosticCheck]:
    """Check that the configured AI CLI is on PATH."""
    command = config.ai.command
    if not command:
        return []

    check = DiagnosticCheck(f"AI CLI '{command}'", "Integration", required=False)
    found = shutil.which(command)
    if found:
        check.passed = True
        check.message = "Available"
        check.details.append(f"Path: {found}")
    else:
        check.message = "Not found (optional)"
    return [check]


def run_checks(root: Path, registry: AdapterRegistry, store: ExpertStore) -> list[DiagnosticCheck]:
    checks, config = check_council(root)
    if config is None:
        return checks
    checks.extend(check_experts(store))
    checks.extend(check_targets(root, config, registry, store))
    checks.extend(check_ai_command(config))
    return checks


def is_healthy(checks: list[DiagnosticCheck]) -> bool:
    return all(check.passed for check in checks if check.required)


def print_checks(checks: list[DiagnosticCheck]):
    """Print diagnostic checks grouped by category."""
    categories: dict[str, list[DiagnosticCheck]] = {}
    for check in checks:
        categories.setdefault(check.category, []).append(check)

    for category, category_checks in categories.items():
        console.print()
        console.print(f"[highlight]{escape(category)}[/highlight]")

        for check in category_checks:
            if check.passed:
                symbol = f"[success]{CHECK}[/success]"
            elif check.required:
                symbol = f"[error]{CROSS}[/error]"
            else:
                symbol = "[warning]![/warning]"
            console.print(f"  {symbol} {escape(check.name)}: {escape(check.message)}")

            for detail in check.details:
                console.print(f"      [dim]{escape(detail)}[/dim]")

    passed = sum(1 for c in checks if c.passed)
    console.print()
    console.print(f"Summary: {passed}/{len(checks)} checks passed")

    if is_healthy(checks):
        console.print("Your council is healthy!")
    else:
        failed = sum(1 for c in checks if c.required and not c.passed)
        console.print(f"{failed} issue(s) found. See details above.")


@click.command()
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--quiet", "-q", is_flag=True, help="Only print when something is wrong")
def doctor(json_output: bool, quiet: bool):
    """
    Check council health and whether each target is in sync.

    Checks:
    - .council/ exists and config.yaml is valid
    - Experts load and can be synced
    - Each target matches what `council sync` would write
    - The configured AI CLI is installed (optional)

    Exits with status 1 when a required check fails.

    Examples:
        council doctor
        council doctor --json
    """
    root = Path(".")
    checks = run_checks(root, default_registry(), ExpertStore(root))
    healthy = is_healthy(checks)

    if json_output:
        click.echo(json.dumps({"healthy": healthy, "checks": [c.to_dict() for c in checks]}, indent=2))
    elif not (quiet and healthy):
        print_section_header("Council Doctor")
        print_checks(checks)

    if not healthy:
        sys.exit(1)
