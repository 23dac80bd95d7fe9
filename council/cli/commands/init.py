"""Init command - create the council directory for a project."""

import shutil
import sys
from pathlib import Path
from typing import List, Optional

import click

from council.adapters import default_registry
from council.adapters.base import AdapterRegistry
from council.branding import CHECK, print_section_header
from council.cli.colors import print_command, print_error, print_warning
from council.config import council_exists, council_root, init_council
from council.core.constants import COUNCIL_DIR, FILE_ENCODING, INSTALL_DOC
from council.core.errors import CouncilError
from council.sync import all_clean_paths, resolve_targets


def remove_generated(root: Path, registry: AdapterRegistry) -> List[str]:
    """Delete the council directory and every generated target path. Returns what was removed."""
    removed = []
    for relative in [COUNCIL_DIR] + all_clean_paths(registry):
        path = root / relative
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
        else:
            continue
        removed.append(relative)
    return removed


@click.command()
@click.option("--tool", "-t", help="Primary AI tool (claude, opencode, generic)")
@click.option("--clean", is_flag=True, help="Remove the existing council and generated files first")
def init(tool: Optional[str], clean: bool):
    """
    Initialize a council in the current project.

    Examples:
        council init
        council init --tool opencode
        council init --clean
    """
    root = Path(".")
    registry = default_registry()

    print_section_header("Initialize Council")

    try:
        if tool:
            tool = registry.require(tool.strip().lower()).name

        if clean:
            for relative in remove_generated(root, registry):
                click.echo(f"Removed {relative}")
        elif council_exists(root):
            print_warning(f"Council already initialized in {council_root(root)}")
            click.echo("Use --clean to start over.")
            sys.exit(1)

        config = init_council(root, tool)
        adapter = resolve_targets(config, registry, root)[0]
        install_doc = council_root(root) / INSTALL_DOC
        install_doc.write_text(adapter.templates().install_doc, encoding=FILE_ENCODING)

    except (CouncilError, OSError) as e:
        print_error(str(e))
        sys.exit(1)

    click.echo(f"{CHECK} Council initialized in {council_root(root)}")
    click.echo(f"Target: {adapter.display_name}")
    click.echo("\nNext:")
    print_command("council sync")
