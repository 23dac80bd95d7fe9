"""Export command - the council as portable markdown."""

import sys
from pathlib import Path
from typing import Optional

import click

from council.branding import CHECK
from council.cli.colors import print_error, print_warning
from council.config import council_exists
from council.core.constants import FILE_ENCODING
from council.core.errors import CouncilNotInitializedError
from council.experts.export import format_markdown
from council.experts.store import ExpertStore


@click.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to FILE instead of stdout")
def export(output: Optional[str]):
    """
    Export the council as portable markdown.

    Paste the output into any AI chat, use it as custom instructions,
    or save it to share.

    Examples:
        council export
        council export | pbcopy
        council export -o council.md
    """
    root = Path(".")
    if not council_exists(root):
        print_error(CouncilNotInitializedError(str(root)).message)
        sys.exit(1)

    listing = ExpertStore(root).list_with_warnings()
    if not listing.experts:
        print_error("No experts to export - add some to .council/experts/ first")
        sys.exit(1)

    text = format_markdown(listing.experts)
    if not output:
        click.echo(text, nl=False)
        return

    for warning in listing.warnings:
        print_warning(warning)
    Path(output).write_text(text, encoding=FILE_ENCODING)
    click.echo(f"{CHECK} Exported {len(listing.experts)} expert(s) to {output}")
