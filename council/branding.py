"""
Text branding for the council CLI.

Provides consistent section headers and status symbols across commands.
"""

import sys

import click


def print_section_header(title: str, width: int = 60):
    """Print a formatted section header."""
    click.echo()
    click.echo(f"{'=' * width}")
    click.echo(f"  {title}")
    click.echo(f"{'=' * width}")
    click.echo()


def _supports_unicode() -> bool:
    encoding = getattr(sys.stdout, "encoding", None)
    return bool(encoding) and encoding.lower() not in ("cp1252", "ascii")


# Cross-platform symbols
CHECK = "✓" if _supports_unicode() else "[OK]"
CROSS = "✗" if _supports_unicode() else "[X]"
