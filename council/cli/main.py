"""
Council CLI - expert personas for AI coding assistants.

Command Structure: council <command> [options]

Examples:
    council init --tool claude
    council sync --dry-run
    council sync opencode --clean
    council targets
    council doctor
"""

import logging

import click

from council import __version__


@click.group()
@click.version_option(version=__version__, prog_name="council")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """
    Council - keep expert personas in sync across AI coding tools.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import commands
from council.cli.commands import doctor, experts, export, init, sync, targets

cli.add_command(init.init)
cli.add_command(sync.sync)
cli.add_command(targets.targets)
cli.add_command(experts.list_experts)
cli.add_command(experts.show)
cli.add_command(experts.remove)
cli.add_command(export.export)
cli.add_command(doctor.doctor)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
