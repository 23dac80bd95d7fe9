"""Central layout constants for council.

Paths are relative to the project root unless noted otherwise. The per-user
data directory (custom and installed councils) can be moved with the
COUNCIL_HOME environment variable, which the tests rely on.

Environment Variables:
    COUNCIL_HOME - Per-user data directory (default: click.get_app_dir("council"))
"""

import os
from pathlib import Path

import click

# =============================================================================
# Project layout
# =============================================================================

# Council root inside a project
COUNCIL_DIR: str = ".council"

# Files and directories under COUNCIL_DIR
CONFIG_FILE: str = "config.yaml"
EXPERTS_DIR: str = "experts"
INSTALL_DOC: str = "INSTALL.md"

# Aggregate file written by the fallback target
AGENTS_MD: str = "AGENTS.md"

# =============================================================================
# Per-user layout
# =============================================================================

# Cloned council repositories, one directory per repo
INSTALLED_DIR: str = "installed"

# Personal council (custom experts)
MY_COUNCIL_DIR: str = "my-council"

# =============================================================================
# Commands
# =============================================================================

# Dynamic review command, rendered from the live expert list
REVIEW_COMMAND: str = "council"
REVIEW_COMMAND_DESCRIPTION: str = "Convene the council to review code"

# Every generated command file name starts with this
COMMAND_PREFIX: str = "council"

COMMAND_DESCRIPTIONS: dict = {
    "council-add": "Add expert to council with AI-generated content",
    "council-detect": "Detect project stack and suggest experts",
    "council-remove": "Remove expert from council",
}

# =============================================================================
# Filesystem
# =============================================================================

FILE_ENCODING: str = "utf-8"


def council_home() -> Path:
    """Return the per-user council data directory."""
    override = os.getenv("COUNCIL_HOME")
    if override:
        return Path(override).expanduser()
    return Path(click.get_app_dir("council"))


def command_description(name: str) -> str:
    """Return the description for a bundled command name."""
    return COMMAND_DESCRIPTIONS.get(name, name)
