"""Claude Code adapter."""

from pathlib import Path

from council.adapters.base import Adapter, PathSet, TemplateSet, dir_exists
from council.adapters.templates import CHOICE_ASK, render_commands, render_install_doc
from council.experts.expert import Expert
from council.experts.store import serialize_expert


class ClaudeAdapter(Adapter):
    """Claude Code: .claude/agents and .claude/commands."""

    name = "claude"
    display_name = "Claude Code"

    def detect(self, root: Path) -> bool:
        return dir_exists(root, ".claude")

    def paths(self) -> PathSet:
        return PathSet(agents_dir=".claude/agents", commands_dir=".claude/commands")

    def templates(self) -> TemplateSet:
        return TemplateSet(
            install_doc=render_install_doc(
                "Your AI tool will read the appropriate instructions for setting up the council."
            ),
            commands=render_commands(CHOICE_ASK),
        )

    def format_agent(self, expert: Expert) -> str:
        """Claude Code reads the council's own file format, so agents are the canonical expert file."""
        self._require_valid(expert)
        return serialize_expert(expert)

    def format_command(self, name: str, description: str, body: str) -> str:
        # Plain markdown, no frontmatter
        return body
