"""OpenCode adapter."""

from pathlib import Path
from typing import List

from council.adapters.base import Adapter, PathSet, TemplateSet, dir_exists, file_exists
from council.adapters.templates import CHOICE_TEXT, render_commands, render_install_doc
from council.experts.expert import Expert


class OpenCodeAdapter(Adapter):
    """OpenCode: .opencode/agents and .opencode/commands.

    Earlier OpenCode releases read agents from the singular ``.opencode/agent``
    directory; it is declared deprecated so ``sync --clean`` removes it.
    """

    name = "opencode"
    display_name = "OpenCode"

    def detect(self, root: Path) -> bool:
        return dir_exists(root, ".opencode") or file_exists(root, "opencode.json")

    def paths(self) -> PathSet:
        return PathSet(
            agents_dir=".opencode/agents",
            commands_dir=".opencode/commands",
            deprecated=(".opencode/agent",),
        )

    def templates(self) -> TemplateSet:
        return TemplateSet(
            install_doc=render_install_doc("Set up the council for your project."),
            commands=render_commands(CHOICE_TEXT),
        )

    def format_agent(self, expert: Expert) -> str:
        self._require_valid(expert)

        parts: List[str] = [
            "---",
            f"description: {expert.focus}",
            "mode: subagent",
            "---",
            "",
            f"# {expert.name}",
            "",
            f"You are channeling {expert.name}, known for expertise in {expert.focus}.",
            "",
        ]

        if expert.philosophy:
            parts.extend(["## Philosophy", "", expert.philosophy.strip(), ""])

        if expert.principles:
            parts.extend(["## Principles", ""])
            parts.extend(f"- {p}" for p in expert.principles)
            parts.append("")

        if expert.red_flags:
            parts.extend(["## Red Flags", "", "Watch for these patterns:"])
            parts.extend(f"- {r}" for r in expert.red_flags)
            parts.append("")

        parts.extend([
            "## Review Style",
            "",
            "When reviewing code, focus on your area of expertise. Be direct and specific.",
            "Explain your reasoning. Suggest concrete improvements.",
        ])
        return "\n".join(parts) + "\n"

    def format_command(self, name: str, description: str, body: str) -> str:
        parts = [
            "---",
            f"description: {description}",
            "mode: subagent",
            "---",
            "",
            body,
        ]
        return "\n".join(parts)
