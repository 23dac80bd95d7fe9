"""Generic adapter - the AGENTS.md fallback.

Used when no specific tool is detected. Instead of one file per expert it
writes a single aggregate AGENTS.md at the project root, and it has no
commands.
"""

import logging
from pathlib import Path
from typing import List, Sequence

from council.adapters.base import Adapter, CommandSpec, DesiredFile, DesiredSet, PathSet, ROOT_DIR, TemplateSet
from council.adapters.templates import GENERIC_INSTALL_DOC
from council.core.constants import AGENTS_MD
from council.core.errors import ExpertValidationError
from council.experts.expert import Expert

logger = logging.getLogger(__name__)

AGENTS_MD_HEADER = [
    "# AGENTS.md - Expert Council",
    "",
    "This file defines expert personas for AI coding assistants.",
    "",
    "## Council Members",
    "",
]


class GenericAdapter(Adapter):
    """Fallback target producing AGENTS.md."""

    name = "generic"
    display_name = "Generic (AGENTS.md)"
    is_fallback = True

    def detect(self, root: Path) -> bool:
        # Always available; excluded from auto-detection by the registry
        return True

    def paths(self) -> PathSet:
        return PathSet(agents_dir=ROOT_DIR, commands_dir=ROOT_DIR)

    def templates(self) -> TemplateSet:
        return TemplateSet(install_doc=GENERIC_INSTALL_DOC, commands={})

    def format_agent(self, expert: Expert) -> str:
        """One AGENTS.md section for an expert."""
        self._require_valid(expert)

        parts: List[str] = [
            f"### {expert.name}{expert.source_marker}",
            f"- **ID**: {expert.id}",
            f"- **Focus**: {expert.focus}",
            "",
        ]
        if expert.philosophy:
            parts.extend([expert.philosophy.strip(), ""])
        if expert.principles:
            parts.append("**Principles:**")
            parts.extend(f"- {p}" for p in expert.principles)
            parts.append("")
        return "\n".join(parts)

    def format_command(self, name: str, description: str, body: str) -> str:
        return ""

    def generate_agents_md(self, experts: Sequence[Expert]) -> str:
        """Complete AGENTS.md content. Experts that fail validation are left out."""
        sections = []
        for expert in experts:
            try:
                sections.append(self.format_agent(expert))
            except ExpertValidationError:
                continue
        return "\n".join(AGENTS_MD_HEADER + sections)

    def desired_files(self, experts: Sequence[Expert], commands: Sequence[CommandSpec]) -> DesiredSet:
        desired = DesiredSet()
        for expert in experts:
            try:
                self._require_valid(expert)
            except ExpertValidationError as e:
                logger.warning("Leaving expert out of %s: %s", AGENTS_MD, e)
                desired.failures.append((f"{AGENTS_MD}#{expert.id or '<no id>'}", e.message))

        desired.add(DesiredFile(path=AGENTS_MD, content=self.generate_agents_md(experts), kind="aggregate"))
        return desired

    def owned_files(self, root: Path) -> List[str]:
        return [AGENTS_MD] if (root / AGENTS_MD).is_file() else []
