"""Adapter abstraction and registry.

An adapter encapsulates everything tool-specific about one target: how to
detect the tool in a project, where its files live, the static templates it
ships, and how experts and commands are formatted. The reconciler only talks
to this interface, so adding a tool never touches the sync logic.

Adapters are stateless; detection and listing take the project root.
"""

from __future__ import annotations

import logging
import posixpath
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from council.core.constants import COMMAND_PREFIX
from council.core.errors import ExpertValidationError, UnknownTargetError
from council.experts.expert import ID_SLUG, Expert, agent_filename

logger = logging.getLogger(__name__)

# Every slug-named .md file in an agents directory counts as generated,
# hand-written ones included, and is removed by --clean once no expert maps to it.
_AGENT_FILE = re.compile(rf"^{ID_SLUG}\.md$")
_COMMAND_FILE = re.compile(rf"^{COMMAND_PREFIX}(?:-[a-z0-9]+)*\.md$")

ROOT_DIR = "."


@dataclass(frozen=True)
class PathSet:
    """Directory layout of a target, relative to the project root."""

    agents_dir: str
    commands_dir: str
    deprecated: Tuple[str, ...] = ()

    def managed_dirs(self) -> List[str]:
        """Directories the reconciler must create, in creation order."""
        dirs = []
        for directory in (self.agents_dir, self.commands_dir):
            if directory != ROOT_DIR and directory not in dirs:
                dirs.append(directory)
        return dirs


@dataclass(frozen=True)
class TemplateSet:
    """Static content bundled with an adapter."""

    install_doc: str
    commands: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CommandSpec:
    """A command to generate: description and unformatted body."""

    name: str
    description: str
    body: str


@dataclass(frozen=True)
class DesiredFile:
    """One file that should exist, with its exact content."""

    path: str
    content: str
    kind: str = "agent"
    expert_id: Optional[str] = None


@dataclass
class DesiredSet:
    """Full desired file state for one (adapter, expert set) pair."""

    files: Dict[str, DesiredFile] = field(default_factory=dict)
    failures: List[Tuple[str, str]] = field(default_factory=list)

    def add(self, desired: DesiredFile) -> bool:
        """Add a file; a second file for the same path is recorded as a failure."""
        if desired.path in self.files:
            self.failures.append((desired.path, f"duplicate target path for expert '{desired.expert_id}'"))
            return False
        self.files[desired.path] = desired
        return True


def join(directory: str, filename: str) -> str:
    """Join a target-relative directory and filename (posix style)."""
    if directory == ROOT_DIR:
        return filename
    return posixpath.join(directory, filename)


def dir_exists(root: Path, relative: str) -> bool:
    return (root / relative).is_dir()


def file_exists(root: Path, relative: str) -> bool:
    return (root / relative).exists()


class Adapter(ABC):
    """Per-tool strategy: identity, detection, paths, templates, formatting.

    Subclasses must implement detect(), paths(), templates(), format_agent()
    and format_command(). The default desired_files()/owned_files() describe a
    per-file layout (one agent file per expert, one file per command); an
    adapter with a different layout overrides both.
    """

    name: str = ""
    display_name: str = ""

    # The always-available target used when nothing is detected
    is_fallback: bool = False

    command_suffix: str = ".md"

    @abstractmethod
    def detect(self, root: Path) -> bool:
        """Does this tool exist in the project? Stat calls only."""

    @abstractmethod
    def paths(self) -> PathSet:
        """Directory structure for this tool."""

    @abstractmethod
    def templates(self) -> TemplateSet:
        """Templates bundled with this tool."""

    @abstractmethod
    def format_agent(self, expert: Expert) -> str:
        """Agent file content for one expert.

        Raises:
            ExpertValidationError: If the expert cannot be formatted
        """

    @abstractmethod
    def format_command(self, name: str, description: str, body: str) -> str:
        """Command file content; an empty string means the tool has no commands."""

    # =========================================================================
    # Layout
    # =========================================================================

    def command_filename(self, name: str) -> str:
        return f"{name}{self.command_suffix}"

    def owns_agent_file(self, filename: str) -> bool:
        """Whether a file in the agents directory looks like a generated agent file."""
        if self.paths().agents_dir == self.paths().commands_dir and self.owns_command_file(filename):
            return False
        return bool(_AGENT_FILE.match(filename))

    def owns_command_file(self, filename: str) -> bool:
        """Whether a file in the commands directory looks like a generated command."""
        return bool(_COMMAND_FILE.match(filename))

    def desired_files(self, experts: Sequence[Expert], commands: Sequence[CommandSpec]) -> DesiredSet:
        """Compute every file this target should contain."""
        paths = self.paths()
        desired = DesiredSet()

        for expert in experts:
            path = join(paths.agents_dir, agent_filename(expert))
            try:
                content = self.format_agent(expert)
            except ExpertValidationError as e:
                logger.warning("Skipping expert for %s: %s", self.name, e)
                desired.failures.append((path, e.message))
                continue
            desired.add(DesiredFile(path=path, content=content, kind="agent", expert_id=expert.id))

        for command in commands:
            content = self.format_command(command.name, command.description, command.body)
            if not content:
                continue
            path = join(paths.commands_dir, self.command_filename(command.name))
            desired.add(DesiredFile(path=path, content=content, kind="command"))

        return desired

    def owned_files(self, root: Path) -> List[str]:
        """Generated files currently on disk, as sorted target-relative paths.

        Anything that does not match the naming convention is left alone.
        """
        paths = self.paths()
        owned = set()
        for directory, owns in ((paths.agents_dir, self.owns_agent_file), (paths.commands_dir, self.owns_command_file)):
            if directory == ROOT_DIR:
                continue
            base = root / directory
            if not base.is_dir():
                continue
            for entry in base.iterdir():
                if entry.is_file() and owns(entry.name):
                    owned.add(join(directory, entry.name))
        return sorted(owned)

    def _require_valid(self, expert: Expert) -> None:
        expert.validate()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class AdapterRegistry:
    """Map from tool name to adapter.

    Built once at startup and passed to the resolver and orchestrator.
    Registration is last-wins so tests can override a built-in adapter.
    """

    def __init__(self, adapters: Sequence[Adapter] = ()):
        self._adapters: Dict[str, Adapter] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: Adapter) -> None:
        if not adapter.name:
            raise ValueError(f"adapter {type(adapter).__name__} has no name")
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> Optional[Adapter]:
        return self._adapters.get(name)

    def require(self, name: str) -> Adapter:
        """Return the adapter for ``name`` or raise UnknownTargetError."""
        adapter = self._adapters.get(name)
        if adapter is None:
            raise UnknownTargetError(name, self.names())
        return adapter

    def names(self) -> List[str]:
        return sorted(self._adapters)

    def all(self) -> Dict[str, Adapter]:
        """Copy of the registry contents."""
        return dict(self._adapters)

    def fallback(self) -> Optional[Adapter]:
        for name in self.names():
            if self._adapters[name].is_fallback:
                return self._adapters[name]
        return None

    def detect(self, root: Path) -> List[Adapter]:
        """Adapters whose tool is present in ``root``, fallback excluded, sorted by name."""
        detected = []
        for name in self.names():
            adapter = self._adapters[name]
            if adapter.is_fallback:
                continue
            if adapter.detect(root):
                detected.append(adapter)
        return detected

    def __iter__(self) -> Iterator[Adapter]:
        return (self._adapters[name] for name in self.names())

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)
