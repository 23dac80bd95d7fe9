"""Expert file persistence and source listing.

This module provides the single-file primitives (parse, serialize, save) and
the ExpertStore class that gathers experts from every source a project merges:

- project experts:   <root>/.council/experts/*.md          (source "")
- custom experts:    <home>/my-council/*.md                (source "custom")
- installed experts: <home>/installed/<repo>/*.md          (source "installed:<repo>")

Provenance is never read from the file; it is assigned from the directory a
file was found in. The sync engine only consumes ExpertStore.list_experts().
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from council.core.constants import (
    COUNCIL_DIR,
    EXPERTS_DIR,
    FILE_ENCODING,
    INSTALLED_DIR,
    MY_COUNCIL_DIR,
    council_home,
)
from council.core.errors import ExpertIntegrityError, ExpertParseError, InvalidExpertIdError
from council.experts.expert import (
    SOURCE_CUSTOM,
    SOURCE_INSTALLED_PREFIX,
    SOURCE_NATIVE,
    Expert,
    effective_body,
    is_valid_id,
)

logger = logging.getLogger(__name__)

_FRONTMATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z", re.DOTALL)

# Files in an expert directory that are never experts
_SKIPPED_FILES = {"README.md"}


# =============================================================================
# Single-file primitives
# =============================================================================


def parse_expert(text: str, path: str = "<string>", source: str = SOURCE_NATIVE) -> Expert:
    """Parse expert markdown with YAML frontmatter.

    Args:
        text: File content
        path: Used in error messages only
        source: Provenance tag to assign

    Returns:
        Parsed Expert

    Raises:
        ExpertParseError: If the frontmatter is missing, unterminated or not a mapping
    """
    if not text.startswith("---"):
        raise ExpertParseError(path, "missing frontmatter: file must start with '---'")

    match = _FRONTMATTER.match(text)
    if not match:
        raise ExpertParseError(path, "invalid frontmatter: missing closing '---'")

    frontmatter, body = match.group(1), match.group(2)
    try:
        data = yaml.safe_load(frontmatter) or {}
    except yaml.YAMLError as e:
        raise ExpertParseError(path, _describe_yaml_error(frontmatter, e)) from e

    if not isinstance(data, dict):
        raise ExpertParseError(path, "frontmatter must be a YAML mapping")

    return Expert.from_dict(data, source=source, body=body.strip())


def _describe_yaml_error(content: str, error: yaml.YAMLError) -> str:
    """Render a YAML error with the surrounding frontmatter lines."""
    mark = getattr(error, "problem_mark", None)
    problem = getattr(error, "problem", None) or str(error)
    if mark is None:
        return f"failed to parse YAML: {problem}. Check indentation and special characters"

    lines = content.splitlines()
    line_no = mark.line + 1
    start = max(line_no - 2, 1)
    end = min(line_no + 1, len(lines))

    parts = [f"YAML error at line {line_no}:", ""]
    for number in range(start, end + 1):
        marker = "> " if number == line_no else "  "
        parts.append(f"  {marker}{number}: {lines[number - 1]}")
    parts.append("")
    parts.append(f"Error: {problem}")
    if "expected" in problem:
        parts.append("Hint: check indentation, quote values containing ': @ #', and use '-' for list items")
    return "\n".join(parts)


def serialize_expert(expert: Expert) -> str:
    """Render the canonical file content for an expert.

    Key order is fixed and the body is synthesized when empty, so structurally
    identical records always produce byte-identical files.
    """
    frontmatter = yaml.safe_dump(
        expert.frontmatter(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"---\n{frontmatter}---\n\n{effective_body(expert)}\n"


def load_expert_file(path: Path, source: str = SOURCE_NATIVE) -> Expert:
    """Read and parse one expert file."""
    return parse_expert(path.read_text(encoding=FILE_ENCODING), path=str(path), source=source)


def save_expert(expert: Expert, path: Path) -> None:
    """Write an expert to ``path`` and verify it reads back.

    Raises:
        ExpertIntegrityError: If the written file does not parse back to the
            same id and name. The bad file is removed.
    """
    if not expert.body.strip():
        expert.body = effective_body(expert)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_expert(expert), encoding=FILE_ENCODING)

    try:
        loaded = load_expert_file(path, source=expert.source)
    except ExpertParseError as e:
        path.unlink()
        raise ExpertIntegrityError(str(path), e.message) from e

    if loaded.id != expert.id or loaded.name != expert.name:
        path.unlink()
        raise ExpertIntegrityError(str(path), "id or name mismatch after save")


# =============================================================================
# Directory listing
# =============================================================================


@dataclass
class ExpertListing:
    """Experts found across sources, plus files that could not be loaded."""

    experts: List[Expert] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def extend(self, other: "ExpertListing") -> None:
        self.experts.extend(other.experts)
        self.warnings.extend(other.warnings)


def list_experts_in_dir(directory: Path, source: str) -> ExpertListing:
    """Load every ``*.md`` expert file in a directory, sorted by filename.

    A missing directory is an empty listing. Files that fail to parse are
    skipped and reported as warnings.
    """
    listing = ExpertListing()
    if not directory.is_dir():
        return listing

    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix != ".md" or path.name in _SKIPPED_FILES:
            continue
        try:
            listing.experts.append(load_expert_file(path, source=source))
        except (ExpertParseError, OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping expert file %s: %s", path, e)
            listing.warnings.append(f"could not load {path.name}: {e}")
    return listing


class ExpertStore:
    """Access to a project's council and the user's custom/installed councils.

    Usage:
        store = ExpertStore(root=".")
        experts = store.list_experts()
        store.save(Expert(id="kent-beck", name="Kent Beck", focus="TDD"))
    """

    def __init__(self, root: Path | str = ".", home: Optional[Path | str] = None):
        """Initialize the store.

        Args:
            root: Project root containing .council/
            home: Per-user council directory (default: council_home())
        """
        self.root = Path(root)
        self.home = Path(home) if home is not None else council_home()

    # =========================================================================
    # Paths
    # =========================================================================

    @property
    def experts_dir(self) -> Path:
        return self.root / COUNCIL_DIR / EXPERTS_DIR

    @property
    def custom_dir(self) -> Path:
        return self.home / MY_COUNCIL_DIR

    @property
    def installed_dir(self) -> Path:
        return self.home / INSTALLED_DIR

    def path_for(self, expert_id: str) -> Path:
        """Path of a project expert file.

        Raises:
            InvalidExpertIdError: If the id is not a slug, so it cannot
                point outside the experts directory
        """
        if not is_valid_id(expert_id):
            raise InvalidExpertIdError(expert_id)
        return self.experts_dir / f"{expert_id}.md"

    # =========================================================================
    # Listing
    # =========================================================================

    def list_project(self) -> ExpertListing:
        return list_experts_in_dir(self.experts_dir, SOURCE_NATIVE)

    def list_custom(self) -> ExpertListing:
        return list_experts_in_dir(self.custom_dir, SOURCE_CUSTOM)

    def installed_repos(self) -> List[str]:
        """Names of installed council repositories, sorted."""
        if not self.installed_dir.is_dir():
            return []
        return sorted(p.name for p in self.installed_dir.iterdir() if p.is_dir())

    def list_installed(self) -> ExpertListing:
        listing = ExpertListing()
        for repo in self.installed_repos():
            listing.extend(list_experts_in_dir(self.installed_dir / repo, SOURCE_INSTALLED_PREFIX + repo))
        return listing

    def list_with_warnings(self) -> ExpertListing:
        """All experts: installed, then custom, then project."""
        listing = ExpertListing()
        listing.extend(self.list_installed())
        listing.extend(self.list_custom())
        listing.extend(self.list_project())
        return listing

    def list_experts(self) -> List[Expert]:
        return self.list_with_warnings().experts

    # =========================================================================
    # Project CRUD
    # =========================================================================

    def load(self, expert_id: str) -> Optional[Expert]:
        path = self.path_for(expert_id)
        if not path.exists():
            return None
        return load_expert_file(path)

    def save(self, expert: Expert) -> Path:
        path = self.path_for(expert.id)
        save_expert(expert, path)
        logger.info("Saved expert %s to %s", expert.id, path)
        return path

    def exists(self, expert_id: str) -> bool:
        return self.path_for(expert_id).exists()

    def delete(self, expert_id: str) -> bool:
        """Remove a project expert. Returns False if it did not exist."""
        path = self.path_for(expert_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted expert %s", expert_id)
        return True
