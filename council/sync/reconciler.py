"""Reconciler - converge one target's files with the expert set.

A reconciliation pass computes the desired file set through the adapter,
diffs it against the generated files currently on disk and applies the
difference:

    desired, absent                 -> create
    desired, present, bytes differ  -> update
    desired, present, bytes equal   -> skipped (no write)
    owned, not desired              -> delete with clean, otherwise reported as stale
    deprecated path present         -> remove with clean, otherwise reported

Dry runs stop after planning; the plan lists exactly what a real run with the
same inputs would do. Per-file failures are collected, never raised. Only a
failure to create the target's base directories aborts the target, as a
TargetDirectoryError.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from council.adapters.base import Adapter, CommandSpec, DesiredFile
from council.adapters.templates import render_review_command
from council.core.constants import REVIEW_COMMAND, REVIEW_COMMAND_DESCRIPTION, command_description
from council.core.errors import TargetDirectoryError
from council.experts.expert import Expert

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


@dataclass(frozen=True)
class SyncOptions:
    """Run-mode flags.

    Attributes:
        dry_run: Plan only, never touch the filesystem
        clean: Remove stale generated files and deprecated paths
        force: Caller has confirmed overwrites; recorded in results only
    """
    dry_run: bool = False
    clean: bool = False
    force: bool = False


@dataclass(frozen=True)
class FileError:
    """A failure confined to one file."""

    path: str
    operation: str  # format, read, write, remove
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "operation": self.operation, "message": self.message}


@dataclass
class Plan:
    """Computed change set for one target."""

    target: str
    to_create: List[DesiredFile] = field(default_factory=list)
    to_update: List[DesiredFile] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
    to_delete: List[str] = field(default_factory=list)
    stale: List[str] = field(default_factory=list)
    deprecated_remove: List[str] = field(default_factory=list)
    deprecated_found: List[str] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.to_create or self.to_update or self.to_delete or self.deprecated_remove)

    @property
    def is_destructive(self) -> bool:
        """Whether applying the plan overwrites or removes existing files."""
        return bool(self.to_update or self.to_delete or self.deprecated_remove)


@dataclass
class TargetResult:
    """Outcome of reconciling one target."""

    target: str
    display_name: str = ""
    dry_run: bool = False
    force: bool = False
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    stale: List[str] = field(default_factory=list)
    deprecated_removed: List[str] = field(default_factory=list)
    deprecated_found: List[str] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)
    fatal: Optional[str] = None
    fatal_code: Optional[str] = None

    @property
    def ok(self) -> bool:
        """False only when the target as a whole failed."""
        return self.fatal is None

    @property
    def changed(self) -> bool:
        return bool(self.created or self.updated or self.deleted or self.deprecated_removed)

    def counts(self) -> Dict[str, int]:
        return {
            "created": len(self.created),
            "updated": len(self.updated),
            "deleted": len(self.deleted) + len(self.deprecated_removed),
            "skipped": len(self.skipped),
            "errors": len(self.errors),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "display_name": self.display_name,
            "ok": self.ok,
            "dry_run": self.dry_run,
            "force": self.force,
            "counts": self.counts(),
            "created": list(self.created),
            "updated": list(self.updated),
            "deleted": list(self.deleted),
            "skipped": list(self.skipped),
            "stale": list(self.stale),
            "deprecated_removed": list(self.deprecated_removed),
            "deprecated_found": list(self.deprecated_found),
            "errors": [e.to_dict() for e in self.errors],
            "fatal": self.fatal,
            "fatal_code": self.fatal_code,
        }

    @classmethod
    def failed(cls, target: str, display_name: str, error: Exception, options: SyncOptions) -> "TargetResult":
        """Result for a target that could not be reconciled at all."""
        return cls(
            target=target,
            display_name=display_name,
            dry_run=options.dry_run,
            force=options.force,
            fatal=str(error),
            fatal_code=getattr(error, "error_code", type(error).__name__),
        )


class Reconciler:
    """Plans and applies the change set for one adapter.

    Usage:
        reconciler = Reconciler(root=".")
        result = reconciler.reconcile(adapter, experts, SyncOptions(clean=True))
    """

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)

    # =========================================================================
    # Planning
    # =========================================================================

    def command_specs(
        self,
        adapter: Adapter,
        experts: Sequence[Expert],
        enabled: Optional[Sequence[str]] = None,
    ) -> List[CommandSpec]:
        """Commands to generate: the review command plus each enabled bundled command.

        Args:
            enabled: Bundled command names to include; None includes all of them
        """
        bundled = adapter.templates().commands
        specs = [CommandSpec(REVIEW_COMMAND, REVIEW_COMMAND_DESCRIPTION, render_review_command(experts))]

        names = sorted(bundled) if enabled is None else list(enabled)
        for name in names:
            if name == REVIEW_COMMAND:
                continue
            if name not in bundled:
                logger.debug("%s does not bundle command %s", adapter.name, name)
                continue
            specs.append(CommandSpec(name, command_description(name), bundled[name]))
        return specs

    def plan(
        self,
        adapter: Adapter,
        experts: Sequence[Expert],
        options: SyncOptions,
        commands: Optional[Sequence[str]] = None,
    ) -> Plan:
        """Compute the change set without touching the filesystem."""
        plan = Plan(target=adapter.name)
        desired = adapter.desired_files(experts, self.command_specs(adapter, experts, commands))

        for path, reason in desired.failures:
            plan.errors.append(FileError(path, "format", reason))

        for path, wanted in desired.files.items():
            current = self.root / path
            if not current.exists():
                plan.to_create.append(wanted)
                continue
            if current.is_dir():
                plan.errors.append(FileError(path, "write", "a directory exists at this path"))
                continue
            try:
                existing = current.read_bytes()
            except OSError as e:
                plan.errors.append(FileError(path, "read", str(e)))
                continue
            if existing == wanted.content.encode(ENCODING):
                plan.unchanged.append(path)
            else:
                plan.to_update.append(wanted)

        for path in adapter.owned_files(self.root):
            if path in desired.files:
                continue
            if options.clean:
                plan.to_delete.append(path)
            else:
                plan.stale.append(path)

        for path in adapter.paths().deprecated:
            location = self.root / path
            if not (location.exists() or location.is_symlink()):
                continue
            if options.clean:
                plan.deprecated_remove.append(path)
            else:
                plan.deprecated_found.append(path)

        return plan

    # =========================================================================
    # Applying
    # =========================================================================

    def apply(self, adapter: Adapter, plan: Plan, options: SyncOptions) -> TargetResult:
        """Carry out a plan. Dry runs return the plan as the result.

        Raises:
            TargetDirectoryError: If a base directory cannot be created
        """
        result = TargetResult(
            target=adapter.name,
            display_name=adapter.display_name,
            dry_run=options.dry_run,
            force=options.force,
            skipped=list(plan.unchanged),
            stale=list(plan.stale),
            deprecated_found=list(plan.deprecated_found),
            errors=list(plan.errors),
        )

        if options.dry_run:
            result.created = [f.path for f in plan.to_create]
            result.updated = [f.path for f in plan.to_update]
            result.deleted = list(plan.to_delete)
            result.deprecated_removed = list(plan.deprecated_remove)
            return result

        self._ensure_dirs(adapter)

        for desired in plan.to_create:
            if self._write(desired, result):
                result.created.append(desired.path)
                logger.info("Created %s", desired.path)

        for desired in plan.to_update:
            if self._write(desired, result):
                result.updated.append(desired.path)
                logger.info("Updated %s", desired.path)

        for path in plan.to_delete:
            if self._remove(path, result):
                result.deleted.append(path)
                logger.info("Removed %s", path)

        for path in plan.deprecated_remove:
            if self._remove(path, result):
                result.deprecated_removed.append(path)
                logger.info("Removed deprecated %s", path)

        return result

    def reconcile(
        self,
        adapter: Adapter,
        experts: Sequence[Expert],
        options: SyncOptions,
        commands: Optional[Sequence[str]] = None,
    ) -> TargetResult:
        """Plan and apply in one step."""
        plan = self.plan(adapter, experts, options, commands=commands)
        return self.apply(adapter, plan, options)

    def _ensure_dirs(self, adapter: Adapter) -> None:
        for directory in adapter.paths().managed_dirs():
            try:
                (self.root / directory).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise TargetDirectoryError(adapter.name, directory, e.strerror or str(e)) from e

    def _write(self, desired: DesiredFile, result: TargetResult) -> bool:
        try:
            (self.root / desired.path).write_bytes(desired.content.encode(ENCODING))
        except OSError as e:
            logger.warning("Could not write %s: %s", desired.path, e)
            result.errors.append(FileError(desired.path, "write", str(e)))
            return False
        return True

    def _remove(self, path: str, result: TargetResult) -> bool:
        location = self.root / path
        try:
            if location.is_dir() and not location.is_symlink():
                shutil.rmtree(location)
            else:
                location.unlink()
        except OSError as e:
            logger.warning("Could not remove %s: %s", path, e)
            result.errors.append(FileError(path, "remove", str(e)))
            return False
        return True
