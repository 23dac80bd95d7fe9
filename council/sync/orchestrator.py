"""Sync orchestration across targets.

The orchestrator validates configuration up front, loads the expert set once
and reconciles every resolved target in order. A failure confined to one
target is recorded in that target's result and the remaining targets still
run; configuration errors propagate before any file is written.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from council.adapters import default_registry
from council.adapters.base import Adapter, AdapterRegistry
from council.config import CouncilConfig, council_exists
from council.core.constants import AGENTS_MD
from council.core.errors import CouncilNotInitializedError, TargetError
from council.experts.expert import Expert
from council.experts.store import ExpertStore
from council.sync.reconciler import Plan, Reconciler, SyncOptions, TargetResult
from council.sync.resolver import resolve_targets

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Per-target results of one sync invocation."""

    results: List[TargetResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def failed_targets(self) -> List[str]:
        return [result.target for result in self.results if not result.ok]

    def result_for(self, target: str) -> Optional[TargetResult]:
        for result in self.results:
            if result.target == target:
                return result
        return None

    def totals(self) -> Dict[str, int]:
        totals = {"created": 0, "updated": 0, "deleted": 0, "skipped": 0, "errors": 0}
        for result in self.results:
            for key, value in result.counts().items():
                totals[key] += value
        return totals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "dry_run": self.dry_run,
            "totals": self.totals(),
            "failed_targets": self.failed_targets,
            "warnings": list(self.warnings),
            "targets": [result.to_dict() for result in self.results],
        }


class SyncOrchestrator:
    """Runs reconciliation for every target a configuration resolves to.

    Usage:
        orchestrator = SyncOrchestrator(default_registry(), ExpertStore("."), ".")
        report = orchestrator.sync_all(load_config("."), SyncOptions(dry_run=True))
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        store: Optional[ExpertStore] = None,
        root: Union[str, Path] = ".",
    ):
        self.registry = registry
        self.root = Path(root)
        self.store = store if store is not None else ExpertStore(self.root)
        self.reconciler = Reconciler(self.root)

    def sync_all(self, config: CouncilConfig, options: SyncOptions) -> SyncReport:
        """Reconcile every resolved target.

        Raises:
            CouncilNotInitializedError: If the project has no council directory
            UnknownTargetError: If a configured target is not registered
        """
        self._require_council()
        adapters = resolve_targets(config, self.registry, self.root)
        return self._run(adapters, config, options)

    def sync_target(self, name: str, config: CouncilConfig, options: SyncOptions) -> SyncReport:
        """Reconcile exactly one named target, regardless of configured targets.

        Raises:
            UnknownTargetError: If ``name`` is not registered
        """
        self._require_council()
        adapter = self.registry.require(name)
        return self._run([adapter], config, options)

    def plan_all(self, config: CouncilConfig, options: SyncOptions, target: Optional[str] = None) -> List[Plan]:
        """Plans for every resolved target (or just ``target``) without touching disk."""
        self._require_council()
        if target:
            adapters = [self.registry.require(target)]
        else:
            adapters = resolve_targets(config, self.registry, self.root)
        experts = self.store.list_experts()
        return [self.reconciler.plan(adapter, experts, options, commands=config.commands) for adapter in adapters]

    def _require_council(self) -> None:
        if not council_exists(self.root):
            raise CouncilNotInitializedError(str(self.root))

    def _run(self, adapters: Sequence[Adapter], config: CouncilConfig, options: SyncOptions) -> SyncReport:
        listing = self.store.list_with_warnings()
        report = SyncReport(warnings=list(listing.warnings), dry_run=options.dry_run)
        logger.debug("Syncing %d experts to %s", len(listing.experts), [a.name for a in adapters])

        for adapter in adapters:
            report.results.append(self._sync_one(adapter, listing.experts, config, options))
        return report

    def _sync_one(
        self,
        adapter: Adapter,
        experts: List[Expert],
        config: CouncilConfig,
        options: SyncOptions,
    ) -> TargetResult:
        try:
            result = self.reconciler.reconcile(adapter, experts, options, commands=config.commands)
        except (TargetError, OSError) as e:
            logger.error("Sync failed for %s: %s", adapter.name, e)
            return TargetResult.failed(adapter.name, adapter.display_name, e, options)

        if result.errors:
            logger.warning("%s: %d file error(s)", adapter.name, len(result.errors))
        return result


def all_clean_paths(registry: Optional[AdapterRegistry] = None) -> List[str]:
    """Every path a full cleanup removes: target directories, deprecated paths and AGENTS.md."""
    registry = registry if registry is not None else default_registry()
    paths = {AGENTS_MD}
    for adapter in registry:
        layout = adapter.paths()
        paths.update(layout.managed_dirs())
        paths.update(layout.deprecated)
    return sorted(paths)


def sync_all(
    config: CouncilConfig,
    options: SyncOptions,
    root: Union[str, Path] = ".",
    registry: Optional[AdapterRegistry] = None,
) -> SyncReport:
    """Sync every configured target using the built-in adapters."""
    orchestrator = SyncOrchestrator(registry or default_registry(), root=root)
    return orchestrator.sync_all(config, options)


def sync_target(
    name: str,
    config: CouncilConfig,
    options: SyncOptions,
    root: Union[str, Path] = ".",
    registry: Optional[AdapterRegistry] = None,
) -> SyncReport:
    """Sync a single named target using the built-in adapters."""
    orchestrator = SyncOrchestrator(registry or default_registry(), root=root)
    return orchestrator.sync_target(name, config, options)
