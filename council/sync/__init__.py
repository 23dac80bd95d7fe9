"""Sync engine: target resolution, reconciliation and orchestration."""

from .orchestrator import SyncOrchestrator, SyncReport, all_clean_paths, sync_all, sync_target
from .reconciler import FileError, Plan, Reconciler, SyncOptions, TargetResult
from .resolver import detect_target_names, resolve_targets

__all__ = [
    "SyncOrchestrator",
    "SyncReport",
    "all_clean_paths",
    "sync_all",
    "sync_target",
    "FileError",
    "Plan",
    "Reconciler",
    "SyncOptions",
    "TargetResult",
    "detect_target_names",
    "resolve_targets",
]
