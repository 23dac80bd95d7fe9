"""Council package exports.

Keep package import lightweight by lazily importing the sync engine.
"""

from typing import TYPE_CHECKING, Any

__version__ = "0.1.0"

if TYPE_CHECKING:
    from .config import CouncilConfig
    from .sync import SyncOptions, SyncReport

__all__ = ["CouncilConfig", "SyncOptions", "SyncReport", "all_clean_paths", "sync_all", "sync_target"]


def __getattr__(name: str) -> Any:
    """Lazily resolve top-level exports."""
    if name == "CouncilConfig":
        from .config import CouncilConfig

        return CouncilConfig

    if name in {"SyncOptions", "SyncReport", "all_clean_paths", "sync_all", "sync_target"}:
        from . import sync

        return getattr(sync, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
