"""Tool adapters for AI coding assistants.

Each supported tool implements the Adapter interface to describe its file
layout and formats. default_registry() builds a registry with every built-in
adapter; callers construct it once and pass it along.

Adding an adapter:
1. Subclass Adapter in a new module
2. Add it to BUILTIN_ADAPTERS
"""

from .base import (
    Adapter,
    AdapterRegistry,
    CommandSpec,
    DesiredFile,
    DesiredSet,
    PathSet,
    TemplateSet,
)
from .claude import ClaudeAdapter
from .generic import GenericAdapter
from .opencode import OpenCodeAdapter
from .templates import render_review_command

BUILTIN_ADAPTERS = (ClaudeAdapter, GenericAdapter, OpenCodeAdapter)


def default_registry() -> AdapterRegistry:
    """Create a fresh registry holding every built-in adapter."""
    return AdapterRegistry([adapter_cls() for adapter_cls in BUILTIN_ADAPTERS])


__all__ = [
    "Adapter",
    "AdapterRegistry",
    "CommandSpec",
    "DesiredFile",
    "DesiredSet",
    "PathSet",
    "TemplateSet",
    "ClaudeAdapter",
    "GenericAdapter",
    "OpenCodeAdapter",
    "BUILTIN_ADAPTERS",
    "default_registry",
    "render_review_command",
]
