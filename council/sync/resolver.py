"""Target resolution - which adapters a sync runs against.

Resolution order:
1. ``targets`` in the configuration, in the given order
2. ``tool`` in the configuration
3. Auto-detection: nothing detected -> fallback adapter, otherwise every
   detected adapter sorted by name

Unknown names are configuration errors and are raised before anything is
written.
"""

import logging
from pathlib import Path
from typing import List, Union

from council.adapters.base import Adapter, AdapterRegistry
from council.config import CouncilConfig
from council.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def resolve_targets(config: CouncilConfig, registry: AdapterRegistry, root: Union[str, Path] = ".") -> List[Adapter]:
    """Map the configuration to an ordered list of adapters.

    Raises:
        UnknownTargetError: If a configured target or tool is not registered
        ConfigurationError: If auto-detection finds nothing and no fallback exists
    """
    if config.targets:
        adapters: List[Adapter] = []
        for name in config.targets:
            adapter = registry.require(name)
            if adapter not in adapters:
                adapters.append(adapter)
        logger.debug("Using configured targets: %s", [a.name for a in adapters])
        return adapters

    if config.tool:
        logger.debug("Using configured tool: %s", config.tool)
        return [registry.require(config.tool)]

    detected = registry.detect(Path(root))
    if detected:
        logger.info("Detected targets: %s", ", ".join(a.name for a in detected))
        return detected

    fallback = registry.fallback()
    if fallback is None:
        raise ConfigurationError("no AI tool detected and no fallback target is registered")
    logger.info("No AI tool detected, using %s", fallback.display_name)
    return [fallback]


def detect_target_names(registry: AdapterRegistry, root: Union[str, Path] = ".") -> List[str]:
    """Names of detected targets, or the fallback's name when nothing is detected."""
    detected = registry.detect(Path(root))
    if detected:
        return [a.name for a in detected]
    fallback = registry.fallback()
    return [fallback.name] if fallback else []
