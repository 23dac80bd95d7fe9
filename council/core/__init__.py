"""Core building blocks shared across council: errors, constants, rendering."""

from .errors import (
    ConfigurationError,
    CouncilError,
    CouncilNotInitializedError,
    ExpertError,
    ExpertIntegrityError,
    ExpertParseError,
    ExpertValidationError,
    InvalidConfigError,
    InvalidExpertIdError,
    TargetDirectoryError,
    TargetError,
    UnknownTargetError,
)

__all__ = [
    "CouncilError",
    "ConfigurationError",
    "CouncilNotInitializedError",
    "UnknownTargetError",
    "InvalidConfigError",
    "TargetError",
    "TargetDirectoryError",
    "ExpertError",
    "ExpertParseError",
    "ExpertValidationError",
    "InvalidExpertIdError",
    "ExpertIntegrityError",
]
