"""Core exception hierarchy for council.

All council exceptions inherit from CouncilError, enabling both specific
and broad exception handling. The class a failure belongs to decides how far
it propagates during a sync:

Exception Hierarchy:
    CouncilError (base)
    ├── ConfigurationError - fatal to the whole invocation
    │   ├── CouncilNotInitializedError
    │   ├── UnknownTargetError
    │   └── InvalidConfigError
    ├── TargetError - fatal to a single target
    │   └── TargetDirectoryError
    └── ExpertError - expert record issues
        ├── ExpertParseError
        ├── ExpertValidationError
        │   └── InvalidExpertIdError
        └── ExpertIntegrityError

File-level write/remove failures are not exceptions at all: the reconciler
records them as FileError entries in the target result.
"""

from typing import Any, Dict, List, Optional, Sequence


class CouncilError(Exception):
    """Base exception for all council errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "UNKNOWN_TARGET")
        details: Optional dict with additional context
    """

    error_code: str = "COUNCIL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dict for machine-readable output."""
        return {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


# Configuration Errors
class ConfigurationError(CouncilError):
    """Base class for configuration errors."""
    error_code = "CONFIG_ERROR"


class CouncilNotInitializedError(ConfigurationError):
    """The project has no council directory."""
    error_code = "NOT_INITIALIZED"

    def __init__(self, root: str):
        super().__init__(
            f"council not initialized in {root}: run 'council init' first",
            details={"root": root}
        )


class UnknownTargetError(ConfigurationError):
    """A target or tool name does not match any registered adapter."""
    error_code = "UNKNOWN_TARGET"

    def __init__(self, name: str, valid: Sequence[str]):
        self.name = name
        super().__init__(
            f"unknown target '{name}' - valid targets: {', '.join(valid)}",
            details={"target": name, "valid": list(valid)}
        )


class InvalidConfigError(ConfigurationError):
    """Configuration value is invalid."""
    error_code = "INVALID_CONFIG"

    def __init__(self, config_key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value for '{config_key}': {reason}",
            details={"config_key": config_key, "value": str(value), "reason": reason}
        )


# Target Errors
class TargetError(CouncilError):
    """Base class for errors that abort reconciliation of one target."""
    error_code = "TARGET_ERROR"

    def __init__(self, target: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.target = target
        details = dict(details or {})
        details.setdefault("target", target)
        super().__init__(message, details=details)


class TargetDirectoryError(TargetError):
    """A target's base directory could not be created."""
    error_code = "TARGET_DIRECTORY"

    def __init__(self, target: str, path: str, reason: str):
        super().__init__(
            target,
            f"cannot create directory '{path}' for {target}: {reason}",
            details={"path": path, "reason": reason}
        )


# Expert Errors
class ExpertError(CouncilError):
    """Base class for expert record errors."""
    error_code = "EXPERT_ERROR"


class ExpertParseError(ExpertError):
    """An expert file could not be parsed."""
    error_code = "EXPERT_PARSE"

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"could not parse {path}: {reason}",
            details={"path": path, "reason": reason}
        )


class ExpertValidationError(ExpertError):
    """An expert record cannot be formatted."""
    error_code = "EXPERT_INVALID"

    def __init__(self, expert_id: str, missing: List[str], message: Optional[str] = None):
        label = expert_id or "<no id>"
        super().__init__(
            message or f"expert '{label}' is missing required fields: {', '.join(missing)}",
            details={"expert_id": expert_id, "missing": list(missing)}
        )


class InvalidExpertIdError(ExpertValidationError):
    """An expert id cannot be used as a filename."""
    error_code = "EXPERT_INVALID_ID"

    def __init__(self, expert_id: str):
        super().__init__(
            expert_id,
            [],
            message=(
                f"invalid expert id '{expert_id}': use lowercase letters and digits "
                "separated by single '-', '_' or '.'"
            ),
        )


class ExpertIntegrityError(ExpertError):
    """A saved expert file does not read back as the record that was written."""
    error_code = "EXPERT_INTEGRITY"

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"saved file {path} is invalid: {reason}",
            details={"path": path, "reason": reason}
        )
