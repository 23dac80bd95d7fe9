"""Configuration management for council.

The project configuration lives in ``.council/config.yaml``. Environment
variables (optionally from a ``.env`` file) override file values:

    COUNCIL_TOOL     - Primary tool (claude, opencode, generic, ...)
    COUNCIL_TARGETS  - Comma separated explicit target list
    COUNCIL_HOME     - Per-user data directory (see core.constants)
"""

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from council.core.constants import CONFIG_FILE, COUNCIL_DIR, EXPERTS_DIR, FILE_ENCODING
from council.core.errors import CouncilNotInitializedError, InvalidConfigError

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")


def _check_name(value: str, what: str) -> str:
    value = value.strip().lower()
    if not _NAME_PATTERN.match(value):
        raise ValueError(f"invalid {what} name '{value}'")
    return value


class AIConfig(BaseModel):
    """AI CLI used to generate expert content.

    Sync never reads it; `council doctor` reports whether ``command`` is installed.
    """

    command: str = Field(default="", description="AI CLI command (claude, opencode, aichat, llm)")
    args: List[str] = Field(default_factory=list, description="Extra arguments for the AI CLI")
    timeout: int = Field(default=120, description="Timeout in seconds")

    @field_validator("timeout", mode="before")
    @classmethod
    def default_timeout(cls, v):
        """Treat a missing or zero timeout as the default."""
        return v or 120


class CouncilConfig(BaseModel):
    """Project council configuration."""

    model_config = ConfigDict(extra="ignore", validate_default=True)

    version: int = Field(default=1, description="Config schema version")
    tool: Optional[str] = Field(default=None, description="Primary tool: claude, opencode, generic")
    targets: List[str] = Field(default_factory=list, description="Explicit sync targets, overrides tool")
    commands: Optional[List[str]] = Field(
        default=None, description="Enabled bundled commands (default: all the target bundles)"
    )
    ai: AIConfig = Field(default_factory=AIConfig)

    @field_validator("tool", mode="before")
    @classmethod
    def validate_tool(cls, v):
        if v is None or v == "":
            return None
        return _check_name(str(v), "tool")

    @field_validator("targets", mode="before")
    @classmethod
    def validate_targets(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [_check_name(str(item), "target") for item in v if str(item).strip()]

    @field_validator("commands", mode="before")
    @classmethod
    def validate_commands(cls, v):
        if v is None:
            return None
        return [_check_name(str(item), "command") for item in v]

    @classmethod
    def default(cls) -> "CouncilConfig":
        return cls()

    def with_env_overrides(self) -> "CouncilConfig":
        """Return a copy with COUNCIL_TOOL / COUNCIL_TARGETS applied."""
        updates = {}
        tool = os.getenv("COUNCIL_TOOL")
        if tool:
            updates["tool"] = tool
        targets = os.getenv("COUNCIL_TARGETS")
        if targets:
            updates["targets"] = targets
        if not updates:
            return self
        try:
            return CouncilConfig.model_validate({**self.model_dump(), **updates})
        except ValidationError as e:
            raise InvalidConfigError("environment", updates, _first_error(e)) from e

    def to_yaml(self) -> str:
        data = self.model_dump(exclude_none=True)
        if not data.get("targets"):
            data.pop("targets", None)
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def council_root(root: Union[str, Path] = ".") -> Path:
    return Path(root) / COUNCIL_DIR


def config_path(root: Union[str, Path] = ".") -> Path:
    return council_root(root) / CONFIG_FILE


def council_exists(root: Union[str, Path] = ".") -> bool:
    """Check if the council directory exists."""
    return council_root(root).is_dir()


def load_config(root: Union[str, Path] = ".") -> CouncilConfig:
    """Load ``.council/config.yaml`` with environment overrides applied.

    A council directory without a config file yields the defaults.

    Raises:
        CouncilNotInitializedError: If ``.council/`` does not exist
        InvalidConfigError: If the file is not valid YAML or fails validation
    """
    if not council_exists(root):
        raise CouncilNotInitializedError(str(Path(root)))

    path = config_path(root)
    data = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text(encoding=FILE_ENCODING)) or {}
        except yaml.YAMLError as e:
            raise InvalidConfigError(str(path), "<unparseable>", f"failed to parse config: {e}") from e
        if not isinstance(data, dict):
            raise InvalidConfigError(str(path), type(data).__name__, "config must be a YAML mapping")
    else:
        logger.debug("No %s found, using defaults", path)

    try:
        config = CouncilConfig.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigError(str(path), data, _first_error(e)) from e

    return config.with_env_overrides()


def save_config(config: CouncilConfig, root: Union[str, Path] = ".") -> Path:
    """Write the configuration to ``.council/config.yaml``."""
    path = config_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config.to_yaml(), encoding=FILE_ENCODING)
    return path


def init_council(root: Union[str, Path] = ".", tool: Optional[str] = None) -> CouncilConfig:
    """Create the council directory layout with a default configuration."""
    config = CouncilConfig(tool=tool)
    (council_root(root) / EXPERTS_DIR).mkdir(parents=True, exist_ok=True)
    save_config(config, root)
    logger.info("Initialized council in %s", council_root(root))
    return config
