"""Tests for project configuration."""

import pytest
import yaml

from council.config import (
    CouncilConfig,
    config_path,
    council_exists,
    init_council,
    load_config,
    save_config,
)
from council.core.errors import CouncilNotInitializedError, InvalidConfigError


class TestCouncilConfig:
    """Tests for the CouncilConfig model."""

    def test_defaults(self):
        config = CouncilConfig.default()

        assert config.version == 1
        assert config.tool is None
        assert config.targets == []
        assert config.commands is None
        assert config.ai.timeout == 120

    def test_targets_from_comma_string(self):
        config = CouncilConfig(targets="Claude, opencode,")

        assert config.targets == ["claude", "opencode"]

    def test_empty_tool_is_none(self):
        assert CouncilConfig(tool="").tool is None

    def test_invalid_tool_name(self):
        with pytest.raises(ValueError):
            CouncilConfig(tool="not a tool!")

    def test_zero_timeout_uses_default(self):
        assert CouncilConfig(ai={"timeout": 0}).ai.timeout == 120

    def test_unknown_keys_ignored(self):
        assert CouncilConfig.model_validate({"tool": "claude", "legacy": True}).tool == "claude"

    def test_to_yaml_omits_unset(self):
        data = yaml.safe_load(CouncilConfig(tool="claude").to_yaml())

        assert data["tool"] == "claude"
        assert "targets" not in data
        assert "commands" not in data


class TestEnvOverrides:

    def test_tool_override(self, monkeypatch):
        monkeypatch.setenv("COUNCIL_TOOL", "opencode")

        assert CouncilConfig(tool="claude").with_env_overrides().tool == "opencode"

    def test_targets_override(self, monkeypatch):
        monkeypatch.setenv("COUNCIL_TARGETS", "claude,generic")

        assert CouncilConfig().with_env_overrides().targets == ["claude", "generic"]

    def test_invalid_override(self, monkeypatch):
        monkeypatch.setenv("COUNCIL_TOOL", "bad tool")

        with pytest.raises(InvalidConfigError):
            CouncilConfig().with_env_overrides()

    def test_no_override_returns_same_instance(self):
        config = CouncilConfig()

        assert config.with_env_overrides() is config


class TestLoadConfig:

    def test_not_initialized(self, tmp_path):
        with pytest.raises(CouncilNotInitializedError):
            load_config(tmp_path)

    def test_missing_file_uses_defaults(self, tmp_path):
        (tmp_path / ".council").mkdir()

        assert load_config(tmp_path) == CouncilConfig()

    def test_save_and_load(self, project):
        save_config(CouncilConfig(targets=["claude", "opencode"], commands=["council-add"]), project)

        config = load_config(project)

        assert config.targets == ["claude", "opencode"]
        assert config.commands == ["council-add"]

    def test_unparseable_yaml(self, project):
        config_path(project).write_text("tool: [claude\n", encoding="utf-8")

        with pytest.raises(InvalidConfigError):
            load_config(project)

    def test_not_a_mapping(self, project):
        config_path(project).write_text("- claude\n", encoding="utf-8")

        with pytest.raises(InvalidConfigError, match="mapping"):
            load_config(project)

    def test_invalid_value(self, project):
        config_path(project).write_text("targets: ['Not Valid']\n", encoding="utf-8")

        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(project)
        assert exc_info.value.error_code == "INVALID_CONFIG"


class TestInitCouncil:

    def test_creates_layout(self, tmp_path):
        config = init_council(tmp_path, tool="claude")

        assert council_exists(tmp_path)
        assert (tmp_path / ".council" / "experts").is_dir()
        assert load_config(tmp_path) == config
