"""Tests for target resolution."""

import pytest

from council.adapters.base import AdapterRegistry
from council.adapters import ClaudeAdapter, OpenCodeAdapter
from council.config import CouncilConfig
from council.core.errors import ConfigurationError, UnknownTargetError
from council.sync.resolver import detect_target_names, resolve_targets


def names(adapters):
    return [a.name for a in adapters]


class TestResolveTargets:

    def test_explicit_targets_in_order(self, registry, tmp_path):
        config = CouncilConfig(targets=["opencode", "claude"], tool="generic")

        assert names(resolve_targets(config, registry, tmp_path)) == ["opencode", "claude"]

    def test_duplicate_targets_collapsed(self, registry, tmp_path):
        config = CouncilConfig(targets=["claude", "claude"])

        assert names(resolve_targets(config, registry, tmp_path)) == ["claude"]

    def test_tool_when_no_targets(self, registry, tmp_path):
        (tmp_path / ".claude").mkdir()

        assert names(resolve_targets(CouncilConfig(tool="opencode"), registry, tmp_path)) == ["opencode"]

    def test_unknown_target(self, registry, tmp_path):
        with pytest.raises(UnknownTargetError) as exc_info:
            resolve_targets(CouncilConfig(targets=["claude", "cursor"]), registry, tmp_path)
        assert exc_info.value.name == "cursor"

    def test_unknown_tool(self, registry, tmp_path):
        with pytest.raises(UnknownTargetError):
            resolve_targets(CouncilConfig(tool="cursor"), registry, tmp_path)

    def test_detects_every_tool_present(self, registry, tmp_path):
        (tmp_path / ".opencode").mkdir()
        (tmp_path / ".claude").mkdir()

        assert names(resolve_targets(CouncilConfig(), registry, tmp_path)) == ["claude", "opencode"]

    def test_fallback_when_nothing_detected(self, registry, tmp_path):
        assert names(resolve_targets(CouncilConfig(), registry, tmp_path)) == ["generic"]

    def test_no_fallback_registered(self, tmp_path):
        registry = AdapterRegistry([ClaudeAdapter(), OpenCodeAdapter()])

        with pytest.raises(ConfigurationError):
            resolve_targets(CouncilConfig(), registry, tmp_path)


class TestDetectTargetNames:

    def test_detected(self, registry, tmp_path):
        (tmp_path / ".claude").mkdir()

        assert detect_target_names(registry, tmp_path) == ["claude"]

    def test_fallback(self, registry, tmp_path):
        assert detect_target_names(registry, tmp_path) == ["generic"]
