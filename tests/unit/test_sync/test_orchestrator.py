"""Tests for multi-target sync orchestration."""

from pathlib import Path

import pytest

from council.adapters import ClaudeAdapter
from council.config import CouncilConfig
from council.core.errors import CouncilNotInitializedError, UnknownTargetError
from council.sync import SyncOptions, SyncOrchestrator, all_clean_paths, sync_all, sync_target


@pytest.fixture
def orchestrator(registry, store, project):
    return SyncOrchestrator(registry, store, project)


@pytest.fixture
def both():
    return CouncilConfig(targets=["claude", "opencode"])


def fail_mkdir_under(monkeypatch, suffix: str):
    original = Path.mkdir

    def failing(self, *args, **kwargs):
        if self.as_posix().endswith(suffix):
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", failing)


class TestSyncAll:

    def test_not_initialized(self, registry, tmp_path):
        with pytest.raises(CouncilNotInitializedError):
            SyncOrchestrator(registry, root=tmp_path).sync_all(CouncilConfig(), SyncOptions())

    def test_unknown_target_fails_before_writing(self, orchestrator, project, add_project_expert):
        add_project_expert()

        with pytest.raises(UnknownTargetError):
            orchestrator.sync_all(CouncilConfig(targets=["claude", "cursor"]), SyncOptions())
        assert not (project / ".claude").exists()

    def test_native_and_custom_with_same_id(self, orchestrator, project, both, add_project_expert, add_custom_expert):
        add_project_expert("dhh", "DHH", "Rails")
        add_custom_expert("dhh", "DHH", "Rails")

        report = orchestrator.sync_all(both, SyncOptions())

        assert report.ok
        assert [r.target for r in report.results] == ["claude", "opencode"]
        for base in (".claude/agents", ".opencode/agents"):
            assert (project / base / "dhh.md").is_file()
            assert (project / base / "custom-dhh.md").is_file()

    def test_second_sync_is_noop(self, orchestrator, project, both, add_project_expert, snapshot):
        add_project_expert()
        orchestrator.sync_all(both, SyncOptions())
        before = snapshot(project)

        report = orchestrator.sync_all(both, SyncOptions())

        assert report.totals()["created"] == 0
        assert report.totals()["updated"] == 0
        assert snapshot(project) == before

    def test_fallback_when_nothing_detected(self, orchestrator, project):
        report = orchestrator.sync_all(CouncilConfig(), SyncOptions())

        assert [r.target for r in report.results] == ["generic"]
        content = (project / "AGENTS.md").read_text(encoding="utf-8")
        assert content.startswith("# AGENTS.md - Expert Council")

    def test_detected_tools(self, orchestrator, project, add_project_expert):
        add_project_expert()
        (project / ".opencode").mkdir()

        report = orchestrator.sync_all(CouncilConfig(), SyncOptions())

        assert [r.target for r in report.results] == ["opencode"]
        assert (project / ".opencode/agents/kent-beck.md").is_file()

    def test_enabled_commands_from_config(self, orchestrator, project, add_project_expert):
        add_project_expert()

        orchestrator.sync_all(CouncilConfig(targets=["claude"], commands=["council-remove"]), SyncOptions())

        commands = sorted(p.name for p in (project / ".claude/commands").iterdir())
        assert commands == ["council-remove.md", "council.md"]

    def test_load_warnings_reported(self, orchestrator, project, both, add_project_expert):
        add_project_expert()
        (project / ".council/experts/broken.md").write_text("no frontmatter", encoding="utf-8")

        report = orchestrator.sync_all(both, SyncOptions())

        assert report.ok
        assert len(report.warnings) == 1
        assert "broken.md" in report.warnings[0]


class TestFailureIsolation:

    def test_directory_failure_isolated_to_target(self, orchestrator, project, both, add_project_expert, monkeypatch):
        add_project_expert()
        fail_mkdir_under(monkeypatch, ".claude/agents")

        report = orchestrator.sync_all(both, SyncOptions())

        assert not report.ok
        assert report.failed_targets == ["claude"]
        claude = report.result_for("claude")
        assert claude.fatal_code == "TARGET_DIRECTORY"
        assert "Permission denied" in claude.fatal
        assert report.result_for("opencode").ok
        assert (project / ".opencode/agents/kent-beck.md").is_file()

    def test_unexpected_os_error_isolated(self, orchestrator, project, both, add_project_expert, monkeypatch):
        add_project_expert()

        def broken(self, root):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(ClaudeAdapter, "owned_files", broken)

        report = orchestrator.sync_all(both, SyncOptions())

        assert report.failed_targets == ["claude"]
        assert report.result_for("claude").fatal_code == "PermissionError"
        assert report.result_for("opencode").ok


class TestSyncTarget:

    def test_only_named_target(self, orchestrator, project, both, add_project_expert):
        add_project_expert()

        report = orchestrator.sync_target("opencode", both, SyncOptions())

        assert [r.target for r in report.results] == ["opencode"]
        assert not (project / ".claude").exists()

    def test_unknown_name(self, orchestrator, both):
        with pytest.raises(UnknownTargetError):
            orchestrator.sync_target("cursor", both, SyncOptions())


class TestPlanAll:

    def test_plans_without_writing(self, orchestrator, project, both, add_project_expert, snapshot):
        add_project_expert()
        before = snapshot(project)

        plans = orchestrator.plan_all(both, SyncOptions())

        assert [p.target for p in plans] == ["claude", "opencode"]
        assert all(p.has_changes and not p.is_destructive for p in plans)
        assert snapshot(project) == before

    def test_destructive_after_edit(self, orchestrator, project, both, add_project_expert):
        add_project_expert()
        orchestrator.sync_all(both, SyncOptions())
        (project / ".claude/agents/kent-beck.md").write_text("edited", encoding="utf-8")

        plans = orchestrator.plan_all(both, SyncOptions(), target="claude")

        assert len(plans) == 1
        assert plans[0].is_destructive


class TestSyncReport:

    def test_dry_run_report(self, orchestrator, project, both, add_project_expert):
        add_project_expert()

        report = orchestrator.sync_all(both, SyncOptions(dry_run=True))
        data = report.to_dict()

        assert data["dry_run"] is True
        assert data["ok"] is True
        assert data["totals"]["created"] == 10
        assert [t["target"] for t in data["targets"]] == ["claude", "opencode"]
        assert not (project / ".claude").exists()


class TestModuleFunctions:

    def test_all_clean_paths(self, registry):
        assert all_clean_paths(registry) == [
            ".claude/agents",
            ".claude/commands",
            ".opencode/agent",
            ".opencode/agents",
            ".opencode/commands",
            "AGENTS.md",
        ]

    def test_all_clean_paths_default_registry(self):
        assert "AGENTS.md" in all_clean_paths()

    def test_sync_all_and_sync_target(self, project, add_project_expert):
        add_project_expert()

        report = sync_all(CouncilConfig(targets=["claude"]), SyncOptions(), root=project)
        assert report.ok
        assert (project / ".claude/agents/kent-beck.md").is_file()

        report = sync_target("generic", CouncilConfig(targets=["claude"]), SyncOptions(), root=project)
        assert [r.target for r in report.results] == ["generic"]
        assert (project / "AGENTS.md").is_file()
