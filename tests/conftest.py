"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from council.adapters import default_registry
from council.config import init_council
from council.experts.expert import SOURCE_CUSTOM, Expert
from council.experts.store import ExpertStore, save_expert


@pytest.fixture(autouse=True)
def council_home(tmp_path, monkeypatch):
    """Point the per-user council directory at a temp dir and clear env overrides."""
    home = tmp_path / "home"
    monkeypatch.setenv("COUNCIL_HOME", str(home))
    monkeypatch.delenv("COUNCIL_TOOL", raising=False)
    monkeypatch.delenv("COUNCIL_TARGETS", raising=False)
    return home


@pytest.fixture
def project(tmp_path):
    """An initialized project with an empty council."""
    root = tmp_path / "project"
    root.mkdir()
    init_council(root)
    return root


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def store(project, council_home):
    return ExpertStore(project, home=council_home)


@pytest.fixture
def make_expert():
    """Factory for valid experts."""

    def _make(expert_id: str = "kent-beck", name: str = "Kent Beck", focus: str = "Test-driven development", **kwargs):
        return Expert(id=expert_id, name=name, focus=focus, **kwargs)

    return _make


@pytest.fixture
def add_project_expert(project, make_expert):
    """Write an expert into the project's .council/experts/."""

    def _add(expert_id: str = "kent-beck", name: str = "Kent Beck", focus: str = "Test-driven development", **kwargs):
        expert = make_expert(expert_id, name, focus, **kwargs)
        save_expert(expert, project / ".council" / "experts" / f"{expert_id}.md")
        return expert

    return _add


@pytest.fixture
def add_custom_expert(council_home, make_expert):
    """Write an expert into the user's personal council."""

    def _add(expert_id: str = "kent-beck", name: str = "Kent Beck", focus: str = "Test-driven development", **kwargs):
        expert = make_expert(expert_id, name, focus, source=SOURCE_CUSTOM, **kwargs)
        save_expert(expert, Path(council_home) / "my-council" / f"{expert_id}.md")
        return expert

    return _add


def _snapshot(root: Path) -> dict:
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def snapshot():
    """Map of every file under a directory to its bytes."""
    return _snapshot

