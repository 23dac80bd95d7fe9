"""Tests for expert file persistence and the ExpertStore."""

import pytest

from council.core.errors import ExpertIntegrityError, ExpertParseError, InvalidExpertIdError
from council.experts.expert import SOURCE_CUSTOM
from council.experts.store import (
    ExpertStore,
    list_experts_in_dir,
    parse_expert,
    save_expert,
    serialize_expert,
)

VALID = """---
id: sandi-metz
name: Sandi Metz
focus: Object-oriented design
principles:
  - Small objects
  - Tell, don't ask
---

# Sandi Metz

Body text.
"""


class TestParseExpert:

    def test_parse_valid(self):
        expert = parse_expert(VALID)

        assert expert.id == "sandi-metz"
        assert expert.principles == ["Small objects", "Tell, don't ask"]
        assert expert.body == "# Sandi Metz\n\nBody text."
        assert expert.source == ""

    def test_parse_assigns_source(self):
        assert parse_expert(VALID, source=SOURCE_CUSTOM).is_custom

    def test_crlf_line_endings(self):
        expert = parse_expert(VALID.replace("\n", "\r\n"))

        assert expert.name == "Sandi Metz"

    def test_missing_frontmatter(self):
        with pytest.raises(ExpertParseError) as exc_info:
            parse_expert("# Just markdown\n", path="plain.md")
        assert "plain.md" in exc_info.value.message

    def test_unterminated_frontmatter(self):
        with pytest.raises(ExpertParseError, match="closing"):
            parse_expert("---\nid: x\nname: X\n")

    def test_invalid_yaml_reports_line(self):
        text = "---\nid: x\nname: [unclosed\nfocus: y\n---\n"

        with pytest.raises(ExpertParseError) as exc_info:
            parse_expert(text)
        assert "YAML error at line" in exc_info.value.message

    def test_frontmatter_must_be_mapping(self):
        with pytest.raises(ExpertParseError, match="mapping"):
            parse_expert("---\n- a\n- b\n---\n")


class TestSerializeExpert:

    def test_structurally_equal_records_serialize_identically(self, make_expert):
        first = make_expert(principles=["a", "b"], priority="high")
        second = make_expert(priority="high", principles=["a", "b"])

        assert serialize_expert(first) == serialize_expert(second)

    def test_parse_serialized_output(self, make_expert):
        expert = make_expert(philosophy="Line one\nLine two", red_flags=["Big methods"])
        parsed = parse_expert(serialize_expert(expert))

        assert parsed.frontmatter() == expert.frontmatter()

    def test_synthesizes_body_when_empty(self, make_expert):
        text = serialize_expert(make_expert())

        assert "You are channeling Kent Beck" in text
        assert text.endswith("\n")
        assert not text.endswith("\n\n")


class TestSaveExpert:

    def test_save_and_load(self, tmp_path, make_expert):
        path = tmp_path / "experts" / "kent-beck.md"
        save_expert(make_expert(), path)

        assert parse_expert(path.read_text(encoding="utf-8")).name == "Kent Beck"

    def test_integrity_failure_removes_file(self, tmp_path, make_expert, monkeypatch):
        import council.experts.store as store_module

        path = tmp_path / "kent-beck.md"
        monkeypatch.setattr(store_module, "serialize_expert", lambda expert: "not an expert file\n")

        with pytest.raises(ExpertIntegrityError):
            save_expert(make_expert(), path)
        assert not path.exists()


class TestListExpertsInDir:

    def test_missing_directory(self, tmp_path):
        listing = list_experts_in_dir(tmp_path / "nope", "")

        assert listing.experts == []
        assert listing.warnings == []

    def test_sorted_and_readme_skipped(self, tmp_path, make_expert):
        save_expert(make_expert("zed", "Zed"), tmp_path / "zed.md")
        save_expert(make_expert("amy", "Amy"), tmp_path / "amy.md")
        (tmp_path / "README.md").write_text("# Council\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        listing = list_experts_in_dir(tmp_path, "")

        assert [e.id for e in listing.experts] == ["amy", "zed"]

    def test_bad_file_becomes_warning(self, tmp_path, make_expert):
        save_expert(make_expert("amy", "Amy"), tmp_path / "amy.md")
        (tmp_path / "broken.md").write_text("no frontmatter", encoding="utf-8")

        listing = list_experts_in_dir(tmp_path, "")

        assert [e.id for e in listing.experts] == ["amy"]
        assert len(listing.warnings) == 1
        assert "broken.md" in listing.warnings[0]


class TestExpertStore:

    def test_paths(self, project, council_home):
        store = ExpertStore(project, home=council_home)

        assert store.experts_dir == project / ".council" / "experts"
        assert store.custom_dir == council_home / "my-council"
        assert store.installed_dir == council_home / "installed"

    def test_home_defaults_to_council_home(self, project, council_home):
        assert ExpertStore(project).home == council_home

    def test_list_merges_sources_in_order(self, store, add_project_expert, add_custom_expert, council_home, make_expert):
        add_project_expert("dhh", "DHH", "Rails")
        add_custom_expert("dhh", "DHH", "Rails")
        save_expert(make_expert("kent-beck"), council_home / "installed" / "team" / "kent-beck.md")

        experts = store.list_experts()

        assert [(e.id, e.source) for e in experts] == [
            ("kent-beck", "installed:team"),
            ("dhh", "custom"),
            ("dhh", ""),
        ]

    def test_installed_repos_sorted(self, store, council_home):
        for repo in ("zeta", "alpha"):
            (council_home / "installed" / repo).mkdir(parents=True)

        assert store.installed_repos() == ["alpha", "zeta"]

    def test_crud(self, store, make_expert):
        assert store.load("kent-beck") is None

        path = store.save(make_expert())

        assert path == store.path_for("kent-beck")
        assert store.exists("kent-beck")
        assert store.load("kent-beck").focus == "Test-driven development"
        assert store.delete("kent-beck") is True
        assert store.delete("kent-beck") is False

    @pytest.mark.parametrize("expert_id", ["../escaped", "a/b", "Kent-Beck"])
    def test_ids_that_are_not_slugs_never_become_paths(self, store, make_expert, expert_id):
        with pytest.raises(InvalidExpertIdError):
            store.path_for(expert_id)
        with pytest.raises(InvalidExpertIdError):
            store.delete(expert_id)
        with pytest.raises(InvalidExpertIdError):
            store.save(make_expert(expert_id))
