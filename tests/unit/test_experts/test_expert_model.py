"""Tests for the Expert record."""

import pytest

from council.core.errors import ExpertValidationError, InvalidExpertIdError
from council.experts.expert import (
    SOURCE_CUSTOM,
    Expert,
    agent_filename,
    effective_body,
    is_valid_id,
    render_body,
    to_id,
)


class TestAgentFilename:
    """Provenance decides the filename prefix."""

    def test_native(self, make_expert):
        assert agent_filename(make_expert("dhh")) == "dhh.md"

    def test_custom(self, make_expert):
        assert agent_filename(make_expert("dhh", source=SOURCE_CUSTOM)) == "custom-dhh.md"

    def test_installed(self, make_expert):
        assert agent_filename(make_expert("dhh", source="installed:team-council")) == "installed-dhh.md"

    def test_same_id_different_sources_never_collide(self, make_expert):
        names = {
            agent_filename(make_expert("dhh")),
            agent_filename(make_expert("dhh", source=SOURCE_CUSTOM)),
            agent_filename(make_expert("dhh", source="installed:x")),
        }
        assert len(names) == 3


class TestValidation:

    def test_valid_expert(self, make_expert):
        make_expert().validate()

    @pytest.mark.parametrize("field", ["id", "name", "focus"])
    def test_missing_required_field(self, make_expert, field):
        expert = make_expert()
        setattr(expert, field, "  ")

        with pytest.raises(ExpertValidationError) as exc_info:
            expert.validate()
        assert exc_info.value.details["missing"] == [field]

    def test_classification_is_not_validated(self, make_expert):
        make_expert(priority="low", category="anything").validate()

    @pytest.mark.parametrize("expert_id", ["dhh", "kent-beck", "j.b.rainsberger", "snake_case", "c3po"])
    def test_slug_ids_are_valid(self, make_expert, expert_id):
        assert is_valid_id(expert_id)
        make_expert(expert_id).validate()

    @pytest.mark.parametrize(
        "expert_id",
        ["../x", "../../escaped", "a/b", "Kent-Beck", "kent beck", "-lead", "a--b", "x.", "dhh\n"],
    )
    def test_other_ids_are_rejected(self, make_expert, expert_id):
        assert not is_valid_id(expert_id)
        with pytest.raises(InvalidExpertIdError):
            make_expert(expert_id).validate()

    def test_missing_id_reported_as_missing(self, make_expert):
        with pytest.raises(ExpertValidationError) as exc_info:
            make_expert("").validate()
        assert not isinstance(exc_info.value, InvalidExpertIdError)

    def test_apply_defaults(self, make_expert):
        expert = make_expert()
        expert.apply_defaults()

        assert expert.category == "custom"
        assert expert.priority == "normal"


class TestFrontmatter:

    def test_canonical_order_and_empty_fields_omitted(self, make_expert):
        expert = make_expert(principles=["Red, green, refactor"], priority="high")

        assert list(expert.frontmatter()) == ["id", "name", "focus", "principles", "priority"]

    def test_to_dict_includes_source(self, make_expert):
        data = make_expert(source=SOURCE_CUSTOM).to_dict()

        assert data["source"] == "custom"
        assert "body" not in data

    def test_from_dict_coerces_values(self):
        expert = Expert.from_dict({"id": "x", "name": "X", "focus": 42, "principles": "one", "red_flags": None})

        assert expert.focus == "42"
        assert expert.principles == ["one"]
        assert expert.red_flags == []

    def test_source_marker(self, make_expert):
        assert make_expert().source_marker == ""
        assert make_expert(source=SOURCE_CUSTOM).source_marker == " [custom]"
        assert make_expert(source="installed:team").source_marker == " [installed:team]"


class TestBody:

    def test_render_body_sections(self, make_expert):
        body = render_body(make_expert(
            philosophy="Make it work, make it right, make it fast.",
            principles=["Small steps"],
            red_flags=["Untested code"],
        ))

        assert body.startswith("# Kent Beck - Test-driven development")
        assert "## Philosophy\n\nMake it work, make it right, make it fast." in body
        assert "## Principles\n\n- Small steps" in body
        assert "## Red Flags\n\nWatch for these patterns:\n- Untested code" in body
        assert body.endswith("Suggest concrete improvements.")

    def test_render_body_skips_empty_sections(self, make_expert):
        body = render_body(make_expert())

        assert "## Philosophy" not in body
        assert "## Principles" not in body
        assert "\n\n\n" not in body

    def test_effective_body_prefers_stored_body(self, make_expert):
        assert effective_body(make_expert(body="  Custom body\n")) == "Custom body"
        assert effective_body(make_expert()) == render_body(make_expert())


class TestToId:

    @pytest.mark.parametrize("name,expected", [
        ("Kent Beck", "kent-beck"),
        ("  Martin Fowler ", "martin-fowler"),
        ("DHH", "dhh"),
        ("C. A. R. Hoare", "c-a-r-hoare"),
    ])
    def test_to_id(self, name, expected):
        assert to_id(name) == expected
