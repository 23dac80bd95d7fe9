"""Expert record - the persona data unit distributed to every target.

An expert is stored as markdown with YAML frontmatter. The structured fields
live in the frontmatter; the body is free-form markdown. When a record has no
body one is synthesized from the structured fields, so two structurally
identical records always serialize to the same bytes.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

from council.core.errors import ExpertValidationError, InvalidExpertIdError
from council.core.rendering import render

# Provenance tags (see Expert.source)
SOURCE_NATIVE = ""
SOURCE_CUSTOM = "custom"
SOURCE_INSTALLED_PREFIX = "installed:"

REQUIRED_FIELDS = ("id", "name", "focus")

_ID_PATTERN = re.compile(r"[^a-z0-9]+")

# Lowercase slug, also the shape of a generated agent filename stem
ID_SLUG = r"[a-z0-9]+(?:[-_.][a-z0-9]+)*"
_VALID_ID = re.compile(ID_SLUG)

BODY_TEMPLATE = """# {{ e.name }} - {{ e.focus }}

You are channeling {{ e.name }}, known for expertise in {{ e.focus }}.

{% if e.philosophy %}
## Philosophy

{{ e.philosophy | trim }}

{% endif %}
{% if e.principles %}
## Principles

{% for principle in e.principles %}
- {{ principle }}
{% endfor %}

{% endif %}
{% if e.red_flags %}
## Red Flags

Watch for these patterns:
{% for flag in e.red_flags %}
- {{ flag }}
{% endfor %}

{% endif %}
## Review Style

When reviewing code, focus on your area of expertise. Be direct and specific.
Explain your reasoning. Suggest concrete improvements.
"""


@dataclass
class Expert:
    """An expert persona.

    ``source`` is never persisted: it is derived from the directory a file was
    loaded from and drives filename prefixing in every target.
    """
    id: str
    name: str
    focus: str
    philosophy: str = ""
    principles: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)

    # Suggestion metadata, opaque to the sync engine
    core: bool = False
    triggers: List[str] = field(default_factory=list)

    # Classification
    category: str = ""
    priority: str = ""

    body: str = ""
    source: str = SOURCE_NATIVE

    @property
    def is_custom(self) -> bool:
        return self.source == SOURCE_CUSTOM

    @property
    def is_installed(self) -> bool:
        return self.source.startswith(SOURCE_INSTALLED_PREFIX)

    @property
    def source_marker(self) -> str:
        """Display marker for listings: '', ' [custom]' or ' [installed:<repo>]'."""
        if self.is_custom:
            return " [custom]"
        if self.is_installed:
            return f" [{self.source}]"
        return ""

    def apply_defaults(self) -> None:
        """Fill optional classification fields with their defaults."""
        if not self.category:
            self.category = "custom"
        if not self.priority:
            self.priority = "normal"

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not str(getattr(self, name) or "").strip()]

    def validate(self) -> None:
        """Raise ExpertValidationError if a required field is empty or the id is not a slug.

        Classification and suggestion metadata are never checked here.
        """
        missing = self.missing_fields()
        if missing:
            raise ExpertValidationError(self.id, missing)
        if not is_valid_id(self.id):
            raise InvalidExpertIdError(self.id)

    def frontmatter(self) -> Dict[str, Any]:
        """Persisted fields in canonical order, empty optional fields omitted."""
        data: Dict[str, Any] = {"id": self.id, "name": self.name, "focus": self.focus}
        if self.philosophy:
            data["philosophy"] = self.philosophy
        if self.principles:
            data["principles"] = list(self.principles)
        if self.red_flags:
            data["red_flags"] = list(self.red_flags)
        if self.core:
            data["core"] = True
        if self.triggers:
            data["triggers"] = list(self.triggers)
        if self.category:
            data["category"] = self.category
        if self.priority:
            data["priority"] = self.priority
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output (body excluded)."""
        data = self.frontmatter()
        data["source"] = self.source
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = SOURCE_NATIVE, body: str = "") -> "Expert":
        """Create from a frontmatter mapping."""
        return cls(
            id=_as_text(data.get("id")),
            name=_as_text(data.get("name")),
            focus=_as_text(data.get("focus")),
            philosophy=_as_text(data.get("philosophy")),
            principles=_as_list(data.get("principles")),
            red_flags=_as_list(data.get("red_flags")),
            core=bool(data.get("core", False)),
            triggers=_as_list(data.get("triggers")),
            category=_as_text(data.get("category")),
            priority=_as_text(data.get("priority")),
            body=body,
            source=source,
        )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def agent_filename(expert: Expert) -> str:
    """Filename of an expert's agent file, prefixed by provenance.

    The prefix keeps experts with the same id from different sources from
    colliding when they are merged into one target directory:

        native     -> {id}.md
        custom     -> custom-{id}.md
        installed  -> installed-{id}.md
    """
    if expert.is_custom:
        return f"custom-{expert.id}.md"
    if expert.is_installed:
        return f"installed-{expert.id}.md"
    return f"{expert.id}.md"


def render_body(expert: Expert) -> str:
    """Synthesize a markdown body from the structured fields."""
    return render(BODY_TEMPLATE, e=expert).strip()


def effective_body(expert: Expert) -> str:
    """The stored body, or the synthesized one when none is set."""
    body = expert.body.strip()
    return body if body else render_body(expert)


def is_valid_id(expert_id: str) -> bool:
    """Whether an id can be used as a filename stem in every target."""
    return _VALID_ID.fullmatch(expert_id) is not None


def to_id(name: str) -> str:
    """Convert a display name to a kebab-case id.

    >>> to_id("Kent Beck")
    'kent-beck'
    """
    return _ID_PATTERN.sub("-", name.lower()).strip("-")
