"""Expert records and their persistence.

Provides:
- Expert: the persona record and provenance-aware agent filenames (expert.py)
- ExpertStore: project, custom and installed sources (store.py)
- parse_expert / serialize_expert / save_expert: single-file primitives
- format_markdown: portable markdown export (export.py)
"""

from .expert import Expert, agent_filename, effective_body, is_valid_id, render_body, to_id
from .export import format_markdown
from .store import (
    ExpertListing,
    ExpertStore,
    list_experts_in_dir,
    load_expert_file,
    parse_expert,
    save_expert,
    serialize_expert,
)

__all__ = [
    "Expert",
    "agent_filename",
    "effective_body",
    "is_valid_id",
    "render_body",
    "to_id",
    "format_markdown",
    "ExpertListing",
    "ExpertStore",
    "list_experts_in_dir",
    "load_expert_file",
    "parse_expert",
    "save_expert",
    "serialize_expert",
]
