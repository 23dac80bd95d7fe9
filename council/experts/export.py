"""Portable markdown export of a council.

The export is meant for contexts the sync targets do not cover: pasting into
a chat, desktop app custom instructions, or sharing as a single file.
"""

from typing import Sequence

from council.core.rendering import render
from council.experts.expert import Expert

EXPORT_TEMPLATE = """# Expert Council

Use these expert perspectives when reviewing my work.

{% for e in experts %}
## {{ e.name }}
**Focus**: {{ e.focus }}

{% if e.philosophy.strip() %}
{{ e.philosophy | trim }}

{% endif %}
{% if e.principles %}
**Principles**:
{% for principle in e.principles %}
- {{ principle }}
{% endfor %}

{% endif %}
{% if e.red_flags %}
**Watch for**:
{% for flag in e.red_flags %}
- {{ flag }}
{% endfor %}

{% endif %}
{% if not loop.last %}
---

{% endif %}
{% endfor %}
"""


def format_markdown(experts: Sequence[Expert]) -> str:
    """Render the council as one markdown document, experts separated by rules."""
    return render(EXPORT_TEMPLATE, experts=list(experts))
