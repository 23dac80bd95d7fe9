"""Template rendering shared by expert bodies and generated commands.

Templates are rendered with a single jinja2 environment configured for
plain-text output, so the same inputs always produce the same bytes.
"""

from functools import lru_cache
from typing import Any

from jinja2 import Environment, StrictUndefined, Template

_environment = Environment(
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


@lru_cache(maxsize=32)
def compile_template(source: str) -> Template:
    """Compile a template source once per process."""
    return _environment.from_string(source)


def render(source: str, **context: Any) -> str:
    """Render a template source against the given context."""
    return compile_template(source).render(**context)
