"""
Jinja2 rendering for generated source text.

Templates hold the fixed blocks of generated Swift (banner, version guard,
declaration bodies). Output is source code, so nothing is HTML-escaped and
a missing context variable is an error rather than an empty string.
"""

from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from jinja2.exceptions import TemplateError as JinjaTemplateError


class TemplateError(Exception):
    """Raised when a template is missing or fails to render."""

    pass


def swift_string_literal(value: Any) -> str:
    """Escape text for use inside a double-quoted Swift string literal."""
    text = str(value)
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


class TemplateEngine:
    """Jinja2 environment over one template directory, configured for byte-stable output."""

    def __init__(self, template_dir: Path):
        self.template_dir = template_dir
        self._env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )
        self._env.filters["swift_string"] = swift_string_literal

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a named template.

        Raises:
            TemplateError: If the template is missing, malformed, or refers to
                a variable the context doesn't provide
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e


_engines: Dict[Path, TemplateEngine] = {}


def create_template_engine(template_dir: Path) -> TemplateEngine:
    """
    Return the template engine for a directory.

    Engines are cached; they hold no per-file state.
    """
    engine = _engines.get(template_dir)
    if engine is None:
        engine = TemplateEngine(template_dir)
        _engines[template_dir] = engine
    return engine
