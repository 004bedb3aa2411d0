"""Jinja rendering of the LaTeX partials (preamble, postamble, title, index).

Partials live next to this module under ``partials/`` and use LaTeX-friendly
delimiters so they stay readable as TeX sources::

    \\documentclass{\\VAR{document_class}}
    \\BLOCK{ for package in packages }
    \\usepackage{\\VAR{package.name}}
    \\BLOCK{ endfor }
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template
from requests.utils import requote_uri as requote_url

from texmark.core.exceptions import TemplateMissingError

from .utils import escape_latex_chars


TEMPLATE_DIR = Path(__file__).resolve().parent / "partials"
TEMPLATE_SUFFIX = ".tex"


def _latex_environment(template_dir: Path) -> Environment:
    return Environment(
        block_start_string=r"\BLOCK{",
        block_end_string=r"}",
        variable_start_string=r"\VAR{",
        variable_end_string=r"}",
        comment_start_string=r"\COMMENT{",
        comment_end_string=r"}",
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
        undefined=StrictUndefined,
        loader=FileSystemLoader(template_dir),
    )


class LaTeXFormatter:
    """Render partials by name, e.g. ``formatter.preamble(document_class=...)``."""

    def __init__(self, template_dir: Path = TEMPLATE_DIR) -> None:
        self.env = _latex_environment(template_dir)
        self.env.filters["latex_escape"] = self.escape
        self.legacy_latex_accents = False
        self._templates: dict[str, Template] = {}
        self._sources = {
            name.removesuffix(TEMPLATE_SUFFIX).replace("/", "_"): name
            for name in self.env.list_templates(extensions=[TEMPLATE_SUFFIX.lstrip(".")])
        }

    @property
    def template_names(self) -> set[str]:
        return set(self._sources)

    def template(self, name: str) -> Template:
        """Return the compiled partial called ``name``."""
        cached = self._templates.get(name)
        if cached is not None:
            return cached
        source = self._sources.get(name)
        if source is None:
            raise TemplateMissingError(f"No LaTeX partial named '{name}'")
        cached = self._templates[name] = self.env.get_template(source)
        return cached

    def render(self, name: str, **context: Any) -> str:
        return self.template(name).render(**context)

    def __getattr__(self, name: str) -> Callable[..., str]:
        if name.startswith("_"):
            raise AttributeError(name)
        template = self.template(name)
        return lambda **context: template.render(**context)

    def __getitem__(self, name: str) -> Callable[..., str]:
        return self.template(name).render

    def escape(self, text: str) -> str:
        """Escape literal text, honouring :attr:`legacy_latex_accents`."""
        return escape_latex_chars(text, legacy_accents=self.legacy_latex_accents)

    def escape_url(self, url: str) -> str:
        """Percent-quote a URL, then protect it for use in ``\\href``."""
        return escape_latex_chars(requote_url(url))


__all__ = ["TEMPLATE_DIR", "LaTeXFormatter"]
