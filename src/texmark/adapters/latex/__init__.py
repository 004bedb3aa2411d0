"""LaTeX backend: renderer façade, partial formatter, and escaping helpers."""

from __future__ import annotations

from .formatter import LaTeXFormatter
from .renderer import LaTeXRenderer
from .utils import escape_latex_chars


__all__ = ["LaTeXFormatter", "LaTeXRenderer", "escape_latex_chars"]
