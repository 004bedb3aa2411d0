"""Custom exception hierarchy for the LaTeX rendering backend."""

from __future__ import annotations


class LatexRenderingError(RuntimeError):
    """Base exception for LaTeX rendering failures."""


class InvalidNodeError(LatexRenderingError):
    """Raised when the walker notifies the renderer about an unknown node kind."""


class TemplateMissingError(LatexRenderingError, AttributeError):
    """Raised when the formatter is asked for a partial it does not provide."""


__all__ = [
    "InvalidNodeError",
    "LatexRenderingError",
    "TemplateMissingError",
]
