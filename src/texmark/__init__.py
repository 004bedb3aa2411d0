"""Primary public API for TeXMark."""

from __future__ import annotations

from texmark.adapters.latex import LaTeXFormatter, LaTeXRenderer, escape_latex_chars
from texmark.core.attributes import AttributeStore, InlineAttributes
from texmark.core.buffer import OutputBuffer
from texmark.core.config import PackageSpec, RendererConfig
from texmark.core.context import DocumentState, GroupCounter, Matter
from texmark.core.diagnostics import (
    CollectingEmitter,
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
)
from texmark.core.exceptions import (
    InvalidNodeError,
    LatexRenderingError,
    TemplateMissingError,
)
from texmark.core.index import IndexKey, IndexRegistry
from texmark.core.nodes import (
    ContentCallback,
    LinkKind,
    ListFlags,
    NodeKind,
    TableAlignment,
    TitleBlock,
)
from texmark.version import get_version


__version__ = get_version()

__all__ = [
    "AttributeStore",
    "ContentCallback",
    "CollectingEmitter",
    "DiagnosticEmitter",
    "DocumentState",
    "GroupCounter",
    "IndexKey",
    "IndexRegistry",
    "InlineAttributes",
    "InvalidNodeError",
    "LaTeXFormatter",
    "LaTeXRenderer",
    "LatexRenderingError",
    "LinkKind",
    "ListFlags",
    "LoggingEmitter",
    "Matter",
    "NodeKind",
    "NullEmitter",
    "OutputBuffer",
    "PackageSpec",
    "RendererConfig",
    "TableAlignment",
    "TemplateMissingError",
    "TitleBlock",
    "__version__",
    "escape_latex_chars",
    "get_version",
]
