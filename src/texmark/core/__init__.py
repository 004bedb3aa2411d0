"""Renderer-independent building blocks: state, configuration, diagnostics."""

from __future__ import annotations

from .attributes import AttributeStore, InlineAttributes
from .buffer import OutputBuffer
from .config import PackageSpec, RendererConfig
from .context import DocumentState, GroupCounter, Matter
from .diagnostics import (
    CollectingEmitter,
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
)
from .exceptions import InvalidNodeError, LatexRenderingError, TemplateMissingError
from .index import IndexKey, IndexRegistry
from .nodes import ContentCallback, LinkKind, ListFlags, NodeKind, TableAlignment, TitleBlock


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
]
