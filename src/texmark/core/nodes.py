"""Node kinds and flag values exchanged between the tree walker and renderer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag


ContentCallback = Callable[[], bool]
"""Renders a container's children into the shared buffer; True when it wrote output."""


class ListFlags(IntFlag):
    """Flags attached to list and list-item notifications."""

    NONE = 0
    ORDERED = 1
    DEFINITION = 2
    TERM = 4
    CONTAINS_BLOCK = 8


class TableAlignment(IntEnum):
    """Column alignment codes sent with table notifications."""

    DEFAULT = 0
    LEFT = 1
    RIGHT = 2
    CENTER = 3


class LinkKind(IntEnum):
    """Autolink classification."""

    NOT_AUTOLINK = 0
    NORMAL = 1
    EMAIL = 2


@dataclass(slots=True)
class TitleBlock:
    """Document title metadata from a title block."""

    title: str = ""
    authors: list[str] = field(default_factory=list)
    date: str = ""


class NodeKind(Enum):
    """Every notification the walker may send; values are handler names."""

    # block level
    BLOCK_CODE = "block_code"
    BLOCK_QUOTE = "block_quote"
    BLOCK_HTML = "block_html"
    COMMENT_HTML = "comment_html"
    HEADER = "header"
    HRULE = "hrule"
    LIST = "list"
    LIST_ITEM = "list_item"
    EXAMPLE = "example"
    PARAGRAPH = "paragraph"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_HEADER_CELL = "table_header_cell"
    TABLE_CELL = "table_cell"
    FOOTNOTES = "footnotes"
    FOOTNOTE_ITEM = "footnote_item"
    FIGURE = "figure"
    SPECIAL_HEADER = "special_header"
    PART = "part"
    NOTE = "note"
    MATH = "math"
    ASIDE = "aside"
    TITLE_BLOCK = "title_block"
    TITLE_BLOCK_TOML = "title_block_toml"
    CALLOUT_CODE = "callout_code"
    CALLOUT_TEXT = "callout_text"
    REFERENCES = "references"
    # inline level
    AUTO_LINK = "auto_link"
    CODE_SPAN = "code_span"
    EMPHASIS = "emphasis"
    DOUBLE_EMPHASIS = "double_emphasis"
    TRIPLE_EMPHASIS = "triple_emphasis"
    STRIKETHROUGH = "strikethrough"
    SUBSCRIPT = "subscript"
    SUPERSCRIPT = "superscript"
    IMAGE = "image"
    LINE_BREAK = "line_break"
    LINK = "link"
    ABBREVIATION = "abbreviation"
    RAW_HTML_TAG = "raw_html_tag"
    FOOTNOTE_REF = "footnote_ref"
    INDEX = "index"
    CITATION = "citation"
    ENTITY = "entity"
    NORMAL_TEXT = "normal_text"
    # lifecycle
    DOCUMENT_HEADER = "document_header"
    DOCUMENT_FOOTER = "document_footer"
    DOCUMENT_MATTER = "document_matter"


__all__ = [
    "ContentCallback",
    "LinkKind",
    "ListFlags",
    "NodeKind",
    "TableAlignment",
    "TitleBlock",
]
