"""LaTeX backend driven by a document tree walker.

The walker visits the parsed document depth-first and calls one method of
:class:`LaTeXRenderer` per node. Leaf notifications carry literal text;
container notifications carry a content callback that renders the children
into the same buffer and reports whether it wrote anything. Containers whose
callback reports no output are rolled back so no empty environment is left
behind.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
import html
import logging
import re
from typing import Any

from slugify import slugify

from texmark.core.attributes import AttributeStore, InlineAttributes
from texmark.core.buffer import OutputBuffer
from texmark.core.config import RendererConfig
from texmark.core.context import DocumentState, Matter
from texmark.core.diagnostics import DiagnosticEmitter, NullEmitter
from texmark.core.exceptions import InvalidNodeError
from texmark.core.index import IndexRegistry
from texmark.core.nodes import (
    ContentCallback,
    LinkKind,
    ListFlags,
    NodeKind,
    TableAlignment,
    TitleBlock,
)
from texmark.version import get_version

from .formatter import LaTeXFormatter


logger = logging.getLogger(__name__)

SECTIONING_COMMANDS = {
    1: "section",
    2: "subsection",
    3: "subsubsection",
    4: "paragraph",
    5: "subparagraph",
}
FALLBACK_HEADING_COMMAND = "textbf"

ENUMERATE_COUNTERS = ("enumi", "enumii", "enumiii", "enumiv")

COLUMN_ALIGNMENTS = {
    TableAlignment.LEFT: "l",
    TableAlignment.RIGHT: "r",
    TableAlignment.CENTER: "c",
}

ROW_BREAK = " \\\\\n"
CELL_SEPARATOR = " & "

SPECIAL_HEADER_ALIASES = {"preface": "abstract"}

_ATTRIBUTION_SEPARATOR = re.compile(r"\s*(?:\u2014|--)\s*")
_LEADING_SEPARATOR = re.compile(r"^(?:\u2014|--)\s*")
_LATEX_MARKUP = re.compile(r"\\[A-Za-z]+\*?|\\.|[{}]")


@dataclass(slots=True)
class _ListFrame:
    flags: ListFlags
    group: str
    start: int


def _column_spec(columns: Iterable[int]) -> str:
    return "".join(COLUMN_ALIGNMENTS.get(code, "c") for code in columns)


def _plain_text(latex: str) -> str:
    """Strip LaTeX commands and braces, leaving readable text."""
    return " ".join(_LATEX_MARKUP.sub(" ", latex).split())


class LaTeXRenderer:
    """Emit LaTeX for the notifications of a document tree walker.

    One instance renders exactly one document: it owns the pending inline
    attributes, the index registry, the list-group counters, and the matter
    state for that render.
    """

    def __init__(
        self,
        config: RendererConfig | None = None,
        formatter: LaTeXFormatter | None = None,
        *,
        state: DocumentState | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config or RendererConfig()
        self.formatter = formatter or LaTeXFormatter()
        self.formatter.legacy_latex_accents = self.config.legacy_latex_accents
        self.state = state or DocumentState()
        self.attributes = AttributeStore()
        self.emitter = emitter or NullEmitter()
        self._lists: list[_ListFrame] = []
        self._handlers: dict[NodeKind, Callable[..., Any]] = {
            kind: getattr(self, kind.value) for kind in NodeKind
        }

    # ------------------------------------------------------------------
    # Dispatch

    def dispatch(self, kind: NodeKind, *args: Any, **kwargs: Any) -> Any:
        """Route a notification to the handler registered for ``kind``."""
        try:
            handler = self._handlers[kind]
        except (KeyError, TypeError) as exc:
            raise InvalidNodeError(f"Unknown node kind: {kind!r}") from exc
        return handler(*args, **kwargs)

    # ------------------------------------------------------------------
    # Helpers

    def _escape(self, text: str) -> str:
        return self.formatter.escape(text)

    def _container(
        self,
        out: OutputBuffer,
        opening: str,
        content: ContentCallback,
        closing: str,
    ) -> bool:
        """Write ``opening``, the children, and ``closing``; roll back when empty."""
        marker = len(out)
        out.write(opening)
        if not content():
            out.truncate(marker)
            return False
        out.write(closing)
        return True

    def _close_special(self, out: OutputBuffer) -> None:
        if self.state.open_special is None:
            return
        out.write(f"\n\\end{{{self.state.open_special}}}\n")
        self.state.open_special = None

    @staticmethod
    def _label(ref: str | None) -> str:
        return f"\\label{{{ref}}}" if ref else ""

    def set_inline_attr(self, attrs: InlineAttributes | None) -> None:
        """Attach attributes to the next block node."""
        self.attributes.set(attrs)

    # ------------------------------------------------------------------
    # Block level

    def block_code(
        self,
        out: OutputBuffer,
        text: str,
        lang: str = "",
        caption: str = "",
        subfigure: bool = False,
        callout: bool = False,
    ) -> None:
        """Render code verbatim, or as a listing when a language is known."""
        attrs = self.attributes.consume()
        caption = caption or attrs.get("caption")
        if not lang:
            out.write("\n\\begin{verbatim}\n")
            out.write(text)
            out.write("\n\\end{verbatim}\n")
            return

        options = [f"language={lang}"]
        if caption:
            options.append(f"caption={{{caption}}}")
        if attrs.id:
            options.append(f"label={attrs.id}")
        out.write(f"\n\\begin{{lstlisting}}[{','.join(options)}]\n")
        out.write(text)
        out.write("\n\\end{lstlisting}\n")

    def block_quote(self, out: OutputBuffer, content: ContentCallback, attribution: str = "") -> None:
        self.attributes.consume()
        marker = len(out)
        out.write("\n\\begin{quotation}\n")
        if not content():
            out.truncate(marker)
            return
        if attribution.strip():
            out.write(self._attribution(attribution))
        out.write("\n\\end{quotation}\n")

    def _attribution(self, attribution: str) -> str:
        cleaned = _LEADING_SEPARATOR.sub("", attribution.strip())
        parts = _ATTRIBUTION_SEPARATOR.split(cleaned, maxsplit=1)
        if len(parts) == 1:
            parts = [part.strip() for part in cleaned.split(",", 1)]
        author = self._escape(parts[0].strip())
        source = self._escape(parts[1].strip()) if len(parts) > 1 else ""
        line = f"\n\\hfill --- {author}"
        if source:
            line += f", \\emph{{{source}}}"
        return line

    def block_html(self, out: OutputBuffer, text: str) -> None:
        """Pass raw markup through as verbatim text.

        Raw markup of another language cannot be translated faithfully, so it
        is kept as opaque literal text.
        """
        self.attributes.consume()
        self.emitter.event("raw_markup_fallback", {"length": len(text)})
        out.write("\n\\begin{verbatim}\n")
        out.write(text)
        out.write("\n\\end{verbatim}\n")

    def comment_html(self, out: OutputBuffer, text: str) -> None:
        body = text.strip()
        if body.startswith("<!--") and body.endswith("-->"):
            body = body[4:-3]
        lines = body.strip().splitlines() or [""]
        out.write("\n")
        for line in lines:
            out.write(f"% {line.rstrip()}".rstrip() + "\n")

    def header(self, out: OutputBuffer, content: ContentCallback, level: int, id: str = "") -> None:
        """Render a heading; depth 6 and deeper fall back to bold text."""
        self._close_special(out)
        attrs = self.attributes.consume()
        level = max(level, 1)
        command = SECTIONING_COMMANDS.get(level, FALLBACK_HEADING_COMMAND)
        sectioning = command != FALLBACK_HEADING_COMMAND
        unnumbered = attrs.has_class("unnumbered") or attrs.has_class("-")
        star = "*" if sectioning and unnumbered else ""

        marker = len(out)
        out.write(f"\n\\{command}{star}{{")
        start = len(out)
        if not content():
            out.truncate(marker)
            return
        text = out.since(start)
        out.write("}")

        ref = id or attrs.id or None
        if ref is None and sectioning and self.config.heading_labels:
            ref = slugify(_plain_text(text), separator="-") or None
        if sectioning:
            out.write(self._label(ref))
        out.write("\n")
        self.state.add_heading(level=level, text=text, ref=ref)

    def hrule(self, out: OutputBuffer) -> None:
        self.attributes.consume()
        out.write("\n\\HRule\n")

    def list(
        self,
        out: OutputBuffer,
        content: ContentCallback,
        flags: int = ListFlags.NONE,
        start: int = 1,
        group: str = "",
    ) -> None:
        """Render a list, numbering grouped lists from their group counter."""
        self.attributes.consume()
        flags = ListFlags(flags)
        if flags & ListFlags.DEFINITION:
            environment = "description"
        elif flags & ListFlags.ORDERED:
            environment = "enumerate"
        else:
            environment = "itemize"

        marker = len(out)
        out.write(f"\n\\begin{{{environment}}}\n")
        if environment == "enumerate":
            first = self.state.groups.upcoming(group, start) if group else start
            if first != 1:
                depth = sum(1 for frame in self._lists if frame.flags & ListFlags.ORDERED)
                counter = ENUMERATE_COUNTERS[min(depth, len(ENUMERATE_COUNTERS) - 1)]
                out.write(f"\\setcounter{{{counter}}}{{{first - 1}}}\n")

        self._lists.append(_ListFrame(flags=flags, group=group, start=start))
        try:
            produced = content()
        finally:
            self._lists.pop()
        if not produced:
            out.truncate(marker)
            return
        out.write(f"\n\\end{{{environment}}}\n")

    def list_item(self, out: OutputBuffer, text: str, flags: int = ListFlags.NONE) -> None:
        flags = ListFlags(flags)
        frame = self._lists[-1] if self._lists else None
        if frame is not None and frame.group:
            self.state.groups.next(frame.group, frame.start)

        if flags & ListFlags.TERM:
            out.write(f"\n\\item[{text.strip()}] ")
            return
        if flags & ListFlags.DEFINITION:
            out.write(text)
            return
        out.write("\n\\item ")
        out.write(text)

    def example(self, out: OutputBuffer, index: int) -> None:
        out.write(f"({index})")

    def paragraph(self, out: OutputBuffer, content: ContentCallback, flags: int = 0) -> None:
        self.attributes.consume()
        self._container(out, "\n", content, "\n")

    def table(
        self,
        out: OutputBuffer,
        header: str,
        body: str,
        footer: str = "",
        columns: Sequence[int] = (),
        caption: str = "",
    ) -> None:
        """Render a table; unknown alignment codes become centred columns."""
        attrs = self.attributes.consume()
        floating = bool(caption or attrs.id)
        if floating:
            out.write("\n\\begin{table}[htbp]\n\\centering")
        out.write(f"\n\\begin{{tabular}}{{{_column_spec(columns)}}}\n")
        out.write(header)
        out.write(ROW_BREAK + "\\hline\n")
        if body:
            out.write(body)
            out.write(ROW_BREAK)
        if footer:
            out.write("\\hline\n")
            out.write(footer)
            out.write(ROW_BREAK)
        out.write("\\end{tabular}\n")
        if floating:
            if caption:
                out.write(f"\\caption{{{caption}}}\n")
            if attrs.id:
                out.write(f"{self._label(attrs.id)}\n")
            out.write("\\end{table}\n")

    def table_row(self, out: OutputBuffer, text: str) -> None:
        if len(out) > 0:
            out.write(ROW_BREAK)
        out.write(text)

    def _cell(self, out: OutputBuffer, text: str, align: int, colspan: int) -> None:
        if len(out) > 0:
            out.write(CELL_SEPARATOR)
        if colspan > 1:
            spec = COLUMN_ALIGNMENTS.get(align, "c")
            out.write(f"\\multicolumn{{{colspan}}}{{{spec}}}{{{text}}}")
        else:
            out.write(text)

    def table_header_cell(self, out: OutputBuffer, text: str, align: int = 0, colspan: int = 1) -> None:
        self._cell(out, text, align, colspan)

    def table_cell(self, out: OutputBuffer, text: str, align: int = 0, colspan: int = 1) -> None:
        self._cell(out, text, align, colspan)

    def footnotes(self, out: OutputBuffer, content: ContentCallback) -> None:
        self._container(out, "\n", content, "\n")

    def footnote_item(self, out: OutputBuffer, name: str, text: str, flags: int = 0) -> None:
        number = self.state.footnote_number(name)
        marker = f"[{number}]" if number is not None else ""
        out.write(f"\\footnotetext{marker}{{{text.strip()}}}\n")

    def figure(self, out: OutputBuffer, text: str, caption: str = "") -> None:
        attrs = self.attributes.consume()
        out.write("\n\\begin{figure}[htbp]\n\\centering\n")
        out.write(text)
        out.write("\n")
        if caption:
            out.write(f"\\caption{{{caption}}}\n")
        if attrs.id:
            out.write(f"{self._label(attrs.id)}\n")
        out.write("\\end{figure}\n")

    def special_header(
        self,
        out: OutputBuffer,
        what: str,
        content: ContentCallback,
        id: str = "",
    ) -> None:
        """Render abstract-like headers; ``preface`` is treated as ``abstract``."""
        self._close_special(out)
        attrs = self.attributes.consume()
        kind = what.strip().lower()
        alias = SPECIAL_HEADER_ALIASES.get(kind)
        if alias is not None:
            self.emitter.event("special_header_alias", {"source": kind, "target": alias})
            kind = alias

        ref = id or attrs.id
        if kind == "abstract":
            # The environment typesets its own title, so the rendered title is
            # discarded along with any index entries recorded inside it.
            marker = len(out)
            registry = self.state.index
            self.state.index = IndexRegistry()
            try:
                produced = content()
            finally:
                self.state.index = registry
            out.truncate(marker)
            if not produced:
                return
            out.write(f"\n\\begin{{abstract}}{self._label(ref)}\n")
            self.state.open_special = "abstract"
            return

        self._container(out, "\n\\section*{", content, f"}}{self._label(ref)}\n")

    def part(self, out: OutputBuffer, content: ContentCallback, id: str = "") -> None:
        self._close_special(out)
        attrs = self.attributes.consume()
        ref = id or attrs.id
        self._container(out, "\n\\part{", content, f"}}{self._label(ref)}\n")

    def note(self, out: OutputBuffer, content: ContentCallback, id: str = "") -> None:
        """Render an unnumbered section."""
        self._close_special(out)
        attrs = self.attributes.consume()
        ref = id or attrs.id
        self._container(out, "\n\\section*{", content, f"}}{self._label(ref)}\n")

    def math(self, out: OutputBuffer, text: str, display: bool = False) -> None:
        """Render math; only display math takes the pending attributes."""
        if not display:
            out.write(f"${text}$")
            return
        attrs = self.attributes.consume()
        if attrs.id:
            out.write(f"\n\\begin{{equation}}{self._label(attrs.id)}\n{text}\n\\end{{equation}}\n")
            return
        out.write(f"\n\\[\n{text}\n\\]\n")

    def aside(self, out: OutputBuffer, text: str) -> None:
        self.attributes.consume()
        out.write("\n\\begin{quote}\n\\small\n")
        out.write(text)
        out.write("\n\\end{quote}\n")

    def title_block(self, out: OutputBuffer, text: str) -> None:
        """Render a ``%``-prefixed title block: title, authors, date."""
        lines = [line.lstrip("%").strip() for line in text.strip().splitlines()]
        lines += [""] * (3 - len(lines))
        authors = [author.strip() for author in lines[1].split(";") if author.strip()]
        self.title_block_toml(out, TitleBlock(title=lines[0], authors=authors, date=lines[2]))

    def title_block_toml(self, out: OutputBuffer, block: TitleBlock) -> None:
        out.write(
            self.formatter.title(
                title=self._escape(block.title),
                authors=[self._escape(author) for author in block.authors],
                date=self._escape(block.date),
            )
        )

    def callout_code(self, out: OutputBuffer, index: str, id: str = "") -> None:
        out.write(f"({self._escape(index)})")

    def callout_text(self, out: OutputBuffer, id: str, ids: Sequence[str]) -> None:
        out.write(" ".join(f"({self._escape(value)})" for value in ids))

    def references(self, out: OutputBuffer, citations: Mapping[str, Any]) -> None:
        """Accept the reference list; bibliography rendering is left to LaTeX."""
        logger.debug("ignoring %d reference entries", len(citations))

    # ------------------------------------------------------------------
    # Inline level

    def auto_link(self, out: OutputBuffer, link: str, kind: int = LinkKind.NORMAL) -> None:
        target = link
        if kind == LinkKind.EMAIL and not link.lower().startswith("mailto:"):
            target = f"mailto:{link}"
        out.write(f"\\href{{{self.formatter.escape_url(target)}}}{{{self._escape(link)}}}")

    def code_span(self, out: OutputBuffer, text: str) -> None:
        out.write(f"\\texttt{{{self._escape(text)}}}")

    def double_emphasis(self, out: OutputBuffer, text: str) -> None:
        out.write(f"\\textbf{{{text}}}")

    def emphasis(self, out: OutputBuffer, text: str) -> None:
        out.write(f"\\textit{{{text}}}")

    def triple_emphasis(self, out: OutputBuffer, text: str) -> None:
        out.write(f"\\textbf{{\\textit{{{text}}}}}")

    def strikethrough(self, out: OutputBuffer, text: str) -> None:
        out.write(f"\\sout{{{text}}}")

    def subscript(self, out: OutputBuffer, text: str) -> None:
        out.write(f"\\textsubscript{{{text}}}")

    def superscript(self, out: OutputBuffer, text: str) -> None:
        out.write(f"\\textsuperscript{{{text}}}")

    def image(
        self,
        out: OutputBuffer,
        link: str,
        title: str = "",
        alt: str = "",
        subfigure: bool = False,
    ) -> None:
        """Embed local images; remote ones become links labelled by their alt text."""
        if link.startswith(("http://", "https://")):
            out.write(f"\\href{{{self.formatter.escape_url(link)}}}{{{self._escape(alt)}}}")
            return
        out.write(f"\\includegraphics{{{link}}}")

    def line_break(self, out: OutputBuffer) -> None:
        out.write(ROW_BREAK)

    def link(self, out: OutputBuffer, link: str, title: str, content: str) -> None:
        if link.startswith("#") and len(link) > 1:
            out.write(f"\\hyperref[{link[1:]}]{{{content}}}")
            return
        out.write(f"\\href{{{self.formatter.escape_url(link)}}}{{{content}}}")

    def abbreviation(self, out: OutputBuffer, abbr: str, title: str = "") -> None:
        self.state.remember_abbreviation(abbr, title)
        out.write(self._escape(abbr))

    def raw_html_tag(self, out: OutputBuffer, tag: str) -> None:
        logger.debug("dropping raw markup tag %r", tag)

    def footnote_ref(self, out: OutputBuffer, ref: str, id: int) -> None:
        self.state.remember_footnote(ref, id)
        out.write(f"\\footnotemark[{id}]")

    def index(
        self,
        out: OutputBuffer,
        primary: str,
        secondary: str = "",
        principal: bool = False,
    ) -> None:
        """Drop an anchor for an index occurrence."""
        reference = self.state.index.record(primary, secondary, principal=principal)
        out.write(f"\\hypertarget{{{reference}}}{{}}")

    def citation(self, out: OutputBuffer, link: str, title: str) -> None:
        out.write(f"\\hyperlink{{{link.lower()}}}{{{title}}}")

    def entity(self, out: OutputBuffer, entity: str) -> None:
        out.write(self._escape(html.unescape(entity)))

    def normal_text(self, out: OutputBuffer, text: str) -> None:
        out.write(self._escape(text))

    # ------------------------------------------------------------------
    # Document lifecycle

    def document_header(self, out: OutputBuffer, first: bool) -> None:
        """Write the preamble for the first document of a standalone render."""
        if not (first and self.config.standalone):
            return
        out.write(
            self.formatter.preamble(
                document_class=self.config.document_class,
                packages=self.config.packages,
                link_color=self.config.link_color,
                generator=self._escape(f"TeXMark v{get_version()}"),
                head=self.config.head.as_posix() if self.config.head else None,
            )
        )

    def document_footer(self, out: OutputBuffer, first: bool) -> None:
        self._close_special(out)
        if not (first and self.config.standalone):
            return
        if self.config.emit_index:
            self.render_index(out)
        out.write(self.formatter.postamble())

    def document_matter(self, out: OutputBuffer, matter: Matter) -> None:
        """Switch front/body/back matter; back matter starts the appendix."""
        self._close_special(out)
        was_appendix = self.state.is_appendix
        self.state.enter_matter(matter)
        if self.config.book_like and matter is Matter.FRONT:
            out.write("\n\\frontmatter\n")
        elif self.config.book_like and matter is Matter.BODY:
            out.write("\n\\mainmatter\n")
        if self.state.is_appendix and not was_appendix:
            out.write("\n\\appendix\n")

    def render_index(self, out: OutputBuffer) -> None:
        """Write the consolidated index section linking back to every occurrence."""
        registry = self.state.index
        if not len(registry):
            return

        def _links(references: Sequence[str]) -> str:
            links = []
            for number, reference in enumerate(references, start=1):
                label = f"\\textbf{{{number}}}" if registry.is_principal(reference) else str(number)
                links.append(f"\\hyperlink{{{reference}}}{{{label}}}")
            return ", ".join(links)

        groups = [
            {
                "term": self._escape(group.term),
                "links": _links(group.references),
                "children": [
                    {"term": self._escape(term), "links": _links(references)}
                    for term, references in group.children
                ],
            }
            for group in registry.grouped()
        ]
        out.write(self.formatter.index(title=self._escape(self.config.index_title), groups=groups))


__all__ = ["LaTeXRenderer"]
