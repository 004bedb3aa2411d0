"""Configuration models used by the LaTeX renderer.

RendererConfig

`standalone` (`bool`)
: Emit a complete preamble and postamble around the body so the output can be
  compiled directly. When `False` only the body fragment is produced, ready to
  be embedded into a document assembled elsewhere.

`document_class` (`str`)
: Class passed to `\\documentclass`. Book-like classes (`book`, `scrbook`,
  `memoir`) also receive `\\frontmatter`/`\\mainmatter` on matter changes.

`packages` (`list[PackageSpec]`)
: Packages loaded by the standalone preamble, in order.

`link_color` (`str`)
: Colour applied to citations, files, internal links, and URLs by
  `\\hypersetup`.

`head` (`Path | None`)
: Optional LaTeX file pulled into the preamble with `\\input`.

`legacy_latex_accents` (`bool`)
: When `True`, escape accented characters, ligatures, and typographic punctuation
  using legacy LaTeX macros. When `False`, keep Unicode glyphs compatible with
  LuaLaTeX/XeLaTeX (default).

`heading_labels` (`bool`)
: Derive a `\\label` from the heading text when a heading carries no id.

`emit_index` (`bool`)
: Let the standalone footer write the consolidated index section.

`index_title` (`str`)
: Title of the index section.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PackageSpec(BaseModel):
    """LaTeX package loaded by the preamble."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    options: str | None = None


DEFAULT_PACKAGES: tuple[PackageSpec, ...] = (
    PackageSpec(name="graphicx"),
    PackageSpec(name="listings"),
    PackageSpec(name="geometry", options="margin=1in"),
    PackageSpec(name="inputenc", options="utf8"),
    PackageSpec(name="verbatim"),
    PackageSpec(name="ulem", options="normalem"),
    PackageSpec(name="hyperref"),
)

BOOK_CLASSES = frozenset({"book", "scrbook", "memoir"})


class RendererConfig(BaseModel):
    """Options recognised by :class:`~texmark.adapters.latex.LaTeXRenderer`."""

    model_config = ConfigDict(extra="forbid")

    standalone: bool = False
    document_class: str = "article"
    packages: list[PackageSpec] = Field(default_factory=lambda: list(DEFAULT_PACKAGES))
    link_color: str = "black"
    head: Path | None = None
    legacy_latex_accents: bool = False
    heading_labels: bool = True
    emit_index: bool = True
    index_title: str = "Index"

    @field_validator("document_class")
    @classmethod
    def _strip_document_class(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("document_class must not be empty")
        return cleaned

    @property
    def book_like(self) -> bool:
        """Return True when the class provides front/main/back matter commands."""
        return self.document_class in BOOK_CLASSES


__all__ = ["BOOK_CLASSES", "DEFAULT_PACKAGES", "PackageSpec", "RendererConfig"]
