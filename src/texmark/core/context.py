"""Per-document state shared by the renderer's notification handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any
import warnings

from .index import IndexRegistry


class Matter(Enum):
    """Macro-structure phase the walker is currently in."""

    FRONT = auto()
    BODY = auto()
    BACK = auto()


@dataclass(slots=True)
class GroupCounter:
    """Next ordinal of every named list group (e.g. ``(@good)`` examples)."""

    _values: dict[str, int] = field(default_factory=dict)

    def next(self, name: str, start: int = 1) -> int:
        """Return the next number of ``name``, starting at ``start``."""
        previous = self._values.get(name)
        value = start if previous is None else previous + 1
        self._values[name] = value
        return value

    def upcoming(self, name: str, start: int = 1) -> int:
        """Return what :meth:`next` would return without advancing."""
        previous = self._values.get(name)
        return start if previous is None else previous + 1

    def __contains__(self, name: object) -> bool:
        return name in self._values


@dataclass(slots=True)
class DocumentState:
    """In-memory state accumulated while rendering a document."""

    matter: Matter = Matter.BODY
    appendix: bool = False
    index: IndexRegistry = field(default_factory=IndexRegistry)
    groups: GroupCounter = field(default_factory=GroupCounter)
    headings: list[dict[str, Any]] = field(default_factory=list)
    footnotes: dict[str, str] = field(default_factory=dict)
    abbreviations: dict[str, str] = field(default_factory=dict)
    open_special: str | None = None

    def enter_matter(self, kind: Matter) -> None:
        """Switch matter; appendix numbering is active only in back matter."""
        self.matter = kind
        self.appendix = kind is Matter.BACK

    @property
    def is_appendix(self) -> bool:
        return self.appendix

    def add_heading(self, *, level: int, text: str, ref: str | None = None) -> None:
        """Track heading metadata to power table-of-contents generation."""
        self.headings.append({"level": level, "text": text, "ref": ref})

    def remember_footnote(self, label: str, number: int) -> None:
        """Associate a footnote label with the number shown at its reference."""
        self.footnotes[label] = str(number)

    def footnote_number(self, label: str) -> str | None:
        return self.footnotes.get(label)

    def remember_abbreviation(self, term: str, description: str) -> None:
        """Track abbreviation definitions while ensuring consistency."""
        normalised_term = term.strip()
        normalised_description = description.strip()
        if not normalised_term or not normalised_description:
            return

        existing_description = self.abbreviations.get(normalised_term)
        if existing_description is not None:
            if existing_description != normalised_description:
                warnings.warn(
                    (
                        f"Inconsistent abbreviation definition for '{normalised_term}': "
                        f"'{existing_description}' vs '{normalised_description}'"
                    ),
                    stacklevel=2,
                )
            return
        self.abbreviations[normalised_term] = normalised_description


__all__ = ["DocumentState", "GroupCounter", "Matter"]
