"""Registry tracking index terms and their reference ids across a document."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NamedTuple


REFERENCE_PREFIX = "idxref"


class IndexKey(NamedTuple):
    """Primary term and optional secondary term of an index entry."""

    primary: str
    secondary: str = ""


@dataclass(slots=True)
class IndexGroup:
    """Index entries sharing a primary term, ready for the index section."""

    term: str
    references: list[str] = field(default_factory=list)
    children: list[tuple[str, list[str]]] = field(default_factory=list)


@dataclass(slots=True)
class IndexRegistry:
    """Container gathering index occurrences encountered during rendering.

    Reference ids have the form ``idxref:<counter>-<occurrence>``. The counter
    advances once per distinct key, on first sight; repeated keys reuse the
    latest counter value and only the occurrence suffix grows.
    """

    _entries: dict[IndexKey, list[str]] = field(default_factory=dict)
    _principal: set[str] = field(default_factory=set)
    _counter: int = -1

    def record(self, primary: str, secondary: str = "", *, principal: bool = False) -> str:
        """Register one occurrence of a term and return its reference id."""
        key = IndexKey(primary, secondary)
        references = self._entries.get(key)
        if references is None:
            self._counter += 1
            references = self._entries[key] = []
        reference = f"{REFERENCE_PREFIX}:{self._counter}-{len(references)}"
        references.append(reference)
        if principal:
            self._principal.add(reference)
        return reference

    def references(self, primary: str, secondary: str = "") -> list[str]:
        """Return the reference ids recorded for a key."""
        return list(self._entries.get(IndexKey(primary, secondary), ()))

    def is_principal(self, reference: str) -> bool:
        """Return True when the occurrence was flagged as the principal one."""
        return reference in self._principal

    def grouped(self) -> list[IndexGroup]:
        """Return entries grouped by primary term, sorted case-insensitively."""
        groups: dict[str, IndexGroup] = {}
        for key in sorted(self._entries, key=_sort_key):
            group = groups.get(key.primary)
            if group is None:
                group = groups[key.primary] = IndexGroup(term=key.primary)
            if key.secondary:
                group.children.append((key.secondary, list(self._entries[key])))
            else:
                group.references.extend(self._entries[key])
        return list(groups.values())

    def clear(self) -> None:
        """Reset the registry to its initial empty state."""
        self._entries.clear()
        self._principal.clear()
        self._counter = -1

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexKey]:
        yield from sorted(self._entries, key=_sort_key)


def _sort_key(key: IndexKey) -> tuple[str, str, str, str]:
    return (key.primary.casefold(), key.primary, key.secondary.casefold(), key.secondary)


__all__ = ["REFERENCE_PREFIX", "IndexGroup", "IndexKey", "IndexRegistry"]
