"""Inline attribute lists (IAL) attached to the next block node."""

from __future__ import annotations

from dataclasses import dataclass, field
import shlex


@dataclass(slots=True)
class InlineAttributes:
    """Identifier, classes, and key/value pairs annotating a block."""

    id: str = ""
    classes: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> InlineAttributes:
        """Parse an ``{#id .class key="value"}`` annotation."""
        payload = text.strip()
        if payload.startswith("{") and payload.endswith("}"):
            payload = payload[1:-1]

        attrs = cls()
        for token in shlex.split(payload):
            if token.startswith("#") and len(token) > 1:
                attrs.id = token[1:]
            elif token.startswith(".") and len(token) > 1:
                attrs.classes.append(token[1:])
            elif "=" in token:
                key, value = token.split("=", 1)
                if key:
                    attrs.attributes[key] = value
            elif token == "-":
                attrs.classes.append("unnumbered")
        return attrs

    def has_class(self, name: str) -> bool:
        """Return True when ``name`` is one of the classes."""
        return name in self.classes

    def get(self, key: str, default: str = "") -> str:
        """Return a custom attribute value."""
        return self.attributes.get(key, default)

    def __bool__(self) -> bool:
        return bool(self.id or self.classes or self.attributes)


class AttributeStore:
    """Single slot holding the attributes pending for the next block.

    The walker calls :meth:`set` right before the block the attributes
    annotate; that block calls :meth:`consume`, which hands the set over and
    empties the slot so no later block observes stale attributes.
    """

    __slots__ = ("_pending",)

    def __init__(self) -> None:
        self._pending: InlineAttributes | None = None

    def set(self, attrs: InlineAttributes | None) -> None:
        """Replace the pending set (no merge)."""
        self._pending = attrs

    def consume(self) -> InlineAttributes:
        """Return the pending set, or an empty one, and clear the slot."""
        attrs = self._pending
        self._pending = None
        return attrs if attrs is not None else InlineAttributes()

    def peek(self) -> InlineAttributes | None:
        """Return the pending set without clearing it."""
        return self._pending


__all__ = ["AttributeStore", "InlineAttributes"]
