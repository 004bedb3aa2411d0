"""Diagnostics raised while rendering.

The renderer never prints. It reports through a :class:`DiagnosticEmitter`
supplied by the host: notices about lossy fallbacks (raw markup kept as
verbatim text) and about aliased constructs (``preface`` handled as
``abstract``) arrive as named events with a small payload.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Sink for warnings, errors, and structured rendering events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Discard everything."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


@dataclass
class CollectingEmitter:
    """Keep diagnostics in memory so a host can inspect them after a render."""

    debug_enabled: bool = False
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def event_names(self) -> list[str]:
        return [name for name, _ in self.events]


class LoggingEmitter:
    """Forward diagnostics to :mod:`logging`.

    Events with a registered formatter are logged at ``INFO`` as a readable
    sentence; the others are logged at ``DEBUG`` with their raw payload.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def _log(self, level: int, message: str, exc: BaseException | None) -> None:
        self._logger.log(level, message, exc_info=exc)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.WARNING, message, exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.ERROR, message, exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message is None:
            self._logger.debug("diagnostic event %s: %s", name, dict(payload))
            return
        self._logger.info(message)


def _special_header_alias(data: dict[str, Any]) -> str:
    source = data.get("source") or "<unknown>"
    target = data.get("target") or "<unknown>"
    return f"Handling special header '{source}' like '{target}'"


def _raw_markup_fallback(data: dict[str, Any]) -> str:
    length = data.get("length")
    suffix = f" ({length} characters)" if length is not None else ""
    return f"Rendering raw markup block as verbatim text{suffix}"


EVENT_FORMATTERS: dict[str, Callable[[dict[str, Any]], str]] = {
    "special_header_alias": _special_header_alias,
    "raw_markup_fallback": _raw_markup_fallback,
}


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for known events, ``None`` otherwise."""
    formatter = EVENT_FORMATTERS.get(name)
    if formatter is None:
        return None
    return formatter(dict(payload))


__all__ = [
    "EVENT_FORMATTERS",
    "CollectingEmitter",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
