from __future__ import annotations

import logging

import pytest

from texmark.adapters.latex import LaTeXRenderer
from texmark.core.buffer import OutputBuffer
from texmark.core.diagnostics import (
    CollectingEmitter,
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    format_event_message,
)
from texmark.core.exceptions import (
    InvalidNodeError,
    LatexRenderingError,
    TemplateMissingError,
)


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.DEBUG):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
        emitter.event("raw_markup_fallback", {"length": 1})
    assert not caplog.records


def test_emitters_satisfy_protocol() -> None:
    assert isinstance(NullEmitter(), DiagnosticEmitter)
    assert isinstance(LoggingEmitter(), DiagnosticEmitter)


def test_logging_emitter_forwards_to_logger(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(logger_obj=logging.getLogger("texmark.tests"))

    with caplog.at_level(logging.INFO, logger="texmark.tests"):
        emitter.warning("careful")
        emitter.error("broken", exc=RuntimeError("boom"))
        emitter.event("special_header_alias", {"source": "preface", "target": "abstract"})

    messages = [(record.levelno, record.getMessage()) for record in caplog.records]
    assert messages == [
        (logging.WARNING, "careful"),
        (logging.ERROR, "broken"),
        (logging.INFO, "Handling special header 'preface' like 'abstract'"),
    ]
    assert caplog.records[1].exc_info is not None


def test_unknown_events_log_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(logger_obj=logging.getLogger("texmark.tests"))

    with caplog.at_level(logging.DEBUG, logger="texmark.tests"):
        emitter.event("custom", {"a": 1})

    assert caplog.records[0].levelno == logging.DEBUG
    assert "custom" in caplog.records[0].getMessage()


def test_format_event_message() -> None:
    assert (
        format_event_message("raw_markup_fallback", {"length": 12})
        == "Rendering raw markup block as verbatim text (12 characters)"
    )
    assert format_event_message("raw_markup_fallback", {}) == (
        "Rendering raw markup block as verbatim text"
    )
    assert format_event_message("unknown", {}) is None


def test_renderer_events_reach_logging(caplog: pytest.LogCaptureFixture) -> None:
    renderer = LaTeXRenderer(emitter=LoggingEmitter())
    out = OutputBuffer()

    with caplog.at_level(logging.INFO, logger="texmark"):
        renderer.block_html(out, "<b>x</b>")

    assert "Rendering raw markup block as verbatim text (8 characters)" in caplog.text


def test_exception_hierarchy() -> None:
    assert issubclass(InvalidNodeError, LatexRenderingError)
    assert issubclass(TemplateMissingError, LatexRenderingError)
    assert issubclass(TemplateMissingError, AttributeError)
    assert issubclass(LatexRenderingError, RuntimeError)


def test_collecting_emitter_keeps_everything() -> None:
    emitter = CollectingEmitter()
    renderer = LaTeXRenderer(emitter=emitter)
    out = OutputBuffer()

    renderer.block_html(out, "<b>x</b>")
    renderer.special_header(out, "preface", lambda: bool(out.write("Preface")))
    emitter.warning("careful")

    assert emitter.event_names() == ["raw_markup_fallback", "special_header_alias"]
    assert emitter.events[1][1] == {"source": "preface", "target": "abstract"}
    assert emitter.warnings == ["careful"]
    assert isinstance(emitter, DiagnosticEmitter)
