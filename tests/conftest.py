from __future__ import annotations

from collections.abc import Callable

import pytest

from texmark.adapters.latex import LaTeXRenderer
from texmark.core.buffer import OutputBuffer
from texmark.core.config import RendererConfig
from texmark.core.diagnostics import CollectingEmitter


@pytest.fixture
def emitter() -> CollectingEmitter:
    return CollectingEmitter()


@pytest.fixture
def renderer(emitter: CollectingEmitter) -> LaTeXRenderer:
    return LaTeXRenderer(config=RendererConfig(), emitter=emitter)


@pytest.fixture
def standalone_renderer(emitter: CollectingEmitter) -> LaTeXRenderer:
    return LaTeXRenderer(config=RendererConfig(standalone=True), emitter=emitter)


@pytest.fixture
def out() -> OutputBuffer:
    return OutputBuffer()


@pytest.fixture
def content() -> Callable[..., Callable[[], bool]]:
    """Build content callbacks writing fixed text, or running nested notifications."""

    def factory(
        out: OutputBuffer, text: str = "", *children: Callable[[], object]
    ) -> Callable[[], bool]:
        def _render() -> bool:
            marker = len(out)
            out.write(text)
            for child in children:
                child()
            return len(out) > marker

        return _render

    return factory
