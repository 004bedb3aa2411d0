from __future__ import annotations

import pytest

from texmark.core.buffer import OutputBuffer


def test_buffer_tracks_length_and_value() -> None:
    out = OutputBuffer()
    assert len(out) == 0

    assert out.write("abc") == 3
    out.write("déf")

    assert len(out) == 6
    assert out.getvalue() == "abcdéf"
    assert str(out) == "abcdéf"


def test_truncate_discards_trailing_output() -> None:
    out = OutputBuffer()
    out.write("keep")
    marker = len(out)
    out.write(" discard")

    out.truncate(marker)
    out.write("!")

    assert out.getvalue() == "keep!"


def test_since_returns_text_after_marker() -> None:
    out = OutputBuffer()
    out.write("\\section{")
    start = len(out)
    out.write("Intro")

    assert out.since(start) == "Intro"


@pytest.mark.parametrize("size", [-1, 4])
def test_truncate_rejects_out_of_range_sizes(size: int) -> None:
    out = OutputBuffer()
    out.write("abc")

    with pytest.raises(ValueError):
        out.truncate(size)
