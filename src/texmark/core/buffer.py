"""Output buffer shared by the walker and the renderer.

The renderer writes every fragment straight into the buffer handed over by
the walker. Container blocks record ``len(out)`` before writing their opening
delimiter and call :meth:`OutputBuffer.truncate` to roll the whole construct
back when their content callback produced nothing.
"""

from __future__ import annotations

import io


class OutputBuffer:
    """Append-only text accumulator supporting truncation to a marker.

    Usage:
            >>> out = OutputBuffer()
            >>> marker = len(out)
            >>> out.write("\\\\begin{itemize}")
            15
            >>> out.truncate(marker)
            >>> out.getvalue()
            ''
    """

    __slots__ = ("_length", "_stream")

    def __init__(self, initial: str = "") -> None:
        self._stream = io.StringIO()
        self._length = 0
        if initial:
            self.write(initial)

    def write(self, text: str) -> int:
        """Append ``text`` and return the number of characters written."""
        if not text:
            return 0
        written = self._stream.write(text)
        self._length += written
        return written

    def truncate(self, size: int) -> None:
        """Discard everything written after ``size`` characters."""
        if size < 0 or size > self._length:
            raise ValueError(f"Cannot truncate buffer of length {self._length} to {size}")
        self._stream.seek(size)
        self._stream.truncate()
        self._length = size

    def since(self, marker: int) -> str:
        """Return the text written after ``marker``."""
        return self._stream.getvalue()[marker:]

    def getvalue(self) -> str:
        """Return the accumulated text."""
        return self._stream.getvalue()

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.getvalue()


__all__ = ["OutputBuffer"]
