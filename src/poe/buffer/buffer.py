"""Line buffer combining the ordered line list with the current-line cursor."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Iterable, Iterator, List, Optional, Tuple

from poe.config import DEFAULT_CONTEXT_RADIUS, DEFAULT_NEWLINE
from poe.runtime import telemetry

from .errors import EditorError, EmptyBufferError, NotFoundError, OutOfRangeError

NumberedLine = Tuple[int, str]


class LineBuffer:
    """Ordered lines plus a cursor that is always a valid index.

    When the buffer holds lines, ``0 <= cursor < len(buffer)``. An empty buffer
    keeps ``cursor == 0`` and every line-dependent operation raises
    :class:`EmptyBufferError`.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        newline: str = DEFAULT_NEWLINE,
    ) -> None:
        self._lines: List[str] = list(lines or [])
        self._cursor = 0
        self.newline = newline
        self.modified = False

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        newline: str = DEFAULT_NEWLINE,
    ) -> "LineBuffer":
        return cls(lines, newline=newline)

    def __len__(self) -> int:
        return len(self._lines)

    def length(self) -> int:
        return len(self._lines)

    @property
    def cursor(self) -> int:
        return self._cursor

    def is_empty(self) -> bool:
        return not self._lines

    def lines(self) -> Tuple[str, ...]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def set_cursor(self, index: int) -> int:
        if not 0 <= index < len(self._lines):
            raise OutOfRangeError(index, length=len(self._lines))
        self._cursor = index
        return index

    def current_line(self) -> str:
        self._require_lines()
        return self._lines[self._cursor]

    def context(self, radius: int = DEFAULT_CONTEXT_RADIUS) -> List[NumberedLine]:
        if not self._lines:
            return []
        radius = max(radius, 0)
        start = max(0, self._cursor - radius)
        end = min(len(self._lines) - 1, self._cursor + radius)
        return [(index, self._lines[index]) for index in range(start, end + 1)]

    def insert_at(self, index: int, text: str) -> int:
        """Insert ``text`` so it becomes line ``index`` and move the cursor there.

        ``index`` may equal the buffer length to append a line.
        """

        if not 0 <= index <= len(self._lines):
            raise OutOfRangeError(index, length=len(self._lines))
        with Transaction(self, "insert_at"):
            self._lines.insert(index, text)
            self._cursor = index
        return index

    def insert_after(self, text: str) -> int:
        return self.insert_at(self._cursor + 1 if self._lines else 0, text)

    def insert_before(self, text: str) -> int:
        return self.insert_at(self._cursor, text)

    def replace_current(self, text: str) -> None:
        with Transaction(self, "replace_current"):
            self._require_lines()
            self._lines[self._cursor] = text

    def delete_current(self) -> str:
        """Remove the current line and return its text."""

        with Transaction(self, "delete_current"):
            self._require_lines()
            removed = self._lines.pop(self._cursor)
            self._cursor = max(0, min(self._cursor, len(self._lines) - 1))
        return removed

    def find_forward(self, needle: str) -> int:
        with telemetry.span(
            "buffer::find_forward",
            metadata={"needle": needle, "cursor": self._cursor},
            expected=(EditorError,),
        ):
            for index in range(self._cursor + 1, len(self._lines)):
                if needle in self._lines[index]:
                    self._cursor = index
                    return index
            raise NotFoundError(needle, direction="forward")

    def find_backward(self, needle: str) -> int:
        with telemetry.span(
            "buffer::find_backward",
            metadata={"needle": needle, "cursor": self._cursor},
            expected=(EditorError,),
        ):
            for index in range(self._cursor - 1, -1, -1):
                if needle in self._lines[index]:
                    self._cursor = index
                    return index
            raise NotFoundError(needle, direction="backward")

    def all_lines(self) -> Iterator[NumberedLine]:
        """Yield every ``(index, line)`` pair in document order."""

        for index, line in enumerate(self._lines):
            yield index, line

    def mark_saved(self) -> None:
        self.modified = False

    def _require_lines(self) -> None:
        if not self._lines:
            raise EmptyBufferError()


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a buffer mutation in a telemetry span and flags the buffer dirty.

    The dirty flag is only raised when the block completes without error.
    """

    def __init__(self, buffer: LineBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"cursor": self.buffer.cursor, "length": len(self.buffer)},
            expected=(EditorError,),
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.buffer.modified = True
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["LineBuffer", "NumberedLine", "Transaction"]
