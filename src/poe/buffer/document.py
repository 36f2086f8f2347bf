"""Reading and writing buffers as newline-separated text files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from poe.config import DEFAULT_NEWLINE, FILE_ENCODING
from poe.runtime import telemetry

from .buffer import LineBuffer
from .errors import IoFailureError


@dataclass(slots=True)
class TextDocument:
    """Lines read from disk together with the newline sequence they used."""

    path: Path
    lines: List[str] = field(default_factory=list)
    newline: str = DEFAULT_NEWLINE

    @classmethod
    def from_text(cls, path: Path, text: str) -> "TextDocument":
        newline = "\r\n" if "\r\n" in text else DEFAULT_NEWLINE
        if not text:
            return cls(path=path, lines=[], newline=newline)
        lines = text.split("\n")
        if text.endswith("\n"):
            lines.pop()
        if newline == "\r\n":
            lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        return cls(path=path, lines=lines, newline=newline)

    def to_buffer(self) -> LineBuffer:
        return LineBuffer.from_lines(self.lines, newline=self.newline)


def render_text(lines: Iterable[str], newline: str = DEFAULT_NEWLINE) -> str:
    """Join ``lines`` with every line terminated by ``newline``."""

    return "".join(f"{line}{newline}" for line in lines)


def load_document(path: Path | str) -> TextDocument:
    """Read ``path`` into a :class:`TextDocument`.

    A path that does not exist yields an empty document bound to that path.
    Any other ``OSError`` is raised as :class:`IoFailureError`.
    """

    path = Path(path)
    if not path.exists():
        telemetry.record_event("document.new", data={"path": str(path)})
        return TextDocument(path=path)

    try:
        with open(path, "r", encoding=FILE_ENCODING, newline="") as handle:
            text = handle.read()
    except OSError as exc:
        telemetry.record_event(
            "document.load_failed",
            level="error",
            data={"path": str(path), "reason": str(exc)},
        )
        raise IoFailureError(path, exc) from exc
    except UnicodeDecodeError as exc:
        raise IoFailureError(path, OSError(f"not {FILE_ENCODING} text")) from exc

    document = TextDocument.from_text(path, text)
    telemetry.record_event(
        "document.load",
        data={"path": str(path), "lines": len(document.lines)},
    )
    return document


def load_buffer(path: Path | str) -> LineBuffer:
    return load_document(path).to_buffer()


def save_buffer(buffer: LineBuffer, path: Path | str) -> int:
    """Write every line of ``buffer`` to ``path`` and return the line count.

    The text is encoded before ``path`` is opened, so a line that cannot be
    encoded leaves the file on disk as it was. The buffer is never touched.
    """

    path = Path(path)
    lines = buffer.lines()
    with telemetry.span(
        "document::save",
        metadata={"path": str(path), "lines": len(lines)},
        expected=(IoFailureError,),
    ):
        try:
            payload = render_text(lines, buffer.newline).encode(FILE_ENCODING)
        except UnicodeError as exc:
            reason = f"cannot encode line as {FILE_ENCODING}"
            raise IoFailureError(path, OSError(reason)) from exc
        try:
            with open(path, "wb") as handle:
                handle.write(payload)
        except OSError as exc:
            raise IoFailureError(path, exc) from exc

    telemetry.record_event(
        "document.save", data={"path": str(path), "lines": len(lines)}
    )
    return len(lines)


__all__ = [
    "TextDocument",
    "load_buffer",
    "load_document",
    "render_text",
    "save_buffer",
]
