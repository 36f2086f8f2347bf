"""Recoverable editor errors surfaced at the command boundary."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class EditorError(RuntimeError):
    """Base class for every error the interpreter reports and recovers from."""

    kind = "editor_error"


class EmptyBufferError(EditorError):
    """Raised when an operation needs at least one line."""

    kind = "empty_buffer"

    def __init__(self, message: str = "Buffer is empty") -> None:
        super().__init__(message)


class OutOfRangeError(EditorError):
    """Raised when a requested line index lies outside ``[0, length)``."""

    kind = "out_of_range"

    def __init__(self, index: int, *, length: int) -> None:
        if length:
            message = f"Line {index} out of range (0-{length - 1})"
        else:
            message = f"Line {index} out of range (buffer is empty)"
        super().__init__(message)
        self.index = index
        self.length = length


class NotFoundError(EditorError):
    kind = "not_found"

    def __init__(self, needle: str, *, direction: str) -> None:
        super().__init__(f"Pattern '{needle}' not found.")
        self.needle = needle
        self.direction = direction


class UnknownCommandError(EditorError):
    kind = "unknown_command"

    def __init__(self, command: str, *, reason: Optional[str] = None) -> None:
        message = f"Unknown command '{command}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.command = command


class MissingFilenameError(EditorError):
    kind = "missing_filename"

    def __init__(self) -> None:
        super().__init__("No filename given")


class IoFailureError(EditorError):
    """Wraps the ``OSError`` behind a failed load or save."""

    kind = "io_failure"

    def __init__(self, path: Path | str, cause: OSError) -> None:
        reason = cause.strerror or str(cause)
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.cause = cause


__all__ = [
    "EditorError",
    "EmptyBufferError",
    "OutOfRangeError",
    "NotFoundError",
    "UnknownCommandError",
    "MissingFilenameError",
    "IoFailureError",
]
