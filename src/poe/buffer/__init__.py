"""Line buffer, cursor, and text file persistence."""

from .buffer import LineBuffer, NumberedLine, Transaction
from .document import (
    TextDocument,
    load_buffer,
    load_document,
    render_text,
    save_buffer,
)
from .errors import (
    EditorError,
    EmptyBufferError,
    IoFailureError,
    MissingFilenameError,
    NotFoundError,
    OutOfRangeError,
    UnknownCommandError,
)

__all__ = [
    "LineBuffer",
    "NumberedLine",
    "Transaction",
    "TextDocument",
    "load_buffer",
    "load_document",
    "render_text",
    "save_buffer",
    "EditorError",
    "EmptyBufferError",
    "IoFailureError",
    "MissingFilenameError",
    "NotFoundError",
    "OutOfRangeError",
    "UnknownCommandError",
]
