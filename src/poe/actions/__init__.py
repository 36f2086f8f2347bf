"""Editing verbs dispatched by the command interpreter."""

from .command import (
    format_numbered,
    goto_line,
    is_line_number,
    lookup_command,
    parse_command,
)
from .core import commit_line

__all__ = [
    "commit_line",
    "format_numbered",
    "goto_line",
    "is_line_number",
    "lookup_command",
    "parse_command",
]
