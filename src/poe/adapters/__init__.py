"""Host adapters that connect the interpreter to a user-facing surface."""

from .terminal import LineHistory, TerminalAdapter, TerminalHooks

__all__ = ["LineHistory", "TerminalAdapter", "TerminalHooks"]
