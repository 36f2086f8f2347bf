"""Actions that commit a typed line while in edit-line or insert-line mode."""

from __future__ import annotations

from poe.modes.state import (
    CommandLine,
    EditLine,
    InsertLine,
    InterpreterResult,
    Session,
)


def commit_line(session: Session, text: str) -> InterpreterResult:
    """Apply ``text`` for the active line mode and return to command mode.

    An empty ``text`` still commits an empty line; there is no cancel path.
    Inserted lines land at the target chosen when the mode was entered.
    """

    mode = session.mode
    buffer = session.buffer
    if isinstance(mode, EditLine):
        buffer.set_cursor(mode.target)
        buffer.replace_current(text)
        status = "commit_edit"
    elif isinstance(mode, InsertLine):
        buffer.insert_at(mode.target, text)
        status = "commit_insert"
    else:
        raise RuntimeError(f"No line being typed in mode '{mode.kind.value}'")
    return InterpreterResult(mode=CommandLine(), status=status)


__all__ = ["commit_line"]
