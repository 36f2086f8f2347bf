"""Actions that evaluate single-letter commands typed in command mode."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from poe.buffer import (
    MissingFilenameError,
    NumberedLine,
    UnknownCommandError,
    save_buffer,
)
from poe.config import DEFAULT_CONTEXT_RADIUS, HELP_TEXT
from poe.modes.state import EditLine, InsertLine, InterpreterResult, Session

CommandHandler = Callable[[Session, str], InterpreterResult]

CURRENT_MARKER = "* "
OTHER_MARKER = "  "


def parse_command(raw: str) -> Tuple[str, str]:
    """Split ``raw`` into its command token and the rest of the line.

    Leading whitespace before the argument is dropped; anything after it is
    kept verbatim so search needles may end in spaces.
    """

    text = raw.lstrip()
    parts = text.split(maxsplit=1)
    if not parts:
        return "", ""
    token = parts[0]
    rest = text[len(token):].lstrip()
    return token, rest


def format_numbered(index: int, line: str, *, current: bool = False) -> str:
    marker = CURRENT_MARKER if current else OTHER_MARKER
    return f"{marker}{index}: {line}"


def _numbered_block(lines: List[NumberedLine], cursor: int) -> List[str]:
    return [
        format_numbered(index, line, current=index == cursor) for index, line in lines
    ]


def _parse_int(command: str, arg: str) -> int:
    try:
        return int(arg)
    except ValueError:
        raise UnknownCommandError(
            f"{command} {arg}", reason=f"'{arg}' is not a line number"
        ) from None


def _optional_int(command: str, arg: str) -> Optional[int]:
    arg = arg.strip()
    if not arg:
        return None
    return _parse_int(command, arg)


def _reject_argument(command: str, arg: str) -> None:
    if arg.strip():
        raise UnknownCommandError(
            f"{command} {arg.strip()}", reason="takes no argument"
        )


def _stay(session: Session, *lines: str, status: str = "ok") -> InterpreterResult:
    return InterpreterResult(output=list(lines), mode=session.mode, status=status)


def is_line_number(token: str) -> bool:
    return token.lstrip("-").isdigit()


def goto_line(session: Session, token: str, arg: str = "") -> InterpreterResult:
    """Handle a bare ``NUM``: move the cursor and echo the line."""

    _reject_argument(token, arg)
    index = _parse_int(token, token)
    session.buffer.set_cursor(index)
    return _stay(session, session.buffer.current_line(), status="goto")


def _handle_help(session: Session, arg: str) -> InterpreterResult:
    _reject_argument("?", arg)
    return _stay(session, *HELP_TEXT, status="help")


def _handle_context(session: Session, arg: str) -> InterpreterResult:
    radius = _optional_int("c", arg)
    if radius is None:
        radius = DEFAULT_CONTEXT_RADIUS
    buffer = session.buffer
    lines = _numbered_block(buffer.context(radius), buffer.cursor)
    return _stay(session, *lines, status="context")


def _handle_delete(session: Session, arg: str) -> InterpreterResult:
    _reject_argument("d", arg)
    session.buffer.delete_current()
    return _stay(session, status="delete")


def _handle_edit(session: Session, arg: str) -> InterpreterResult:
    _reject_argument("e", arg)
    buffer = session.buffer
    text = buffer.current_line()
    return InterpreterResult(
        mode=EditLine(target=buffer.cursor, text=text), status="enter_edit"
    )


def _handle_find(
    session: Session, arg: str, *, backward: bool = False
) -> InterpreterResult:
    buffer = session.buffer
    if backward:
        buffer.find_backward(arg)
    else:
        buffer.find_forward(arg)
    return _stay(session, buffer.current_line(), status="find")


def _handle_insert(
    session: Session, arg: str, *, before: bool = False
) -> InterpreterResult:
    _reject_argument("I" if before else "i", arg)
    buffer = session.buffer
    if before:
        target = buffer.cursor
    else:
        target = buffer.cursor + 1 if len(buffer) else 0
    return InterpreterResult(
        mode=InsertLine(target=target, before=before), status="enter_insert"
    )


def _handle_metadata(session: Session, arg: str) -> InterpreterResult:
    _reject_argument("m", arg)
    buffer = session.buffer
    path = str(session.source_path) if session.source_path else "-"
    lines = [
        f"File: {path}",
        f"Lines: {len(buffer)}",
        f"Current Line: {buffer.cursor}",
        f"Modified: {'yes' if buffer.modified else 'no'}",
    ]
    lines.extend(
        format_numbered(index, line, current=index == buffer.cursor)
        for index, line in buffer.all_lines()
    )
    return _stay(session, *lines, status="metadata")


def _handle_print(session: Session, arg: str) -> InterpreterResult:
    index = _optional_int("p", arg)
    buffer = session.buffer
    if index is not None:
        buffer.set_cursor(index)
    return _stay(session, buffer.current_line(), status="print")


def _handle_quit(session: Session, arg: str) -> InterpreterResult:
    _reject_argument("q", arg)
    return InterpreterResult(mode=session.mode, status="quit", quit=True)


def _handle_write(session: Session, arg: str) -> InterpreterResult:
    filename = arg.strip()
    if filename:
        path = Path(filename)
    elif session.source_path is not None:
        path = session.source_path
    else:
        raise MissingFilenameError()
    save_buffer(session.buffer, path)
    session.source_path = path
    session.buffer.mark_saved()
    return _stay(session, "Saved!", status="write")


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "?": _handle_help,
    "c": _handle_context,
    "d": _handle_delete,
    "e": _handle_edit,
    "f": _handle_find,
    "F": partial(_handle_find, backward=True),
    "i": _handle_insert,
    "I": partial(_handle_insert, before=True),
    "m": _handle_metadata,
    "p": _handle_print,
    "q": _handle_quit,
    "w": _handle_write,
}


def lookup_command(token: str) -> Optional[CommandHandler]:
    return _COMMAND_HANDLERS.get(token)


__all__ = [
    "CommandHandler",
    "format_numbered",
    "goto_line",
    "is_line_number",
    "lookup_command",
    "parse_command",
]
