"""Session state: the mode variants and the result of one interpreter step."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from poe.buffer import EditorError, LineBuffer
from poe.config import MODE_CONFIGS, ModeKind


@dataclass(frozen=True, slots=True)
class CommandLine:
    """Input lines are parsed as single-letter commands."""

    kind = ModeKind.COMMAND


@dataclass(frozen=True, slots=True)
class EditLine:
    """The next input line replaces the line at ``target``.

    ``text`` holds the line as it was on entry; hosts use it to prefill input.
    """

    target: int
    text: str = ""

    kind = ModeKind.EDIT_LINE


@dataclass(frozen=True, slots=True)
class InsertLine:
    """The next input line becomes a new line at ``target``."""

    target: int
    before: bool = False
    text: str = ""

    kind = ModeKind.INSERT_LINE


Mode = Union[CommandLine, EditLine, InsertLine]


def prompt_symbol(mode: Mode) -> str:
    return MODE_CONFIGS[mode.kind].prompt_symbol


@dataclass
class Session:
    """Everything one editing session owns, passed explicitly to every handler."""

    buffer: LineBuffer = field(default_factory=LineBuffer)
    source_path: Optional[Path] = None
    mode: Mode = field(default_factory=CommandLine)

    def prompt(self) -> str:
        return f"{self.buffer.cursor} {prompt_symbol(self.mode)} "


@dataclass(slots=True)
class InterpreterResult:
    """Outcome of feeding one raw input line to the interpreter."""

    output: List[str] = field(default_factory=list)
    mode: Mode = field(default_factory=CommandLine)
    status: str = "ok"
    quit: bool = False
    error: Optional[EditorError] = None


__all__ = [
    "CommandLine",
    "EditLine",
    "InsertLine",
    "InterpreterResult",
    "Mode",
    "Session",
    "prompt_symbol",
]
