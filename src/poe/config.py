"""Editor mode configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ModeConfig:
    """Configuration for editor modes."""

    label: str
    prompt_symbol: str
    takes_commands: bool


class ModeKind(str, Enum):
    """Available editor modes."""

    COMMAND = "command"
    EDIT_LINE = "edit_line"
    INSERT_LINE = "insert_line"


MODE_CONFIGS = {
    ModeKind.COMMAND: ModeConfig("COMMAND", ">", True),
    ModeKind.EDIT_LINE: ModeConfig("EDIT", "#", False),
    ModeKind.INSERT_LINE: ModeConfig("INSERT", "+", False),
}

DEFAULT_CONTEXT_RADIUS = 2
DEFAULT_NEWLINE = "\n"
FILE_ENCODING = "utf-8"

HISTORY_ENV = "POE_HISTORY_FILE"
DEFAULT_HISTORY_FILE = "~/.poe_history"
MAX_HISTORY_ITEMS = 10000

HELP_TEXT = (
    "         NUM - Set current line",
    "           ? - Print this help",
    "     c [NUM] - Print context, defaults to 2 lines",
    "           d - Delete current line",
    "           e - Edit current line",
    "    f [TEXT] - Find text below current line",
    "    F [TEXT] - Find text above current line",
    "           i - Insert new line below current line",
    "           I - Insert new line above current line",
    "           m - Print editor data",
    "           q - Quit",
    "     p [NUM] - Print current line. If given a number, will set the current line and print it",
    "w [FILENAME] - Write file to FILENAME or opened file location",
)


def history_path() -> Optional[Path]:
    """Return the history file location, or ``None`` when history is disabled."""

    raw = os.getenv(HISTORY_ENV, DEFAULT_HISTORY_FILE)
    if not raw:
        return None
    return Path(raw).expanduser()
