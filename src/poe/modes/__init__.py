"""Mode state machine and the command interpreter."""

from .state import (
    CommandLine,
    EditLine,
    InsertLine,
    InterpreterResult,
    Mode,
    Session,
    prompt_symbol,
)
from .interpreter import CommandInterpreter

__all__ = [
    "CommandInterpreter",
    "CommandLine",
    "EditLine",
    "InsertLine",
    "InterpreterResult",
    "Mode",
    "Session",
    "prompt_symbol",
]
