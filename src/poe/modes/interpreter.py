"""Command interpreter owning the command / edit-line / insert-line modes."""

from __future__ import annotations

from typing import Optional

from poe.actions import command as command_actions
from poe.actions import core as core_actions
from poe.buffer import EditorError, UnknownCommandError
from poe.runtime import telemetry

from .state import CommandLine, InterpreterResult, Mode, Session

LOGGER_NAME = "poe.modes"


class CommandInterpreter:
    """Turns raw input lines into buffer operations and output lines.

    In command mode a line is parsed as a command; in the line modes the whole
    line is the text being committed. Every :class:`EditorError` is reported
    as one output line and leaves the mode unchanged.
    """

    def __init__(self, session: Optional[Session] = None) -> None:
        self.session = session or Session()

    @property
    def mode(self) -> Mode:
        return self.session.mode

    def prompt(self) -> str:
        return self.session.prompt()

    def feed(self, raw: str) -> InterpreterResult:
        mode = self.session.mode
        try:
            if isinstance(mode, CommandLine):
                result = self._dispatch(raw)
            else:
                result = core_actions.commit_line(self.session, raw)
        except EditorError as exc:
            telemetry.record_event(
                "command.error",
                level="warning",
                data={"kind": exc.kind, "message": str(exc)},
                logger_name=LOGGER_NAME,
            )
            return InterpreterResult(
                output=[str(exc)], mode=mode, status="error", error=exc
            )

        self._switch_mode(result.mode)
        return result

    def _dispatch(self, raw: str) -> InterpreterResult:
        token, arg = command_actions.parse_command(raw)
        if not token:
            return InterpreterResult(mode=self.session.mode, status="empty")

        handler = command_actions.lookup_command(token)
        with telemetry.span(
            f"command::{token}",
            component="commands",
            metadata={"cursor": self.session.buffer.cursor},
            expected=(EditorError,),
        ):
            if handler is not None:
                return handler(self.session, arg)
            if command_actions.is_line_number(token):
                return command_actions.goto_line(self.session, token, arg)
            raise UnknownCommandError(token)

    def _switch_mode(self, mode: Mode) -> None:
        previous = self.session.mode
        if previous == mode:
            return
        self.session.mode = mode
        telemetry.record_event(
            "mode.switch",
            data={"from": previous.kind.value, "to": mode.kind.value},
            logger_name=LOGGER_NAME,
        )


__all__ = ["CommandInterpreter"]
