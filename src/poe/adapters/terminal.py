"""Line-oriented terminal loop that drives the command interpreter."""

from __future__ import annotations

import readline
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

from poe.config import MAX_HISTORY_ITEMS, history_path
from poe.modes import CommandInterpreter, EditLine, InterpreterResult
from poe.runtime import telemetry

LOGGER_NAME = "poe.terminal"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TerminalHooks:
    """Callables the loop reads from and writes to; swapped out in tests."""

    read_line: Callable[[str], str] = input
    write_line: Callable[[str], None] = print
    log: Callable[[str], None] = _noop


class LineHistory:
    """Input history kept by ``readline`` and persisted to a file.

    Problems with the history file are logged and otherwise ignored.
    """

    def __init__(self, path: Path, *, max_items: int = MAX_HISTORY_ITEMS) -> None:
        self.path = path
        self.max_items = max_items
        self.enabled = True

    @classmethod
    def from_environment(cls) -> Optional["LineHistory"]:
        path = history_path()
        if path is None:
            return None
        return cls(path)

    def load(self) -> None:
        readline.set_history_length(self.max_items)
        try:
            self.path.touch(exist_ok=True)
            readline.read_history_file(self.path)
            if readline.get_current_history_length() >= self.max_items:
                readline.write_history_file(self.path)
        except OSError as exc:
            self._disable("load", exc)

    def record(self, count: int = 1) -> None:
        """Append the last ``count`` history entries to the history file."""

        if not self.enabled or count <= 0:
            return
        try:
            readline.append_history_file(count, self.path)
        except OSError as exc:
            self._disable("append", exc)

    @contextmanager
    def prefill(self, text: str) -> Iterator[None]:
        """Pre-insert ``text`` into the next ``input()`` line."""

        readline.set_startup_hook(lambda: readline.insert_text(text))
        try:
            yield
        finally:
            readline.set_startup_hook(None)

    def _disable(self, action: str, exc: OSError) -> None:
        self.enabled = False
        telemetry.record_event(
            "history.error",
            level="warning",
            data={"action": action, "path": str(self.path), "reason": str(exc)},
            logger_name=LOGGER_NAME,
        )


class TerminalAdapter:
    """Prompts, reads one line, feeds the interpreter, prints its output."""

    def __init__(
        self,
        interpreter: CommandInterpreter,
        hooks: Optional[TerminalHooks] = None,
        *,
        history: Optional[LineHistory] = None,
    ) -> None:
        self.interpreter = interpreter
        self.hooks = hooks or TerminalHooks()
        self.history = history
        if self.history is not None:
            self.history.load()

    def run(self) -> int:
        """Loop until ``q`` or end of input; return the process exit status."""

        while True:
            prompt = self.interpreter.prompt()
            try:
                raw = self._read(prompt)
            except KeyboardInterrupt:
                self.hooks.write_line("")
                continue
            except EOFError:
                self.hooks.write_line("")
                return 0

            result = self.handle_line(raw)
            if result.quit:
                return 0

    def handle_line(self, raw: str) -> InterpreterResult:
        self._log_state("line ->", raw=raw)
        result = self.interpreter.feed(raw)
        for line in result.output:
            self.hooks.write_line(line)
        self._log_state("result <-", status=result.status, quit=result.quit)
        return result

    def _read(self, prompt: str) -> str:
        mode = self.interpreter.mode
        known = readline.get_current_history_length()
        if self.history is not None and isinstance(mode, EditLine):
            with self.history.prefill(mode.text):
                raw = self.hooks.read_line(prompt)
        else:
            raw = self.hooks.read_line(prompt)
        if self.history is not None:
            self.history.record(readline.get_current_history_length() - known)
        return raw

    def _log_state(self, prefix: str, **fields: object) -> None:
        session = self.interpreter.session
        snapshot = {
            "mode": session.mode.kind.value,
            "cursor": session.buffer.cursor,
            "lines": len(session.buffer),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["LineHistory", "TerminalAdapter", "TerminalHooks"]
