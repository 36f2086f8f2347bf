"""Command line entry point: ``poe [FILENAME]``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from poe import __version__
from poe.adapters import LineHistory, TerminalAdapter, TerminalHooks
from poe.buffer import IoFailureError, LineBuffer, load_document
from poe.modes import CommandInterpreter, Session
from poe.runtime import telemetry


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="poe", description="A minimal line-oriented text editor."
    )
    parser.add_argument(
        "filename",
        nargs="?",
        help="File to edit. Created on the first write if it does not exist.",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        help="Telemetry preset to use instead of the POE_* environment settings.",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not read or write the input history file.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def open_session(filename: Optional[str]) -> Session:
    """Build the initial session, loading ``filename`` when given.

    A missing file starts an empty buffer that remembers the path. An
    unreadable one raises :class:`IoFailureError`.
    """

    if not filename:
        return Session(buffer=LineBuffer())
    document = load_document(filename)
    return Session(buffer=document.to_buffer(), source_path=document.path)


def main(
    argv: Optional[Sequence[str]] = None, *, hooks: Optional[TerminalHooks] = None
) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    try:
        session = open_session(args.filename)
    except IoFailureError as exc:
        print(f"poe: {exc}", file=sys.stderr)
        return 1

    history = None if args.no_history else LineHistory.from_environment()
    adapter = TerminalAdapter(CommandInterpreter(session), hooks, history=history)
    return adapter.run()


if __name__ == "__main__":
    sys.exit(main())
