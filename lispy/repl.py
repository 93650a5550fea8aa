"""Command-line front end for Lispy.

With no file arguments this runs an interactive read-eval-print loop; with
files it evaluates each one through a single shared interpreter.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, TextIO

from lispy.config import get_history_path, get_prompt
from lispy.interpreter import Interpreter
from lispy.printer import render
from lispy.reader.parser import parse
from lispy.types.errors import LispyError

logger = logging.getLogger(__name__)

VERSION = "0.0.0.0.1"
BANNER = f"Lispy Version {VERSION}\nPress Ctrl+c to Exit\n"
HISTORY_LENGTH = 1000


def enable_line_editing(history_path: Path | None) -> Callable[[], None] | None:
    """Load `readline` so `input` gets line editing and history.

    Lines entered at the prompt are added to the in-session history by
    readline itself. When `history_path` is given, earlier sessions' history
    is loaded from it and the returned callable writes the session back.
    Returns None when there is nothing to save.
    """
    try:
        import readline
    except ImportError:
        logger.debug("readline unavailable; line editing disabled")
        return None
    if history_path is None:
        return None

    readline.set_history_length(HISTORY_LENGTH)
    if history_path.exists():
        try:
            readline.read_history_file(str(history_path))
        except OSError as exc:
            logger.warning("could not read history from %s: %s", history_path, exc)

    def save_history() -> None:
        try:
            readline.write_history_file(str(history_path))
        except OSError as exc:
            logger.warning("could not save history to %s: %s", history_path, exc)

    return save_history


def repl(
    interp: Interpreter,
    prompt: str,
    show_ast: bool = False,
    read_line: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> None:
    """Loop until end of input; one bad line never ends the session."""
    out = out or sys.stdout
    print(BANNER, file=out)
    while True:
        try:
            line = read_line(prompt)
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            break
        if not line.strip():
            continue
        try:
            if show_ast:
                print(parse(line).pretty(), end="", file=out)
            print(interp.run(line), file=out)
        except LispyError as exc:
            logger.debug("error in %r", line, exc_info=True)
            print(exc, file=out)


def run_files(interp: Interpreter, paths: list[str], out: TextIO | None = None) -> int:
    out = out or sys.stdout
    for path in paths:
        try:
            results = interp.load_file(path)
        except LispyError as exc:
            print(exc, file=sys.stderr)
            return 1
        for result in results:
            text = render(result)
            if text != "()":
                print(text, file=out)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="lispy", description="An interpreter for Lispy")
    parser.add_argument('--no-prelude', action='store_true', help="skip LISPY_PRELUDE_PATH")
    parser.add_argument('--ast', action='store_true', help="print the parse tree of each line")
    parser.add_argument('--no-history', action='store_true', help="do not load or save LISPY_HISTORY_FILE")
    parser.add_argument('-v', '--verbose', action='store_true')
    parser.add_argument('files', nargs='*', type=str)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        interp = Interpreter(prelude=None if args.no_prelude else 'auto')
    except LispyError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.files:
        return run_files(interp, args.files)
    save_history = enable_line_editing(None if args.no_history else get_history_path())
    try:
        repl(interp, get_prompt(), show_ast=args.ast)
    finally:
        if save_history is not None:
            save_history()
    return 0
