"""
Command-line drivers.

- `lwhlisp`: load the library, evaluate files, then (optionally) run a REPL.
- `lwhlisp-format`: pretty-print every form of a source file.
"""
from __future__ import annotations

import argparse
import logging
import os
import readline
import sys
from pathlib import Path
from typing import Optional, Sequence

from lwhlisp import LispValue, SExpression
from lwhlisp.config import get_history_file, get_recursion_limit
from lwhlisp.errors import LispError, LispLoadError, LispRecursionError, LispSyntaxError, error_chain
from lwhlisp.interpreter import Interpreter
from lwhlisp.modules.library_loader import load_library, read_file_to_string
from lwhlisp.printer import format_source, pretty_print
from lwhlisp.reader.parser import read

logger = logging.getLogger("lwhlisp.cli")

PROMPT = "user> "
CONTINUATION_PROMPT = "...> "
HISTORY_LENGTH = 1000


def _echo(form: SExpression, result: LispValue) -> None:
    print(pretty_print(form))
    print(f"=> {pretty_print(result)}", flush=True)


def _report(err: BaseException, form: Optional[SExpression] = None) -> None:
    if form is not None:
        print(pretty_print(form), file=sys.stderr)
    print(f"!! {error_chain(err)}", file=sys.stderr, flush=True)


# -------------------------------
# Files
# -------------------------------
def run_file(itp: Interpreter, path: str | Path, debug: bool = False) -> bool:
    """
    Evaluate a program file form by form.

    Evaluation errors are reported and the next form runs. A syntax error or
    exhausted recursion abandons the rest of the file. Returns True when every
    form evaluated cleanly.
    """
    logger.info("Running file '%s'...", path)
    try:
        src = read_file_to_string(path)
    except LispLoadError as e:
        _report(e)
        return False

    ok = True
    try:
        for form in itp.read(src):
            try:
                result = itp.eval_form(form)
            except LispRecursionError as e:
                _report(e, form)
                return False
            except LispError as e:
                _report(e, form)
                ok = False
                continue
            if debug:
                _echo(form, result)
    except LispSyntaxError as e:
        err = LispLoadError(f"While reading file {path}")
        err.__cause__ = e
        _report(err)
        return False

    logger.info("Done running file '%s'!", path)
    return ok


# -------------------------------
# REPL
# -------------------------------
def _read_history(history_file: Path) -> None:
    readline.set_history_length(HISTORY_LENGTH)
    try:
        readline.read_history_file(str(history_file))
    except OSError:
        logger.debug("No readable history file at '%s'", history_file)


def _write_history(history_file: Path) -> None:
    try:
        readline.write_history_file(str(history_file))
    except OSError as e:
        logger.warning("Could not write history file '%s': %s", history_file, e)


def read_entry(first_line: str) -> Optional[list[SExpression]]:
    """Read the forms of one REPL entry, prompting for more while incomplete.

    Returns None when the entry is abandoned (EOF while continuing, or a
    syntax error, which is reported).
    """
    src = first_line
    while True:
        try:
            return read(src)
        except LispSyntaxError as e:
            if not e.incomplete:
                _report(e)
                return None
        try:
            src += "\n" + input(CONTINUATION_PROMPT)
        except EOFError:
            print()
            return None


def run_entry(itp: Interpreter, line: str) -> None:
    """Evaluate one REPL entry, printing each result. An error ends the entry."""
    forms = read_entry(line)
    if forms is None:
        return
    for form in forms:
        try:
            result = itp.eval_form(form)
        except LispError as e:
            _report(e, form)
            return
        print(f"=> {pretty_print(result)}", flush=True)


def run_repl(itp: Interpreter, history_file: Optional[Path] = None) -> None:
    history_file = history_file or get_history_file()
    _read_history(history_file)
    try:
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

            # Ctrl-C abandons the rest of the entry, not the session
            try:
                run_entry(itp, line)
            except KeyboardInterrupt:
                print("\nInterrupted", file=sys.stderr, flush=True)
    finally:
        _write_history(history_file)


# -------------------------------
# lwhlisp
# -------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lwhlisp", description="lwhlisp interpreter")
    parser.add_argument("--library", action="append", default=None, metavar="PATH",
                        help="library file to load instead of the default (repeatable)")
    parser.add_argument("-f", "--files", action="append", default=[], metavar="PATH",
                        help="file to evaluate (repeatable, evaluated in order)")
    parser.add_argument("--repl", action="store_true",
                        help="start the REPL after the files (implied when no files are given)")
    parser.add_argument("--debug-library", action="store_true",
                        help="echo each library form and its result")
    parser.add_argument("--debug", action="store_true",
                        help="echo each file form and its result")
    parser.add_argument("-v", "--verbose", action="store_true", help="log loading stages")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    repl = args.repl
    if not args.files:
        logger.info("No files to execute, scheduling REPL start")
        repl = True

    itp = Interpreter(library=None)
    try:
        load_library(itp, args.library, echo=_echo if args.debug_library else None)
    except LispError as e:
        _report(e)
        return 1

    for path in args.files:
        run_file(itp, path, debug=args.debug)

    if repl:
        run_repl(itp)
    return 0


# -------------------------------
# lwhlisp-format
# -------------------------------
def format_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="lwhlisp-format", description="Pretty-print lwhlisp source")
    parser.add_argument("file", help="file to format")
    parser.add_argument("--replace", action="store_true",
                        help="write the result over FILE instead of to stdout")
    args = parser.parse_args(argv)

    try:
        text = format_source(read_file_to_string(args.file))
    except LispError as e:
        _report(e)
        return 1

    if not args.replace:
        sys.stdout.write(text)
        return 0

    tmp_path = f"{args.file}.tmp_format"
    try:
        try:
            Path(tmp_path).write_text(text, encoding="utf-8")
        except OSError as e:
            raise LispLoadError(f"While writing to temporary output file {tmp_path}") from e
        try:
            os.replace(tmp_path, args.file)
        except OSError as e:
            raise LispLoadError(f"While replacing {args.file} with the formatted output") from e
    except LispLoadError as e:
        _report(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
