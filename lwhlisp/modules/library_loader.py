from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Protocol

from lwhlisp import LispValue, SExpression
from lwhlisp.config import get_library_paths
from lwhlisp.errors import LispError, LispLoadError

logger = logging.getLogger("lwhlisp.loader")

EchoFn = Callable[[SExpression, LispValue], None]


class _HasEvalForms(Protocol):
    def read(self, code: str) -> Iterable[SExpression]: ...
    def eval_form(self, expr: SExpression) -> LispValue: ...


def read_file_to_string(path: str | Path) -> str:
    """Read a source file; failures keep the OS error as the cause."""
    try:
        return Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise LispLoadError(f"While opening file {path}") from e
    except UnicodeDecodeError as e:
        raise LispLoadError(f"While reading file {path}") from e


def load_library_file(itp: _HasEvalForms, path: str | Path, echo: Optional[EchoFn] = None) -> None:
    """Evaluate one library file. Any failure is fatal to the load."""
    logger.info("Loading library file '%s'...", path)
    try:
        src = read_file_to_string(path)
    except LispLoadError as e:
        raise LispLoadError("While opening library file") from e

    try:
        for expr in itp.read(src):
            result = itp.eval_form(expr)
            if echo is not None:
                echo(expr, result)
    except LispError as e:
        raise LispLoadError(f"While evaluating library file {path}") from e

    logger.info("Done loading library file '%s'!", path)


def load_library(
    itp: _HasEvalForms,
    paths: Optional[Iterable[str | Path]] = None,
    echo: Optional[EchoFn] = None,
) -> None:
    """Evaluate the library files (configured ones when `paths` is None)."""
    for path in (paths if paths is not None else get_library_paths()):
        load_library_file(itp, path, echo)
