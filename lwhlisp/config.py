from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (lwhlisp package directory)
_LWHLISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_LIBRARY_FILES = [_LWHLISP_DIR / 'lib' / 'lib.lisp']
_DEFAULT_HISTORY_FILE = Path('.lisphistory.txt')
_DEFAULT_RECURSION_LIMIT = 10000


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_library_paths() -> List[Path]:
    """Library files evaluated at start-up, in order."""
    return paths_from_env('LWHLISP_LIBRARY_PATH', _DEFAULT_LIBRARY_FILES)


def get_history_file() -> Path:
    return paths_from_env('LWHLISP_HISTORY_FILE', [_DEFAULT_HISTORY_FILE])[0]


def get_recursion_limit() -> int:
    raw = os.environ.get('LWHLISP_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"LWHLISP_RECURSION_LIMIT must be an integer, got {raw!r}") from None
    if limit <= 0:
        raise ValueError(f"LWHLISP_RECURSION_LIMIT must be positive, got {limit}")
    return limit
