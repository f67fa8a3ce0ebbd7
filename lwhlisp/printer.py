"""Printing of Lisp values.

- to_string: readable form (strings quoted and escaped); reading it back
  gives an equal value for numbers, strings, symbols and lists.
- to_display_string: what `println` shows (strings without quotes).
- pretty_print: multi-line layout used by the formatter and the REPL echo.
"""

from __future__ import annotations

import math
from io import StringIO

from lwhlisp import LispValue
from lwhlisp.types.lambda_fn import Lambda, Macro
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import Pair
from lwhlisp.types.primitive import Primitive
from lwhlisp.types.symbol import Symbol

INLINE_LIMIT = 12
INDENT = "   "
HEAD_LINE_FORMS = {"if", "define", "defmacro", "lambda"}

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def format_number(x: float) -> str:
    if math.isfinite(x) and x == int(x):
        return str(int(x))
    return repr(x)


def _escape(s: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in s)


def _write(buffer: StringIO, value: LispValue, display: bool) -> None:
    match value:
        case Pair():
            buffer.write("(")
            _write(buffer, value.car, display)
            rest = value.cdr
            while isinstance(rest, Pair):
                buffer.write(" ")
                _write(buffer, rest.car, display)
                rest = rest.cdr
            if rest is not Nil:
                buffer.write(" . ")
                _write(buffer, rest, display)
            buffer.write(")")
        case Lambda():
            # Macro is a Lambda subclass; `kind` names the right head
            _write(buffer, Pair(Symbol(value.kind), Pair(value.params, value.body)), display)
        case Primitive():
            buffer.write(repr(value))
        case Symbol():
            buffer.write(value.id)
        case str():
            buffer.write(value if display else f'"{_escape(value)}"')
        case float() | int():
            buffer.write(format_number(value))
        case _ if value is Nil:
            buffer.write("nil")
        case _:
            buffer.write(str(value))


def to_string(value: LispValue) -> str:
    with StringIO() as buffer:
        _write(buffer, value, display=False)
        return buffer.getvalue()


def to_display_string(value: LispValue) -> str:
    with StringIO() as buffer:
        _write(buffer, value, display=True)
        return buffer.getvalue()


def leaf_count(value: LispValue) -> int:
    """Number of leaves in a pair tree, list terminators included."""
    count = 0
    stack = [value]
    while stack:
        v = stack.pop()
        if isinstance(v, Pair):
            stack.append(v.car)
            stack.append(v.cdr)
        else:
            count += 1
    return count


def _inline_size(value: LispValue) -> int:
    if isinstance(value, Symbol):
        return len(value.id)
    return leaf_count(value)


def pretty_print(value: LispValue, indent_level: int = 0) -> str:
    if isinstance(value, Macro):
        return pretty_print(Pair(Symbol("defmacro"), Pair(value.params, value.body)), indent_level)
    if not isinstance(value, Pair) or _inline_size(value) <= INLINE_LIMIT:
        return to_string(value)

    parts = ["(", pretty_print(value.car, indent_level + 1)]
    head_line = isinstance(value.car, Symbol) and value.car.id in HEAD_LINE_FORMS
    first_arg = True
    rest = value.cdr
    while rest is not Nil:
        if not isinstance(rest, Pair):
            parts.append(f" . {to_string(rest)}")
            break
        item = pretty_print(rest.car, indent_level + 1)
        if head_line and first_arg:
            parts.append(f" {item}")
        else:
            parts.append("\n" + INDENT * (indent_level + 1) + item)
        first_arg = False
        rest = rest.cdr
    parts.append(")")
    return "".join(parts)


def format_source(src: str) -> str:
    """Pretty-print every form of `src`, separated by blank lines."""
    from lwhlisp.reader.parser import read
    return "".join(f"{pretty_print(form)}\n\n" for form in read(src))
