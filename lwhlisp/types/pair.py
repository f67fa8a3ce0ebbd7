"""Pair cells and list helpers.

Lists are right-nested chains of Pairs terminated by Nil. A chain whose final
rest is neither a Pair nor Nil is a dotted (improper) list and is a valid
value everywhere a list is accepted as data.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from lwhlisp import LispValue
from lwhlisp.errors import LispTypeError
from lwhlisp.types.nil import Nil


class Pair:
    __slots__ = ("car", "cdr")

    def __init__(self, car: LispValue, cdr: LispValue = Nil):
        self.car = car
        self.cdr = cdr

    def __eq__(self, other: object) -> bool:
        # Walk the spine iteratively so long lists do not recurse per element.
        a, b = self, other
        while isinstance(a, Pair):
            if not isinstance(b, Pair) or a.car != b.car:
                return False
            a, b = a.cdr, b.cdr
        return a == b

    __hash__ = None  # mutable cells

    def __iter__(self) -> Iterator[LispValue]:
        return iter_list(self)

    def __repr__(self) -> str:
        from lwhlisp.printer import to_string
        return to_string(self)


def make_list(items: Iterable[LispValue], tail: LispValue = Nil) -> LispValue:
    """Build a Pair chain from a Python iterable, ending in `tail`."""
    result = tail
    for item in reversed(list(items)):
        result = Pair(item, result)
    return result


def iter_list(xs: LispValue) -> Iterator[LispValue]:
    """Yield the elements of a proper list; a dotted tail is a type error."""
    while isinstance(xs, Pair):
        yield xs.car
        xs = xs.cdr
    if xs is not Nil:
        raise LispTypeError(f"Expected a proper list, found dotted tail {xs!r}")


def list_to_python(xs: LispValue) -> list[LispValue]:
    return list(iter_list(xs))


def is_proper_list(xs: LispValue) -> bool:
    while isinstance(xs, Pair):
        xs = xs.cdr
    return xs is Nil

