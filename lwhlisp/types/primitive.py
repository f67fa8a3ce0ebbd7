"""Host-implemented procedures."""

from __future__ import annotations

from typing import Callable

from lwhlisp import LispValue
from lwhlisp.errors import LispArityError

PrimitiveFn = Callable[..., LispValue]


class Primitive:
    """A named builtin with a fixed or variadic arity.

    `fn` is called as ``fn(env, args)`` where `env` is the caller's
    environment and `args` the already-evaluated argument values.
    `max_args` of None means variadic.
    """

    __slots__ = ("name", "fn", "min_args", "max_args")

    def __init__(self, name: str, fn: PrimitiveFn, min_args: int = 0, max_args: int | None = None):
        self.name = name
        self.fn = fn
        self.min_args = min_args
        self.max_args = max_args

    def check_arity(self, count: int) -> None:
        if count < self.min_args or (self.max_args is not None and count > self.max_args):
            if self.max_args == self.min_args:
                expected = f"exactly {self.min_args}"
            elif self.max_args is None:
                expected = f"at least {self.min_args}"
            else:
                expected = f"between {self.min_args} and {self.max_args}"
            plural = "" if expected.endswith(" 1") else "s"
            raise LispArityError(
                f"Builtin {self.name} expected {expected} argument{plural}, got {count}"
            )

    def __call__(self, env, args: list[LispValue]) -> LispValue:
        self.check_arity(len(args))
        return self.fn(env, args)

    def __repr__(self) -> str:
        return f"#<BUILTIN {self.name}>"
