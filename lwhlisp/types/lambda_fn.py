"""Closure and macro values for lwhlisp."""

from __future__ import annotations

from lwhlisp import SExpression
from lwhlisp.errors import LispArityError, LispInvalidSymbol, LispTypeError
from lwhlisp.types.environment import Environment
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import Pair, is_proper_list
from lwhlisp.types.symbol import Symbol


def validate_params(params: SExpression) -> None:
    """Check that a parameter list is Nil, a symbol, or a (dotted) chain of symbols."""
    p = params
    while isinstance(p, Pair):
        if not isinstance(p.car, Symbol):
            raise LispInvalidSymbol(
                f"Expected all argument names to be symbols, but got {p.car!r}, which is not a symbol"
            )
        p = p.cdr
    if p is not Nil and not isinstance(p, Symbol):
        raise LispInvalidSymbol(
            f"Expected all argument names to be symbols, but got {p!r}, which is not a symbol"
        )


class Lambda:
    """A first-class closure with a parameter list, body forms, and captured env.

    The captured environment is shared, not copied: definitions made into it
    after the closure was created are visible on the closure's next call.
    """

    __slots__ = ("params", "body", "env", "name")
    kind = "lambda"

    def __init__(
        self,
        params: SExpression,
        body: SExpression,
        env: Environment,
        name: Symbol | None = None,
    ):
        validate_params(params)
        if body is Nil:
            raise LispArityError(f"{self.kind} requires at least one body form")
        if not is_proper_list(body):
            raise LispTypeError(f"Expected body to be a proper list, got {body!r}")
        self.params: SExpression = params
        self.body: SExpression = body
        self.env: Environment = env
        self.name: Symbol | None = name

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the closure."""
        from lwhlisp.printer import to_string
        return to_string(self)


class Macro(Lambda):
    """A closure whose arguments are bound unevaluated and whose result is
    evaluated once more in the calling environment."""

    __slots__ = ()
    kind = "defmacro"
