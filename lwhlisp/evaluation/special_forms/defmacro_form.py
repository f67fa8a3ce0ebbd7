"""Special form: defmacro.

Binds a macro value in the current environment, alongside ordinary values.
"""

from __future__ import annotations

from lwhlisp import EvaluatorFn, SExpression, LispValue
from lwhlisp.errors import LispInvalidSymbol, LispArityError
from lwhlisp.types.environment import Environment
from lwhlisp.types.lambda_fn import Macro
from lwhlisp.types.pair import Pair, make_list
from lwhlisp.types.symbol import Symbol


def defmacro_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """(defmacro (name . params) body...): bind `name` to a Macro; return `name`."""
    if len(tail) < 2 or not isinstance(tail[0], Pair):
        raise LispArityError("defmacro has the form (defmacro (name arg ...) body ...)")

    name = tail[0].car
    if not isinstance(name, Symbol):
        raise LispInvalidSymbol(f"Macro name must be a Symbol, got {name!r}")

    macro = Macro(tail[0].cdr, make_list(tail[1:]), env, name=name)
    env.define(name, macro)
    return name
