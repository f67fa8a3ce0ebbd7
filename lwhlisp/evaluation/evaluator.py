"""Core evaluator for the lwhlisp interpreter.

Implements special-form dispatch, macro expansion and procedure application
by plain recursive descent. There is no tail-call elimination: deep recursion
in Lisp code is deep recursion here, and the interpreter reports host stack
exhaustion as LispRecursionError.
"""

from __future__ import annotations

from lwhlisp import SExpression, LispValue
from lwhlisp.errors import LispTypeError
from lwhlisp.types.environment import Environment
from lwhlisp.types.lambda_fn import Macro
from lwhlisp.types.pair import Pair, is_proper_list, iter_list, list_to_python
from lwhlisp.types.symbol import Symbol
from lwhlisp.evaluation.apply import apply
from lwhlisp.evaluation.macro_expander import expand_1
from lwhlisp.evaluation.special_forms import SPECIAL_FORMS


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate one form in `env` and return its value."""
    match expr:
        case Symbol():
            return env.lookup(expr)
        case Pair():
            return evaluate_list(expr, env)
        case Macro():
            raise LispTypeError(f"Attempt to evaluate macro {expr!r}")
        case _:
            # numbers, strings, nil, closures and builtins evaluate to themselves
            return expr


def evaluate_list(expr: Pair, env: Environment) -> LispValue:
    if not is_proper_list(expr):
        raise LispTypeError(f"Attempted to evaluate improper list {expr!r}")

    head, tail = expr.car, expr.cdr

    # --- Special forms handling ---
    if isinstance(head, Symbol) and head in SPECIAL_FORMS:
        return SPECIAL_FORMS[head](list_to_python(tail), env, evaluate)

    op = evaluate(head, env)

    # Macros see their argument forms unevaluated; the expansion is code
    # and is evaluated once more, in the caller's environment.
    if isinstance(op, Macro):
        expansion = expand_1(op, tail, evaluate)
        return evaluate(expansion, env)

    args = [evaluate(arg, env) for arg in iter_list(tail)]
    return apply(op, args, env, evaluate)
