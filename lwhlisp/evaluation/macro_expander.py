"""Macro expansion for lwhlisp.

A macro is applied to its argument forms exactly as written. Its body runs in
a child of the macro's captured environment and returns a new form; the caller
evaluates that form once more in its own environment.
"""

from __future__ import annotations

from lwhlisp import SExpression, EvaluatorFn
from lwhlisp.evaluation.apply import evaluate_body
from lwhlisp.types.bind import bind_arguments
from lwhlisp.types.environment import Environment
from lwhlisp.types.lambda_fn import Macro
from lwhlisp.types.pair import Pair
from lwhlisp.types.symbol import Symbol


def expand_1(macro: Macro, arg_forms: SExpression, evaluate_fn: EvaluatorFn) -> SExpression:
    """Run the macro transformer once and return the expansion unevaluated."""
    call_env = bind_arguments(macro.params, arg_forms, macro.env)
    return evaluate_body(macro.body, call_env, evaluate_fn)


def macro_for(form: SExpression, env: Environment) -> Macro | None:
    """Return the macro named by `form`'s head in `env`, if any."""
    if isinstance(form, Pair) and isinstance(form.car, Symbol):
        scope = env.find(form.car)
        if scope is not None:
            value = scope.vars[form.car]
            if isinstance(value, Macro):
                return value
    return None


def macroexpand_1(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand only the head-position macro if present."""
    macro = macro_for(form, env)
    if macro is None:
        return form  # Not a macro call, unchanged
    return expand_1(macro, form.cdr, evaluate_fn)


def macroexpand(form: SExpression, env: Environment, evaluate_fn: EvaluatorFn) -> SExpression:
    """Expand the head position repeatedly until it no longer names a macro."""
    while (macro := macro_for(form, env)) is not None:
        form = expand_1(macro, form.cdr, evaluate_fn)
    return form
