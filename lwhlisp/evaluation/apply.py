"""Application engine for lwhlisp.

Centralizes how an operator value is applied to already-evaluated arguments,
so the evaluator and the `apply` builtin share the same semantics.
"""

from __future__ import annotations

from lwhlisp import LispValue, EvaluatorFn
from lwhlisp.errors import LispTypeError
from lwhlisp.types.bind import bind_arguments
from lwhlisp.types.environment import Environment
from lwhlisp.types.lambda_fn import Lambda, Macro
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import iter_list, make_list
from lwhlisp.types.primitive import Primitive


def evaluate_body(body: LispValue, env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """Evaluate body forms in order; the last one supplies the result."""
    result = Nil
    for form in iter_list(body):
        result = evaluate_fn(form, env)
    return result


def apply_lambda(fn: Lambda, args: list[LispValue], evaluate_fn: EvaluatorFn) -> LispValue:
    """Apply a closure.

    Arguments are bound into a fresh child of the closure's captured
    environment, never of the caller's, which is what makes scoping lexical.
    """
    call_env = bind_arguments(fn.params, make_list(args), fn.env)
    return evaluate_body(fn.body, call_env, evaluate_fn)


def apply(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a closure or a builtin to evaluated arguments.

    - For Lambda, bind and run the body.
    - For Primitive, invoke with the caller env and list of args.
    - Otherwise, raise a type error.
    """
    if isinstance(head, Macro):
        raise LispTypeError(f"Cannot apply macro {head!r} to evaluated arguments")
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn)
    if isinstance(head, Primitive):
        return head(env, args)
    raise LispTypeError(f"Expected a function as first element of evaluated list, got {head!r}")
