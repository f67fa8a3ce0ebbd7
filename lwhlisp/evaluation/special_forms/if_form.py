from lwhlisp import EvaluatorFn
from lwhlisp import SExpression, LispValue
from lwhlisp.errors import LispArityError
from lwhlisp.types.nil import Nil
from lwhlisp.types.environment import Environment


def if_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """(if test then [else]): only Nil counts as false."""
    if len(tail) not in (2, 3):
        raise LispArityError(
            f"if takes a test, a then-branch and an optional else-branch, got {len(tail)} arguments"
        )

    cond = evaluate_fn(tail[0], env)
    if cond is not Nil:
        return evaluate_fn(tail[1], env)
    if len(tail) == 3:
        return evaluate_fn(tail[2], env)
    return Nil
