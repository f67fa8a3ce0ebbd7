from lwhlisp import SExpression, LispValue, EvaluatorFn
from lwhlisp.errors import LispArityError
from lwhlisp.types.environment import Environment


def quote_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    if len(tail) != 1:
        raise LispArityError(f"quote takes exactly one argument, got {len(tail)}")
    return tail[0]
