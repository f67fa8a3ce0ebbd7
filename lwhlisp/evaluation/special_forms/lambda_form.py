from lwhlisp import EvaluatorFn
from lwhlisp import SExpression, LispValue
from lwhlisp.errors import LispArityError
from lwhlisp.types.environment import Environment
from lwhlisp.types.lambda_fn import Lambda
from lwhlisp.types.pair import make_list


def lambda_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    # (lambda params body...) with one or more body forms; the closure
    # shares `env` rather than copying it.
    if len(tail) < 2:
        raise LispArityError("lambda has the form (lambda (arg ...) body ...)")

    params, *body = tail
    return Lambda(params, make_list(body), env)
