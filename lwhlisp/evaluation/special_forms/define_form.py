from lwhlisp import EvaluatorFn
from lwhlisp import SExpression, LispValue
from lwhlisp.errors import LispArityError, LispInvalidSymbol
from lwhlisp.types.environment import Environment
from lwhlisp.types.lambda_fn import Lambda
from lwhlisp.types.pair import Pair, make_list
from lwhlisp.types.symbol import Symbol


def define_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """
    (define name value)
    (define (name . params) body...)

    Both bind in the local frame of `env` and return the symbol `name`.

    The function form closes over a private frame that binds `name` to the
    new closure itself. Recursive calls resolve through that frame, so a
    closure keeps recursing into itself even after `name` is redefined in
    `env`; every other free name still resolves through `env` and sees later
    redefinitions.
    """
    if len(tail) < 2:
        raise LispArityError(
            "define has either the form (define name value) or (define (name arg ...) body ...)"
        )

    target = tail[0]
    if isinstance(target, Pair):
        name = target.car
        if not isinstance(name, Symbol):
            raise LispInvalidSymbol(
                f"Found define form (define (name arg ...) body ...), but name {name!r} was not a symbol"
            )
        self_env = env.child()
        fn = Lambda(target.cdr, make_list(tail[1:]), self_env, name=name)
        self_env.define(name, fn)
        env.define(name, fn)
        return name

    if not isinstance(target, Symbol):
        raise LispInvalidSymbol(f"Expected a symbol as first argument to define, got {target!r}")
    if len(tail) != 2:
        raise LispArityError(f"(define name value) takes exactly 2 arguments, got {len(tail)}")

    value = evaluate_fn(tail[1], env)
    env.define(target, value)
    return target
