from __future__ import annotations

from lwhlisp import LispValue, SExpression
from lwhlisp.errors import LispArityError
from lwhlisp.types.environment import Environment
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import Pair
from lwhlisp.types.symbol import Symbol


def bind_arguments(
    params: SExpression,
    supplied_args: LispValue,
    closure_env: Environment,
) -> Environment:
    """
    Single source of truth for parameter binding, shared by closures and macros.

    `params` is the parameter list as written: Nil, a bare symbol (all
    arguments as one list), or a possibly dotted chain of symbols such as
    (a b . rest). `supplied_args` is a list of argument values (evaluated for
    closures, raw forms for macros).

    Returns a new Environment whose outer is `closure_env`, populated with
    the bindings for evaluating the callee body.
    """
    local_env = closure_env.child()
    names = params
    args = supplied_args

    while isinstance(names, Pair):
        if not isinstance(args, Pair):
            raise LispArityError(
                f"Too few arguments, expected {params!r}, but got {supplied_args!r}"
            )
        local_env.define(names.car, args.car)
        names = names.cdr
        args = args.cdr

    if isinstance(names, Symbol):
        # rest parameter absorbs whatever is left, possibly Nil
        local_env.define(names, args)
    elif args is not Nil:
        raise LispArityError(
            f"Too many arguments, expected {params!r} but got {supplied_args!r}"
        )

    return local_env
