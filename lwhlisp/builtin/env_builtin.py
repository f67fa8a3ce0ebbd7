"""Built-in functions for the lwhlisp runtime environment.

This module defines the primitive procedures exposed to Lisp code: strictly
binary arithmetic and comparison, pair operations, type predicates, string
operations, output, and the hooks back into the evaluator (`apply`, `eval`,
`macroexpand-1`). The bundled library builds the variadic surface on top.
"""
from __future__ import annotations

import math

from lwhlisp import LispValue
from lwhlisp.errors import LispPrimitiveError, LispTypeError, LispUserError
from lwhlisp.evaluation.apply import apply as apply_engine
from lwhlisp.evaluation.evaluator import evaluate
from lwhlisp.evaluation.macro_expander import expand_1, macroexpand_1
from lwhlisp.printer import to_display_string, to_string
from lwhlisp.types.environment import Environment
from lwhlisp.types.lambda_fn import Lambda, Macro
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import Pair, is_proper_list, list_to_python
from lwhlisp.types.primitive import Primitive
from lwhlisp.types.symbol import Symbol

T = Symbol("t")

_POSITIONS = ("first", "second")


def truth(flag: bool) -> LispValue:
    """Map a Python bool onto t / nil."""
    return T if flag else Nil


def _number(name: str, args: list[LispValue], index: int) -> float:
    x = args[index]
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise LispTypeError(
            f"Builtin {name} expected a number as {_POSITIONS[index]} argument, got {to_string(x)}"
        )
    return x


def _numbers(name: str, args: list[LispValue]) -> tuple[float, float]:
    return _number(name, args, 0), _number(name, args, 1)


def _finite(name: str, a: float, b: float, result: float) -> float:
    if not math.isfinite(result):
        raise LispPrimitiveError(f"Builtin {name} overflow: {to_string(a)} {name} {to_string(b)}")
    return float(result)


# -------------------------------
# Arithmetic (strictly binary)
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> float:
    a, b = _numbers("+", args)
    return _finite("+", a, b, a + b)


def sub(env: Environment, args: list[LispValue]) -> float:
    a, b = _numbers("-", args)
    return _finite("-", a, b, a - b)


def mul(env: Environment, args: list[LispValue]) -> float:
    a, b = _numbers("*", args)
    return _finite("*", a, b, a * b)


def div(env: Environment, args: list[LispValue]) -> float:
    a, b = _numbers("/", args)
    if b == 0:
        raise LispPrimitiveError(f"Builtin / division by zero: {to_string(a)} / 0")
    return _finite("/", a, b, a / b)


def mod(env: Environment, args: list[LispValue]) -> float:
    """(% n d): remainder with the sign of n."""
    a, b = _numbers("%", args)
    if b == 0:
        raise LispPrimitiveError(f"Builtin % modulo by zero: {to_string(a)} % 0")
    try:
        return math.fmod(a, b)
    except ValueError as e:
        raise LispPrimitiveError(f"Builtin % failed on {to_string(a)} % {to_string(b)}: {e}") from e


# -------------------------------
# Comparison
# -------------------------------
def equals(env: Environment, args: list[LispValue]) -> LispValue:
    """Structural equality on any two values."""
    a, b = args
    return truth(a == b)


def lt(env: Environment, args: list[LispValue]) -> LispValue:
    a, b = _numbers("<", args)
    return truth(a < b)


def lte(env: Environment, args: list[LispValue]) -> LispValue:
    a, b = _numbers("<=", args)
    return truth(a <= b)


def gt(env: Environment, args: list[LispValue]) -> LispValue:
    a, b = _numbers(">", args)
    return truth(a > b)


def gte(env: Environment, args: list[LispValue]) -> LispValue:
    a, b = _numbers(">=", args)
    return truth(a >= b)


# -------------------------------
# Pairs
# -------------------------------
def cons(env: Environment, args: list[LispValue]) -> Pair:
    """Construct a new pair; the rest slot may hold any value."""
    return Pair(args[0], args[1])


def car(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the first slot of a pair; the car of nil is nil."""
    xs = args[0]
    if xs is Nil:
        return Nil
    if not isinstance(xs, Pair):
        raise LispTypeError(f"Builtin car expected a pair, got {to_string(xs)}")
    return xs.car


def cdr(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the rest slot of a pair; the cdr of nil is nil."""
    xs = args[0]
    if xs is Nil:
        return Nil
    if not isinstance(xs, Pair):
        raise LispTypeError(f"Builtin cdr expected a pair, got {to_string(xs)}")
    return xs.cdr


# -------------------------------
# Predicates
# -------------------------------
def is_pair(env: Environment, args: list[LispValue]) -> LispValue:
    return truth(isinstance(args[0], Pair))


def is_symbol(env: Environment, args: list[LispValue]) -> LispValue:
    return truth(isinstance(args[0], Symbol))


def is_string(env: Environment, args: list[LispValue]) -> LispValue:
    return truth(isinstance(args[0], str))


def is_number(env: Environment, args: list[LispValue]) -> LispValue:
    x = args[0]
    return truth(isinstance(x, (int, float)) and not isinstance(x, bool))


def is_procedure(env: Environment, args: list[LispValue]) -> LispValue:
    x = args[0]
    return truth(isinstance(x, Primitive) or (isinstance(x, Lambda) and not isinstance(x, Macro)))


def is_macro(env: Environment, args: list[LispValue]) -> LispValue:
    return truth(isinstance(args[0], Macro))


# -------------------------------
# Strings and output
# -------------------------------
def string_length(env: Environment, args: list[LispValue]) -> float:
    s = args[0]
    if not isinstance(s, str):
        raise LispTypeError(
            f"Builtin string-length expected its argument to be a string, but got {to_string(s)}"
        )
    return float(len(s))


def string_append(env: Environment, args: list[LispValue]) -> str:
    for s in args:
        if not isinstance(s, str):
            raise LispTypeError(f"Builtin string-append expected strings, got {to_string(s)}")
    return "".join(args)


def to_string_builtin(env: Environment, args: list[LispValue]) -> str:
    """(to-string x): the display form of x as a string."""
    return to_display_string(args[0])


def println_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Print space-separated display forms of args followed by newline; returns Nil."""
    print(" ".join(to_display_string(a) for a in args), flush=True)
    return Nil


def print_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Like println without the trailing newline."""
    print(" ".join(to_display_string(a) for a in args), end="", flush=True)
    return Nil


def error_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    raise LispUserError(" ".join(to_display_string(a) for a in args))


# -------------------------------
# Evaluator hooks
# -------------------------------
def apply_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(apply f args): call f with the elements of the list `args`.

    Closures and builtins receive the elements as already-evaluated
    arguments. A macro receives them as its unevaluated argument forms,
    and its expansion is evaluated in the caller's environment.
    """
    fn, arg_list = args
    if not is_proper_list(arg_list):
        raise LispTypeError(
            f"Expected second argument to apply to be a proper list, but got {to_string(arg_list)}"
        )
    if isinstance(fn, Macro):
        return evaluate(expand_1(fn, arg_list, evaluate), env)
    return apply_engine(fn, list_to_python(arg_list), env, evaluate)


def eval_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(eval form): evaluate a value as code in the caller's environment."""
    return evaluate(args[0], env)


def macroexpand_1_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(macroexpand-1 'form): one expansion step, not evaluated."""
    return macroexpand_1(args[0], env, evaluate)


# name -> (function, min args, max args); max None means variadic
BUILTINS = {
    "+": (add, 2, 2),
    "-": (sub, 2, 2),
    "*": (mul, 2, 2),
    "/": (div, 2, 2),
    "%": (mod, 2, 2),
    "=": (equals, 2, 2),
    "<": (lt, 2, 2),
    "<=": (lte, 2, 2),
    ">": (gt, 2, 2),
    ">=": (gte, 2, 2),
    "cons": (cons, 2, 2),
    "car": (car, 1, 1),
    "cdr": (cdr, 1, 1),
    "pair?": (is_pair, 1, 1),
    "symbol?": (is_symbol, 1, 1),
    "string?": (is_string, 1, 1),
    "number?": (is_number, 1, 1),
    "procedure?": (is_procedure, 1, 1),
    "macro?": (is_macro, 1, 1),
    "string-length": (string_length, 1, 1),
    "string-append": (string_append, 0, None),
    "to-string": (to_string_builtin, 1, 1),
    "println": (println_builtin, 0, None),
    "print": (print_builtin, 0, None),
    "error": (error_builtin, 0, None),
    "apply": (apply_builtin, 2, 2),
    "eval": (eval_builtin, 1, 1),
    "macroexpand-1": (macroexpand_1_builtin, 1, 1),
}


def register(env: Environment) -> None:
    """Register all builtin functions and constants into the given environment."""
    env.update(
        {
            Symbol(name): Primitive(name, fn, min_args, max_args)
            for name, (fn, min_args, max_args) in BUILTINS.items()
        }
    )
    env.define(Symbol("nil"), Nil)
    env.define(T, T)
