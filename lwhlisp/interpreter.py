from __future__ import annotations
from typing import Iterator, Literal

from lwhlisp import SExpression, LispValue
from lwhlisp.builtin.env_builtin import register
from lwhlisp.errors import LispRecursionError
from lwhlisp.evaluation.evaluator import evaluate
from lwhlisp.reader.parser import lex, TokenStream
from lwhlisp.types.environment import Environment
from lwhlisp.types.nil import Nil


class Interpreter:
    """
    Orchestrates reading and evaluating lwhlisp code.

    Each Interpreter owns one root Environment, populated by the builtins and
    then by the library; every top-level form evaluated afterwards defines
    into that same environment. Separate instances share nothing.
    """

    def __init__(self, library: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if library is None:
            pass  # explicit: builtins only
        elif library == 'auto':
            # Lazy import to avoid circular imports
            from lwhlisp.modules.library_loader import load_library
            load_library(self)
        else:
            self.eval_library(library)

    def read(self, code: str) -> Iterator[SExpression]:
        """Lazily parse top-level forms from `code`."""
        return TokenStream(lex(code), code).parse_all()

    def eval_form(self, expr: SExpression) -> LispValue:
        """Evaluate one top-level form against the root environment."""
        try:
            return evaluate(expr, self.env)
        except RecursionError as e:
            raise LispRecursionError("Maximum recursion depth exceeded during evaluation") from e

    def eval_library(self, code: str) -> None:
        for expr in self.read(code):
            self.eval_form(expr)

    def eval(self, code: str) -> LispValue:
        results: list[LispValue] = [self.eval_form(expr) for expr in self.read(code)]
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results
