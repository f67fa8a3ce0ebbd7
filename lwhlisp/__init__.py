# Core type aliases for lwhlisp's data model.
# Runtime values are Python objects: float for numbers, str for strings,
# Symbol, the Nil singleton, Pair cells for lists, and the procedure types
# (Lambda, Macro, Primitive).
#
# Naming guidance:
# - SExpression: Use in reader/macro code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any` and are interchangeable, since code is data.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (used interchangeably with LispValue)
SExpression = LispValue

# Evaluator function type: evaluator passed into special forms/macros
EvaluatorFn = Callable[..., LispValue]
