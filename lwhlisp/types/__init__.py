from lwhlisp.types.symbol import Symbol
from lwhlisp.types.nil import Nil, NilType
from lwhlisp.types.pair import Pair, make_list, iter_list, list_to_python, is_proper_list
from lwhlisp.types.environment import Environment
from lwhlisp.types.lambda_fn import Lambda, Macro
from lwhlisp.types.primitive import Primitive

__all__ = [
    "Symbol",
    "Nil",
    "NilType",
    "Pair",
    "make_list",
    "iter_list",
    "list_to_python",
    "is_proper_list",
    "Environment",
    "Lambda",
    "Macro",
    "Primitive",
]
