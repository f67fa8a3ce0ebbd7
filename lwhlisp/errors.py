class LispError(Exception):
    """ Base class for all lwhlisp errors"""
    pass

class LispInvalidSymbol(LispError):
    """ Raised when a non-symbol is used where a symbol is required"""
    pass

class LispUnboundSymbol(LispError):
    """ Raised when a symbol is used before it is bound"""

    def __init__(self, name):
        super().__init__(f"Symbol {name} is not bound to any value")
        self.name = name

class LispSyntaxError(LispError):
    """ Raised when the reader meets malformed input text"""

    def __init__(self, message: str, source: str = "", offset: int = 0, incomplete: bool = False):
        self.offset = offset
        self.line = source.count("\n", 0, offset) + 1
        self.column = offset - (source.rfind("\n", 0, offset) + 1) + 1
        self.incomplete = incomplete
        super().__init__(f"{message} at line {self.line}, column {self.column}")

class LispArityError(LispError):
    """ Raised when the number of arguments passed to a procedure is incorrect"""

class LispTypeError(LispError):
    """ Raised when a value of the wrong kind is used"""

class LispPrimitiveError(LispError):
    """ Raised when a primitive procedure fails (e.g. division by zero)"""

class LispUserError(LispError):
    """ Raised by the `error` primitive"""

class LispRecursionError(LispError):
    """ Raised when evaluation exhausts the host recursion limit"""

class LispLoadError(LispError):
    """ Raised when a library or program file cannot be loaded.

    Each loading stage wraps the failure of the stage below it, so the
    original cause is kept in the ``__cause__`` chain.
    """


def error_chain(err: BaseException) -> str:
    """Render an exception and its causes as `outer: inner: root`."""
    parts = []
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        parts.append(str(err) or type(err).__name__)
        err = err.__cause__
    return ": ".join(parts)
