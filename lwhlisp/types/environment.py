"""Runtime environment for lwhlisp.

The Environment stores bindings of Symbols to evaluated Lisp values and
supports nested scopes via an `outer` link. Frames are shared by reference:
a closure keeps the frame it was created in, so later definitions into that
frame (or any ancestor) are visible to it.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lwhlisp import LispValue
from lwhlisp.errors import LispInvalidSymbol, LispUnboundSymbol
from lwhlisp.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame, overwriting any local binding.

        Never writes through to an outer frame.
        Raises LispInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise LispInvalidSymbol(f"Cannot define {name!r} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, walking outward through parents.

        Raises LispUnboundSymbol if not found.
        """
        env: Optional[Environment] = self
        while env is not None:
            try:
                return env.vars[name]
            except KeyError:
                env = env.outer
        raise LispUnboundSymbol(name)

    def child(self) -> Environment:
        """Create a new empty frame whose parent is this one."""
        return Environment(outer=self)

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variable names into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(str(k) for k in self.vars))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                env_buf = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
