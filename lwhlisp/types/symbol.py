from __future__ import annotations
import sys


class Symbol:
    """A symbol name. Symbols are interned: equal names give the same object."""

    __slots__ = ("id",)
    _table: dict[str, Symbol] = {}

    def __new__(cls, name: str):
        sym = cls._table.get(name)
        if sym is None:
            sym = super().__new__(cls)
            sym.id = sys.intern(name)
            cls._table[sym.id] = sym
        return sym

    def __eq__(self, other: object) -> bool:
        return self is other or (isinstance(other, Symbol) and self.id == other.id)

    def __hash__(self) -> int:
        return hash(self.id)

    def __reduce__(self):
        return (Symbol, (self.id,))

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id
