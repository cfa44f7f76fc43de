"""Symbols and the symbol table that interns them.

Symbols are compared by identity. The only way to obtain one is through a
SymbolTable, which folds names to upper case and hands out the same object
for every spelling of a name.
"""

from __future__ import annotations

from typing import Iterator


class Symbol:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name


class SymbolTable:
    """Owned mapping from upper-cased name to its unique Symbol."""

    __slots__ = ("_symbols",)

    def __init__(self):
        self._symbols: dict[str, Symbol] = {}

    def intern(self, name: str) -> Symbol:
        key = name.upper()
        sym = self._symbols.get(key)
        if sym is None:
            sym = Symbol(key)
            self._symbols[key] = sym
        return sym

    def __contains__(self, name: str) -> bool:
        return name.upper() in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)
