"""Runtime environment for Kappa.

The Environment stores bindings of Symbols to evaluated Lisp values and supports
nested scopes via an `outer` link. Binding always writes the innermost scope;
lookup walks outward until the root.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from kappa import LispValue
from kappa.errors import KappaTypeError, KappaUnboundSymbol
from kappa.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to Lisp values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        # Symbols hash by identity, so the dict is keyed on the interned object
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this scope, replacing a local binding if present.

        Raises KappaTypeError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise KappaTypeError(f"Cannot bind {name!r}: not a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, innermost scope first.

        Raises KappaUnboundSymbol if not found.
        """
        env: Optional[Environment] = self
        while env is not None:
            try:
                return env.vars[name]
            except KeyError:
                env = env.outer
        raise KappaUnboundSymbol(f"Cannot lookup unbound symbol {name}")

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return "<Environment chain: " + " -> ".join(chain) + ">"
