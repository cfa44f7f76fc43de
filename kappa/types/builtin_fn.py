from __future__ import annotations

from typing import Callable

from kappa import LispValue


class Builtin:
    """A native function. Receives its evaluated arguments as a Lisp list."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable[[LispValue], LispValue]):
        self.name = name
        self.fn = fn

    def __call__(self, args: LispValue) -> LispValue:
        return self.fn(args)

    def __repr__(self) -> str:
        return f"#<BUILTIN:{self.name}>"
