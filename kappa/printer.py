"""External representation of Kappa values.

NIL, decimal integers, upper-case symbol names and parenthesised lists with
` . ` before an improper tail, printed without recursion. Callables print as
placeholders that the reader cannot read back.
"""

from __future__ import annotations

from io import StringIO
from typing import TextIO

from kappa import LispValue
from kappa.types.builtin_fn import Builtin
from kappa.types.lambda_fn import Closure
from kappa.types.nil import Nil
from kappa.types.pair import Pair
from kappa.types.symbol import Symbol


def write(value: LispValue, out: TextIO) -> None:
    # Pending work, last item first: (True, text) writes text as is,
    # (False, value) prints a value.
    pending: list[tuple[bool, object]] = [(False, value)]
    while pending:
        is_text, item = pending.pop()
        if is_text:
            out.write(item)
        elif item is Nil:
            out.write("NIL")
        elif isinstance(item, Pair):
            out.write("(")
            elements = []
            rest = item
            while isinstance(rest, Pair):
                elements.append(rest.car)
                rest = rest.cdr
            pending.append((True, ")"))
            if rest is not Nil:
                pending.append((False, rest))
                pending.append((True, " . "))
            for i in range(len(elements) - 1, 0, -1):
                pending.append((False, elements[i]))
                pending.append((True, " "))
            pending.append((False, elements[0]))
        elif isinstance(item, (Symbol, Builtin, Closure)):
            # Symbols print their name; callables have opaque reprs
            out.write(str(item))
        elif type(item) is int:
            out.write(str(item))
        else:
            out.write(f"#<PYTHON:{item!r}>")


def to_string(value: LispValue) -> str:
    with StringIO() as buffer:
        write(value, buffer)
        return buffer.getvalue()
