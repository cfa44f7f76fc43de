"""Cons cells and the list primitives built on them.

Pairs are the building block of every list, including the source code the
evaluator walks. The car and cdr slots are mutable in place.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from kappa import LispValue
from kappa.errors import KappaTypeError
from kappa.types.nil import Nil


class Pair:
    __slots__ = ("car", "cdr")

    def __init__(self, car: LispValue, cdr: LispValue):
        self.car = car
        self.cdr = cdr

    def __repr__(self) -> str:
        from kappa.printer import to_string
        return to_string(self)


def cons(a: LispValue, b: LispValue) -> Pair:
    return Pair(a, b)


def _need_pair(p: LispValue, what: str) -> Pair:
    if not isinstance(p, Pair):
        raise KappaTypeError(f"{what} expects a pair, got {p!r}")
    return p


def car(p: LispValue) -> LispValue:
    return _need_pair(p, "car").car


def cdr(p: LispValue) -> LispValue:
    return _need_pair(p, "cdr").cdr


def set_car(p: LispValue, value: LispValue) -> None:
    _need_pair(p, "set-car!").car = value


def set_cdr(p: LispValue, value: LispValue) -> None:
    _need_pair(p, "set-cdr!").cdr = value


def is_nil(x: LispValue) -> bool:
    return x is Nil


def is_proper_list(x: LispValue) -> bool:
    """True for Nil and for Nil-terminated chains of pairs.

    Dotted tails and cycles are not proper lists.
    """
    slow = x
    while True:
        if x is Nil:
            return True
        if not isinstance(x, Pair):
            return False
        x = x.cdr
        if x is Nil:
            return True
        if not isinstance(x, Pair):
            return False
        x = x.cdr
        slow = slow.cdr
        if x is slow:
            return False


def list_copy(lst: LispValue) -> LispValue:
    """Shallow copy: new spine, shared elements."""
    if lst is Nil:
        return Nil
    head = tail = Pair(car(lst), Nil)
    lst = lst.cdr
    while lst is not Nil:
        tail.cdr = Pair(car(lst), Nil)
        tail = tail.cdr
        lst = lst.cdr
    return head


def list_reverse(lst: LispValue) -> LispValue:
    """Reverse a proper list in place and return the new head."""
    result = Nil
    while lst is not Nil:
        nxt = lst.cdr
        lst.cdr = result
        result = lst
        lst = nxt
    return result


def from_iterable(items: Iterable[LispValue], tail: LispValue = Nil) -> LispValue:
    result = tail
    for item in reversed(list(items)):
        result = Pair(item, result)
    return result


def iter_list(lst: LispValue) -> Iterator[LispValue]:
    """Iterate the elements of a proper list."""
    while lst is not Nil:
        yield car(lst)
        lst = lst.cdr
