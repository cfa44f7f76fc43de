import copy

import pytest

from kappa.errors import KappaTypeError
from kappa.types.nil import Nil, NilType
from kappa.types.pair import (
    Pair,
    car,
    cdr,
    cons,
    from_iterable,
    is_nil,
    is_proper_list,
    iter_list,
    list_copy,
    list_reverse,
    set_car,
    set_cdr,
)


def test_nil_is_a_falsy_singleton():
    assert NilType() is Nil
    assert not Nil
    assert repr(Nil) == "NIL"
    assert copy.copy(Nil) is Nil
    assert copy.deepcopy([Nil])[0] is Nil
    assert is_nil(Nil)
    assert not is_nil(0)


def test_cons_car_cdr():
    p = cons(1, 2)
    assert car(p) == 1
    assert cdr(p) == 2


def test_set_car_and_cdr_mutate_in_place():
    p = cons(1, Nil)
    set_car(p, 10)
    set_cdr(p, 20)
    assert (p.car, p.cdr) == (10, 20)


@pytest.mark.parametrize("fn", [car, cdr])
@pytest.mark.parametrize("value", [Nil, 3])
def test_car_cdr_of_non_pair_raise(fn, value):
    with pytest.raises(KappaTypeError):
        fn(value)


def test_set_car_of_non_pair_raises():
    with pytest.raises(KappaTypeError):
        set_car(Nil, 1)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Nil, True),
        (from_iterable([1, 2, 3]), True),
        (cons(1, 2), False),
        (from_iterable([1, 2], tail=3), False),
        (7, False),
    ],
)
def test_is_proper_list(value, expected):
    assert is_proper_list(value) is expected


@pytest.mark.parametrize("size", [1, 2, 5])
def test_cyclic_list_is_not_proper(size):
    lst = from_iterable(range(size))
    last = lst
    while last.cdr is not Nil:
        last = last.cdr
    last.cdr = lst
    assert not is_proper_list(lst)


def test_list_copy_is_shallow():
    inner = cons(1, Nil)
    lst = from_iterable([inner, 2])
    dup = list_copy(lst)
    assert dup is not lst
    assert dup.cdr is not lst.cdr
    assert dup.car is inner
    assert list(iter_list(dup)) == [inner, 2]
    assert list_copy(Nil) is Nil


def test_list_reverse_in_place():
    lst = from_iterable([1, 2, 3])
    rev = list_reverse(lst)
    assert list(iter_list(rev)) == [3, 2, 1]
    # the old head is now the last cell
    assert lst.cdr is Nil
    assert list_reverse(Nil) is Nil


def test_pair_repr_uses_printer():
    assert repr(from_iterable([1, 2], tail=3)) == "(1 2 . 3)"
