"""Built-in functions for the Kappa runtime environment.

Every builtin receives its evaluated arguments as a Lisp list, checks the
argument count and types itself, and never coerces. Integers are 64-bit:
results wrap around on overflow.
"""
from __future__ import annotations

from typing import Callable

from kappa import LispValue
from kappa.errors import KappaArityError, KappaDivisionByZero, KappaSyntaxError, KappaTypeError
from kappa.types.builtin_fn import Builtin
from kappa.types.environment import Environment
from kappa.types.lambda_fn import Closure
from kappa.types.nil import Nil
from kappa.types.pair import Pair, is_proper_list, list_copy
from kappa.types.symbol import Symbol, SymbolTable
from kappa.types.tail_call import TailCall

INT_BITS = 64
_INT_MOD = 1 << INT_BITS
_INT_MIN = -(1 << (INT_BITS - 1))


def wrap_int(n: int) -> int:
    """Reduce n to a signed 64-bit integer."""
    return (n - _INT_MIN) % _INT_MOD + _INT_MIN


def is_integer(x: LispValue) -> bool:
    return type(x) is int


# -------------------------------
# Argument checking
# -------------------------------
def _one(name: str, args: LispValue) -> LispValue:
    if not isinstance(args, Pair) or args.cdr is not Nil:
        raise KappaArityError(f"{name} requires exactly 1 argument")
    return args.car


def _two(name: str, args: LispValue) -> tuple[LispValue, LispValue]:
    if not isinstance(args, Pair) or not isinstance(args.cdr, Pair) or args.cdr.cdr is not Nil:
        raise KappaArityError(f"{name} requires exactly 2 arguments")
    return args.car, args.cdr.car


def _integers(name: str, args: LispValue) -> tuple[int, int]:
    a, b = _two(name, args)
    if not is_integer(a) or not is_integer(b):
        raise KappaTypeError(f"All arguments to {name} must be integers")
    return a, b


# -------------------------------
# Pairs
# -------------------------------
def car(args: LispValue) -> LispValue:
    p = _one("car", args)
    if not isinstance(p, Pair):
        raise KappaTypeError(f"car expects a pair, got {p!r}")
    return p.car


def cdr(args: LispValue) -> LispValue:
    p = _one("cdr", args)
    if not isinstance(p, Pair):
        raise KappaTypeError(f"cdr expects a pair, got {p!r}")
    return p.cdr


def cons(args: LispValue) -> Pair:
    a, b = _two("cons", args)
    return Pair(a, b)


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: LispValue) -> int:
    a, b = _integers("+", args)
    return wrap_int(a + b)


def sub(args: LispValue) -> int:
    a, b = _integers("-", args)
    return wrap_int(a - b)


def mul(args: LispValue) -> int:
    a, b = _integers("*", args)
    return wrap_int(a * b)


def div(args: LispValue) -> int:
    """Integer quotient, truncated toward zero."""
    a, b = _integers("/", args)
    if b == 0:
        raise KappaDivisionByZero("Division by zero")
    q = abs(a) // abs(b)
    return wrap_int(q if (a < 0) == (b < 0) else -q)


# -------------------------------
# Comparison and predicates
# -------------------------------
def num_eq(args: LispValue) -> bool:
    a, b = _integers("=", args)
    return a == b


def less(args: LispValue) -> bool:
    a, b = _integers("<", args)
    return a < b


def is_eq(a: LispValue, b: LispValue) -> bool:
    """Identity for pairs, symbols and callables; value equality for integers."""
    if type(a) is not type(b):
        return False
    if is_integer(a):
        return a == b
    return a is b


def eq(args: LispValue) -> bool:
    a, b = _two("eq?", args)
    return is_eq(a, b)


def pairp(args: LispValue) -> bool:
    return isinstance(_one("pair?", args), Pair)


# -------------------------------
# Application
# -------------------------------
def apply(args: LispValue) -> TailCall:
    """(apply fn args): hand fn and a copy of args back to the evaluator."""
    fn, fn_args = _two("apply", args)
    if not is_proper_list(fn_args):
        raise KappaSyntaxError("apply arguments must be a proper list")
    if not isinstance(fn, (Builtin, Closure)):
        raise KappaTypeError(f"Cannot apply non-function {fn!r}")
    return TailCall(fn, list_copy(fn_args))


def _predicate(name: str, test: Callable[[LispValue], bool], t: Symbol) -> Builtin:
    return Builtin(name, lambda args: t if test(args) else Nil)


def register(env: Environment, symbols: SymbolTable) -> None:
    """Register all builtin functions and constants into the given environment."""
    s = symbols.intern
    t = s("T")
    env.update(
        {
            s("CAR"): Builtin("CAR", car),
            s("CDR"): Builtin("CDR", cdr),
            s("CONS"): Builtin("CONS", cons),
            s("+"): Builtin("+", add),
            s("-"): Builtin("-", sub),
            s("*"): Builtin("*", mul),
            s("/"): Builtin("/", div),
            s("="): _predicate("=", num_eq, t),
            s("<"): _predicate("<", less, t),
            s("EQ?"): _predicate("EQ?", eq, t),
            s("PAIR?"): _predicate("PAIR?", pairp, t),
            s("APPLY"): Builtin("APPLY", apply),
        }
    )
    env.define(t, t)
