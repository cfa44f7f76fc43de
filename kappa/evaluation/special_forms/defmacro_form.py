"""Special form: defmacro.

Binds a Macro (a closure applied to unevaluated operands) in the current
environment.
"""

from __future__ import annotations

from kappa import SExpression
from kappa.errors import KappaArityError, KappaSyntaxError, KappaTypeError
from kappa.types.frame import RunSignal
from kappa.types.lambda_fn import Macro, make_closure
from kappa.types.nil import Nil
from kappa.types.pair import Pair
from kappa.types.symbol import Symbol


def defmacro_form(machine, operands: SExpression) -> int:
    """(defmacro (name . params) body...)"""
    if operands is Nil or operands.cdr is Nil:
        raise KappaArityError("defmacro requires a signature and a body")

    signature = operands.car
    if not isinstance(signature, Pair):
        raise KappaSyntaxError("defmacro signature must be a list (name . params)")
    name = signature.car
    if not isinstance(name, Symbol):
        raise KappaTypeError(f"Macro name must be a Symbol, got {name!r}")

    machine.env.define(name, make_closure(machine.env, signature.cdr, operands.cdr, Macro))
    machine.result = name
    return RunSignal.RETURN
