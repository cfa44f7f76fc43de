from __future__ import annotations

from dataclasses import dataclass

from kappa import LispValue
from kappa.types.environment import Environment
from kappa.types.nil import Nil


class _Unresolved:
    """Marker held in Frame.op while the operator expression is being evaluated."""

    __slots__ = ()

    def __repr__(self):
        return "<unresolved>"


UNRESOLVED = _Unresolved()


@dataclass(slots=True)
class Frame:
    """One record of the evaluator's explicit continuation stack.

    The parent frame is the previous entry of the stack list.
    - env:  environment active in this frame
    - op:   UNRESOLVED, the SpecialForm being continued, or the resolved operator
    - tail: operand expressions not yet evaluated
    - args: evaluated operands, most recent first until the apply step reverses them
    - body: remaining body expressions of the closure being executed, or None
    """

    env: Environment
    tail: LispValue = Nil
    op: LispValue = UNRESOLVED
    args: LispValue = Nil
    body: LispValue | None = None


class RunSignal:
    """What the evaluator loop does next."""

    DISPATCH = 0  # evaluate machine.expr in machine.env
    RETURN = 1  # fold machine.result into the top frame
