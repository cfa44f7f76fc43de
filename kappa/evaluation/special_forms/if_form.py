from kappa import SExpression
from kappa.errors import KappaArityError
from kappa.types.frame import Frame, RunSignal
from kappa.types.nil import Nil


def if_form(machine, operands: SExpression) -> int:
    """(if cond then else): evaluate cond in a frame holding the two branches."""
    if (
        operands is Nil
        or operands.cdr is Nil
        or operands.cdr.cdr is Nil
        or operands.cdr.cdr.cdr is not Nil
    ):
        raise KappaArityError("if requires a condition, a then-expression and an else-expression")
    machine.frames.append(Frame(machine.env, operands.cdr, machine.current_form))
    machine.expr = operands.car
    return RunSignal.DISPATCH


def if_resume(machine, frame: Frame) -> int:
    # Only Nil is false. The chosen branch replaces this frame (tail position).
    machine.frames.pop()
    branches = frame.tail
    machine.expr = branches.car if machine.result is not Nil else branches.cdr.car
    return RunSignal.DISPATCH
