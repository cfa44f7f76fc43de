from kappa import SExpression
from kappa.errors import KappaArityError, KappaSyntaxError
from kappa.types.frame import Frame, RunSignal
from kappa.types.nil import Nil
from kappa.types.pair import Pair, is_proper_list, list_copy


def apply_form(machine, operands: SExpression) -> int:
    """
    (apply fn args)
    Both operands are evaluated like ordinary arguments; fn is then applied to
    the list args without evaluating its elements again.
    """
    if operands is Nil or operands.cdr is Nil or operands.cdr.cdr is not Nil:
        raise KappaArityError("apply expects exactly two arguments: function and argument list")
    machine.frames.append(Frame(machine.env, operands.cdr, machine.current_form))
    machine.expr = operands.car
    return RunSignal.DISPATCH


def apply_resume(machine, frame: Frame) -> int:
    frame.args = Pair(machine.result, frame.args)
    if frame.tail is not Nil:
        return machine.next_operand(frame)

    args_val, fn_val = frame.args.car, frame.args.cdr.car
    if not is_proper_list(args_val):
        raise KappaSyntaxError("apply arguments must evaluate to a proper list")
    # Apply owns the copy; the caller's list is never mutated.
    frame.op = fn_val
    frame.args = list_copy(args_val)
    return machine.apply(frame)
