from kappa import SExpression
from kappa.errors import KappaArityError, KappaTypeError
from kappa.types.frame import Frame, RunSignal
from kappa.types.lambda_fn import make_closure
from kappa.types.nil import Nil
from kappa.types.pair import Pair
from kappa.types.symbol import Symbol


def define_form(machine, operands: SExpression) -> int:
    """
    (define name value)          evaluate value, bind name locally, yield name
    (define (name . params) body...)  bind name to a closure, yield name
    """
    if operands is Nil or operands.cdr is Nil:
        raise KappaArityError("define requires a name and a value")

    target = operands.car
    if isinstance(target, Pair):
        name = target.car
        if not isinstance(name, Symbol):
            raise KappaTypeError(f"Cannot define {name!r}: not a symbol")
        machine.env.define(name, make_closure(machine.env, target.cdr, operands.cdr))
        machine.result = name
        return RunSignal.RETURN

    if not isinstance(target, Symbol):
        raise KappaTypeError(f"Cannot define {target!r}: not a symbol")
    if operands.cdr.cdr is not Nil:
        raise KappaArityError("define requires exactly 2 arguments")

    # The name waits in the args slot while the value is evaluated.
    machine.frames.append(Frame(machine.env, Nil, machine.current_form, target))
    machine.expr = operands.cdr.car
    return RunSignal.DISPATCH


def define_resume(machine, frame: Frame) -> int:
    machine.frames.pop()
    name = frame.args
    frame.env.define(name, machine.result)
    machine.result = name
    return RunSignal.RETURN
