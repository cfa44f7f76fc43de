from kappa import SExpression
from kappa.errors import KappaArityError
from kappa.types.frame import RunSignal
from kappa.types.nil import Nil
from kappa.types.pair import Pair


def quote_form(machine, operands: SExpression) -> int:
    """(quote x) => x, unevaluated."""
    if not isinstance(operands, Pair) or operands.cdr is not Nil:
        raise KappaArityError("Quote expects exactly 1 argument")
    machine.result = operands.car
    return RunSignal.RETURN
