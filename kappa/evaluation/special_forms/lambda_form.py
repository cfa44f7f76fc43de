from kappa import SExpression
from kappa.errors import KappaArityError
from kappa.types.frame import RunSignal
from kappa.types.lambda_fn import make_closure
from kappa.types.nil import Nil


def lambda_form(machine, operands: SExpression) -> int:
    # (lambda params body...) requires at least one body form.
    if operands is Nil or operands.cdr is Nil:
        raise KappaArityError("lambda requires a parameter list and a body")
    machine.result = make_closure(machine.env, operands.car, operands.cdr)
    return RunSignal.RETURN
