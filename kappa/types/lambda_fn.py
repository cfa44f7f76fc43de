"""Closure and macro representation and argument binding utilities for Kappa."""

from __future__ import annotations

from kappa import SExpression, LispValue
from kappa.errors import KappaArityError, KappaSyntaxError, KappaTypeError
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.pair import Pair, is_proper_list
from kappa.types.symbol import Symbol


class Closure:
    """A first-class function: parameter list, body and captured environment.

    `params` is a proper list of symbols, a dotted list whose final cdr is the
    symbol collecting the remaining arguments, or a single symbol collecting
    all of them. `body` is a non-empty proper list of expressions.
    """

    __slots__ = ("env", "params", "body")

    kind = "CLOSURE"

    def __init__(self, env: Environment, params: SExpression, body: SExpression):
        self.env = env
        self.params = params
        self.body = body

    def __repr__(self) -> str:
        return f"#<{self.kind}>"

    def extend_env(self, args: LispValue) -> Environment:
        """Bind the argument list to this closure's parameters in a fresh child
        of the captured environment."""
        return bind_arguments(self.params, args, self.env)


class Macro(Closure):
    """A closure applied to unevaluated operands whose result is evaluated again."""

    __slots__ = ()

    kind = "MACRO"


def make_closure(
    env: Environment, params: SExpression, body: SExpression, cls: type[Closure] = Closure
) -> Closure:
    if not is_proper_list(body):
        raise KappaSyntaxError("Function body must be a proper list")
    p = params
    while p is not Nil and not isinstance(p, Symbol):
        if not isinstance(p, Pair) or not isinstance(p.car, Symbol):
            raise KappaTypeError("Parameters must be symbols")
        p = p.cdr
    return cls(env, params, body)


def bind_arguments(params: SExpression, args: LispValue, closure_env: Environment) -> Environment:
    """
    Single source of truth for parameter binding in Kappa.

    Returns a new Environment whose outer is the closure_env, populated with
    the bindings for evaluating the callee body. A symbol in parameter
    position (the whole list, or the tail after a dot) captures the rest.
    """
    local_env = Environment(outer=closure_env)
    while params is not Nil:
        if isinstance(params, Symbol):
            local_env.define(params, args)
            args = Nil
            break
        if args is Nil:
            raise KappaArityError("Too few arguments")
        local_env.define(params.car, args.car)
        params = params.cdr
        args = args.cdr
    if args is not Nil:
        raise KappaArityError("Too many arguments")
    return local_env
