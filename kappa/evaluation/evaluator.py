"""Core evaluator for the Kappa interpreter.

Evaluation never recurses on the Python stack. A Machine keeps an explicit
list of Frame records and loops over two states:

- DISPATCH: decide what kind of expression `expr` is. Symbols and atoms
  produce a result at once; special forms run their handler; any other list
  pushes an application frame and dispatches its operator.
- RETURN: fold `result` into the top frame. This resolves the operator,
  collects an operand, continues a special form, advances a closure body, or
  feeds a macro expansion back into DISPATCH. Once every operand is collected
  the apply step invokes the builtin or binds the closure.

A closure frame is popped before its last body expression is dispatched, so a
call in tail position replaces its caller instead of stacking on top of it.
"""

from __future__ import annotations

import logging

from kappa import SExpression, LispValue
from kappa.errors import KappaSyntaxError, KappaTypeError
from kappa.evaluation.special_forms import SpecialForm, build_special_forms
from kappa.types.builtin_fn import Builtin
from kappa.types.environment import Environment
from kappa.types.frame import Frame, RunSignal, UNRESOLVED
from kappa.types.lambda_fn import Closure, Macro
from kappa.types.nil import Nil
from kappa.types.pair import Pair, is_proper_list, list_reverse
from kappa.types.symbol import Symbol, SymbolTable
from kappa.types.tail_call import TailCall

logger = logging.getLogger(__name__)


class Evaluator:
    """Evaluates expressions against environments built on one SymbolTable."""

    def __init__(self, symbols: SymbolTable):
        self.symbols = symbols
        self.special_forms: dict[Symbol, SpecialForm] = build_special_forms(symbols)

    def evaluate(self, expr: SExpression, env: Environment) -> LispValue:
        logger.debug("evaluating %s", expr)
        machine = Machine(self.special_forms, expr, env)
        result = machine.run()
        logger.debug("evaluated with peak frame depth %d", machine.peak_depth)
        return result


class Machine:
    """State of one evaluation: the current expression, environment, result
    and the frame stack.

    `current_form` is the SpecialForm whose begin handler is running; handlers
    that push a frame store it there as the frame's op.
    """

    __slots__ = ("special_forms", "frames", "expr", "env", "result", "current_form", "peak_depth")

    def __init__(self, special_forms: dict[Symbol, SpecialForm], expr: SExpression, env: Environment):
        self.special_forms = special_forms
        self.frames: list[Frame] = []
        self.expr: SExpression = expr
        self.env: Environment = env
        self.result: LispValue = Nil
        self.current_form: SpecialForm | None = None
        self.peak_depth = 0

    def run(self) -> LispValue:
        signal = RunSignal.DISPATCH
        while True:
            if signal == RunSignal.DISPATCH:
                signal = self.dispatch()
            elif not self.frames:
                return self.result
            else:
                if len(self.frames) > self.peak_depth:
                    self.peak_depth = len(self.frames)
                signal = self.resume()

    # --- DISPATCH ---
    def dispatch(self) -> int:
        expr = self.expr
        if isinstance(expr, Symbol):
            self.result = self.env.lookup(expr)
            return RunSignal.RETURN
        if not isinstance(expr, Pair):
            # Integers, Nil and callables evaluate to themselves
            self.result = expr
            return RunSignal.RETURN
        if not is_proper_list(expr):
            raise KappaSyntaxError("Cannot evaluate an improper list")

        head, operands = expr.car, expr.cdr
        if isinstance(head, Symbol):
            form = self.special_forms.get(head)
            if form is not None:
                self.current_form = form
                return form.begin(self, operands)

        self.frames.append(Frame(self.env, operands))
        self.expr = head
        return RunSignal.DISPATCH

    # --- RETURN ---
    def resume(self) -> int:
        frame = self.frames[-1]
        self.env = frame.env
        op = frame.op

        if frame.body is not None:
            # Still running a closure body; the intermediate result is dropped
            return self.execute(frame)

        if isinstance(op, SpecialForm):
            return op.resume(self, frame)

        if op is UNRESOLVED:
            op = frame.op = self.result
            if isinstance(op, Macro):
                # The expansion runs in a frame of its own with the operands
                # unevaluated; this frame then waits for the expansion.
                expansion = Frame(self.env, Nil, op, frame.tail)
                frame.tail = Nil
                self.frames.append(expansion)
                return self.bind(expansion)
        elif isinstance(op, Macro):
            # Expansion finished: evaluate it in the caller's environment
            self.frames.pop()
            self.expr = self.result
            return RunSignal.DISPATCH
        else:
            frame.args = Pair(self.result, frame.args)

        return self.next_operand(frame)

    def next_operand(self, frame: Frame) -> int:
        tail = frame.tail
        if tail is Nil:
            frame.args = list_reverse(frame.args)
            return self.apply(frame)
        self.expr = tail.car
        frame.tail = tail.cdr
        return RunSignal.DISPATCH

    # --- APPLY ---
    def apply(self, frame: Frame) -> int:
        """Invoke frame.op on the evaluated list frame.args."""
        op = frame.op
        while isinstance(op, Builtin):
            value = op(frame.args)
            if not isinstance(value, TailCall):
                self.frames.pop()
                self.result = value
                return RunSignal.RETURN
            op = frame.op = value.fn
            frame.args = value.args

        if not isinstance(op, Closure) or isinstance(op, Macro):
            raise KappaTypeError(f"Cannot apply non-function {op!r}")
        return self.bind(frame)

    def bind(self, frame: Frame) -> int:
        fn = frame.op
        frame.env = fn.extend_env(frame.args)
        frame.args = Nil
        frame.body = fn.body
        return self.execute(frame)

    def execute(self, frame: Frame) -> int:
        """Dispatch the next body expression, popping the frame before the last one."""
        body = frame.body
        self.env = frame.env
        self.expr = body.car
        if body.cdr is Nil:
            self.frames.pop()
        else:
            frame.body = body.cdr
        return RunSignal.DISPATCH
