from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from kappa import SExpression, LispValue
from kappa.builtin.env_builtin import register
from kappa.errors import KappaError
from kappa.evaluation.evaluator import Evaluator
from kappa.modules.package_loader import load_prelude, read_source
from kappa.printer import to_string
from kappa.reader.parser import lex, read, TokenStream
from kappa.types.environment import Environment
from kappa.types.nil import Nil
from kappa.types.symbol import SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of one top-level form during a best-effort load."""

    expr: Optional[SExpression]
    value: LispValue = Nil
    error: Optional[KappaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Interpreter:
    """
    Orchestrates reading and evaluating Kappa code.
    Owns a SymbolTable, an Evaluator and a root Environment seeded with
    builtins; definitions persist across calls.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = None,
        *,
        symbols: SymbolTable | None = None,
    ):
        self.symbols: SymbolTable = symbols if symbols is not None else SymbolTable()
        self.evaluator = Evaluator(self.symbols)
        self.env: Environment = Environment()
        register(self.env, self.symbols)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    def read(self, code: str) -> list[SExpression]:
        return read(code, self.symbols)

    def evaluate(self, expr: SExpression) -> LispValue:
        """Evaluate one already-read expression in the root environment."""
        return self.evaluator.evaluate(expr, self.env)

    def eval_prelude(self, code: str) -> None:
        stream = TokenStream(lex(code), self.symbols)
        while (expr := stream.parse_expr()) is not None:
            self.evaluate(expr)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in code; return the last result (NIL if none).

        The first error aborts and propagates.
        """
        stream = TokenStream(lex(code), self.symbols)
        result: LispValue = Nil
        while (expr := stream.parse_expr()) is not None:
            result = self.evaluate(expr)
        return result

    def load(self, code: str) -> list[LoadResult]:
        """Best-effort: evaluate each form on its own, report failures and keep going.

        A syntax error ends the load since the reader cannot find the next form.
        """
        stream = TokenStream(lex(code), self.symbols)
        results: list[LoadResult] = []
        while True:
            try:
                expr = stream.parse_expr()
            except KappaError as ex:
                logger.warning("error: %s while reading", ex)
                results.append(LoadResult(None, error=ex))
                break
            if expr is None:
                break
            try:
                value = self.evaluate(expr)
            except KappaError as ex:
                logger.warning("error: %s in expression: %s", ex, to_string(expr))
                results.append(LoadResult(expr, error=ex))
            else:
                results.append(LoadResult(expr, value))
        return results

    def load_file(self, path: Path | str) -> list[LoadResult]:
        logger.info("Reading %s...", path)
        return self.load(read_source(path))
