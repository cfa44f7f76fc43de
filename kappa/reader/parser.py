"""
  Lisp Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits the runtime's own value tree:

    - nil, () -> Nil
    - lists -> chains of Pair ending in Nil
    - dotted lists -> chains of Pair ending in the dotted tail
    - symbols -> Symbol, interned (upper-cased) in the reader's SymbolTable
    - integers -> int (signed 64-bit)
    - 'x -> (QUOTE x), `x -> (QUASIQUOTE x), ,x -> (UNQUOTE x), ,@x -> (UNQUOTE-SPLICING x)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from kappa import SExpression
from kappa.errors import KappaSyntaxError
from kappa.types.nil import Nil
from kappa.types.pair import Pair
from kappa.types.symbol import Symbol, SymbolTable


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<quote>['`])"  # ' and `
    r"|(?P<unquote>,@|,)"  # , and ,@
    r'|(?P<symbol>[^\s()\'`,;"]+)'  # everything else up to a delimiter
)

WHITESPACE_RE = re.compile(r"\s*")

INTEGER_RE = re.compile(r"[+-]?[0-9]+")

INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1

QUOTE_FORMS: dict[str, str] = {
    "'": "QUOTE",
    "`": "QUASIQUOTE",
    ",": "UNQUOTE",
    ",@": "UNQUOTE-SPLICING",
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples. Comments are skipped."""
    pos = 0
    n = len(source)
    while True:
        pos = WHITESPACE_RE.match(source, pos).end()
        if pos >= n:
            return
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise KappaSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        kind = m.lastgroup
        if kind != "comment":
            yield kind, m.group(kind)



class _OpenList:
    """A list whose ')' has not been read yet."""

    __slots__ = ("head", "tail", "dotted", "has_cdr")

    def __init__(self):
        self.head: SExpression = Nil
        self.tail: Pair | None = None
        self.dotted = False  # a '.' has been read
        self.has_cdr = False  # the dotted cdr has been read

    def add(self, value: SExpression) -> None:
        if self.dotted:
            if self.has_cdr:
                raise KappaSyntaxError("Expected ')' after dotted cdr")
            self.tail.cdr = value
            self.has_cdr = True
            return
        cell = Pair(value, Nil)
        if self.tail is None:
            self.head = cell
        else:
            self.tail.cdr = cell
        self.tail = cell

    def dot(self) -> None:
        if self.tail is None:
            raise KappaSyntaxError("Dotted list needs an element before '.'")
        if self.dotted:
            raise KappaSyntaxError("Unexpected '.'")
        self.dotted = True

    def close(self) -> SExpression:
        if self.dotted and not self.has_cdr:
            raise KappaSyntaxError("Expected an expression after '.'")
        return self.head


class TokenStream:
    """Reads one expression at a time.

    Open lists and pending quote forms live on an explicit stack, so nesting
    depth is not limited by the Python stack.
    """

    def __init__(self, token_iter: Iterator[tuple[str, str]], symbols: SymbolTable):
        self.tokens = iter(token_iter)
        self.symbols = symbols

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[SExpression]:
        """Read one expression, or return None at end of input."""
        # entries are _OpenList or the Symbol of a pending quote form
        stack: list[_OpenList | Symbol] = []
        while True:
            tok_type, tok_val = self.advance()
            if tok_type is None:
                if not stack:
                    return None
                if isinstance(stack[-1], _OpenList):
                    raise KappaSyntaxError("Unmatched '('")
                raise KappaSyntaxError(f"Expected an expression after {stack[-1]}")

            if tok_type == "lparen":
                stack.append(_OpenList())
                continue
            if tok_type in ("quote", "unquote"):
                stack.append(self.symbols.intern(QUOTE_FORMS[tok_val]))
                continue
            if tok_type == "symbol" and tok_val == ".":
                if not stack or not isinstance(stack[-1], _OpenList):
                    raise KappaSyntaxError("Unexpected '.'")
                stack[-1].dot()
                continue

            if tok_type == "rparen":
                if not stack or not isinstance(stack[-1], _OpenList):
                    raise KappaSyntaxError(f"Unexpected {tok_val!r}")
                value = stack.pop().close()
            else:
                value = self._atom(tok_val)

            # Hand the finished value to whatever is waiting for it
            while stack and isinstance(stack[-1], Symbol):
                value = Pair(stack.pop(), Pair(value, Nil))
            if not stack:
                return value
            stack[-1].add(value)

    def _atom(self, text: str) -> SExpression:
        if INTEGER_RE.fullmatch(text):
            value = int(text)
            if not INT_MIN <= value <= INT_MAX:
                raise KappaSyntaxError(f"Integer literal out of range: {text}")
            return value
        # NIL is the empty list, never a symbol
        if text.upper() == "NIL":
            return Nil
        return self.symbols.intern(text)

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            expr = self.parse_expr()
            if expr is None:
                break
            yield expr


def read(source: str, symbols: SymbolTable) -> list[SExpression]:
    """Read every top-level expression in source."""
    return list(TokenStream(lex(source), symbols).parse_all())
