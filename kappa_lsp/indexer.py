from __future__ import annotations

"""
Lightweight indexer for Kappa Lisp files without evaluating code.

We scan for top-level forms and build an index for:
- definitions: (define name ...), (define (name . params) ...), (defmacro (name . params) ...)
- parenthesis balance
- the first syntax error reported by the real reader

The scanner is tolerant: it works on partial/incomplete buffers. Names are
upper-cased the way the reader interns them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import re

from kappa.errors import KappaSyntaxError
from kappa.reader.parser import read
from kappa.types.symbol import SymbolTable

# Simple token patterns for scanning
TOKEN_REGEX = re.compile(r";[^\n]*|\(|\)|,@|['`,]|[^\s()'`,;]+")


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function" | "macro"
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    syntax_error: Optional[str] = None


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if tok.startswith(';'):
            continue
        yield tok, m.start()


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _definition(tokens: List[Tuple[str, int]], i: int) -> Optional[Tuple[str, str, int]]:
    """Given tokens[i] == '(' at depth 0, return (kind, name, offset) of a definition."""
    if i + 2 >= len(tokens):
        return None
    head = tokens[i + 1][0].upper()
    target, offset = tokens[i + 2]
    if head == "DEFINE":
        if target == "(":
            if i + 3 < len(tokens) and tokens[i + 3][0] not in ("(", ")"):
                return "function", tokens[i + 3][0], tokens[i + 3][1]
            return None
        if target != ")":
            return "var", target, offset
    elif head == "DEFMACRO" and target == "(":
        if i + 3 < len(tokens) and tokens[i + 3][0] not in ("(", ")"):
            return "macro", tokens[i + 3][0], tokens[i + 3][1]
    return None


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(_iter_tokens(text))

    depth = 0
    for i, (tok, _) in enumerate(tokens):
        if tok == '(':
            if depth == 0:
                found = _definition(tokens, i)
                if found is not None:
                    kind, name, offset = found
                    line, col = _position_from_offset(text, offset)
                    name = name.upper()
                    idx.symbols[name] = SymbolDef(name=name, kind=kind, line=line, col=col)
            depth += 1
            idx.paren_balance += 1
        elif tok == ')':
            depth = max(depth - 1, 0)
            idx.paren_balance -= 1

    try:
        read(text, SymbolTable())
    except KappaSyntaxError as ex:
        idx.syntax_error = str(ex)

    return idx


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "CAR": "(car pair)",
    "CDR": "(cdr pair)",
    "CONS": "(cons x y)",
    "+": "(+ a b)",
    "-": "(- a b)",
    "*": "(* a b)",
    "/": "(/ a b)",
    "=": "(= a b)",
    "<": "(< a b)",
    "EQ?": "(eq? x y)",
    "PAIR?": "(pair? x)",
    "APPLY": "(apply fn args)",
}

SPECIAL_FORM_SIGNATURES: Dict[str, str] = {
    "QUOTE": "(quote x)",
    "DEFINE": "(define name value) | (define (name . params) body...)",
    "LAMBDA": "(lambda params body...)",
    "IF": "(if cond then else)",
    "DEFMACRO": "(defmacro (name . params) body...)",
}
