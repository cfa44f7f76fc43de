from __future__ import annotations

"""
A minimal pygls-based Language Server for Kappa Lisp.

Features:
- Text synchronization and document store
- Diagnostics: reader errors, unmatched parens
- Hover: builtin and special form signatures, locally defined symbols
- Completion: locals, builtins, special forms
- Signature Help: for known builtins
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from kappa import __version__
from kappa_lsp.indexer import (
    BUILTIN_SIGNATURES,
    SPECIAL_FORM_SIGNATURES,
    DocumentIndex,
    build_index,
)

logger = logging.getLogger(__name__)

SOURCE = "kappa-ls"

WORD_DELIMITERS = " \t()'`,\n\r"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class KappaLanguageServer(LanguageServer):
    CMD_NAME = "kappa-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}

    def update_document(self, uri: str, text: str) -> DocumentState:
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        self.publish_diagnostics(uri, collect_diagnostics(state.text, state.index))
        return state


ls = KappaLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: KappaLanguageServer, params: DidOpenTextDocumentParams):
    ls.update_document(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: KappaLanguageServer, params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        state = ls.documents.get(uri)
        text = state.text if state else ""
    ls.update_document(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: KappaLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def collect_diagnostics(text: str, idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.syntax_error is not None:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message=idx.syntax_error,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    if idx.paren_balance != 0:
        kind = "'('" if idx.paren_balance > 0 else "')'"
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message=f"Unmatched parentheses detected: {abs(idx.paren_balance)} extra {kind}",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    return diags


# --- Hover ---
def describe(word: str, idx: DocumentIndex) -> Optional[str]:
    name = word.upper()
    if name in SPECIAL_FORM_SIGNATURES:
        return f"{SPECIAL_FORM_SIGNATURES[name]} (special form)"
    if name in idx.symbols:
        sdef = idx.symbols[name]
        return f"{name}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    if name in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[name]
    return None


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: KappaLanguageServer, params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = _extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = describe(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name, sig in SPECIAL_FORM_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=sig))
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Variable if sdef.kind == "var" else CompletionItemKind.Function
        items.append(CompletionItem(label=name, kind=kind))
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(ls: KappaLanguageServer, params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return CompletionList(is_incomplete=False, items=[])
    return CompletionList(is_incomplete=False, items=completion_items(state.index))


# --- Signature Help ---
@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(ls: KappaLanguageServer, params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    callee = _extract_callee_name(_get_line_prefix(state.text, params.position))
    if not callee:
        return None

    label = BUILTIN_SIGNATURES.get(callee.upper())
    if not label:
        return None

    # parameters are the words after the name
    parameters = [ParameterInformation(label=p) for p in label.strip("()").split()[1:]]
    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Variable if sdef.kind == "var" else SymbolKind.Function,
                range=rng,
                selection_range=rng,
                detail=sdef.kind,
            )
        )
    return symbols


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(ls: KappaLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state.index)


# --- Helpers ---

def _get_line_prefix(text: str, pos: Position) -> str:
    # Text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_DELIMITERS:
        start -= 1
    while end < len(line) and line[end] not in WORD_DELIMITERS:
        end += 1
    return line[start:end] or None


def _extract_callee_name(prefix: str) -> Optional[str]:
    # first token after the last '('
    lp = prefix.rfind('(')
    if lp == -1:
        return None
    parts = prefix[lp + 1:].split()
    return parts[0] if parts else None


def main():
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting %s over stdio", ls.CMD_NAME)
    ls.start_io()


if __name__ == "__main__":
    main()
