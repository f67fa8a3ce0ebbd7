from __future__ import annotations

"""
A minimal pygls-based Language Server for lwhlisp.

Features:
- Text synchronization and document store
- Diagnostics: reader errors with their line and column
- Hover: builtin signatures and locally defined symbols
- Completion: locals, builtins
- Document Symbols: from indexer
- Formatting: the whole document through the pretty printer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from lsprotocol.types import (
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
    DocumentFormattingParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
    TextEdit,
)
from pygls.server import LanguageServer

from lwhlisp.errors import LispSyntaxError
from lwhlisp.printer import format_source
from lwhlisp_lsp.indexer import BUILTIN_SIGNATURES, DocumentIndex, SymbolDef, build_index

SYMBOL_KINDS = {
    "variable": SymbolKind.Variable,
    "function": SymbolKind.Function,
    "macro": SymbolKind.Operator,
}


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class LwhlispLanguageServer(LanguageServer):
    CMD_NAME = "lwhlisp-ls"
    VERSION = "0.1.0"

    def __init__(self):
        super().__init__(self.CMD_NAME, self.VERSION)
        self.documents: Dict[str, DocumentState] = {}


ls = LwhlispLanguageServer()


# --- Text sync ---
def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, diagnostics_for(idx))


@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    _update(params.text_document.uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        state = ls.documents.get(uri)
        text = state.text if state else ""
    _update(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def diagnostics_for(idx: DocumentIndex) -> List[Diagnostic]:
    err: Optional[LispSyntaxError] = idx.syntax_error
    if err is None:
        return []
    # reader positions are 1-based
    start = Position(line=err.line - 1, character=err.column - 1)
    end = Position(line=err.line - 1, character=err.column)
    return [
        Diagnostic(
            range=Range(start=start, end=end),
            message=str(err),
            severity=DiagnosticSeverity.Warning if err.incomplete else DiagnosticSeverity.Error,
            source=LwhlispLanguageServer.CMD_NAME,
        )
    ]


# --- Hover ---
def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in idx.symbols:
        sdef = idx.symbols[word]
        head = sdef.signature or word
        return f"{head}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return BUILTIN_SIGNATURES.get(word)


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position)
    if not word:
        return None
    contents = hover_text(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature("textDocument/completion", CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if state:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Variable if sdef.kind == "variable" else CompletionItemKind.Function
            items.append(CompletionItem(label=name, kind=kind, detail=sdef.signature))
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
def _document_symbol(sdef: SymbolDef) -> DocumentSymbol:
    rng = Range(
        start=Position(line=sdef.line, character=sdef.col),
        end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
    )
    return DocumentSymbol(
        name=sdef.name,
        detail=sdef.signature,
        kind=SYMBOL_KINDS[sdef.kind],
        range=rng,
        selection_range=rng,
    )


@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return [_document_symbol(sdef) for sdef in state.index.symbols.values()]


# --- Formatting ---
@ls.feature("textDocument/formatting")
def on_formatting(params: DocumentFormattingParams) -> Optional[List[TextEdit]]:
    state = ls.documents.get(params.text_document.uri)
    if not state or state.index.syntax_error is not None:
        return None
    lines = state.text.splitlines()
    end = Position(line=len(lines), character=0)
    return [TextEdit(range=Range(start=Position(line=0, character=0), end=end),
                     new_text=format_source(state.text))]


# --- Helpers ---
def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    # expand to symbol boundaries
    start = pos.character
    while start > 0 and line[start - 1] not in " \t()'`,\"\n\r":
        start -= 1
    end = pos.character
    while end < len(line) and line[end] not in " \t()'`,\"\n\r":
        end += 1
    return line[start:end] or None


def main() -> None:
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
