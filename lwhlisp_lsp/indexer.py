from __future__ import annotations

"""
Lightweight indexer for lwhlisp files without evaluating code.

We scan the token stream of the real lexer for top-level forms and index:
- variables: (define name ...)
- functions: (define (name . params) ...)
- macros: (defmacro (name . params) ...)

The scan is tolerant: it stops quietly at an unterminated string so partial
buffers still get symbols. Reader errors are kept separately for diagnostics.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from lwhlisp.errors import LispSyntaxError
from lwhlisp.reader.parser import Token, lex, read

DEFINING_FORMS = {"define": "function", "defmacro": "macro"}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "variable" | "function" | "macro"
    line: int
    col: int
    signature: Optional[str] = None


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    syntax_error: Optional[LispSyntaxError] = None


def _tokens(text: str) -> List[Token]:
    tokens: List[Token] = []
    try:
        for tok in lex(text):
            tokens.append(tok)
    except LispSyntaxError:
        pass  # unterminated string: index what precedes it
    return tokens


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _param_list(tokens: List[Token], start: int) -> Tuple[List[str], int]:
    """Collect the flat text of a parameter list opening at tokens[start]."""
    parts: List[str] = []
    depth = 0
    j = start
    while j < len(tokens):
        kind, val, _ = tokens[j]
        if kind == "lparen":
            depth += 1
        elif kind == "rparen":
            depth -= 1
            if depth == 0:
                return parts, j
        else:
            parts.append(val)
        j += 1
    return parts, j


def _index_form(text: str, tokens: List[Token], head_pos: int, idx: DocumentIndex) -> None:
    if head_pos + 1 >= len(tokens):
        return
    head_kind, head, _ = tokens[head_pos]
    if head_kind != "symbol" or head not in DEFINING_FORMS:
        return

    kind, val, offset = tokens[head_pos + 1]
    if kind == "symbol" and head == "define":
        line, col = _position_from_offset(text, offset)
        idx.symbols[val] = SymbolDef(name=val, kind="variable", line=line, col=col)
    elif kind == "lparen":
        parts, _ = _param_list(tokens, head_pos + 1)
        if not parts:
            return
        name_offset = tokens[head_pos + 2][2]
        line, col = _position_from_offset(text, name_offset)
        idx.symbols[parts[0]] = SymbolDef(
            name=parts[0],
            kind=DEFINING_FORMS[head],
            line=line,
            col=col,
            signature="(" + " ".join(parts) + ")",
        )


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    try:
        read(text)
    except LispSyntaxError as e:
        idx.syntax_error = e

    tokens = _tokens(text)
    depth = 0
    for i, (kind, _, _) in enumerate(tokens):
        if kind == "lparen":
            if depth == 0:
                _index_form(text, tokens, i + 1, idx)
            depth += 1
        elif kind == "rparen":
            depth = max(depth - 1, 0)
    return idx


# Builtin and library signatures for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "quote": "(quote x)",
    "if": "(if test then [else])",
    "lambda": "(lambda params body...)",
    "define": "(define name value) | (define (name . params) body...)",
    "defmacro": "(defmacro (name . params) body...)",
    "+": "(+ nums...)",
    "-": "(- x nums...)",
    "*": "(* x nums...)",
    "/": "(/ x nums...)",
    "%": "(% n d)",
    "=": "(= a b)",
    "<": "(< a b)",
    "<=": "(<= a b)",
    ">": "(> a b)",
    ">=": "(>= a b)",
    "cons": "(cons x xs)",
    "car": "(car xs)",
    "cdr": "(cdr xs)",
    "pair?": "(pair? x)",
    "symbol?": "(symbol? x)",
    "string?": "(string? x)",
    "number?": "(number? x)",
    "procedure?": "(procedure? x)",
    "macro?": "(macro? x)",
    "string-length": "(string-length s)",
    "string-append": "(string-append strs...)",
    "to-string": "(to-string x)",
    "println": "(println xs...)",
    "print": "(print xs...)",
    "error": "(error xs...)",
    "apply": "(apply f args)",
    "eval": "(eval form)",
    "macroexpand-1": "(macroexpand-1 form)",
    "list": "(list . items)",
    "map": "(map proc xs)",
    "filter": "(filter pred xs)",
    "foldl": "(foldl proc init xs)",
    "foldr": "(foldr proc init xs)",
    "append": "(append . lists)",
    "reverse": "(reverse xs)",
    "length": "(length x)",
    "nth": "(nth n xs)",
    "last": "(last xs)",
    "let": "(let ((name value)...) body...)",
    "cond": "(cond (test body...)...)",
    "and": "(and xs...)",
    "or": "(or xs...)",
    "when": "(when test body...)",
    "unless": "(unless test body...)",
    "begin": "(begin body...)",
    "factorial": "(factorial n)",
}
