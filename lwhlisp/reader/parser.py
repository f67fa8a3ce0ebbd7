"""
  Lisp Reader, Lexer and Parser

- Streaming, lazy parsing: one top-level form per `parse_expr` call
- Emits lwhlisp values directly:

    - nil, () -> Nil
    - lists -> Pair chains terminated by Nil
    - dotted lists (a b . c) -> Pair chains terminated by c
    - symbols -> Symbol
    - strings -> str (escapes decoded)
    - numbers -> float
    - 'x `x ,x ,@x -> (quote x) (quasiquote x) (unquote x) (unquote-splicing x)
"""

from __future__ import annotations

import math
import re
from typing import Iterator, Optional

from lwhlisp import SExpression
from lwhlisp.errors import LispSyntaxError
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import Pair, make_list
from lwhlisp.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>['`])"  # ' and `
    r"|(?P<unquote>,@|,)"  # , and ,@
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<symbol>[^\s()\'`",;]+)'  # fallback: symbols and numbers
)

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    ",": Symbol("unquote"),
    ",@": Symbol("unquote-splicing"),
}

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
}

DOT = "."

Token = tuple[str, str, int]


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, offset) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if m is None:
            # only an unterminated string can fail every alternative
            raise LispSyntaxError("Unterminated string", source, pos, incomplete=True)
        kind = m.lastgroup
        if kind != "comment":
            yield kind, m.group(kind), pos
        pos = m.end()


def decode_string(literal: str) -> str:
    """Strip the quotes of a string token and decode its escapes."""
    body = literal[1:-1]
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            out.append(STRING_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def parse_atom(text: str) -> SExpression:
    if text == "nil":
        return Nil
    if NUMBER_RE.fullmatch(text):
        return float(text)
    return Symbol(text)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], source: str = ""):
        self.tokens = iter(token_iter)
        self.source = source
        self.buffer: list[Token] = []

    def peek(self) -> tuple[Optional[str], Optional[str], int]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None, len(self.source)
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str], int]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None, len(self.source)))

    def error(self, message: str, offset: int, incomplete: bool = False) -> LispSyntaxError:
        return LispSyntaxError(message, self.source, offset, incomplete)

    def parse_expr(self) -> SExpression | None:
        """Parse one form, or return None at end of input."""
        tok_type, tok_val, offset = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            if tok_val == DOT:
                raise self.error("Unexpected '.' outside of a list", offset)
            atom = parse_atom(tok_val)
            if isinstance(atom, float) and not math.isfinite(atom):
                raise self.error(f"Number literal {tok_val} is out of range", offset)
            return atom

        if tok_type == "string":
            self.advance()
            return decode_string(tok_val)

        # Quote forms
        if tok_type in ("quote", "unquote"):
            self.advance()
            expr = self.parse_expr()
            if expr is None:
                raise self.error(f"Expected a form after {tok_val!r}", offset, incomplete=True)
            return make_list([QUOTE_FORMS[tok_val], expr])

        if tok_type == "rparen":
            raise self.error("Unexpected ')'", offset)

        # List or dotted list
        self.advance()
        items = []
        while True:
            nxt_type, nxt_val, nxt_offset = self.peek()
            if nxt_type is None:
                raise self.error("Unterminated list", offset, incomplete=True)
            if nxt_type == "rparen":
                self.advance()
                return make_list(items)
            if nxt_type == "symbol" and nxt_val == DOT:
                if not items:
                    raise self.error("Expected a form before '.'", nxt_offset)
                self.advance()
                tail_type, _, tail_offset = self.peek()
                if tail_type is None:
                    raise self.error("Unterminated list", offset, incomplete=True)
                if tail_type == "rparen":
                    raise self.error("Expected a form after '.'", tail_offset)
                tail = self.parse_expr()
                close_type, _, close_offset = self.advance()
                if close_type is None:
                    raise self.error("Unterminated list", offset, incomplete=True)
                if close_type != "rparen":
                    raise self.error("Expected ')' after dotted tail", close_offset)
                return make_list(items, tail)
            items.append(self.parse_expr())

    def parse_all(self) -> Iterator[SExpression]:
        while (expr := self.parse_expr()) is not None:
            yield expr


def read(source: str) -> list[SExpression]:
    """Parse every top-level form in `source`."""
    return list(TokenStream(lex(source), source).parse_all())


def read_one(source: str) -> SExpression:
    """Parse exactly one form from `source`."""
    stream = TokenStream(lex(source), source)
    expr = stream.parse_expr()
    if expr is None:
        raise LispSyntaxError("Expected a form, found end of input", source, len(source), incomplete=True)
    extra_type, _, extra_offset = stream.peek()
    if extra_type is not None:
        raise LispSyntaxError("Expected a single form", source, extra_offset)
    return expr
