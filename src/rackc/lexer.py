from __future__ import annotations

import logging
import string
from dataclasses import dataclass

from .errors import LexError, LexErrorKind
from .session import Session
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# The C locale set; other Unicode spaces are unexpected characters.
_SPACE = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset(string.digits)
_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")

_SINGLE = {
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    "*": TokenKind.ASTERISK,
}


@dataclass(slots=True)
class _Cursor:
    src: str
    i: int = 0

    def eof(self) -> bool:
        return self.i >= len(self.src)

    def peek(self, n: int = 0) -> str:
        j = self.i + n
        if j >= len(self.src):
            return ""
        return self.src[j]

    def advance(self, n: int = 1) -> None:
        self.i = min(self.i + n, len(self.src))


class Lexer:
    """Single left-to-right scanner over one session's source text.

    :meth:`next` produces one token at a time and signals the end of the
    stream by raising ``LexError(EOF)``. An unexpected character is reported
    to the session and raised as ``UNEXPECTED_CHARACTER`` after the cursor has
    moved past it, so a caller can resume scanning.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.cur = _Cursor(src=session.text)

    def _token(self, kind: TokenKind, lexeme: str, start: int) -> Token:
        return Token(kind, lexeme, self.session.span(start, self.cur.i))

    def _unexpected(self, message: str, start: int) -> LexError:
        span = self.session.span(start, self.cur.i)
        self.session.push(message, span)
        return LexError(kind=LexErrorKind.UNEXPECTED_CHARACTER, span=span)

    def _eof(self) -> LexError:
        pos = self.cur.i
        return LexError(kind=LexErrorKind.EOF, span=self.session.span(pos, pos))

    def next(self) -> Token:
        cur = self.cur
        while not cur.eof() and cur.peek() in _SPACE:
            cur.advance()
        if cur.eof():
            raise self._eof()

        start = cur.i
        ch = cur.peek()

        kind = _SINGLE.get(ch)
        if kind is not None:
            cur.advance()
            return self._token(kind, ch, start)
        if ch == "-":
            return self._lex_minus()
        if ch == '"':
            return self._lex_quoted_string()
        if ch in _DIGITS:
            return self._lex_run(TokenKind.NUMBER, _DIGITS)
        if ch in _IDENT_START:
            return self._lex_run(TokenKind.KEYWORD_OR_IDENTIFIER, _IDENT_CHARS)

        cur.advance()
        raise self._unexpected(f"unexpected character {ch!r}", start)

    def _lex_run(self, kind: TokenKind, chars: frozenset[str]) -> Token:
        cur = self.cur
        start = cur.i
        while not cur.eof() and cur.peek() in chars:
            cur.advance()
        return self._token(kind, cur.src[start : cur.i], start)

    def _lex_minus(self) -> Token:
        cur = self.cur
        start = cur.i
        nxt = cur.peek(1)
        if nxt == "":
            cur.advance()
            return self._token(TokenKind.MINUS, "-", start)
        cur.advance(2)
        if nxt == "-":
            return self._token(TokenKind.MINUS_MINUS, "--", start)
        if nxt == ">":
            return self._token(TokenKind.ARROW, "->", start)
        raise self._unexpected(f"unexpected character {nxt!r} after '-'", start)

    def _lex_quoted_string(self) -> Token:
        cur = self.cur
        start = cur.i
        cur.advance()
        is_escaped = False
        while not cur.eof():
            c = cur.peek()
            if c in "\r\n":
                cur.advance()
                continue
            if c == '"' and not is_escaped:
                # Escapes are kept as-is; the lexeme is the raw text between the quotes.
                lexeme = cur.src[start + 1 : cur.i]
                cur.advance()
                return self._token(TokenKind.DOUBLE_QUOTED_STRING, lexeme, start)
            is_escaped = not is_escaped and c == "\\"
            cur.advance()

        span = self.session.span(start, cur.i)
        self.session.push("unexpected eof: unterminated string literal", span)
        raise LexError(kind=LexErrorKind.EOF, span=span)


def lex(session: Session) -> list[Token]:
    """Tokenize the whole source of ``session``.

    Raises ``LexError(EMPTY_SOURCE)`` for an empty file. Scanning carries on
    past unexpected characters so each one gets a diagnostic; if there was
    any, the first is raised once the whole file has been scanned.
    """
    if not session.text:
        raise LexError(kind=LexErrorKind.EMPTY_SOURCE, span=session.span(0, 0))

    lexer = Lexer(session)
    tokens: list[Token] = []
    failure: LexError | None = None
    while True:
        try:
            tokens.append(lexer.next())
        except LexError as e:
            if e.kind is LexErrorKind.EOF:
                break
            if failure is None:
                failure = e

    if failure is not None:
        raise failure
    logger.debug("lexed %d tokens from %s", len(tokens), session.file)
    return tokens
