from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span


class TokenKind(str, Enum):
    NUMBER = "Number"
    PLUS = "Plus"
    MINUS = "Minus"
    MINUS_MINUS = "MinusMinus"
    COLON = "Colon"
    COMMA = "Comma"
    ASTERISK = "Asterisk"
    ARROW = "Arrow"
    KEYWORD_OR_IDENTIFIER = "KeywordOrIdentifier"
    DOUBLE_QUOTED_STRING = "DoubleQuotedString"


KEYWORDS = frozenset({"fn", "begin", "end"})


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    lexeme: str
    span: Span

    def is_keyword(self) -> bool:
        return self.kind is TokenKind.KEYWORD_OR_IDENTIFIER and self.lexeme in KEYWORDS

    def format(self) -> str:
        return (
            f"Token {{ lexeme: {self.lexeme}, kind: {self.kind.value}, "
            f"span: {self.span.format()} }}"
        )

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.lexeme!r}, {self.span.format()})"
