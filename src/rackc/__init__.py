from __future__ import annotations

from .api import CompileResult, compile_file, compile_session, compile_source, lex_source
from .codegen import TARGETS, CodeGenerator, assemble
from .diagnostics import Diagnostic
from .errors import AssembleError, AssembleErrorKind, LexError, LexErrorKind, RackError, SourceReadError
from .lexer import lex
from .session import Session
from .spans import Span
from .tokens import Token, TokenKind

__all__ = [
    "AssembleError",
    "AssembleErrorKind",
    "CodeGenerator",
    "CompileResult",
    "Diagnostic",
    "LexError",
    "LexErrorKind",
    "RackError",
    "Session",
    "SourceReadError",
    "Span",
    "TARGETS",
    "Token",
    "TokenKind",
    "assemble",
    "compile_file",
    "compile_session",
    "compile_source",
    "lex",
    "lex_source",
]
