from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from .errors import AssembleError, AssembleErrorKind
from .session import Session
from .spans import Span
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)

TARGETS: dict[str, type["CodeGenerator"]] = {}


def string_length(raw: str) -> int:
    """Length pushed for a literal: its encoded size, counting each ``\\n`` pair once."""
    return len(raw.encode("utf-8")) - raw.count("\\n")


class CodeGenerator(ABC):
    """Walks a token list and emits assembly text for one target.

    The function grammar ``fn <name> [-- <params>] -> <type> begin <body> end``
    is driven here; subclasses only decide which instructions each construct
    turns into. Grammar violations push a diagnostic on the session and raise
    :class:`AssembleError`; stray tokens inside a body only push a diagnostic.
    """

    target: ClassVar[str]
    builtins: ClassVar[frozenset[str]] = frozenset()

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        name = cls.__dict__.get("target")
        if name is not None:
            TARGETS[name] = cls

    def __init__(self, session: Session, tokens: list[Token]) -> None:
        self.session = session
        self.tokens = tokens
        self.cursor = 0
        self.lines: list[str] = []
        self.strings: list[str] = []

    # -- output -------------------------------------------------------------

    def writeln(self, line: str = "") -> None:
        self.lines.append(line)

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n"

    # -- target hooks -------------------------------------------------------

    @abstractmethod
    def generate_header(self) -> None: ...

    @abstractmethod
    def generate_prelude(self) -> None: ...

    @abstractmethod
    def generate_entry_point(self) -> None: ...

    @abstractmethod
    def generate_data_section(self) -> None: ...

    @abstractmethod
    def emit_function_label(self, name: str) -> None: ...

    @abstractmethod
    def emit_return(self) -> None: ...

    @abstractmethod
    def emit_string_literal(self, index: int, length: int) -> None: ...

    @abstractmethod
    def emit_builtin_call(self, name: str) -> None: ...

    # -- token cursor -------------------------------------------------------

    def eof(self) -> bool:
        return self.cursor >= len(self.tokens)

    def peek(self) -> Token | None:
        if self.eof():
            return None
        return self.tokens[self.cursor]

    def _fail(self, kind: AssembleErrorKind, message: str, span: Span) -> AssembleError:
        self.session.push(message, span)
        return AssembleError(kind=kind, span=span)

    # -- driver -------------------------------------------------------------

    def compile_to_assembly(self) -> None:
        self.generate_header()
        self.generate_prelude()
        while True:
            try:
                self.next()
            except AssembleError as e:
                if e.kind is AssembleErrorKind.EOF:
                    break
                raise
        self.generate_entry_point()
        self.generate_data_section()

    def next(self) -> None:
        tok = self.peek()
        if tok is None:
            raise AssembleError(kind=AssembleErrorKind.EOF)

        if tok.kind is TokenKind.KEYWORD_OR_IDENTIFIER and tok.lexeme == "fn":
            self.compile_function()
            return

        logger.warning("unimplemented %s, skipping compilation", tok.lexeme)
        self.cursor += 1

    def compile_function(self) -> None:
        fn_keyword = self.tokens[self.cursor]
        self.cursor += 1

        name = self.peek()
        if name is None or name.kind is not TokenKind.KEYWORD_OR_IDENTIFIER:
            raise self._fail(
                AssembleErrorKind.MISSING_FUNCTION_NAME,
                "expected identifier after 'fn' keyword, function name is missing",
                fn_keyword.span,
            )
        self.cursor += 1

        arrow = self.peek()
        if arrow is None:
            raise self._fail(
                AssembleErrorKind.MISSING_FUNCTION_PARAMETERS_OR_RETURN_TYPE,
                "expected parameter list or return type after function name",
                name.span,
            )
        if arrow.kind is TokenKind.MINUS_MINUS:
            raise self._fail(
                AssembleErrorKind.NOT_IMPLEMENTED,
                "function parameter lists are not implemented yet",
                arrow.span,
            )
        if arrow.kind is not TokenKind.ARROW:
            raise self._fail(
                AssembleErrorKind.MISSING_FUNCTION_PARAMETERS_OR_RETURN_TYPE,
                "expected return type after function name or parameter list",
                name.span,
            )
        self.cursor += 1

        # TODO: check the return type names a real type once types exist.
        return_type = self.peek()
        if return_type is None:
            raise self._fail(
                AssembleErrorKind.MISSING_FUNCTION_PARAMETERS_OR_RETURN_TYPE,
                "expected return type after function name or parameter list",
                arrow.span,
            )
        self.cursor += 1

        begin = self.peek()
        if begin is None or begin.kind is not TokenKind.KEYWORD_OR_IDENTIFIER or begin.lexeme != "begin":
            raise self._fail(
                AssembleErrorKind.NO_BEGIN_TOKEN,
                "expected begin after function return type",
                return_type.span,
            )
        self.cursor += 1

        logger.debug("compiling function %s", name.lexeme)
        self.emit_function_label(name.lexeme)
        self.compile_function_body(begin.span)
        # Skip "end".
        self.cursor += 1
        self.emit_return()

    def compile_function_body(self, begin_span: Span) -> None:
        while True:
            tok = self.peek()
            if tok is None:
                raise self._fail(
                    AssembleErrorKind.NO_END_TOKEN,
                    "expected end token after function body",
                    begin_span,
                )

            if tok.kind is TokenKind.KEYWORD_OR_IDENTIFIER and tok.lexeme == "end":
                return

            if tok.kind is TokenKind.DOUBLE_QUOTED_STRING:
                self.compile_double_quoted_string(tok)
            elif tok.kind is TokenKind.KEYWORD_OR_IDENTIFIER:
                if tok.is_keyword():
                    self.compile_keyword(tok)
                else:
                    self.compile_function_call(tok)
            else:
                self.session.push(f"{tok.kind.value} is not allowed in this context", tok.span)
                self.cursor += 1

    def compile_double_quoted_string(self, tok: Token) -> None:
        self.strings.append(tok.lexeme)
        self.emit_string_literal(len(self.strings) - 1, string_length(tok.lexeme))
        self.cursor += 1

    def compile_keyword(self, tok: Token) -> None:
        self.session.push(f"keyword '{tok.lexeme}' is not implemented in this context", tok.span)
        self.cursor += 1

    def compile_function_call(self, tok: Token) -> None:
        if tok.lexeme not in self.builtins:
            raise self._fail(
                AssembleErrorKind.UNDECLARED_FUNCTION,
                f"undeclared function {tok.lexeme}",
                tok.span,
            )
        self.emit_builtin_call(tok.lexeme)
        self.cursor += 1


def generator_for(target: str) -> type[CodeGenerator]:
    try:
        return TARGETS[target]
    except KeyError:
        raise ValueError(f"unknown target: {target!r}") from None


def output_path_for(session: Session) -> Path:
    target = session.output if session.output is not None else Path(session.file)
    return target.parent / f"{target.stem}.asm"


def assemble(session: Session, tokens: list[Token], *, target: str = "x86_64") -> CodeGenerator:
    """Generate assembly for ``tokens`` and write it to :func:`output_path_for`.

    Returns the finished generator. The file is truncated up front and stays
    empty if generation fails.
    """
    generator_cls = generator_for(target)

    out = output_path_for(session)
    if not out.parent.is_dir():
        raise AssembleError(kind=AssembleErrorKind.NO_SUCH_FILE_OR_DIRECTORY)

    generator = generator_cls(session, tokens)
    with out.open("w", encoding="utf-8", newline="\n") as fh:
        generator.compile_to_assembly()
        for line in generator.lines:
            fh.write(line + "\n")
    logger.debug("wrote %d lines to %s", len(generator.lines), out)
    return generator
