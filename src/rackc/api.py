from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .codegen import assemble, generator_for, output_path_for
from .diagnostics import Diagnostic
from .lexer import lex
from .session import Session
from .tokens import Token
from . import x86_64  # noqa: F401  (registers the x86_64 target)


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Outcome of a pipeline run that did not hit a fatal error.

    Diagnostics are kept apart from the output: a result that still carries
    diagnostics must not be trusted.
    """

    assembly: str
    strings: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...]
    output: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def lex_source(src: str, *, file: str = "<memory>") -> list[Token]:
    return lex(Session.from_source(src, file=file))


def compile_session(session: Session, *, target: str = "x86_64") -> CompileResult:
    """Run the pipeline in memory. Fatal errors propagate; diagnostics stay on ``session``."""
    tokens = lex(session)
    generator = generator_for(target)(session, tokens)
    generator.compile_to_assembly()
    return CompileResult(
        assembly=generator.text,
        strings=tuple(generator.strings),
        diagnostics=tuple(session.diagnostics),
    )


def compile_source(src: str, *, file: str = "<memory>", target: str = "x86_64") -> CompileResult:
    return compile_session(Session.from_source(src, file=file), target=target)


def compile_file(
    path: str | Path,
    *,
    output: str | Path | None = None,
    target: str = "x86_64",
) -> CompileResult:
    """Compile ``path`` and write ``<output dir>/<stem>.asm``."""
    session = Session(file=str(Path(path).expanduser()), output=Path(output) if output is not None else None)
    tokens = lex(session)
    generator = assemble(session, tokens, target=target)
    return CompileResult(
        assembly=generator.text,
        strings=tuple(generator.strings),
        diagnostics=tuple(session.diagnostics),
        output=output_path_for(session),
    )
