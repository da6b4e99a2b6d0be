from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.logging import RichHandler

from .codegen import TARGETS, assemble, output_path_for
from .config import CompileOptions, default_target
from .diagnostics import stderr_console
from .errors import AssembleError, LexError, SourceReadError
from .lexer import lex
from .session import Session, read_source
from . import x86_64  # noqa: F401  (registers the x86_64 target)

logger = logging.getLogger(__name__)


def _setup_logging(level: int, console: Console) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="rackc", description="Compile a rack source file to x86-64 NASM assembly")
    ap.add_argument("file", help="path to file to compile")
    ap.add_argument("-o", "--output", default=None, help="output path; the assembly is written as <dir>/<stem>.asm")
    ap.add_argument("--target", choices=sorted(TARGETS), default=default_target(), help="code generation target")
    ap.add_argument("--dump-tokens", action="store_true", help="print the token stream and exit")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="more logging (repeatable)")
    args = ap.parse_args(argv)
    # argparse does not check defaults against choices.
    if args.target not in TARGETS:
        ap.error(f"unknown target {args.target!r} (set by RACKC_TARGET)")

    opts = CompileOptions.from_args(args)
    console = stderr_console()
    _setup_logging(opts.log_level, console)

    try:
        text = read_source(opts.source)
    except SourceReadError as e:
        print(f"[ERROR]: error occurred while reading file {opts.source}: {e.kind.value}")
        return 1
    session = Session.from_source(text, file=str(opts.source), output=opts.output)

    try:
        tokens = lex(session)
        if opts.dump_tokens:
            for tok in tokens:
                print(tok.format())
            if session.has_errors:
                session.report(console=console)
                return 1
            return 0
        assemble(session, tokens, target=opts.target)
    except (LexError, AssembleError) as e:
        logger.info("compilation failed: %s", e)
        session.report(console=console)
        if not session.has_errors:
            console.print(f"error: {e}", markup=False, highlight=False)
        return 1

    if session.has_errors:
        session.report(console=console)
        return 1

    logger.info("wrote %s", output_path_for(session))
    return 0
