"""Diagnostics collected while lexing and generating code, and their rendering.

Diagnostics never abort the pipeline on their own. They are accumulated on the
session and rendered once, after the pipeline ran, with the offending source
line and a caret marker under the span::

    error: undeclared function foo
     --> main.rk:1:22
      |
    1 | fn main -> int begin foo end
      |                      ^^^ undeclared function foo
      |
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from rich.console import Console
from rich.text import Text

from .spans import Span, line_index, line_spans, position_of


@dataclass(frozen=True, slots=True)
class Diagnostic:
    message: str
    span: Span


def stderr_console() -> Console:
    return Console(stderr=True, highlight=False)


def render_diagnostic(diag: Diagnostic, text: str, console: Console) -> None:
    if not text:
        return

    lines = line_spans(text, file=diag.span.file)
    shown = lines[line_index(lines, diag.span.start)]
    number = line_index(lines, max(diag.span.start, diag.span.end - 1)) + 1

    line_text = shown.slice(text).rstrip("\r\n")
    col0 = min(diag.span.start - shown.start, len(line_text))
    width = max(1, min(diag.span.end, shown.start + len(line_text)) - diag.span.start)
    # Keep tabs so the caret line expands the same way as the source line.
    pad = "".join("\t" if c == "\t" else " " for c in line_text[:col0])
    gutter = " " * len(str(number))

    console.print(Text.assemble(("error", "bold red"), (f": {diag.message}", "bold")), soft_wrap=True)
    column = position_of(text, diag.span.start).column
    console.print(Text(f"{gutter}--> {diag.span.file}:{number}:{column}", style="blue"), soft_wrap=True)
    console.print(Text(f"{gutter} |", style="blue"), soft_wrap=True)
    console.print(Text.assemble((f"{number} | ", "blue"), line_text), soft_wrap=True)
    console.print(
        Text.assemble((f"{gutter} | ", "blue"), pad, ("^" * width + f" {diag.message}", "bold red")),
        soft_wrap=True,
    )
    console.print(Text(f"{gutter} |", style="blue"), soft_wrap=True)


def report(diagnostics: Iterable[Diagnostic], text: str, *, console: Console | None = None) -> int:
    """Render every diagnostic in insertion order; returns how many there were."""
    console = console or stderr_console()
    count = 0
    for diag in diagnostics:
        render_diagnostic(diag, text, console)
        count += 1
    if count:
        plural = "error" if count == 1 else "errors"
        console.print(
            Text.assemble(("error", "bold red"), (f": aborting due to {count} previous {plural}", "bold")),
            soft_wrap=True,
        )
    return count
