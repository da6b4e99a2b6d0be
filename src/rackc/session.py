from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from .diagnostics import Diagnostic, report
from .errors import ReadErrorKind, SourceReadError
from .spans import Span

logger = logging.getLogger(__name__)


def read_source(path: str | Path) -> str:
    p = Path(path).expanduser()
    if not p.exists():
        raise SourceReadError(kind=ReadErrorKind.NO_SUCH_FILE, path=str(p))
    if not p.is_file():
        raise SourceReadError(kind=ReadErrorKind.NON_REGULAR_FILE, path=str(p))
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(kind=ReadErrorKind.UNABLE_TO_OPEN, path=str(p)) from e


@dataclass(slots=True)
class Session:
    """State shared by every stage compiling one source file.

    The source text is loaded from ``file`` on first access and cached; the
    diagnostics list is append-only and drained by :meth:`report` once the
    pipeline has finished.
    """

    file: str
    output: Path | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    _text: str | None = field(default=None, repr=False)

    @classmethod
    def from_source(cls, src: str, *, file: str = "<memory>", output: str | Path | None = None) -> "Session":
        return cls(file=file, output=Path(output) if output is not None else None, _text=src)

    @property
    def text(self) -> str:
        if self._text is None:
            logger.debug("loading source text from %s", self.file)
            self._text = read_source(self.file)
        return self._text

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def span(self, start: int, end: int) -> Span:
        return Span(file=self.file, start=start, end=end)

    def push(self, message: str, span: Span) -> None:
        self.diagnostics.append(Diagnostic(message=message, span=span))

    def report(self, *, console: Console | None = None) -> int:
        return report(self.diagnostics, self.text, console=console)
