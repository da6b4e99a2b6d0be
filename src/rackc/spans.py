from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A concrete source position.

    Offsets are 0-based; line/column are 1-based for user-facing messages.
    """

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [start, end) in a single file.

    Offsets index the decoded source text of ``file``.
    """

    file: str
    start: int
    end: int

    def __post_init__(self) -> None:
        assert 0 <= self.start <= self.end, f"malformed span [{self.start}, {self.end})"

    def __len__(self) -> int:
        return self.end - self.start

    def to(self, other: Span) -> Span:
        return Span(file=self.file, start=self.start, end=max(self.end, other.end))

    def slice(self, text: str) -> str:
        return text[self.start : self.end]

    def format(self) -> str:
        return f"{self.file}:{self.start}-{self.end}"


def line_spans(text: str, *, file: str = "") -> list[Span]:
    """Split ``text`` into line spans, each including its trailing newline.

    A final line without a newline still gets a span reaching end of text.
    """
    lines: list[Span] = []
    start = 0
    for i, ch in enumerate(text):
        if ch == "\n":
            lines.append(Span(file=file, start=start, end=i + 1))
            start = i + 1
    if start < len(text):
        lines.append(Span(file=file, start=start, end=len(text)))
    return lines


def line_index(lines: list[Span], offset: int) -> int:
    for i, line in enumerate(lines):
        if line.start <= offset < line.end:
            return i
    # Offsets at (or past) end of text belong to the last line.
    return len(lines) - 1


def position_of(text: str, offset: int) -> Position:
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(offset=offset, line=line, column=offset - line_start + 1)
