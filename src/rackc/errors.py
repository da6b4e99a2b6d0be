from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .spans import Span


class LexErrorKind(str, Enum):
    EOF = "Eof"
    EMPTY_SOURCE = "EmptySource"
    UNEXPECTED_CHARACTER = "UnexpectedCharacter"


class AssembleErrorKind(str, Enum):
    EOF = "Eof"
    NO_SUCH_FILE_OR_DIRECTORY = "NoSuchFileOrDirectory"
    MISSING_FUNCTION_NAME = "MissingFunctionName"
    MISSING_FUNCTION_PARAMETERS_OR_RETURN_TYPE = "MissingFunctionParametersOrReturnType"
    NO_BEGIN_TOKEN = "NoBeginToken"
    NO_END_TOKEN = "NoEndToken"
    UNDECLARED_FUNCTION = "UndeclaredFunction"
    NOT_IMPLEMENTED = "NotImplemented"


class ReadErrorKind(str, Enum):
    NO_SUCH_FILE = "no such file"
    NON_REGULAR_FILE = "not a regular file"
    UNABLE_TO_OPEN = "unable to open file"


class RackError(Exception):
    """Base class for every fatal error raised by the compiler."""


@dataclass(slots=True)
class LexError(RackError):
    kind: LexErrorKind
    span: Span | None = None

    def __str__(self) -> str:
        base = f"LexError::{self.kind.value}"
        if self.span is not None:
            return f"{base} at {self.span.format()}"
        return base


@dataclass(slots=True)
class AssembleError(RackError):
    kind: AssembleErrorKind
    span: Span | None = None

    def __str__(self) -> str:
        base = f"AssembleError::{self.kind.value}"
        if self.span is not None:
            return f"{base} at {self.span.format()}"
        return base


@dataclass(slots=True)
class SourceReadError(RackError):
    kind: ReadErrorKind
    path: str

    def __str__(self) -> str:
        return f"{self.path}: {self.kind.value}"
