from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TARGET = "x86_64"


def default_target() -> str:
    return os.environ.get("RACKC_TARGET", DEFAULT_TARGET)


@dataclass(frozen=True, slots=True)
class CompileOptions:
    source: Path
    output: Path | None = None
    target: str = DEFAULT_TARGET
    dump_tokens: bool = False
    verbosity: int = 0

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CompileOptions":
        return cls(
            source=Path(args.file),
            output=Path(args.output) if args.output is not None else None,
            target=args.target,
            dump_tokens=args.dump_tokens,
            verbosity=args.verbose,
        )

    @property
    def log_level(self) -> int:
        if self.verbosity >= 2:
            return logging.DEBUG
        if self.verbosity == 1:
            return logging.INFO
        return logging.WARNING
