from __future__ import annotations

import argparse

from rackc import Session, lex


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="dump_tokens")
    ap.add_argument("file")
    args = ap.parse_args(argv)

    session = Session(file=args.file)
    tokens = lex(session)
    print(f"tokens: {len(tokens)}")
    for i, tok in enumerate(tokens):
        print(f"{i:>4}: {tok.format()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
