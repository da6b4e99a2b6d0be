from __future__ import annotations

import argparse
import hashlib

from rackc import compile_source


def _generate(seed: int | None, count: int) -> list[str]:
    from rackc.testing import SNAPSHOT_SOURCES, generate_sources

    if seed is None:
        return list(SNAPSHOT_SOURCES)
    return generate_sources(seed=seed, count=count)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="compute_snapshot_hash")
    ap.add_argument("--seed", type=int, default=None, help="hash a generated corpus instead of the fixed one")
    ap.add_argument("--count", type=int, default=1000)
    args = ap.parse_args(argv)

    h = hashlib.sha256()
    for i, src in enumerate(_generate(args.seed, args.count)):
        res = compile_source(src, file=f"snapshot:{i}.rk")
        if not res.ok:
            raise SystemExit(f"diagnostics reported for case {i}")
        h.update(res.assembly.encode("utf-8"))
        h.update(b"\n---\n")

    print(h.hexdigest())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
