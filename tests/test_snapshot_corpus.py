from __future__ import annotations

import hashlib
import os

from rackc import compile_source
from rackc.testing import SNAPSHOT_SOURCES, generate_sources


# Update this by running: `python scripts/compute_snapshot_hash.py`
EXPECTED_SHA256 = "6c8252d22b84788ccb7b92f7e8b3a3c67905812054268a3bbbfe02b5913721e8"


def _digest(sources: list[str] | tuple[str, ...]) -> str:
    h = hashlib.sha256()
    for i, src in enumerate(sources):
        res = compile_source(src, file=f"snapshot:{i}.rk")
        assert res.ok, f"case {i} reported diagnostics: {res.diagnostics}"
        h.update(res.assembly.encode("utf-8"))
        h.update(b"\n---\n")
    return h.hexdigest()


def test_snapshot_corpus_hash() -> None:
    digest = _digest(SNAPSHOT_SOURCES)
    assert digest == EXPECTED_SHA256, f"snapshot output changed\nexpected {EXPECTED_SHA256}\nactual   {digest}"


def test_generated_corpus_is_deterministic() -> None:
    seed = int(os.environ.get("RACKC_SNAPSHOT_SEED", "1"))
    count = int(os.environ.get("RACKC_SNAPSHOT_CASES", "300"))

    sources = generate_sources(seed=seed, count=count)
    assert sources == generate_sources(seed=seed, count=count)
    assert _digest(sources) == _digest(sources)
