from __future__ import annotations

import random
import string

from ..tokens import KEYWORDS

_BUILTINS = ("print", "puts")
_TYPES = ("int", "void", "u64")

# Fixed programs whose compiled output is pinned by the snapshot test.
SNAPSHOT_SOURCES = (
    "fn main -> int begin end\n",
    'fn main -> int begin "hi\\n" puts end\n',
    'fn helper -> void begin\n    "x" print\nend\n\nfn main -> int begin "ab" puts "ab" puts end\n',
)


def _ident(r: random.Random) -> str:
    head = r.choice(string.ascii_letters + "_")
    tail = "".join(r.choice(string.ascii_letters + string.digits + "_") for _ in range(r.randint(0, 10)))
    s = head + tail
    if s in KEYWORDS or s in _BUILTINS or s == "main":
        return s + "_"
    return s


def _string_lit(r: random.Random) -> str:
    alphabet = string.ascii_letters + string.digits + " _-/.,!?"
    s = "".join(r.choice(alphabet) for _ in range(r.randint(0, 24)))
    if r.random() < 0.3:
        s += "\\n"
    return '"' + s + '"'


def generate_sources(*, seed: int, count: int) -> list[str]:
    """Generate ``count`` well-formed programs; same seed, same programs."""
    r = random.Random(seed)
    return [_gen_one(r) for _ in range(count)]


def generate_corpus_files(*, seed: int, count: int) -> list[tuple[str, str]]:
    """Generate a deterministic corpus as a *file set*.

    Returns a list of (relative_path, source) with stable names
    `case_000000.rk`, ...
    """
    names = [f"case_{i:06d}.rk" for i in range(count)]
    return list(zip(names, generate_sources(seed=seed, count=count)))


def _gen_one(r: random.Random) -> str:
    funcs = [_gen_function(r, _ident(r)) for _ in range(r.randint(0, 3))]
    funcs.insert(r.randint(0, len(funcs)), _gen_function(r, "main"))
    return "\n\n".join(funcs) + "\n"


def _gen_function(r: random.Random, name: str) -> str:
    lines = [f"fn {name} -> {r.choice(_TYPES)} begin"]
    for _ in range(r.randint(0, 6)):
        if r.random() < 0.7:
            lines.append(f"    {_string_lit(r)} puts")
        else:
            lines.append(f"    {_string_lit(r)} print")
    lines.append("end")
    return "\n".join(lines)
