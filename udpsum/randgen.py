"""Generate random request values for feeding to the client."""

from __future__ import annotations

import random
import sys
from typing import Iterator

MAX_NUM = 50
MAX_REP = 1_000_000


def generate(
    count: int = MAX_REP, max_num: int = MAX_NUM, rng: random.Random | None = None
) -> Iterator[int]:
    """Yield ``count`` random integers between 1 and ``max_num``."""
    if max_num < 1:
        raise ValueError("max_num must be at least 1")
    if rng is None:
        rng = random.Random()
    for _ in range(count):
        yield rng.randint(1, max_num)


def main(argv: list[str] | None = None) -> int:
    """Print random values, one per line, and their sum on standard error."""
    argv = sys.argv if argv is None else argv
    count = MAX_REP
    if len(argv) > 1:
        try:
            count = int(argv[1])
        except ValueError:
            print(f"invalid count: {argv[1]}", file=sys.stderr)
            return 1
    total = 0
    out = sys.stdout
    for number in generate(count):
        out.write(f"{number}\n")
        total += number
    out.flush()
    print(f"#### sum == {total}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())