from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Anything that yields an integer in [0, stop). `random.Random` qualifies."""

    def randrange(self, stop: int) -> int:
        ...


def make_rng(seed: Optional[int] = None) -> RandomSource:
    return random.Random(seed)
