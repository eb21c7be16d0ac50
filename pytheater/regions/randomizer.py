from __future__ import annotations

import random
from typing import Optional


class Randomizer:
    """
    Seeded random source for region generation. Use a seed to get the same
    spawn selection across runs.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high]; fails fast when low > high."""
        if low > high:
            raise ValueError(f"randint lower bound {low} exceeds upper bound {high}")
        return self.rng.randint(low, high)

    def index(self, length: int) -> int:
        """Uniform index into a sequence of `length` items."""
        if length < 1:
            raise ValueError("Cannot pick an index from an empty sequence")
        return self.randint(0, length - 1)
