"""
Seeded source of signed 64-bit integers.
"""

import random
from typing import Optional

INT64_BITS = 64
_SIGN_BIT = 1 << (INT64_BITS - 1)


class Randomizer:
    """
    Deterministic integer stream.

    Each call to ``next_rand`` returns a new value in the signed 64-bit
    range. Instances are passed explicitly through the pipeline stages; the
    same seed always reproduces the same sequence.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_rand(self) -> int:
        value = self._rng.getrandbits(INT64_BITS)
        if value & _SIGN_BIT:
            value -= 1 << INT64_BITS
        return value
