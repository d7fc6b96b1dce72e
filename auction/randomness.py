"""
Seeded pseudo-random generation.

Every draw in the engine goes through a SeededRandom built for the call,
never the module-level random generator, so equal keys give equal
sequences and concurrent calls never share state.
"""

import hashlib
import random
from typing import Iterable


def stable_seed(parts: Iterable[object]) -> int:
    """64-bit integer seed from the SHA-256 of the "|"-joined parts."""
    text = "|".join("" if part is None else str(part) for part in parts)
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class SeededRandom:
    """
    Deterministic random source keyed by stable input fields.

    Wraps a private random.Random instance.
    """

    def __init__(self, *key_parts: object):
        self.seed = stable_seed(key_parts)
        self._rng = random.Random(self.seed)

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def gauss(self, mean: float, std: float) -> float:
        return self._rng.gauss(mean, std)

    def triangular(self, low: float, high: float, mode: float) -> float:
        return self._rng.triangular(low, high, mode)

    def child(self, *key_parts: object) -> "SeededRandom":
        """Independent generator derived from this seed and extra key parts."""
        return SeededRandom(self.seed, *key_parts)
