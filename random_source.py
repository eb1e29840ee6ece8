from __future__ import annotations

"""Random variate service.

Every core function takes a ``RandomSource`` argument instead of touching the
global ``random`` module, so a seeded source reproduces a whole simulation.
Each public function documents the order in which it draws.
"""

import hashlib
import random
from typing import Optional


def stable_seed(*parts: str) -> int:
    """Deterministic seed from string parts (stable across runs)."""
    h = hashlib.sha256("|".join([str(p) for p in parts]).encode("utf-8")).hexdigest()
    return int(h[:16], 16)


class RandomSource:
    """Thin wrapper over ``random.Random`` exposing the draws the models use."""

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    @classmethod
    def from_parts(cls, *parts: str) -> "RandomSource":
        return cls(stable_seed(*parts))

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def uniform(self, lo: float, hi: float) -> float:
        return self._rng.uniform(float(lo), float(hi))

    def gauss(self, mu: float = 0.0, sigma: float = 1.0) -> float:
        return self._rng.gauss(float(mu), float(sigma))

    def randint(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi], both ends inclusive."""
        return self._rng.randint(int(lo), int(hi))
