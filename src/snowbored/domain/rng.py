from __future__ import annotations
from typing import Protocol


class RandomSource(Protocol):
    def random(self) -> float:  # returns in [0.0, 1.0)
        ...


def pick_index(rng: RandomSource, n: int) -> int:
    # Uniform in [0, n); guards against rng.random() implementations returning 1.0.
    return min(int(rng.random() * n), n - 1)
