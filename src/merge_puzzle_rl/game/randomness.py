from __future__ import annotations

from typing import Optional, Protocol, Sequence, TypeVar

import numpy as np


T = TypeVar("T")


class RandomSource(Protocol):
    """Randomness consumed by tile spawning.

    Swap in a scripted implementation to make spawns deterministic.
    """

    def uniform_index(self, n: int) -> int:
        ...

    def weighted_choice(self, values: Sequence[T], weights: Sequence[float]) -> T:
        ...


class GeneratorSource:
    """RandomSource backed by a numpy Generator (e.g. a gymnasium env's np_random)."""

    def __init__(self, generator: Optional[np.random.Generator] = None, seed: Optional[int] = None) -> None:
        self.generator = generator if generator is not None else np.random.default_rng(seed)

    def uniform_index(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"Cannot pick an index from an empty range (n={n})")
        return int(self.generator.integers(n))

    def weighted_choice(self, values: Sequence[T], weights: Sequence[float]) -> T:
        idx = self.generator.choice(len(values), p=np.asarray(weights, dtype=np.float64))
        return values[int(idx)]
