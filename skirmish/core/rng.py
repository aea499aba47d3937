"""
Seeded random number generator shared by a whole combat run.

Every random draw of a run (block rolls, dodge rolls, unarmed damage, healing
amounts) goes through one instance so that a seed reproduces the same combat.
"""

import secrets
from random import Random


class SeededRandom:
    """Wrapper around random.Random exposing the two draws the engine needs."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = secrets.randbits(32)
        self._seed = seed
        self._random = Random(seed)

    @property
    def seed(self) -> int:
        """The seed this generator was created with."""
        return self._seed

    def uniform_int(self, low: int, high: int) -> int:
        """Return a random integer N such that low <= N <= high."""
        if low > high:
            raise ValueError(f"Invalid range [{low}, {high}].")
        return self._random.randint(low, high)

    def percent(self, chance: float) -> bool:
        """Roll a d100 and succeed when the result is at most `chance`."""
        return self.uniform_int(1, 100) <= chance
