"""
Shared fixtures for the skirmish test-suite.
"""

from collections import deque

import pytest
from skirmish.core.rng import SeededRandom


class ScriptedRandom(SeededRandom):
    """A generator returning pre-recorded values, failing when it runs dry."""

    def __init__(self, values) -> None:
        super().__init__(seed=0)
        self.values = deque(values)
        self.calls: list[tuple[int, int]] = []

    def uniform_int(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        if not self.values:
            raise AssertionError(f"Unexpected draw in [{low}, {high}].")
        value = self.values.popleft()
        assert low <= value <= high, f"Scripted value {value} outside [{low}, {high}]."
        return value


@pytest.fixture
def scripted_rng():
    """Factory building a generator that returns the given values in order."""

    def factory(*values: int) -> ScriptedRandom:
        return ScriptedRandom(values)

    return factory
