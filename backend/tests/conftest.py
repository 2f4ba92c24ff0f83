"""Shared fixtures: temporary snippet store, ledger and predictable randomness."""

import numpy as np
import pytest
from codewordle.repository import SnippetRepository
from codewordle.stats import StatisticsLedger


class ScriptedRng:
    """Stand-in for ``numpy.random.Generator.integers`` returning preset values."""

    def __init__(self, *values: int):
        self.values = list(values)
        self.calls: list[tuple] = []

    def integers(self, low, high=None, size=None):
        self.calls.append((low, high, size))
        if size is None:
            return self.values.pop(0)
        return np.array([self.values.pop(0) for _ in range(size)])


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def repo(tmp_path):
    return SnippetRepository(tmp_path / "snippets")


@pytest.fixture
def ledger(tmp_path):
    return StatisticsLedger(tmp_path / "stats.json")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
