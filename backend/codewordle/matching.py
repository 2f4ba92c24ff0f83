"""Exact and fuzzy substring matching against a snippet."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Protocol

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .grid import BLANK, MIN_LEN, RevealGrid, Snippet

logger = logging.getLogger(__name__)

# A window fuzzy-matches with at most this many differing characters...
FUZZY_MAX_MISMATCHES = 1
# ...provided the guess has at least this many non-blank characters.
FUZZY_MIN_VISIBLE = 2


class RandomSource(Protocol):
    """The slice of ``numpy.random.Generator`` the game relies on."""

    def integers(self, low, high=None, size=None): ...


def make_rng(seed: int | None = None) -> np.random.Generator:
    return np.random.default_rng(seed)


@dataclass(frozen=True)
class GuessResult:
    status: Literal["ok", "too_short"]
    exact_count: int = 0
    fuzzy_count: int | None = None  # None while fuzzy matching is disabled


def _codes(text: str) -> np.ndarray:
    return np.fromiter(map(ord, text), dtype=np.int32, count=len(text))


class MatchEngine:
    """Applies guesses and random reveals to the reveal grid of one snippet."""

    def __init__(
        self,
        snippet: Snippet,
        rng: RandomSource,
        fuzzy_enabled: bool = True,
        grid: RevealGrid | None = None,
    ):
        self.snippet = snippet
        self.grid = grid if grid is not None else RevealGrid(snippet)
        self.fuzzy_enabled = fuzzy_enabled
        self._rng = rng
        self._line_codes = [_codes(line) for line in snippet.lines]

    def guess(self, text: str) -> GuessResult:
        """Reveal every window of the snippet that matches *text*.

        Each window is judged on its own: overlapping windows all count, and
        a window that matches exactly is never also counted as fuzzy.
        """
        size = len(text)
        if size < MIN_LEN:
            return GuessResult(status="too_short")

        guess_codes = _codes(text)
        visible_in_guess = sum(1 for c in text if c != BLANK)
        fuzzy_possible = self.fuzzy_enabled and visible_in_guess >= FUZZY_MIN_VISIBLE

        exact_count = 0
        fuzzy_count = 0
        for i, codes in enumerate(self._line_codes):
            if len(codes) < size:
                continue
            mismatches = (sliding_window_view(codes, size) != guess_codes).sum(axis=1)
            exact_starts = np.flatnonzero(mismatches == 0)
            exact_count += len(exact_starts)
            for j in exact_starts:
                self.grid.mark_exact(i, int(j), int(j) + size)

            if not fuzzy_possible:
                continue
            # Exact marks go first; fuzzy marks never touch EXACT cells, so
            # the result matches a left-to-right scan.
            fuzzy_starts = np.flatnonzero(
                (mismatches > 0) & (mismatches <= FUZZY_MAX_MISMATCHES)
            )
            fuzzy_count += len(fuzzy_starts)
            for j in fuzzy_starts:
                self.grid.mark_fuzzy(i, int(j), int(j) + size)

        logger.debug(
            "[match] %r: %d exact, %d fuzzy", text, exact_count, fuzzy_count
        )
        return GuessResult(
            status="ok",
            exact_count=exact_count,
            fuzzy_count=fuzzy_count if self.fuzzy_enabled else None,
        )

    def reveal(self) -> None:
        """Force one uniformly chosen hidden character to EXACT."""
        candidates = self.grid.unrevealed_cells()
        if not candidates:
            return
        line, col = candidates[int(self._rng.integers(len(candidates)))]
        self.grid.set_exact(line, col)
        logger.debug("[match] Revealed (%d, %d)", line, col)

    def check(self) -> bool:
        return self.grid.is_fully_revealed()

    def total_count(self) -> int:
        return self.grid.total_count()

    def guessed_count(self) -> int:
        return self.grid.guessed_count()
