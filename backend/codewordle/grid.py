"""Snippet text and the per-character reveal state laid over it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

MIN_LEN = 3
BLANK = " "
TAB_WIDTH = 4


class CellState(IntEnum):
    UNGUESSED = 0
    FUZZY = 1
    EXACT = 2


@dataclass(frozen=True)
class Snippet:
    snippet_id: str
    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, snippet_id: str, text: str) -> Snippet:
        """Build a snippet from raw source text.

        Tabs become 4 spaces and every line gets ``MIN_LEN - 1`` trailing
        blanks, so the last visible character of a line still starts a
        window of minimum length.
        """
        pad = BLANK * (MIN_LEN - 1)
        lines = tuple(
            line.replace("\t", BLANK * TAB_WIDTH) + pad for line in text.splitlines()
        )
        return cls(snippet_id=snippet_id, lines=lines)


class RevealGrid:
    """Reveal state for every character position of one snippet.

    Blank cells are tracked but never change state and never count towards
    the totals.
    """

    def __init__(self, snippet: Snippet):
        self.snippet = snippet
        self._states: list[np.ndarray] = [
            np.zeros(len(line), dtype=np.int8) for line in snippet.lines
        ]
        self._visible: list[np.ndarray] = [
            np.fromiter((c != BLANK for c in line), dtype=bool, count=len(line))
            for line in snippet.lines
        ]

    def cell_state(self, line: int, col: int) -> CellState:
        return CellState(int(self._states[line][col]))

    def set_exact(self, line: int, col: int) -> None:
        if self._visible[line][col]:
            self._states[line][col] = CellState.EXACT

    def set_fuzzy_if_unguessed(self, line: int, col: int) -> None:
        if self._visible[line][col] and self._states[line][col] == CellState.UNGUESSED:
            self._states[line][col] = CellState.FUZZY

    def mark_exact(self, line: int, start: int, stop: int) -> None:
        window = self._states[line][start:stop]
        window[self._visible[line][start:stop]] = CellState.EXACT

    def mark_fuzzy(self, line: int, start: int, stop: int) -> None:
        window = self._states[line][start:stop]
        window[(window == CellState.UNGUESSED) & self._visible[line][start:stop]] = (
            CellState.FUZZY
        )

    def total_count(self) -> int:
        return int(sum(visible.sum() for visible in self._visible))

    def guessed_count(self) -> int:
        return int(
            sum(
                ((states == CellState.EXACT) & visible).sum()
                for states, visible in zip(self._states, self._visible)
            )
        )

    def is_fully_revealed(self) -> bool:
        return self.guessed_count() == self.total_count()

    def unrevealed_cells(self) -> list[tuple[int, int]]:
        """Every visible (line, col) that is not yet EXACT, in reading order."""
        cells: list[tuple[int, int]] = []
        for i, (states, visible) in enumerate(zip(self._states, self._visible)):
            for j in np.flatnonzero(visible & (states != CellState.EXACT)):
                cells.append((i, int(j)))
        return cells

    def masked_view(
        self, exact_placeholder: str = "@", fuzzy_placeholder: str = "#"
    ) -> list[str]:
        """One string per line, with hidden cells replaced by a placeholder.

        Each placeholder must be a single character so rows keep their width.
        """
        for placeholder in (exact_placeholder, fuzzy_placeholder):
            if len(placeholder) != 1:
                raise ValueError(f"Placeholder must be one character: {placeholder!r}")
        view: list[str] = []
        for line, states, visible in zip(self.snippet.lines, self._states, self._visible):
            chars = np.array(list(line), dtype="<U1")
            chars[visible & (states == CellState.UNGUESSED)] = exact_placeholder
            chars[visible & (states == CellState.FUZZY)] = fuzzy_placeholder
            view.append("".join(chars))
        return view
