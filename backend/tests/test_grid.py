"""Tests for snippet loading and the reveal grid."""

import pytest
from codewordle.grid import CellState, RevealGrid, Snippet


def _grid(text: str) -> RevealGrid:
    return RevealGrid(Snippet.from_text("t", text))


# ── Snippet ───────────────────────────────────────────────────────────────

class TestSnippet:
    def test_lines_padded_with_two_blanks(self):
        snippet = Snippet.from_text("1", "ab\nc")
        assert snippet.lines == ("ab  ", "c  ")

    def test_tabs_become_four_spaces(self):
        snippet = Snippet.from_text("1", "\tx")
        assert snippet.lines == ("    x  ",)

    def test_empty_lines_kept(self):
        snippet = Snippet.from_text("1", "a\n\nb")
        assert len(snippet.lines) == 3
        assert snippet.lines[1] == "  "


# ── RevealGrid ────────────────────────────────────────────────────────────

class TestRevealGrid:
    def test_counts_ignore_blanks(self):
        grid = _grid("int x;\n  y")
        assert grid.total_count() == 6
        assert grid.guessed_count() == 0

    def test_initial_mask(self):
        grid = _grid("ab c")
        assert grid.masked_view() == ["@@ @  "]

    def test_custom_placeholders(self):
        grid = _grid("abc")
        grid.set_fuzzy_if_unguessed(0, 1)
        assert grid.masked_view("?", "~") == ["?~?  "]

    @pytest.mark.parametrize("placeholders", [("@@", "#"), ("@", ""), ("@", "##")])
    def test_placeholders_must_be_one_character(self, placeholders):
        grid = _grid("abc")
        with pytest.raises(ValueError):
            grid.masked_view(*placeholders)

    def test_set_exact_reveals_character(self):
        grid = _grid("abc")
        grid.set_exact(0, 2)
        assert grid.cell_state(0, 2) is CellState.EXACT
        assert grid.masked_view() == ["@@c  "]
        assert grid.guessed_count() == 1

    def test_fuzzy_does_not_downgrade_exact(self):
        grid = _grid("abc")
        grid.set_exact(0, 0)
        grid.set_fuzzy_if_unguessed(0, 0)
        assert grid.cell_state(0, 0) is CellState.EXACT

    def test_exact_overrides_fuzzy(self):
        grid = _grid("abc")
        grid.set_fuzzy_if_unguessed(0, 0)
        assert grid.cell_state(0, 0) is CellState.FUZZY
        grid.set_exact(0, 0)
        assert grid.cell_state(0, 0) is CellState.EXACT

    def test_blank_cells_never_change(self):
        grid = _grid("a b")
        grid.set_exact(0, 1)
        grid.mark_fuzzy(0, 0, 3)
        assert grid.cell_state(0, 1) is CellState.UNGUESSED
        assert grid.masked_view() == ["# #  "]

    def test_mark_ranges(self):
        grid = _grid("abcdef")
        grid.mark_fuzzy(0, 0, 4)
        grid.mark_exact(0, 2, 5)
        states = [grid.cell_state(0, j) for j in range(6)]
        assert states == [
            CellState.FUZZY,
            CellState.FUZZY,
            CellState.EXACT,
            CellState.EXACT,
            CellState.EXACT,
            CellState.UNGUESSED,
        ]

    def test_fully_revealed(self):
        grid = _grid("ab\n c")
        assert not grid.is_fully_revealed()
        for line, col in [(0, 0), (0, 1), (1, 1)]:
            grid.set_exact(line, col)
        assert grid.is_fully_revealed()
        assert grid.masked_view() == ["ab  ", " c  "]

    def test_unrevealed_cells_in_reading_order(self):
        grid = _grid("a b\ncd")
        grid.set_exact(1, 0)
        assert grid.unrevealed_cells() == [(0, 0), (0, 2), (1, 1)]
