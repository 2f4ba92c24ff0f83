"""Hint generator that proposes the next guess from the masked display only."""

from __future__ import annotations

from .matching import RandomSource

GUESS_LENGTH = 3

ALPHABET = 'abcdefghijklmnopqrstuvwxyz0123456789_^(){};%=<>+-*&|"'

# Fragments of common C/C++ code, tried in order.
KEYWORDS: tuple[str, ...] = (
    "int", "for", "if(", "els", "ret", "urn", "cla", "ass", "nam", "esp",
    "#in", "ude", "std", "siz", "lon", "eof", "nul", "ptr", "new", "del",
    "ete", "whi", "ile", "con", "st ", "cou", "t<<", "cin", ">> ", "%d ",
    "sca", "pri", "ntf", '<<"', '"<<',
)


class AutoSuggester:
    """Walks ``KEYWORDS`` once, skipping fragments already visible.

    The cursor moves forward on every call, so each keyword is offered at
    most once per game. After the list runs out, suggestions are random
    strings over ``ALPHABET``.
    """

    def __init__(self, rng: RandomSource, keywords: tuple[str, ...] = KEYWORDS):
        self._rng = rng
        self._keywords = keywords
        self._cursor = 0

    def suggest(self, masked: list[str]) -> str:
        while self._cursor < len(self._keywords):
            keyword = self._keywords[self._cursor]
            self._cursor += 1
            if not any(keyword in line for line in masked):
                return keyword
        return self.random_guess()

    def random_guess(self) -> str:
        picks = self._rng.integers(len(ALPHABET), size=GUESS_LENGTH)
        return "".join(ALPHABET[int(i)] for i in picks)
