"""Turn handling shared by the console and HTTP front-ends."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .sessions import GameSession, SessionState
from .suggest import AutoSuggester

logger = logging.getLogger(__name__)

END_TOKEN = "E"
AUTO_TOKEN = "A"


@dataclass
class TurnOutcome:
    state: SessionState
    messages: list[str] = field(default_factory=list)
    summary: str | None = None  # set once the game has ended


class GameController:
    """Drives one started session from the first guess to the end."""

    def __init__(self, session: GameSession, suggester: AutoSuggester | None = None):
        self.session = session
        self.suggester = suggester or AutoSuggester(session.rng)
        self.summary: str | None = None

    @property
    def state(self) -> SessionState:
        return self.session.state

    def display_lines(self) -> list[str]:
        return self.session.display_lines()

    def check(self) -> TurnOutcome:
        """End the game if it is already won or its limit has been reached."""
        if self.state is SessionState.ACTIVE:
            if self.session.is_finished():
                self.summary = self.session.win()
            elif self.session.is_over():
                self.summary = self.session.lose()
        return TurnOutcome(state=self.state, summary=self.summary)

    def submit(self, text: str) -> TurnOutcome:
        if self.state is not SessionState.ACTIVE:
            raise RuntimeError("Game already finished")

        # The clock may have run out while the player was typing.
        outcome = self.check()
        if outcome.state is not SessionState.ACTIVE:
            logger.warning("[game] Input %r arrived after the game ended", text)
            return outcome

        if text == END_TOKEN:
            self.summary = self.session.lose()
            return TurnOutcome(state=self.state, summary=self.summary)

        if text == AUTO_TOKEN:
            hint = self.suggester.suggest(self.session.masked_view())
            return TurnOutcome(state=self.state, messages=[hint])

        messages = self.session.make_guess(text)
        outcome = self.check()
        outcome.messages = messages
        return outcome
