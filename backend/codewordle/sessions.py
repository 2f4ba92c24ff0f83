"""Game sessions and the rules of the three game modes.

A ``GameSession`` holds everything a single play-through needs (snippet,
reveal grid, attempt counter, feature flags) and delegates the mode-specific
decisions (when to auto-reveal, when the game is over, how it is scored) to a
policy object selected by ``GameMode``.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable

from . import config
from .grid import MIN_LEN, Snippet
from .matching import GuessResult, MatchEngine, RandomSource, make_rng
from .repository import SnippetRepository
from .stats import StatisticsLedger, format_history_line, format_timestamp

logger = logging.getLogger(__name__)

SHOW_SOURCE_TOKEN = "P"
ENABLE_FUZZY_TOKEN = "F"

Clock = Callable[[], float]


class ConfigurationError(ValueError):
    """Invalid game parameters."""


class GameMode(str, Enum):
    LIMITED = "limited"
    TIMED = "timed"
    POINT = "point"


class SessionState(str, Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


# ---------------------------------------------------------------------------
# Mode policies
# ---------------------------------------------------------------------------


class ModePolicy:
    """Rules shared by every mode; subclasses override what differs."""

    mode: GameMode
    label: str
    fuzzy_by_default = True
    source_by_default = True

    def on_start(self, session: GameSession) -> None:
        pass

    def reveal_times(self, session: GameSession) -> int:
        return 0

    def is_over(self, session: GameSession) -> bool:
        return False

    def status_lines(self, session: GameSession) -> list[str]:
        return [f"{session.attempts} guesses"]

    def prompt_lines(self, session: GameSession) -> list[str]:
        return [
            f"Enter your guesses (>= {MIN_LEN} chars), or end the game by "
            "entering E, or get an auto guess by entering A"
        ]

    def history_info(self, session: GameSession, won: bool) -> str:
        return "Win" if won else "Lose"

    def outcome(self, session: GameSession, won: bool) -> float:
        return 1 if won else 0

    def summary(self, session: GameSession, won: bool) -> str:
        return "You win!" if won else "You lose."


class LimitedAttemptsPolicy(ModePolicy):
    """A fixed number of guesses; one character is revealed every 5 guesses."""

    mode = GameMode.LIMITED
    label = "Limited Guesses"

    MIN_ATTEMPTS = 30
    REVEAL_EVERY = 5

    def __init__(self):
        self.max_attempts = self.MIN_ATTEMPTS

    def on_start(self, session: GameSession) -> None:
        self.max_attempts = max(session.engine.total_count() // 3 + 5, self.MIN_ATTEMPTS)

    def reveal_times(self, session: GameSession) -> int:
        return 1 if session.attempts % self.REVEAL_EVERY == 0 else 0

    def is_over(self, session: GameSession) -> bool:
        return session.attempts >= self.max_attempts

    def status_lines(self, session: GameSession) -> list[str]:
        return [f"Guesses: {session.attempts}/{self.max_attempts}"]

    def history_info(self, session: GameSession, won: bool) -> str:
        result = "Win" if won else "Lose"
        return f"guesses: {session.attempts}/{self.max_attempts} {result}"

    def summary(self, session: GameSession, won: bool) -> str:
        if won:
            return f"You win! You only used {session.attempts} guesses!"
        return f"You lose. You have used {session.attempts} guesses."


class TimedPolicy(ModePolicy):
    """A time limit; one character is revealed for every 10 seconds played."""

    mode = GameMode.TIMED
    label = "Time Attack"

    MIN_SECONDS = 60
    REVEAL_INTERVAL = 10

    def __init__(self, clock: Clock = time.monotonic):
        self.clock = clock
        self.max_seconds = self.MIN_SECONDS
        self.started_at = 0.0
        self.last_reveal = 0.0

    def on_start(self, session: GameSession) -> None:
        self.max_seconds = int(
            max(session.engine.total_count() / 1.5 + 10, self.MIN_SECONDS)
        )
        self.started_at = self.clock()
        self.last_reveal = self.started_at

    def elapsed(self) -> int:
        return int(self.clock() - self.started_at)

    def reveal_times(self, session: GameSession) -> int:
        # Only whole intervals are consumed; the remainder carries over.
        count = int((self.clock() - self.last_reveal) // self.REVEAL_INTERVAL)
        self.last_reveal += count * self.REVEAL_INTERVAL
        return count

    def is_over(self, session: GameSession) -> bool:
        return self.elapsed() >= self.max_seconds

    def status_lines(self, session: GameSession) -> list[str]:
        return [f"Time: {self.elapsed()}s/{self.max_seconds}s"]

    def history_info(self, session: GameSession, won: bool) -> str:
        result = "Win" if won else "Lose"
        return f"time: {self.elapsed()}s/{self.max_seconds}s {result}"

    def summary(self, session: GameSession, won: bool) -> str:
        if won:
            return f"You win! You only used {self.elapsed()} seconds!"
        return f"You lose. You have used {self.elapsed()} seconds."


class PointPolicy(ModePolicy):
    """Unlimited guesses scored by how much was revealed and how many tries it took.

    Fuzzy matching and the source line start disabled; turning either on
    scales the final score down.
    """

    mode = GameMode.POINT
    label = "Point"
    fuzzy_by_default = False
    source_by_default = False

    SOURCE_PENALTY = 0.5
    FUZZY_PENALTY = 0.8

    def __init__(
        self,
        guess_penalty: float = 100,
        point_factor: float = 500,
        reward_factor: float = 1.5,
    ):
        if guess_penalty <= 0:
            raise ConfigurationError("Guess penalty must be positive")
        if point_factor <= 0:
            raise ConfigurationError("Point factor must be positive")
        if reward_factor < 1.0:
            raise ConfigurationError("Reward factor must be not less than 1.0")
        self.guess_penalty = guess_penalty
        self.point_factor = point_factor
        self.reward_factor = reward_factor

    def points(self, session: GameSession) -> float:
        guessed = session.engine.guessed_count()
        total = session.engine.total_count()
        base = self.point_factor * guessed * guessed / total if total else 0.0
        points = base - self.guess_penalty * session.attempts
        if session.show_source:
            points *= self.SOURCE_PENALTY
        if session.fuzzy_enabled:
            points *= self.FUZZY_PENALTY
        if guessed == total:
            points *= self.reward_factor
        return points

    def status_lines(self, session: GameSession) -> list[str]:
        return [f"Points: {self.points(session):.2f}"]

    def prompt_lines(self, session: GameSession) -> list[str]:
        return [
            "Enter P to show the snippet ID, or F to enable fuzzy match",
            "The game will be easier, but you will get LESS points",
            f"Enter your guesses (>= {MIN_LEN} chars), or end the game by entering E",
        ]

    def history_info(self, session: GameSession, won: bool) -> str:
        result = "Win" if won else "Lose"
        return f"points: {self.points(session):.2f} {result}"

    def outcome(self, session: GameSession, won: bool) -> float:
        return self.points(session)

    def summary(self, session: GameSession, won: bool) -> str:
        # No losing in point mode: ending early still reports the score.
        return f"You achieved {self.points(session):.2f} points!"


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class GameSession:
    def __init__(
        self,
        policy: ModePolicy,
        repository: SnippetRepository,
        ledger: StatisticsLedger,
        rng: RandomSource | None = None,
        fuzzy_enabled: bool | None = None,
        show_source: bool | None = None,
    ):
        self.policy = policy
        self.repository = repository
        self.ledger = ledger
        self.rng = rng if rng is not None else make_rng(config.RANDOM_SEED)
        self.fuzzy_enabled = (
            policy.fuzzy_by_default if fuzzy_enabled is None else fuzzy_enabled
        )
        self.show_source = policy.source_by_default if show_source is None else show_source
        self.snippet_id: str | None = None
        self.snippet: Snippet | None = None
        self.engine: MatchEngine | None = None
        self.attempts = 0
        self.state = SessionState.ACTIVE

    @property
    def mode(self) -> GameMode:
        return self.policy.mode

    def start(self) -> bool:
        """Pick and load a random snippet. Returns False if there is none."""
        snippet_id = self.repository.pick_random_id(self.rng)
        if snippet_id is None:
            logger.warning("[session] No snippets available")
            return False
        self.snippet_id = snippet_id
        self.snippet = self.repository.load(snippet_id)
        self.engine = MatchEngine(self.snippet, self.rng, fuzzy_enabled=self.fuzzy_enabled)
        self.attempts = 0
        self.state = SessionState.ACTIVE
        self.policy.on_start(self)
        logger.info(
            "[session] Started %s game on %s (%d characters)",
            self.mode.value,
            snippet_id,
            self.engine.total_count(),
        )
        return True

    def make_guess(self, text: str) -> list[str]:
        """Apply one player input and return the feedback lines."""
        if not self.show_source and text == SHOW_SOURCE_TOKEN:
            self.show_source = True
            return ["Source display enabled"]
        if not self.fuzzy_enabled and text == ENABLE_FUZZY_TOKEN:
            self.fuzzy_enabled = True
            self.engine.fuzzy_enabled = True
            return ["Fuzzy match enabled"]

        result = self.engine.guess(text)
        if result.status == "too_short":
            return [f"Guess must be at least {MIN_LEN} chars"]

        self.attempts += 1
        for _ in range(self.policy.reveal_times(self)):
            self.engine.reveal()
        return [self._feedback(result)]

    @staticmethod
    def _feedback(result: GuessResult) -> str:
        msg = f"{result.exact_count} matches found"
        if result.fuzzy_count is not None:
            msg += f", {result.fuzzy_count} fuzzy matches found"
        return msg + "."

    def masked_view(self) -> list[str]:
        return self.engine.grid.masked_view()

    def source_line(self) -> str:
        return config.SOURCE_LINE_TEMPLATE.format(snippet_id=self.snippet_id)

    def display_lines(self) -> list[str]:
        lines = self.policy.status_lines(self)
        if self.show_source:
            lines.append(self.source_line())
        lines.extend(self.masked_view())
        lines.extend(self.policy.prompt_lines(self))
        return lines

    def is_over(self) -> bool:
        return self.policy.is_over(self)

    def is_finished(self) -> bool:
        return self.engine.check()

    def win(self) -> str:
        return self._finish(won=True)

    def lose(self) -> str:
        return self._finish(won=False)

    def _finish(self, won: bool) -> str:
        if self.state is not SessionState.ACTIVE:
            raise RuntimeError("Game already finished")
        line = format_history_line(
            format_timestamp(),
            self.policy.label,
            self.snippet_id,
            self.policy.history_info(self, won),
        )
        outcome = self.policy.outcome(self, won)
        # Leave ACTIVE before recording, so the game can be recorded only once.
        self.state = SessionState.WON if won else SessionState.LOST
        try:
            self.ledger.append_record(line, self.mode.value, outcome)
        except Exception:
            self.state = SessionState.ACTIVE
            raise
        logger.info(
            "[session] %s game on %s ended: %s", self.mode.value, self.snippet_id, self.state.value
        )
        return self.policy.summary(self, won)


def make_policy(mode: GameMode, clock: Clock = time.monotonic) -> ModePolicy:
    if mode is GameMode.LIMITED:
        return LimitedAttemptsPolicy()
    if mode is GameMode.TIMED:
        return TimedPolicy(clock=clock)
    return PointPolicy(
        guess_penalty=config.GUESS_PENALTY,
        point_factor=config.POINT_FACTOR,
        reward_factor=config.REWARD_FACTOR,
    )


def new_session(
    mode: GameMode | str,
    repository: SnippetRepository,
    ledger: StatisticsLedger,
    rng: RandomSource | None = None,
    clock: Clock = time.monotonic,
) -> GameSession:
    """Build a session for *mode* with that mode's default feature flags."""
    return GameSession(make_policy(GameMode(mode), clock=clock), repository, ledger, rng=rng)


MODE_LABELS: dict[str, str] = {
    GameMode.LIMITED.value: LimitedAttemptsPolicy.label,
    GameMode.TIMED.value: TimedPolicy.label,
    GameMode.POINT.value: PointPolicy.label,
}
