"""Tests for the shared turn loop."""

import pytest
from codewordle.controller import GameController
from codewordle.sessions import (
    GameSession,
    LimitedAttemptsPolicy,
    PointPolicy,
    SessionState,
    TimedPolicy,
)
from codewordle.suggest import KEYWORDS

from conftest import FakeClock


@pytest.fixture
def start(repo, ledger, rng):
    def _start(text, policy):
        repo.add("1001", text.splitlines())
        session = GameSession(policy, repo, ledger, rng=rng)
        assert session.start()
        return GameController(session)

    return _start


class TestGameController:
    def test_end_token_loses(self, start, ledger):
        controller = start("int x;", LimitedAttemptsPolicy())
        outcome = controller.submit("E")
        assert outcome.state is SessionState.LOST
        assert outcome.summary == "You lose. You have used 0 guesses."
        assert ledger.totals("limited").games == 1

    def test_end_token_in_point_mode_reports_score(self, start, ledger):
        controller = start("abc", PointPolicy())
        outcome = controller.submit("E")
        assert outcome.summary == "You achieved 0.00 points!"
        assert ledger.totals("point").games == 1

    def test_auto_token_suggests_without_guessing(self, start):
        controller = start("x = 1;", LimitedAttemptsPolicy())
        outcome = controller.submit("A")
        assert outcome.messages == [KEYWORDS[0]]
        assert outcome.state is SessionState.ACTIVE
        assert controller.session.attempts == 0

    def test_guess_feedback(self, start):
        controller = start("int x;", LimitedAttemptsPolicy())
        outcome = controller.submit("x;;")
        assert outcome.messages == ["0 matches found, 1 fuzzy matches found."]
        assert outcome.state is SessionState.ACTIVE
        assert outcome.summary is None

    def test_full_reveal_wins(self, start, ledger):
        controller = start("abc", LimitedAttemptsPolicy())
        outcome = controller.submit("abc")
        assert outcome.state is SessionState.WON
        assert outcome.summary == "You win! You only used 1 guesses!"
        assert ledger.totals("limited").wins == 1

    def test_win_beats_attempt_limit(self, start):
        controller = start("abcdefghijklmnop", LimitedAttemptsPolicy())
        for _ in range(29):
            controller.submit("zzz")
        assert controller.session.is_over() is False
        assert controller.submit("abcdefghijklmnop").state is SessionState.WON

    def test_attempt_limit_loses(self, start):
        controller = start("x" * 60, LimitedAttemptsPolicy())
        for _ in range(29):
            assert controller.submit("zzz").state is SessionState.ACTIVE
        outcome = controller.submit("zzz")
        assert outcome.state is SessionState.LOST
        assert outcome.messages == ["0 matches found, 0 fuzzy matches found."]

    def test_expired_clock_ignores_late_guess(self, start):
        clock = FakeClock()
        controller = start("abc", TimedPolicy(clock))
        clock.now += 61
        outcome = controller.submit("abc")
        assert outcome.state is SessionState.LOST
        assert controller.session.attempts == 0
        assert outcome.summary == "You lose. You have used 61 seconds."

    def test_check_detects_expiry_without_input(self, start):
        clock = FakeClock()
        controller = start("abc", TimedPolicy(clock))
        assert controller.check().state is SessionState.ACTIVE
        clock.now += 60
        assert controller.check().state is SessionState.LOST

    def test_submit_after_end_raises(self, start):
        controller = start("abc", LimitedAttemptsPolicy())
        controller.submit("E")
        with pytest.raises(RuntimeError):
            controller.submit("abc")
