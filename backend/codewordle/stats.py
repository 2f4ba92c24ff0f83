"""Persistent win/loss ledger and game history."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

_TIME_WIDTH = 26
_MODE_WIDTH = 18
_ID_WIDTH = 7


def format_timestamp(moment: datetime | None = None) -> str:
    """ctime-style timestamp, e.g. ``Tue May 13 17:21:15 2025``."""
    return (moment or datetime.now()).strftime("%a %b %d %H:%M:%S %Y")


def format_history_line(timestamp: str, mode_label: str, snippet_id: str, info: str) -> str:
    return (
        f"{timestamp:<{_TIME_WIDTH}}{mode_label:<{_MODE_WIDTH}}"
        f"{snippet_id:<{_ID_WIDTH}}{info}"
    )


class ModeTotals(BaseModel):
    games: int = 0
    wins: int = 0
    points: float = 0.0


class LedgerState(BaseModel):
    total_games: int = 0
    modes: dict[str, ModeTotals] = Field(default_factory=dict)
    history: list[str] = Field(default_factory=list)


class StatisticsLedger:
    """Append-only statistics file.

    Bounded modes record an outcome of 1 (win) or 0 (loss) and accumulate
    wins; the point mode records its raw score and accumulates points.
    Every append is written to disk before returning.
    """

    def __init__(self, path: str | Path, scored_modes: tuple[str, ...] = ("point",)):
        self.path = Path(path)
        self.scored_modes = scored_modes
        if self.path.exists():
            self.state = LedgerState.model_validate_json(
                self.path.read_text(encoding="utf-8")
            )
        else:
            self.state = LedgerState()
            self.save()

    def save(self, state: LedgerState | None = None) -> None:
        state = state or self.state
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(state.model_dump_json(indent=2), encoding="utf-8")

    def append_record(self, history_line: str, mode: str, outcome: float) -> None:
        """Record one finished game. Nothing changes in memory if the write fails."""
        state = self.state.model_copy(deep=True)
        totals = state.modes.setdefault(mode, ModeTotals())
        totals.games += 1
        if mode in self.scored_modes:
            totals.points += outcome
        else:
            totals.wins += int(outcome)
        state.total_games += 1
        state.history.append(history_line)
        self.save(state)
        self.state = state
        logger.info("[stats] Recorded %s game (outcome %s)", mode, outcome)

    def totals(self, mode: str) -> ModeTotals:
        return self.state.modes.get(mode, ModeTotals())

    def summary_lines(self, labels: dict[str, str] | None = None) -> list[str]:
        """Human-readable totals followed by the history, newest first.

        Every mode in *labels* gets a row, in the order given, even before
        its first game; modes only known from the file follow.
        """
        labels = labels or {}
        modes = list(labels) + sorted(m for m in self.state.modes if m not in labels)
        lines = [f"Total Games: {self.state.total_games}"]
        for mode in modes:
            totals = self.totals(mode)
            label = labels.get(mode, mode)
            if mode in self.scored_modes:
                average = totals.points / totals.games if totals.games else 0.0
                lines.append(f"{label} Games: {totals.games}")
                lines.append(f"Average Points: {average:.2f}")
                lines.append(f"Total Points: {totals.points:.2f}")
            else:
                lines.append(f"{label} Games: {totals.wins}/{totals.games}")
        lines.append("")
        lines.append("========== Game History ==========")
        lines.extend(reversed(self.state.history))
        return lines
