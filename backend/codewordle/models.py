from typing import Literal

from pydantic import BaseModel

GameStatus = Literal["active", "won", "lost"]


class StartRequest(BaseModel):
    mode: Literal["limited", "timed", "point"]


class GameView(BaseModel):
    started: bool
    mode: str | None = None
    status: GameStatus | None = None
    lines: list[str] = []       # status line(s), source line, masked code, prompt
    summary: str | None = None  # "You win! ..." once the game is over


class GuessRequest(BaseModel):
    guess: str


class GuessResponse(BaseModel):
    status: GameStatus
    messages: list[str]
    lines: list[str]
    summary: str | None = None


class SnippetBody(BaseModel):
    lines: list[str]


class SnippetResponse(BaseModel):
    snippet_id: str
    text: str


class StatsResponse(BaseModel):
    lines: list[str]
