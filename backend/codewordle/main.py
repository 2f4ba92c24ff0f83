import logging
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from . import config
from .controller import GameController
from .matching import make_rng
from .models import (
    GameView,
    GuessRequest,
    GuessResponse,
    SnippetBody,
    SnippetResponse,
    StartRequest,
    StatsResponse,
)
from .repository import SnippetRepository
from .sessions import MODE_LABELS, SessionState, new_session
from .stats import StatisticsLedger

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Game state (one player, one game at a time)
# ---------------------------------------------------------------------------
_repo: SnippetRepository | None = None
_ledger: StatisticsLedger | None = None
_rng = None
_controller: GameController | None = None
# Routes run in FastAPI's threadpool; every use of the game state holds this.
_lock = threading.Lock()


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _repo, _ledger, _rng, _controller

    _repo = SnippetRepository(config.SNIPPET_DIR)
    _ledger = StatisticsLedger(config.STATS_PATH)
    _rng = make_rng(config.RANDOM_SEED)
    _controller = None
    logger.info(
        "[api] Serving %d snippets from %s", len(_repo.list_ids()), _repo.root
    )

    yield


app = FastAPI(lifespan=lifespan)


def _current() -> GameController:
    if _controller is None:
        raise HTTPException(status_code=409, detail="No game in progress")
    return _controller


def _view(controller: GameController) -> GameView:
    return GameView(
        started=True,
        mode=controller.session.mode.value,
        status=controller.state.value,
        lines=controller.display_lines(),
        summary=controller.summary,
    )


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/game", response_model=GameView)
def post_game(body: StartRequest):
    """Start a new game, abandoning any game still in progress."""
    global _controller

    with _lock:
        session = new_session(body.mode, _repo, _ledger, rng=_rng)
        if not session.start():
            _controller = None
            return GameView(started=False)
        _controller = GameController(session)
        return _view(_controller)


@app.get("/api/game", response_model=GameView)
def get_game():
    with _lock:
        controller = _current()
        controller.check()
        return _view(controller)


@app.post("/api/guess", response_model=GuessResponse)
def post_guess(body: GuessRequest):
    with _lock:
        controller = _current()
        if controller.state is not SessionState.ACTIVE:
            raise HTTPException(status_code=409, detail="Game already finished")

        # Not stripped: blanks are part of the code being guessed.
        outcome = controller.submit(body.guess)
        return GuessResponse(
            status=outcome.state.value,
            messages=outcome.messages,
            lines=controller.display_lines(),
            summary=outcome.summary,
        )


@app.get("/api/stats", response_model=StatsResponse)
def get_stats():
    with _lock:
        return StatsResponse(lines=_ledger.summary_lines(MODE_LABELS))


@app.get("/api/snippets")
def list_snippets() -> list[str]:
    return _repo.list_ids()


@app.get("/api/snippets/{snippet_id}", response_model=SnippetResponse)
def get_snippet(snippet_id: str):
    try:
        text = _repo.read(snippet_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if text is None:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return SnippetResponse(snippet_id=snippet_id, text=text)


@app.put("/api/snippets/{snippet_id}", response_model=SnippetResponse)
def put_snippet(snippet_id: str, body: SnippetBody):
    try:
        _repo.add(snippet_id, body.lines)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return SnippetResponse(snippet_id=snippet_id, text=_repo.read(snippet_id))


@app.delete("/api/snippets/{snippet_id}")
def delete_snippet(snippet_id: str) -> dict[str, bool]:
    try:
        removed = _repo.remove(snippet_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not removed:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return {"removed": True}
