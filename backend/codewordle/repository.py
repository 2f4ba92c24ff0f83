"""File-backed store of code snippets, one ``<id>.txt`` file per snippet."""

from __future__ import annotations

import logging
from pathlib import Path

from .grid import Snippet
from .matching import RandomSource

logger = logging.getLogger(__name__)

_SUFFIX = ".txt"


def _check_id(snippet_id: str) -> str:
    if not snippet_id or snippet_id.startswith(".") or any(
        sep in snippet_id for sep in ("/", "\\")
    ):
        raise ValueError(f"Invalid snippet id: {snippet_id!r}")
    return snippet_id


class SnippetRepository:
    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, snippet_id: str) -> Path:
        return self.root / f"{_check_id(snippet_id)}{_SUFFIX}"

    def list_ids(self) -> list[str]:
        return sorted(p.stem for p in self.root.glob(f"*{_SUFFIX}") if p.is_file())

    def pick_random_id(self, rng: RandomSource) -> str | None:
        """Return a uniformly chosen snippet id, or None if the store is empty."""
        ids = self.list_ids()
        if not ids:
            return None
        return ids[int(rng.integers(len(ids)))]

    def load(self, snippet_id: str) -> Snippet:
        """Load a snippet ready for play. Missing files raise FileNotFoundError."""
        text = self.path_for(snippet_id).read_text(encoding="utf-8")
        return Snippet.from_text(snippet_id, text)

    def read(self, snippet_id: str) -> str | None:
        path = self.path_for(snippet_id)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def add(self, snippet_id: str, lines: list[str]) -> None:
        """Create or overwrite a snippet."""
        path = self.path_for(snippet_id)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        logger.info("[repo] Saved snippet %s (%d lines)", snippet_id, len(lines))

    def remove(self, snippet_id: str) -> bool:
        path = self.path_for(snippet_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info("[repo] Removed snippet %s", snippet_id)
        return True
