"""Centralised runtime configuration loaded from environment variables."""

import os

SNIPPET_DIR: str = os.getenv("SNIPPET_DIR", "CodeSnippets")
STATS_PATH: str = os.getenv("STATS_PATH", "statistics.json")

# Point mode scoring
GUESS_PENALTY: float = float(os.getenv("GUESS_PENALTY", "100"))
POINT_FACTOR: float = float(os.getenv("POINT_FACTOR", "500"))
REWARD_FACTOR: float = float(os.getenv("REWARD_FACTOR", "1.5"))

# Unset means a fresh OS-seeded generator per process
_seed = os.getenv("RANDOM_SEED", "")
RANDOM_SEED: int | None = int(_seed) if _seed else None

SOURCE_LINE_TEMPLATE: str = os.getenv("SOURCE_LINE_TEMPLATE", "Snippet: {snippet_id}")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
