"""Text console front-end.

usage:
  codewordle                          # snippets in ./CodeSnippets
  codewordle --snippets src/ --stats ~/.codewordle.json
  codewordle --seed 42                # reproducible reveals and picks
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable

from . import config
from .controller import GameController
from .matching import RandomSource, make_rng
from .repository import SnippetRepository
from .sessions import MODE_LABELS, ConfigurationError, GameMode, SessionState, new_session
from .stats import StatisticsLedger

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J\x1b[H\x1b[3J"

RULES = """Code Wordle

You will be given a random code snippet.
Initially, all characters are hidden.
All you can see is the shape of the code snippet.

Your goal is to guess the code snippet.
To do so, enter a substring of the code snippet of length >= 3.
The matching characters will then be revealed.

There's also fuzzy match:
if a substring of the code snippet differs by only 1 character,
its characters will be shown as fuzzy matches.

There are 3 game modes:
Limited Guesses: use as few guesses as possible; one character is revealed every 5 guesses.
Time Attack: use as little time as possible; one character is revealed every 10 seconds.
Point: the score depends on your guesses. Fuzzy match and the snippet ID are disabled
initially. You can enable them, but the score will be reduced."""

_MODE_KEYS = {"G": GameMode.LIMITED, "T": GameMode.TIMED, "P": GameMode.POINT}


class Console:
    def __init__(
        self,
        repo: SnippetRepository,
        ledger: StatisticsLedger,
        rng: RandomSource,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[..., None] = print,
        clear: bool = True,
    ):
        self.repo = repo
        self.ledger = ledger
        self.rng = rng
        self._input = input_fn
        self._print = print_fn
        self._clear = clear

    # ── helpers ──────────────────────────────────────────────────────────

    def clear_screen(self) -> None:
        if self._clear:
            self._print(CLEAR_SCREEN, end="", flush=True)

    def show(self, lines: list[str]) -> None:
        for line in lines:
            self._print(line)

    def pause(self) -> None:
        self._input("\n--Press Enter to go back--\n")

    def choose(self, options: list[str]) -> str:
        self.show(options)
        return self._input("> ").strip().upper()

    # ── pages ────────────────────────────────────────────────────────────

    def mainloop(self) -> None:
        while True:
            self.clear_screen()
            op = self.choose(["Play(P)", "Rule(R)", "Code(C)", "Stats(S)", "Exit(E)"])
            if op == "P":
                self.game_page()
            elif op == "R":
                self.rule_page()
            elif op == "C":
                self.code_page()
            elif op == "S":
                self.stats_page()
            elif op == "E":
                return

    def rule_page(self) -> None:
        self.clear_screen()
        self._print(RULES)
        self.pause()

    def stats_page(self) -> None:
        self.clear_screen()
        self.show(self.ledger.summary_lines(MODE_LABELS))
        self.pause()

    def code_page(self) -> None:
        while True:
            self.clear_screen()
            op = self.choose(
                ["Code Repo", "List(L)", "Read(R)", "Add/Edit(A)", "Remove(M)", "Back(B)"]
            )
            self.clear_screen()
            try:
                if op == "L":
                    ids = self.repo.list_ids()
                    self.show(ids or ["No code snippets"])
                    self.pause()
                elif op == "R":
                    text = self.repo.read(self._input("Enter the code ID to read: ").strip())
                    self._print(text if text is not None else "Code not found")
                    self.pause()
                elif op == "A":
                    self.add_snippet()
                elif op == "M":
                    snippet_id = self._input("Enter the code ID: ").strip()
                    removed = self.repo.remove(snippet_id)
                    self._print(f"Code #{snippet_id} removed" if removed else "Code not found")
                    self.pause()
                elif op == "B":
                    return
            except ValueError as exc:
                self._print(str(exc))
                self.pause()

    def add_snippet(self) -> None:
        snippet_id = self._input("Enter the code ID: ").strip()
        self._print('Enter the code, end with entering "END"')
        lines: list[str] = []
        while True:
            line = self._input("")
            if line == "END":
                break
            lines.append(line)
        self.repo.add(snippet_id, lines)

    def game_page(self) -> None:
        self.clear_screen()
        op = self.choose(["Game Mode:", "Limited Guesses(G)", "Time Attack(T)", "Point(P)"])
        mode = _MODE_KEYS.get(op)
        if mode is None:
            return

        session = new_session(mode, self.repo, self.ledger, rng=self.rng)
        if not session.start():
            self._print("There are no code snippets")
            self.pause()
            return
        self.play(GameController(session))

    def play(self, controller: GameController) -> None:
        messages: list[str] = []
        while True:
            outcome = controller.check()
            self.clear_screen()
            self.show(controller.display_lines())
            self.show(messages)
            if outcome.state is not SessionState.ACTIVE:
                break
            messages = controller.submit(self._input("")).messages
        self._print(controller.summary)
        self.pause()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Code Wordle: guess the hidden code snippet.")
    parser.add_argument("--snippets", default=config.SNIPPET_DIR, help="Directory of <id>.txt snippets")
    parser.add_argument("--stats", default=config.STATS_PATH, help="Statistics file")
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED, help="Random seed for reproducible games")
    parser.add_argument("--no-clear", action="store_true", help="Do not clear the screen between pages")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    console = Console(
        SnippetRepository(args.snippets),
        StatisticsLedger(args.stats),
        make_rng(args.seed),
        clear=not args.no_clear,
    )
    try:
        console.mainloop()
    except ConfigurationError as exc:
        logger.error("[console] %s", exc)
        return 2
    except (EOFError, KeyboardInterrupt):
        print("\nBye!")
    return 0
