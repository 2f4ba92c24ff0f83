"""Tests for the text console driven by scripted input."""

import pytest
from codewordle.console import Console


@pytest.fixture
def run(repo, ledger, rng):
    def _run(*inputs):
        pending = list(inputs)
        output: list[str] = []
        console = Console(
            repo,
            ledger,
            rng,
            input_fn=lambda prompt="": pending.pop(0),
            print_fn=lambda *args, **kwargs: output.append(" ".join(map(str, args))),
            clear=False,
        )
        console.mainloop()
        assert pending == []
        return output

    return _run


class TestConsole:
    def test_exit(self, run):
        assert run("E")[-1] == "Exit(E)"

    def test_play_without_snippets(self, run):
        output = run("P", "G", "", "E")
        assert "There are no code snippets" in output

    def test_play_and_give_up(self, run, repo, ledger):
        repo.add("1001", ["int x;"])
        output = run("P", "G", "E", "", "E")
        assert "@@@ @@  " in output
        assert "You lose. You have used 0 guesses." in output
        assert ledger.totals("limited").games == 1

    def test_play_to_a_win(self, run, repo):
        repo.add("1001", ["abc"])
        output = run("P", "T", "abc", "", "E")
        assert "abc  " in output
        assert any(line.startswith("You win! You only used") for line in output)

    def test_code_pages(self, run, repo):
        output = run(
            "C",
            "A", "42", "int main() {", "}", "END",
            "L", "",
            "R", "42", "",
            "M", "42", "",
            "B",
            "E",
        )
        assert "42" in output
        assert "int main() {\n}\n" in output
        assert "Code #42 removed" in output
        assert repo.list_ids() == []

    def test_stats_page(self, run, ledger):
        ledger.append_record("a game", "timed", 1)
        output = run("S", "", "E")
        assert "Time Attack Games: 1/1" in output
        assert "a game" in output
