"""Tests for the file-backed snippet repository."""

import pytest
from codewordle.repository import SnippetRepository

from conftest import ScriptedRng


class TestSnippetRepository:
    def test_creates_root(self, tmp_path):
        repo = SnippetRepository(tmp_path / "a" / "b")
        assert repo.root.is_dir()
        assert repo.list_ids() == []

    def test_add_list_read(self, repo):
        repo.add("1002", ["int main() {", "}"])
        repo.add("1001", ["x"])
        assert repo.list_ids() == ["1001", "1002"]
        assert repo.read("1002") == "int main() {\n}\n"

    def test_ignores_other_files(self, repo):
        (repo.root / "notes.md").write_text("hi", encoding="utf-8")
        repo.add("1001", ["x"])
        assert repo.list_ids() == ["1001"]

    def test_read_missing(self, repo):
        assert repo.read("nope") is None

    def test_add_overwrites(self, repo):
        repo.add("1001", ["old"])
        repo.add("1001", ["new"])
        assert repo.read("1001") == "new\n"

    def test_remove(self, repo):
        repo.add("1001", ["x"])
        assert repo.remove("1001") is True
        assert repo.remove("1001") is False
        assert repo.list_ids() == []

    def test_load_builds_padded_snippet(self, repo):
        repo.add("1001", ["\tab"])
        snippet = repo.load("1001")
        assert snippet.snippet_id == "1001"
        assert snippet.lines == ("    ab  ",)

    def test_load_missing_raises(self, repo):
        with pytest.raises(FileNotFoundError):
            repo.load("nope")

    def test_pick_random(self, repo):
        for pid in ("a", "b", "c"):
            repo.add(pid, ["x"])
        rng = ScriptedRng(2)
        assert repo.pick_random_id(rng) == "c"
        assert rng.calls == [(3, None, None)]

    def test_pick_random_empty(self, repo):
        assert repo.pick_random_id(ScriptedRng()) is None

    @pytest.mark.parametrize("bad", ["", "../x", "a/b", "a\\b", ".hidden"])
    def test_invalid_ids(self, repo, bad):
        with pytest.raises(ValueError):
            repo.add(bad, ["x"])
