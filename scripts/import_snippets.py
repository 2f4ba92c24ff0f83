#!/usr/bin/env python3
"""Import source files into the snippet directory.

Usage:
    python scripts/import_snippets.py solutions/*.cpp          # id = file stem
    python scripts/import_snippets.py --force solutions/*.cpp  # overwrite existing ids
    python scripts/import_snippets.py --dir CodeSnippets a.py b.py

Each file becomes CodeSnippets/<stem>.txt. Blank lines at the top and bottom
of a file are dropped; nothing else is changed.
"""

import argparse
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
_BACKEND_DIR = _PROJECT_ROOT / "backend"


def _trimmed_lines(path: Path) -> list[str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def import_files(paths: list[Path], snippet_dir: str, force: bool = False) -> int:
    # Add backend to sys.path so the script runs from a plain checkout
    sys.path.insert(0, str(_BACKEND_DIR))
    from codewordle.repository import SnippetRepository  # noqa: PLC0415

    repo = SnippetRepository(snippet_dir)
    existing = set(repo.list_ids())
    imported = 0
    for path in paths:
        snippet_id = path.stem
        if snippet_id in existing and not force:
            print(f"[import] {snippet_id} already exists. Use --force to overwrite.")
            continue
        lines = _trimmed_lines(path)
        if not lines:
            print(f"[import] {path} is empty, skipped.")
            continue
        repo.add(snippet_id, lines)
        imported += 1
        print(f"[import] {path} → {repo.path_for(snippet_id)}")
    return imported


def main() -> None:
    parser = argparse.ArgumentParser(description="Import source files as code snippets.")
    parser.add_argument("files", nargs="+", type=Path, help="Source files to import")
    parser.add_argument(
        "--dir",
        default=None,
        help="Snippet directory (default: SNIPPET_DIR or ./CodeSnippets)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite snippets whose id already exists.",
    )
    args = parser.parse_args()

    snippet_dir = args.dir
    if snippet_dir is None:
        sys.path.insert(0, str(_BACKEND_DIR))
        from codewordle.config import SNIPPET_DIR  # noqa: PLC0415

        snippet_dir = SNIPPET_DIR

    count = import_files(args.files, snippet_dir, force=args.force)
    print(f"[import] {count} snippet(s) imported.")


if __name__ == "__main__":
    main()
