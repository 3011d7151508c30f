#!/usr/bin/env -S uv run --script --python 3.12
# /// script
# requires-python = ">=3.10"
# dependencies = [
#   "globweave",
# ]
# ///
"""Time find() and find_sync() on a generated tree, with and without gitignore."""

from __future__ import annotations

import asyncio
import shutil
import tempfile
import time
from argparse import ArgumentParser
from collections.abc import Callable
from pathlib import Path

from globweave import find, find_sync

BENCHMARKS: dict[str, list[str]] = {
    "negative globs (some files inside dir)": ["a/*", "!a/c*"],
    "negative globs (whole dir)": ["b/*", "a/*", "!a/**"],
    "multiple positive globs": ["a/*", "b/*"],
}


def parse_args() -> tuple[int, int]:
    """Parse the per-directory file count and repetition count."""
    parser = ArgumentParser(description="Benchmark globweave on a generated directory tree.")
    parser.add_argument("--files", type=int, default=500, help="Files per directory.")
    parser.add_argument("--repeat", type=int, default=20, help="Runs per benchmark.")
    args = parser.parse_args()
    return args.files, args.repeat


def make_tree(root: Path, files: int) -> None:
    """Create `a/` and `b/` with `c*` and `d*` files, plus a `.gitignore`."""
    for name in ["a", "b"]:
        directory = root / name
        directory.mkdir()
        for i in range(files):
            (directory / f"{'c' if i < files // 5 else 'd'}{i}").write_text("")
    (root / ".gitignore").write_text("a\nb/c*\n")


def timed(run: Callable[[], object], repeat: int) -> float:
    """Average wall-clock milliseconds per run."""
    start = time.perf_counter()
    for _ in range(repeat):
        run()
    return (time.perf_counter() - start) * 1000 / repeat


def main() -> int:
    files, repeat = parse_args()
    root = Path(tempfile.mkdtemp(prefix="globweave-bench-"))
    try:
        make_tree(root, files)
        for name, patterns in BENCHMARKS.items():
            print(name)
            for gitignore in (False, True):
                label = " with gitignore" if gitignore else ""

                def run_sync() -> object:
                    return find_sync(patterns, cwd=root, gitignore=gitignore)

                def run_async() -> object:
                    return asyncio.run(find(patterns, cwd=root, gitignore=gitignore))

                print(f"  find_sync{label}: {timed(run_sync, repeat):.2f} ms")
                print(f"  find{label}: {timed(run_async, repeat):.2f} ms")
    finally:
        shutil.rmtree(root)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
