"""Tests for gitignore discovery and filtering."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from globweave import IgnoreDiscoveryError, discover_ignore_files, find, find_sync
from globweave.gitignore import find_repository_root, load_gitignore, read_ignore_file


def _make_gitignore_fixture(root: Path) -> None:
    (root / ".gitignore").write_text("foo.js\n")
    (root / "foo.js").write_text("console.log('foo')\n")
    (root / "bar.js").write_text("console.log('bar')\n")


def test_read_ignore_file_missing(tmp_path: Path):
    assert read_ignore_file(tmp_path / ".gitignore") is None


def test_read_ignore_file_skips_comments_and_blanks(tmp_path: Path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("# comment\n\n*.log\n  \nbuild/\n")
    assert read_ignore_file(ignore_file) == ["*.log", "build/"]


def test_read_ignore_file_non_utf8(tmp_path: Path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_bytes(b"\x80\x81\x82\xff\xfe")
    with pytest.raises(IgnoreDiscoveryError):
        read_ignore_file(ignore_file)


def test_load_gitignore_empty(tmp_path: Path):
    ignore_file = tmp_path / ".gitignore"
    ignore_file.write_text("# only a comment\n")
    assert load_gitignore(ignore_file) is None


def test_find_repository_root(tmp_path: Path):
    (tmp_path / ".git").mkdir()
    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)
    assert find_repository_root(deep) == tmp_path


def test_gitignore_defaults_to_false(tmp_path: Path):
    _make_gitignore_fixture(tmp_path)
    assert find_sync("*", cwd=tmp_path) == ["bar.js", "foo.js"]


def test_gitignore(tmp_path: Path):
    _make_gitignore_fixture(tmp_path)
    assert find_sync("*", cwd=tmp_path, gitignore=True) == ["bar.js"]
    assert asyncio.run(find("*", cwd=tmp_path, gitignore=True)) == ["bar.js"]


def test_ignore_ignored_gitignore(tmp_path: Path):
    _make_gitignore_fixture(tmp_path)
    options = {"ignore": ["**/.gitignore"], "cwd": tmp_path, "gitignore": True}
    assert find_sync("*", options) == ["bar.js", "foo.js"]
    assert asyncio.run(find("*", options)) == ["bar.js", "foo.js"]


def test_negative_gitignore(tmp_path: Path):
    (tmp_path / ".gitignore").write_text("*.js\n!foo.js\n")
    (tmp_path / "foo.js").write_text("")
    (tmp_path / "bar.js").write_text("")
    assert find_sync("*", cwd=tmp_path, gitignore=True) == ["foo.js"]


def test_gitignore_directories(tmp_path: Path):
    (tmp_path / ".gitignore").write_text("node_modules/\n")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "pkg.js").write_text("")
    (tmp_path / "index.js").write_text("")

    without = find_sync("*", cwd=tmp_path, only_files=False)
    assert "node_modules" in without
    with_gitignore = find_sync("*", cwd=tmp_path, only_files=False, gitignore=True)
    assert "node_modules" not in with_gitignore
    assert "index.js" in with_gitignore
    assert find_sync("**/*.js", cwd=tmp_path, gitignore=True) == ["index.js"]


def test_nested_gitignore_applies_to_subtree(tmp_path: Path):
    (tmp_path / "root.log").write_text("")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / ".gitignore").write_text("*.log\n")
    (sub / "nested.log").write_text("")
    (sub / "keep.md").write_text("")

    result = find_sync("**/*", cwd=tmp_path, gitignore=True)
    assert result == ["root.log", "sub/keep.md"]


def test_ancestor_gitignore_in_repository(tmp_path: Path):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".gitignore").write_text("*.log\n")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "debug.log").write_text("")
    (sub / "notes.md").write_text("")

    assert find_sync("*", cwd=sub, gitignore=True) == ["notes.md"]
    assert find_sync("*", cwd=sub, gitignore=True, ignore=["**/.gitignore"]) == [
        "debug.log",
        "notes.md",
    ]


def test_discovery_skips_default_excluded_dirs(tmp_path: Path):
    nm = tmp_path / "node_modules" / "pkg"
    nm.mkdir(parents=True)
    (nm / ".gitignore").write_text("*\n")
    (tmp_path / ".gitignore").write_text("*.log\n")

    rules = discover_ignore_files(tmp_path)
    assert rules.relative_paths() == [".gitignore"]


def test_discovery_orders_shallow_first(tmp_path: Path):
    (tmp_path / "b" / "c").mkdir(parents=True)
    (tmp_path / "a").mkdir()
    for rel in ["b/c/.gitignore", "a/.gitignore", ".gitignore", "b/.gitignore"]:
        (tmp_path / rel).write_text("*.log\n")

    rules = discover_ignore_files(tmp_path)
    assert rules.relative_paths() == [".gitignore", "a/.gitignore", "b/.gitignore", "b/c/.gitignore"]


def test_unreadable_gitignore_is_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    (tmp_path / ".gitignore").write_bytes(b"\x80\x81\x82\xff\xfe")
    (tmp_path / "foo.js").write_text("")

    with caplog.at_level(logging.WARNING, logger="globweave.gitignore"):
        assert find_sync("*", cwd=tmp_path, gitignore=True) == ["foo.js"]
    assert "Skipping ignore file" in caplog.text


def test_no_gitignore_file(tmp_path: Path):
    (tmp_path / "foo.js").write_text("")
    rules = discover_ignore_files(tmp_path)
    assert rules.files == ()
    assert find_sync("*", cwd=tmp_path, gitignore=True) == ["foo.js"]


def test_nested_gitignore_reincludes(tmp_path: Path):
    (tmp_path / ".gitignore").write_text("*.js\n")
    (tmp_path / "top.js").write_text("")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / ".gitignore").write_text("!keep.js\n")
    (sub / "keep.js").write_text("")
    (sub / "drop.js").write_text("")

    assert find_sync("**/*.js", cwd=tmp_path, gitignore=True) == ["sub/keep.js"]
    rules = discover_ignore_files(tmp_path)
    assert rules.is_ignored("sub/drop.js")
    assert not rules.is_ignored("sub/keep.js")
