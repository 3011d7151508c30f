"""
Gitignore discovery and matching using pathspec.

Ignore files are found below the search directory (with the matcher's glob engine)
and above it, up to the enclosing repository root. Each file's patterns stay keyed
by the directory that holds it, since gitignore patterns are relative to that
directory and may re-include paths with `!`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pathspec
from wcmatch import glob

from globweave.defaults import DEFAULT_DISCOVERY_EXCLUDES, IGNORE_FILE_NAME, REPOSITORY_MARKERS
from globweave.errors import IgnoreDiscoveryError

logger = logging.getLogger(__name__)

_DISCOVERY_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.DOTGLOB | glob.NODIR


@dataclass(frozen=True)
class IgnoreFile:
    """A parsed ignore file. `base_dir` is the directory its patterns are relative to."""

    path: Path
    base_dir: Path
    spec: pathspec.GitIgnoreSpec


@dataclass(frozen=True)
class IgnoreRules:
    """Ignore files discovered for one search directory, shallowest first."""

    cwd: Path
    files: tuple[IgnoreFile, ...] = ()

    def is_ignored(self, path: str) -> bool:
        """
        Check a matched path (relative to `cwd`, or absolute) against every ignore
        file whose directory contains it. Files are consulted shallowest first and
        the last rule that applies wins, so a nested `!keep.js` re-includes a path
        a parent file ignored. Directories are checked with a trailing `/` so
        directory-only patterns like `build/` apply.
        """
        candidate = Path(os.path.abspath(self.cwd / path))
        is_dir = candidate.is_dir()
        ignored = False
        for ignore_file in self.files:
            try:
                rel = candidate.relative_to(ignore_file.base_dir).as_posix()
            except ValueError:
                continue
            if rel == ".":
                continue
            if is_dir:
                rel += "/"
            decision = ignore_file.spec.check_file(rel).include
            if decision is not None:
                ignored = decision
        return ignored

    def relative_paths(self) -> list[str]:
        """Paths of the discovered ignore files at or below `cwd`, relative to it."""
        paths: list[str] = []
        for ignore_file in self.files:
            try:
                paths.append(ignore_file.path.relative_to(self.cwd).as_posix())
            except ValueError:
                continue
        return paths


def read_ignore_file(path: Path) -> list[str] | None:
    """
    Read pattern lines from an ignore file, skipping blanks and comments.
    Returns `None` if the file doesn't exist, and raises `IgnoreDiscoveryError`
    if it exists but can't be read as UTF-8 text.
    """
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IgnoreDiscoveryError(f"Could not read ignore file {path}: {e}") from e
    return [line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")]


def load_gitignore(path: Path) -> pathspec.GitIgnoreSpec | None:
    """
    Compile the ignore file at `path` into a `GitIgnoreSpec`, or `None` if the file
    doesn't exist or has no patterns.
    """
    lines = read_ignore_file(path)
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def find_repository_root(start_dir: Path) -> Path | None:
    """The first directory at or above `start_dir` holding a repository marker."""
    for directory in (start_dir, *start_dir.parents):
        if any((directory / marker).exists() for marker in REPOSITORY_MARKERS):
            return directory
    return None


def _ancestor_dirs(root: Path) -> list[Path]:
    """Directories from the repository root down to the parent of `root`."""
    repo_root = find_repository_root(root)
    if repo_root is None or repo_root == root:
        return []
    parents = list(root.parents)
    return list(reversed(parents[: parents.index(repo_root) + 1]))


def _is_caller_ignored(rel_path: str, ignore: Sequence[str]) -> bool:
    return bool(ignore) and glob.globmatch(rel_path, list(ignore), flags=_DISCOVERY_FLAGS)


def _load(path: Path) -> IgnoreFile | None:
    try:
        spec = load_gitignore(path)
    except IgnoreDiscoveryError as e:
        logger.warning("Skipping ignore file: %s", e)
        return None
    if spec is None:
        return None
    logger.debug("Loaded ignore file %s", path)
    return IgnoreFile(path=path, base_dir=path.parent, spec=spec)


def discover_ignore_files(cwd: Path, ignore: Sequence[str] = ()) -> IgnoreRules:
    """
    Collect ignore files that apply to searches in `cwd`: those in ancestor
    directories up to the repository root, then those at or below `cwd`.

    Ignore files matching one of the caller's `ignore` globs are skipped, so
    `ignore=["**/.gitignore"]` turns gitignore rules off for those files. A
    missing ignore file is normal; an unreadable one is logged and skipped.
    """
    root = Path(os.path.abspath(cwd))
    found: list[IgnoreFile] = []

    for directory in _ancestor_dirs(root):
        path = directory / IGNORE_FILE_NAME
        if not path.is_file() or _is_caller_ignored(IGNORE_FILE_NAME, ignore):
            continue
        loaded = _load(path)
        if loaded is not None:
            found.append(loaded)

    if root.is_dir():
        nested = glob.glob(
            f"**/{IGNORE_FILE_NAME}",
            flags=_DISCOVERY_FLAGS,
            root_dir=str(root),
            exclude=[*DEFAULT_DISCOVERY_EXCLUDES, *ignore],
        )
        # Shallowest first, so parent rules precede nested ones.
        for rel in sorted(nested, key=lambda p: (p.count("/"), p)):
            loaded = _load(root / rel)
            if loaded is not None:
                found.append(loaded)

    return IgnoreRules(cwd=root, files=tuple(found))
