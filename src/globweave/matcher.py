"""
The matcher seam: the engine that turns one glob plus exclusions into paths.

`WcmatchMatcher` is the default, built on `wcmatch.glob`. Any object with a
compatible `match()` method can be passed to `find()` / `find_sync()` instead.
"""

from __future__ import annotations

import os
from typing import Protocol

from wcmatch import glob

from globweave.errors import MatcherError
from globweave.patterns import MAGIC_FLAGS
from globweave.types import TaskOptions

# Pass-through options the default matcher understands.
SUPPORTED_OPTIONS = frozenset({"dot", "follow_symlinks", "case_sensitive", "absolute"})


class Matcher(Protocol):
    def match(self, pattern: str, options: TaskOptions) -> list[str]: ...


class WcmatchMatcher:
    """
    Match with `wcmatch.glob.glob()`, rooted at the task's `cwd`.

    Paths come back as posix-style paths relative to `cwd` (or absolute with
    `absolute=True`), sorted, since directory scan order is not stable.
    """

    def flags(self, options: TaskOptions) -> int:
        unknown = set(options.matcher_options) - SUPPORTED_OPTIONS
        if unknown:
            raise MatcherError(f"Unsupported matcher options: {', '.join(sorted(unknown))}")

        flags = MAGIC_FLAGS
        if options.only_files:
            flags |= glob.NODIR
        if options.matcher_options.get("dot", False):
            flags |= glob.DOTGLOB
        if options.matcher_options.get("follow_symlinks", False):
            flags |= glob.FOLLOW
        if not options.matcher_options.get("case_sensitive", True):
            flags |= glob.IGNORECASE
        return flags

    def match(self, pattern: str, options: TaskOptions) -> list[str]:
        flags = self.flags(options)
        if not options.cwd.is_dir():
            raise MatcherError(f"Search directory not found: {options.cwd}")

        root_dir = str(options.cwd)
        paths = glob.glob(
            pattern,
            flags=flags,
            root_dir=root_dir,
            exclude=list(options.ignore) or None,
        )
        if options.reinclude:
            # wcmatch treats every `exclude` entry as an exclusion, so paths
            # brought back by a re-include glob come from an unfiltered pass.
            match_flags = (flags & ~glob.NODIR) | glob.DOTGLOB
            kept = set(paths)
            paths.extend(
                p
                for p in glob.glob(pattern, flags=flags, root_dir=root_dir)
                if p not in kept
                and glob.globmatch(p, list(options.reinclude), flags=match_flags)
            )
        paths = [p.replace(os.sep, "/") for p in paths]
        if options.matcher_options.get("absolute", False):
            paths = [
                os.path.join(os.path.abspath(root_dir), p).replace(os.sep, "/")
                if not os.path.isabs(p)
                else p
                for p in paths
            ]
        return sorted(paths)
