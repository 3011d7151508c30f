"""
Task planning: turning a mixed pattern list into independent match tasks.

Each positive pattern becomes one `Task`, in input order, carrying the caller's
ignores, the negative patterns that follow it, and (with `gitignore=True`) the
discovered ignore rules. Both `find()` and `find_sync()` execute exactly the
tasks returned here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from globweave.config import apply_config
from globweave.exclusions import exclusions_for, split_ignore
from globweave.expansion import expand_directories
from globweave.gitignore import discover_ignore_files
from globweave.patterns import ClassifiedPattern, classify_patterns
from globweave.types import GlobOptions, Task, TaskOptions

logger = logging.getLogger(__name__)


def build_tasks(patterns: list[ClassifiedPattern], options: GlobOptions) -> list[Task]:
    """Plan tasks for already-classified patterns."""
    options = apply_config(options)
    expanded = expand_directories(patterns, options.expand_directories, options.cwd)
    if not any(p.positive for p in expanded):
        return []

    caller_ignore, reinclude = split_ignore(options.ignore)
    ignore_rules = None
    ignore_file_paths: list[str] = []
    if options.gitignore:
        ignore_rules = discover_ignore_files(options.cwd, caller_ignore)
        ignore_file_paths = ignore_rules.relative_paths()

    tasks: list[Task] = []
    for index, pattern in enumerate(expanded):
        if pattern.negative:
            continue
        task_options = TaskOptions(
            cwd=options.cwd,
            ignore=exclusions_for(index, expanded, caller_ignore, ignore_file_paths),
            reinclude=reinclude,
            only_files=options.only_files,
            ignore_rules=ignore_rules,
            matcher_options=options.matcher_options,
        )
        tasks.append(Task(pattern=pattern.value, options=task_options))

    logger.debug("Planned %d task(s) from %d pattern(s)", len(tasks), len(patterns))
    return tasks


def plan_tasks(
    patterns: object, options: GlobOptions | Mapping[str, Any] | None = None, **kwargs: Any
) -> list[Task]:
    """
    Plan the match tasks for `patterns` (a string or a sequence of strings).

    Raises `InvalidPatternError` before doing any filesystem access if
    `patterns` has the wrong shape. Returns `[]` when every pattern is negative.
    """
    classified = classify_patterns(patterns)
    return build_tasks(classified, GlobOptions.from_any(options, **kwargs))
