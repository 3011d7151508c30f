"""
Running planned tasks and composing their results.

`find_sync()` blocks; `find()` is a coroutine that plans and matches in worker
threads so the event loop stays free. Both return paths in task order, keeping
only the first occurrence of each path.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Iterable, Mapping
from typing import Any, cast

from globweave.matcher import Matcher, WcmatchMatcher
from globweave.tasks import plan_tasks
from globweave.types import GlobOptions, Task


def compose_results(results: Iterable[Iterable[str]]) -> list[str]:
    """Concatenate per-task results in order, dropping repeated paths."""
    seen: set[str] = set()
    composed: list[str] = []
    for paths in results:
        for path in paths:
            if path not in seen:
                seen.add(path)
                composed.append(path)
    return composed


def run_task(task: Task, matcher: Matcher) -> list[str]:
    """
    Match one task and drop paths excluded by its gitignore rules.
    Matcher errors propagate as-is, with a note naming the task on Python 3.11+.
    """
    try:
        paths = matcher.match(task.pattern, task.options)
    except Exception as e:
        if sys.version_info >= (3, 11):
            e.add_note(f"while matching {task.pattern!r} in {task.options.cwd}")
        raise
    rules = task.options.ignore_rules
    if rules is None:
        return list(paths)
    return [p for p in paths if not rules.is_ignored(p)]


def find_sync(
    patterns: object,
    options: GlobOptions | Mapping[str, Any] | None = None,
    *,
    matcher: Matcher | None = None,
    **kwargs: Any,
) -> list[str]:
    """
    Find paths matching `patterns`, blocking until done.

    Options: `cwd`, `ignore`, `gitignore`, `expand_directories`, `only_files`,
    `config`; anything else (such as `dot`) is passed to the matcher.
    """
    tasks = plan_tasks(patterns, options, **kwargs)
    if not tasks:
        return []
    active = matcher if matcher is not None else WcmatchMatcher()
    return compose_results(run_task(task, active) for task in tasks)


async def find(
    patterns: object,
    options: GlobOptions | Mapping[str, Any] | None = None,
    *,
    matcher: Matcher | None = None,
    **kwargs: Any,
) -> list[str]:
    """
    Async version of `find_sync()`. Tasks run concurrently in worker threads but
    results keep task order. If any task fails, the failure of the earliest task
    (in task order) is raised and other results are discarded.
    """
    tasks = await asyncio.to_thread(plan_tasks, patterns, options, **kwargs)
    if not tasks:
        return []
    active = matcher if matcher is not None else WcmatchMatcher()
    outcomes = await asyncio.gather(
        *(asyncio.to_thread(run_task, task, active) for task in tasks),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    return compose_results(cast(list[list[str]], outcomes))
