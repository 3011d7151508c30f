"""Combining caller ignores, negative patterns, and ignore-file paths into exclusion sets."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from globweave.patterns import ClassifiedPattern, classify_pattern


def _ordered_union(*groups: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    result: list[str] = []
    for group in groups:
        for pattern in group:
            if pattern not in seen:
                seen.add(pattern)
                result.append(pattern)
    return tuple(result)


def exclusions_for(
    index: int,
    patterns: Sequence[ClassifiedPattern],
    caller_ignore: Sequence[str] = (),
    ignore_file_paths: Sequence[str] = (),
) -> tuple[str, ...]:
    """
    Exclusion set for the positive pattern at `index`: caller ignores, then the
    negative patterns that follow it, then discovered ignore-file paths.

    Only later negatives apply, so `["!*.tmp", "a.tmp"]` still matches `a.tmp`.
    A negative textually identical to the task's own pattern is dropped.
    """
    own = patterns[index].value
    negatives = [
        p.value for p in patterns[index + 1 :] if p.negative and p.value != own
    ]
    return _ordered_union(caller_ignore, negatives, ignore_file_paths)


def split_ignore(ignore: Sequence[str]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """
    Split caller `ignore` entries into plain exclusions and re-include globs.

    `["**/*.js", "!**/foo.js"]` excludes every `.js` file except `foo.js`.
    Leading `!` pairs escape a literal `!`, as for patterns.
    """
    excluded: list[str] = []
    reincluded: list[str] = []
    for entry in map(classify_pattern, ignore):
        (reincluded if entry.negative else excluded).append(entry.value)
    return _ordered_union(excluded), _ordered_union(reincluded)
