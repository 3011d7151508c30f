"""
Directory expansion: rewriting bare directory patterns into globs for the files
beneath them.
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from globweave.defaults import DEFAULT_EXPANSION_GLOB
from globweave.errors import InvalidOptionsError
from globweave.patterns import ClassifiedPattern, is_magic, pattern_tuple


@dataclass(frozen=True)
class ExpansionRule:
    """
    How a directory is expanded. With neither `files` nor `extensions` set,
    a directory `dir` becomes `dir/**`.
    """

    files: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()


def expansion_rule(value: object) -> ExpansionRule | None:
    """
    Build an `ExpansionRule` from an `expand_directories` option value:
    a bool, a sequence of file globs, a `{"files": ..., "extensions": ...}`
    mapping, or an `ExpansionRule`. Returns `None` when expansion is disabled.
    """
    if isinstance(value, ExpansionRule):
        return value
    if value is None or value is False:
        return None
    if value is True:
        return ExpansionRule()
    if isinstance(value, Mapping):
        mapping = cast(Mapping[str, Any], value)
        unknown = set(mapping) - {"files", "extensions"}
        if unknown:
            raise InvalidOptionsError(
                f"Unknown `expand_directories` keys: {', '.join(sorted(unknown))}"
            )
        return ExpansionRule(
            files=pattern_tuple(mapping.get("files", ()), "expand_directories.files"),
            extensions=pattern_tuple(
                mapping.get("extensions", ()), "expand_directories.extensions"
            ),
        )
    if isinstance(value, Sequence) and not isinstance(value, str):
        return ExpansionRule(files=pattern_tuple(value, "expand_directories"))
    raise InvalidOptionsError(
        "`expand_directories` must be a bool, a sequence of globs, "
        "or a mapping with `files` and/or `extensions`"
    )


def _extensions_glob(extensions: tuple[str, ...]) -> str:
    if len(extensions) > 1:
        return "{" + ",".join(extensions) + "}"
    return extensions[0]


def directory_globs(directory: str, rule: ExpansionRule) -> list[str]:
    """Globs that match the files beneath `directory` under the given rule."""
    base = directory.rstrip("/") or "/"
    if rule.files and rule.extensions:
        exts = _extensions_glob(rule.extensions)
        return [
            posixpath.join(base, f"**/{name}")
            if posixpath.splitext(name)[1]
            else posixpath.join(base, f"**/{name}.{exts}")
            for name in rule.files
        ]
    if rule.files:
        return [posixpath.join(base, f"**/{name}") for name in rule.files]
    if rule.extensions:
        return [posixpath.join(base, f"**/*.{_extensions_glob(rule.extensions)}")]
    return [posixpath.join(base, DEFAULT_EXPANSION_GLOB)]


def expand_directories(
    patterns: Sequence[ClassifiedPattern], rule: ExpansionRule | None, cwd: Path
) -> list[ClassifiedPattern]:
    """
    Replace each positive, non-magic pattern naming an existing directory
    (relative to `cwd`) with its expansion globs, in place. Negative patterns are
    never expanded.
    """
    if rule is None:
        return list(patterns)

    expanded: list[ClassifiedPattern] = []
    for pattern in patterns:
        if pattern.negative or is_magic(pattern.value) or not (cwd / pattern.value).is_dir():
            expanded.append(pattern)
            continue
        expanded.extend(
            ClassifiedPattern(value=glob, negative=False, raw=pattern.raw)
            for glob in directory_globs(pattern.value, rule)
        )
    return expanded
