"""
Pattern classification: input validation, polarity, and glob magic detection.

A pattern's polarity depends on its leading `!` characters. Each `!!` pair is an
escape for one literal `!`, and a single leftover `!` negates:

    x     -> positive  x
    !x    -> negative  x
    !!x   -> positive  !x
    !!!x  -> negative  !x
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from wcmatch import glob

from globweave.errors import InvalidOptionsError, InvalidPatternError

NEGATION_MARKER = "!"

# Flags shared with the default matcher so magic detection agrees with matching.
MAGIC_FLAGS = glob.GLOBSTAR | glob.BRACE


@dataclass(frozen=True)
class ClassifiedPattern:
    """A pattern with its negation markers resolved."""

    value: str
    negative: bool
    raw: str

    @property
    def positive(self) -> bool:
        return not self.negative


def normalize_patterns(patterns: object) -> list[str]:
    """
    Normalize a string or sequence of strings into a new list of strings.
    Raises `InvalidPatternError` for anything else, including sequences that hold
    a non-string element.
    """
    if isinstance(patterns, str):
        return [patterns]
    # `str` is itself a Sequence, and bytes/bytearray would iterate as ints.
    if not isinstance(patterns, Sequence) or isinstance(patterns, (bytes, bytearray)):
        raise InvalidPatternError()
    result: list[str] = []
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise InvalidPatternError()
        result.append(pattern)
    return result


def pattern_tuple(value: object, name: str) -> tuple[str, ...]:
    """Copy an option holding a sequence of globs into a tuple, or raise `InvalidOptionsError`."""
    if value is None:
        return ()
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        raise InvalidOptionsError(f"`{name}` must be a sequence of strings")
    if not all(isinstance(item, str) for item in value):
        raise InvalidOptionsError(f"`{name}` must be a sequence of strings")
    return tuple(value)


def classify_pattern(pattern: str) -> ClassifiedPattern:
    count = len(pattern) - len(pattern.lstrip(NEGATION_MARKER))
    rest = pattern[count:]
    return ClassifiedPattern(
        value=NEGATION_MARKER * (count // 2) + rest,
        negative=count % 2 == 1,
        raw=pattern,
    )


def classify_patterns(patterns: object) -> list[ClassifiedPattern]:
    """Validate and classify every pattern, in input order."""
    return [classify_pattern(p) for p in normalize_patterns(patterns)]


def is_magic(pattern: str) -> bool:
    return glob.is_magic(pattern, flags=MAGIC_FLAGS)


def has_glob_magic(patterns: object) -> bool:
    """
    True if any of the given patterns contains glob metacharacters
    (`*`, `?`, `[...]`, `{a,b}`).
    """
    return any(is_magic(p) for p in normalize_patterns(patterns))
