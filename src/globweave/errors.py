"""Exception types raised by globweave."""

from __future__ import annotations


class GlobweaveError(Exception):
    """Base class for all globweave errors."""


class InvalidPatternError(GlobweaveError, TypeError):
    """The patterns argument is not a string or a sequence of strings."""

    def __init__(self, message: str = "Patterns must be a string or a sequence of strings") -> None:
        super().__init__(message)


class InvalidOptionsError(GlobweaveError, ValueError):
    """An option value has the wrong shape."""


class MatcherError(GlobweaveError):
    """The matcher could not run with the given task options."""


class IgnoreDiscoveryError(GlobweaveError):
    """An ignore file exists but could not be read or parsed."""
