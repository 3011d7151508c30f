"""Option and task records shared by the planner, matcher, and composer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from os import PathLike
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast

from globweave.errors import InvalidOptionsError
from globweave.expansion import ExpansionRule, expansion_rule
from globweave.patterns import pattern_tuple

if TYPE_CHECKING:
    from globweave.gitignore import IgnoreRules

# Accepted camelCase spellings of option names.
_OPTION_ALIASES: dict[str, str] = {
    "expandDirectories": "expand_directories",
    "onlyFiles": "only_files",
    "followSymlinks": "follow_symlinks",
    "followSymbolicLinks": "follow_symlinks",
    "caseSensitive": "case_sensitive",
}


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class GlobOptions:
    """
    Immutable options for one call. Build with `GlobOptions.from_any()`, which
    copies caller values into fresh containers so caller objects are never mutated.

    `matcher_options` holds every option globweave doesn't interpret itself
    (such as `dot`); they are forwarded to the matcher unchanged.
    `explicit` records which options the caller passed, for config file merging.
    """

    cwd: Path
    ignore: tuple[str, ...] = ()
    gitignore: bool = False
    expand_directories: ExpansionRule | None = ExpansionRule()
    only_files: bool = True
    matcher_options: Mapping[str, Any] = field(default_factory=_empty_mapping)
    config: bool | Path = False
    explicit: frozenset[str] = frozenset()

    @classmethod
    def from_any(
        cls, options: GlobOptions | Mapping[str, Any] | None = None, **kwargs: Any
    ) -> GlobOptions:
        """
        Build options from a `GlobOptions`, a mapping (read-only mappings are fine),
        or `None`, with keyword overrides taking precedence.
        """
        inherited: frozenset[str] = frozenset()
        if isinstance(options, GlobOptions):
            if not kwargs:
                return options
            raw: dict[str, Any] = {name: getattr(options, name) for name in _FIELDS}
            raw.update(options.matcher_options)
            inherited = options.explicit
        elif options is None:
            raw = {}
        elif isinstance(options, Mapping):
            raw = dict(cast(Mapping[str, Any], options))
        else:
            raise InvalidOptionsError("options must be a mapping or GlobOptions")

        values: dict[str, Any] = {}
        matcher_options: dict[str, Any] = {}
        for source in (raw, kwargs):
            for key, value in source.items():
                name = _OPTION_ALIASES.get(key, key)
                if name in _FIELDS:
                    values[name] = value
                else:
                    matcher_options[name] = value

        if isinstance(options, GlobOptions):
            explicit = inherited | {_OPTION_ALIASES.get(k, k) for k in kwargs}
        else:
            explicit = frozenset(values) | frozenset(matcher_options)
        cwd = values.get("cwd")
        return cls(
            cwd=Path(cwd) if cwd is not None else Path.cwd(),
            ignore=pattern_tuple(values.get("ignore", ()), "ignore"),
            gitignore=bool(values.get("gitignore", False)),
            expand_directories=expansion_rule(values.get("expand_directories", True)),
            only_files=bool(values.get("only_files", True)),
            matcher_options=MappingProxyType(matcher_options),
            config=_config_value(values.get("config", False)),
            explicit=explicit,
        )


_FIELDS = {f.name for f in fields(GlobOptions)} - {"matcher_options", "explicit"}


def _config_value(value: object) -> bool | Path:
    if isinstance(value, (str, PathLike)):
        return Path(cast("str | PathLike[str]", value))
    return bool(value)


@dataclass(frozen=True)
class TaskOptions:
    """
    Everything the matcher needs to run a single task. A path matching `ignore`
    is dropped unless it also matches one of the `reinclude` globs.
    """

    cwd: Path
    ignore: tuple[str, ...] = ()
    reinclude: tuple[str, ...] = ()
    only_files: bool = True
    ignore_rules: IgnoreRules | None = None
    matcher_options: Mapping[str, Any] = field(default_factory=_empty_mapping)


@dataclass(frozen=True)
class Task:
    """One positive pattern paired with its exclusion set."""

    pattern: str
    options: TaskOptions
