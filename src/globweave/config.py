"""
TOML-based config file loading for globweave.

Searches for `.globweave.toml`, `globweave.toml`, or `pyproject.toml [tool.globweave]`
walking up from the search directory. Config values are merged with call options
using three-way precedence: explicit call options > config file > built-in defaults.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

from globweave.expansion import expansion_rule
from globweave.gitignore import find_repository_root
from globweave.patterns import pattern_tuple
from globweave.types import GlobOptions

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

logger = logging.getLogger(__name__)


@dataclass
class GlobweaveConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    # Planning
    ignore: list[str] | None = None
    gitignore: bool | None = None
    expand_directories: bool | list[str] | dict[str, list[str]] | None = None
    only_files: bool | None = None
    # Matcher
    dot: bool | None = None
    follow_symlinks: bool | None = None
    case_sensitive: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".globweave.toml", "globweave.toml", "pyproject.toml"]

# Mapping from TOML kebab-case keys to Python snake_case field names
_KEBAB_TO_SNAKE: dict[str, str] = {
    "expand-directories": "expand_directories",
    "only-files": "only_files",
    "follow-symlinks": "follow_symlinks",
    "case-sensitive": "case_sensitive",
}

_VALID_FIELDS = {f.name for f in fields(GlobweaveConfig)}

_MATCHER_FIELDS = {"dot", "follow_symlinks", "case_sensitive"}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Look for a config file in `start_dir` and its parents, stopping at the
    enclosing repository root when there is one. Per directory, `.globweave.toml`
    beats `globweave.toml`, which beats a `pyproject.toml` with `[tool.globweave]`.
    """
    start = start_dir.resolve()
    stop = find_repository_root(start)
    for directory in (start, *start.parents):
        for filename in _CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file() and _declares_config(candidate):
                return candidate
        if directory == stop:
            break
    return None


def _declares_config(path: Path) -> bool:
    if path.name != "pyproject.toml":
        return True
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.debug("Skipping %s while searching for config: %s", path, e)
        return False
    return "globweave" in data.get("tool", {})


def load_config(config_path: Path) -> GlobweaveConfig:
    """
    Load a `GlobweaveConfig` from a TOML file. Supports both standalone
    `globweave.toml` / `.globweave.toml` and `pyproject.toml` (extracts
    `[tool.globweave]`). Unknown keys are ignored.
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("globweave", {})

    logger.debug("Loaded config file %s", config_path)
    return _parse_config_data(data)


def _parse_config_data(data: dict[str, Any]) -> GlobweaveConfig:
    mapped: dict[str, Any] = {}
    for key, value in data.items():
        snake_key = _KEBAB_TO_SNAKE.get(key, key.replace("-", "_"))
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = value
    return GlobweaveConfig(**mapped)


def merge_config_with_options(
    options: GlobOptions, config: GlobweaveConfig | None
) -> GlobOptions:
    """
    Fill in options the caller didn't pass explicitly from `config`.
    Returns a new `GlobOptions`; `options` is left untouched.
    """
    if config is None:
        return options

    changes: dict[str, Any] = {}
    matcher_options = dict(options.matcher_options)
    for cfg_field in fields(GlobweaveConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None or cfg_field.name in options.explicit:
            continue
        if cfg_field.name in _MATCHER_FIELDS:
            matcher_options[cfg_field.name] = cfg_value
        elif cfg_field.name == "ignore":
            changes["ignore"] = pattern_tuple(cfg_value, "ignore")
        elif cfg_field.name == "expand_directories":
            changes["expand_directories"] = expansion_rule(cfg_value)
        else:
            changes[cfg_field.name] = bool(cfg_value)

    changes["matcher_options"] = MappingProxyType(matcher_options)
    return dataclasses.replace(options, **changes)


def apply_config(options: GlobOptions) -> GlobOptions:
    """
    Merge the config file selected by `options.config`: `True` searches upward
    from `options.cwd`, a path loads that file, `False` leaves options as is.
    """
    if options.config is False:
        return options
    if options.config is True:
        config_path = find_config_file(options.cwd)
        if config_path is None:
            return options
    else:
        config_path = cast(Path, options.config)
    return merge_config_with_options(options, load_config(config_path))
