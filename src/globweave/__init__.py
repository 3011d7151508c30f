"""
Ordered, de-duplicated globbing over mixed positive and negative patterns,
with directory expansion and gitignore support.

Usage::

    from globweave import find, find_sync, plan_tasks

    paths = find_sync(["src/**/*.py", "!**/test_*.py"], gitignore=True)
    paths = await find("docs", expand_directories={"extensions": ["md"]})
    tasks = plan_tasks(["*.tmp", "!b.tmp"], ignore=["c.tmp"])
"""

from globweave.config import GlobweaveConfig, find_config_file, load_config
from globweave.errors import (
    GlobweaveError,
    IgnoreDiscoveryError,
    InvalidOptionsError,
    InvalidPatternError,
    MatcherError,
)
from globweave.expansion import ExpansionRule
from globweave.finder import find, find_sync
from globweave.gitignore import IgnoreRules, discover_ignore_files
from globweave.matcher import Matcher, WcmatchMatcher
from globweave.patterns import has_glob_magic
from globweave.tasks import plan_tasks
from globweave.types import GlobOptions, Task, TaskOptions

__all__ = [
    "ExpansionRule",
    "GlobOptions",
    "GlobweaveConfig",
    "GlobweaveError",
    "IgnoreDiscoveryError",
    "IgnoreRules",
    "InvalidOptionsError",
    "InvalidPatternError",
    "Matcher",
    "MatcherError",
    "Task",
    "TaskOptions",
    "WcmatchMatcher",
    "discover_ignore_files",
    "find",
    "find_config_file",
    "find_sync",
    "has_glob_magic",
    "load_config",
    "plan_tasks",
]
