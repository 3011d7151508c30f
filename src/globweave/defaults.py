"""
Default patterns and constants for task planning and ignore-file discovery.

Discovery and exclusion patterns use glob syntax (with `**` and `{a,b}` braces),
not gitignore syntax. Gitignore syntax only appears inside the ignore files themselves.
"""

from __future__ import annotations

IGNORE_FILE_NAME = ".gitignore"

# Glob used when expanding a bare directory with no files/extensions rule.
DEFAULT_EXPANSION_GLOB = "**"

# Trees that are never searched for nested ignore files.
DEFAULT_DISCOVERY_EXCLUDES: list[str] = [
    # Version control
    "**/.git",
    "**/.git/**",
    # JavaScript/Node
    "**/node_modules/**",
    "**/bower_components/**",
    "**/flow-typed/**",
    # Coverage
    "**/coverage/**",
]

# Marker checked in ancestor directories to find the repository root.
REPOSITORY_MARKERS: list[str] = [".git"]
