"""Tests for directory expansion."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

import pytest

from globweave import ExpansionRule, InvalidOptionsError
from globweave.expansion import directory_globs, expand_directories, expansion_rule
from globweave.patterns import classify_patterns


def test_expansion_rule_from_bool():
    assert expansion_rule(True) == ExpansionRule()
    assert expansion_rule(False) is None


def test_expansion_rule_from_sequence():
    assert expansion_rule(["a*", "b*"]) == ExpansionRule(files=("a*", "b*"))


def test_expansion_rule_from_mapping():
    rule = expansion_rule(MappingProxyType({"files": ["a", "b"], "extensions": ["tmp"]}))
    assert rule == ExpansionRule(files=("a", "b"), extensions=("tmp",))


def test_expansion_rule_invalid():
    with pytest.raises(InvalidOptionsError):
        expansion_rule(5)
    with pytest.raises(InvalidOptionsError):
        expansion_rule({"names": ["a"]})
    with pytest.raises(InvalidOptionsError):
        expansion_rule({"files": "a"})


def test_directory_globs_default():
    assert directory_globs("tmp", ExpansionRule()) == ["tmp/**"]
    assert directory_globs("tmp/", ExpansionRule()) == ["tmp/**"]


def test_directory_globs_files():
    assert directory_globs("tmp", ExpansionRule(files=("a*", "b*"))) == ["tmp/**/a*", "tmp/**/b*"]


def test_directory_globs_extensions():
    assert directory_globs("src", ExpansionRule(extensions=("js",))) == ["src/**/*.js"]
    assert directory_globs("src", ExpansionRule(extensions=("js", "ts"))) == ["src/**/*.{js,ts}"]


def test_directory_globs_files_and_extensions():
    rule = ExpansionRule(files=("a", "b.md"), extensions=("tmp", "txt"))
    assert directory_globs("tmp", rule) == ["tmp/**/a.{tmp,txt}", "tmp/**/b.md"]


def test_expand_directories_in_place(tmp_path: Path):
    (tmp_path / "tmp").mkdir()
    (tmp_path / "x.tmp").write_text("")
    patterns = classify_patterns(["x.tmp", "tmp", "!tmp", "*.tmp"])
    result = expand_directories(patterns, ExpansionRule(), tmp_path)
    assert [(p.value, p.negative) for p in result] == [
        ("x.tmp", False),
        ("tmp/**", False),
        ("tmp", True),
        ("*.tmp", False),
    ]


def test_expand_directories_disabled(tmp_path: Path):
    (tmp_path / "tmp").mkdir()
    patterns = classify_patterns(["tmp"])
    assert expand_directories(patterns, None, tmp_path) == patterns


def test_expand_directories_skips_missing_and_magic(tmp_path: Path):
    (tmp_path / "tmp").mkdir()
    patterns = classify_patterns(["missing", "tmp*"])
    result = expand_directories(patterns, ExpansionRule(), tmp_path)
    assert [p.value for p in result] == ["missing", "tmp*"]
