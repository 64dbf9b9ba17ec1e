"""
Tests for the YAML rule config loader.
"""

from __future__ import annotations

import logging

import pytest

from hush.routing.loader import RuleConfigLoader
from hush.routing.models import Action
from hush.routing.rules_config import Priority, get_default_rule_configs

VALID_YAML = """\
rules:
  - title: Git Conflicts
    source: Git
    priority: high
    action: allow
    contains: conflict
  - source: Chat
    priority: medium
    action: digest
    show_in_focus_mode: true
"""

MIXED_YAML = """\
rules:
  - source: Git
    action: allow
  - source: Build
    action: explode
  - just a string
"""


@pytest.fixture
def write_yaml(tmp_path):
    def _write(content: str, name: str = "rules.yaml"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


class TestLoad:
    """Tests for RuleConfigLoader.load."""

    def test_load_valid(self, write_yaml):
        configs = RuleConfigLoader.load(write_yaml(VALID_YAML))

        assert len(configs) == 2
        assert configs[0].title == "Git Conflicts"
        assert configs[0].priority is Priority.HIGH
        assert configs[0].action is Action.ALLOW
        assert configs[1].show_in_focus_mode is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader.load(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, write_yaml):
        with pytest.raises(ValueError, match="Invalid YAML"):
            RuleConfigLoader.load(write_yaml("rules: [unclosed"))

    def test_not_a_mapping(self, write_yaml):
        with pytest.raises(ValueError, match="must be a YAML mapping"):
            RuleConfigLoader.load(write_yaml("- a\n- b\n"))

    def test_rules_not_a_list(self, write_yaml):
        with pytest.raises(ValueError, match="must be a list"):
            RuleConfigLoader.load(write_yaml("rules: nope\n"))

    def test_empty_file(self, write_yaml):
        assert RuleConfigLoader.load(write_yaml("")) == []

    def test_skips_invalid_entries(self, write_yaml, caplog):
        with caplog.at_level(logging.WARNING, logger="hush.routing.loader"):
            configs = RuleConfigLoader.load(write_yaml(MIXED_YAML))

        assert [c.source for c in configs] == ["Git"]
        assert "Skipping invalid rule #1" in caplog.text
        assert "Skipping invalid rule #2" in caplog.text

    def test_strict_raises(self, write_yaml):
        with pytest.raises(ValueError, match="Invalid rule #1"):
            RuleConfigLoader.load(write_yaml(MIXED_YAML), strict=True)


class TestLoadOrDefault:
    """Tests for RuleConfigLoader.load_or_default."""

    def test_none_returns_defaults(self):
        assert RuleConfigLoader.load_or_default(None) == get_default_rule_configs()

    def test_path_is_loaded(self, write_yaml):
        assert len(RuleConfigLoader.load_or_default(write_yaml(VALID_YAML))) == 2


class TestValidateFile:
    """Tests for RuleConfigLoader.validate_file."""

    def test_valid_file(self, write_yaml):
        assert RuleConfigLoader.validate_file(write_yaml(VALID_YAML)) == []

    def test_reports_each_bad_entry(self, write_yaml):
        errors = RuleConfigLoader.validate_file(write_yaml(MIXED_YAML))
        assert len(errors) == 2
        assert errors[0].startswith("rule #1:")
        assert errors[1] == "rule #2: entry must be a mapping"

    def test_missing_file_is_an_error(self, tmp_path):
        errors = RuleConfigLoader.validate_file(tmp_path / "nope.yaml")
        assert len(errors) == 1
        assert "not found" in errors[0]


class TestSave:
    """Tests for RuleConfigLoader.save."""

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "rules.yaml"
        configs = get_default_rule_configs()

        written = RuleConfigLoader.save(path, configs)

        assert written == path
        assert RuleConfigLoader.load(path) == configs
