"""
Rule Config Loader.

Loads and saves rule configs from YAML files shaped as:

    rules:
      - title: Build Failures
        source: Build
        priority: high
        action: allow
        contains: failed
        show_in_focus_mode: false
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..core.logging import get_logger
from .rules_config import SourceRuleConfig, get_default_rule_configs

logger = get_logger(__name__)


class RuleConfigLoader:
    """Load and save rule config files."""

    @classmethod
    def _read(cls, path: Path) -> list[Any]:
        if not path.exists():
            raise FileNotFoundError(f"Rule config not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in rule config {path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, dict):
            raise ValueError(f"Rule config {path} must be a YAML mapping")

        entries = data.get("rules", [])
        if not isinstance(entries, list):
            raise ValueError(f"'rules' in {path} must be a list")
        return entries

    @classmethod
    def load(cls, path: Path | str, strict: bool = False) -> list[SourceRuleConfig]:
        """
        Load rule configs from a YAML file.

        Args:
            path: File to read
            strict: Raise on the first invalid entry instead of skipping it

        Returns:
            Rule configs in file order

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not valid YAML of the expected shape,
                or an entry is invalid and strict is set
        """
        path = Path(path)
        configs = []

        for index, entry in enumerate(cls._read(path)):
            try:
                if not isinstance(entry, dict):
                    raise ValueError("entry must be a mapping")
                config = SourceRuleConfig.from_dict(entry)
                errors = config.validate()
                if errors:
                    raise ValueError("; ".join(errors))
            except ValueError as e:
                if strict:
                    raise ValueError(f"Invalid rule #{index} in {path}: {e}") from e
                logger.warning(f"Skipping invalid rule #{index} in {path}: {e}")
                continue
            configs.append(config)

        logger.debug(f"Loaded {len(configs)} rule configs from {path}")
        return configs

    @classmethod
    def load_or_default(cls, path: Path | str | None) -> list[SourceRuleConfig]:
        """Load rule configs, or return the built-in set when no path is given."""
        if path is None:
            return get_default_rule_configs()
        return cls.load(path)

    @classmethod
    def validate_file(cls, path: Path | str) -> list[str]:
        """
        Validate every entry of a rule config file.

        Returns:
            List of validation error messages (empty if valid)
        """
        path = Path(path)
        try:
            entries = cls._read(path)
        except (FileNotFoundError, ValueError) as e:
            return [str(e)]

        errors = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                errors.append(f"rule #{index}: entry must be a mapping")
                continue
            try:
                config = SourceRuleConfig.from_dict(entry)
            except ValueError as e:
                errors.append(f"rule #{index}: {e}")
                continue
            errors.extend(f"rule #{index}: {msg}" for msg in config.validate())
        return errors

    @classmethod
    def save(cls, path: Path | str, configs: list[SourceRuleConfig]) -> Path:
        """
        Write rule configs to a YAML file, creating parent directories.

        Returns:
            Path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {"rules": [c.to_dict() for c in configs]}
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

        logger.info(f"Saved {len(configs)} rule configs to {path}")
        return path
