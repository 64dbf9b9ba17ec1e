"""
Rule Configuration.

User-facing rule definitions with priorities and focus-mode visibility,
and their conversion into the ordered routing rules the router consumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .models import WILDCARD_SOURCE, Action, Rule


class Priority(IntEnum):
    """Priority of a rule config; higher priorities are evaluated first."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3

    @classmethod
    def parse(cls, value: int | str | Priority) -> Priority:
        """
        Parse a priority from its name or numeric value.

        Raises:
            ValueError: If the value is not a known priority
        """
        if isinstance(value, Priority):
            return value
        if isinstance(value, str) and not value.strip().lstrip("-").isdigit():
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown priority '{value}'") from None
        try:
            return cls(int(value))
        except ValueError:
            raise ValueError(f"Unknown priority '{value}'") from None


ACTION_LABELS: dict[Action, str] = {
    Action.ALLOW: "Show Immediately",
    Action.SUPPRESS: "Suppress",
    Action.DIGEST: "Digest (Sidebar)",
}


@dataclass
class SourceRuleConfig:
    """
    A configured rule for a notification source.

    Attributes:
        source: Source name or "*"
        priority: Evaluation priority (higher first)
        action: Action when matched
        show_in_focus_mode: Keep this rule while focus mode is on
        contains: Optional content filter
        title: Display name (generated when absent)
    """

    source: str
    priority: Priority
    action: Action
    show_in_focus_mode: bool = False
    contains: str | None = None
    title: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceRuleConfig:
        """
        Create from configuration dict.

        Raises:
            ValueError: If source, action or priority is missing or invalid
        """
        source = data.get("source")
        if not isinstance(source, str) or not source.strip():
            raise ValueError("Rule config requires a non-empty 'source'")
        if "action" not in data:
            raise ValueError(f"Rule config for '{source}' requires an 'action'")
        return cls(
            source=source.strip(),
            priority=Priority.parse(data.get("priority", Priority.MEDIUM)),
            action=Action.parse(data["action"]),
            show_in_focus_mode=bool(data.get("show_in_focus_mode", False)),
            contains=data.get("contains"),
            title=data.get("title"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to configuration dict."""
        result: dict[str, Any] = {}
        if self.title:
            result["title"] = self.title
        result["source"] = self.source
        result["priority"] = self.priority.name.lower()
        result["action"] = self.action.value
        result["show_in_focus_mode"] = self.show_in_focus_mode
        if self.contains:
            result["contains"] = self.contains
        return result

    def to_rule(self) -> Rule:
        return Rule(source=self.source, action=self.action, contains=self.contains)

    def validate(self) -> list[str]:
        """
        Validate the rule config.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        if not self.source.strip():
            errors.append("source must not be empty")
        if self.contains is not None and not isinstance(self.contains, str):
            errors.append(f"contains must be a string, got {type(self.contains).__name__}")
        return errors


def get_default_rule_configs() -> list[SourceRuleConfig]:
    """Built-in rule configs used when none are configured."""
    return [
        SourceRuleConfig(
            title="Build Failures",
            source="Build",
            priority=Priority.HIGH,
            action=Action.ALLOW,
            contains="failed",
        ),
        SourceRuleConfig(
            title="Build Success",
            source="Build",
            priority=Priority.LOW,
            action=Action.SUPPRESS,
            contains="succeeded",
        ),
        SourceRuleConfig(
            title="Test Failures",
            source="Test",
            priority=Priority.HIGH,
            action=Action.ALLOW,
            contains="failed",
        ),
        SourceRuleConfig(
            title="Test Passed",
            source="Test",
            priority=Priority.LOW,
            action=Action.SUPPRESS,
            contains="passed",
        ),
        SourceRuleConfig(
            title="Debug Exceptions",
            source="Debug",
            priority=Priority.CRITICAL,
            action=Action.ALLOW,
            show_in_focus_mode=True,
            contains="Exception",
        ),
        SourceRuleConfig(
            title="Extension Errors",
            source="Extension",
            priority=Priority.HIGH,
            action=Action.ALLOW,
            contains="error",
        ),
        SourceRuleConfig(
            title="Git Conflicts",
            source="Git",
            priority=Priority.HIGH,
            action=Action.ALLOW,
            contains="conflict",
        ),
        SourceRuleConfig(
            title="Git Completed",
            source="Git",
            priority=Priority.LOW,
            action=Action.SUPPRESS,
            contains="completed",
        ),
        # @mentions are handled by the ledger, not by a rule
        SourceRuleConfig(
            title="Chat Messages",
            source="Chat",
            priority=Priority.MEDIUM,
            action=Action.DIGEST,
            show_in_focus_mode=True,
        ),
    ]


def convert_to_routing_rules(configs: list[SourceRuleConfig], focus_mode: bool) -> list[Rule]:
    """
    Convert rule configs into ordered routing rules.

    Configs are ordered by priority (highest first, ties keep their
    configured order). In focus mode only configs visible in focus mode
    survive. A trailing catch-all digests everything else, or suppresses
    it in focus mode.

    Args:
        configs: Rule configs
        focus_mode: Whether focus mode is on

    Returns:
        Ordered routing rules ending in a catch-all
    """
    ordered = sorted(configs, key=lambda c: c.priority, reverse=True)

    rules = [c.to_rule() for c in ordered if c.show_in_focus_mode or not focus_mode]

    catch_all = Action.SUPPRESS if focus_mode else Action.DIGEST
    rules.append(Rule(source=WILDCARD_SOURCE, action=catch_all))
    return rules


def get_priority_label(priority: Priority | int) -> str:
    try:
        return Priority(priority).name.capitalize()
    except ValueError:
        return "Unknown"


def get_action_label(action: Action | str) -> str:
    try:
        return ACTION_LABELS[Action.parse(action)]
    except ValueError:
        return str(action)


def generate_rule_title(config: SourceRuleConfig) -> str:
    """Return the config's title, or a description built from its fields."""
    if config.title:
        return config.title
    source = "Any source" if config.source == WILDCARD_SOURCE else config.source
    contains = f' containing "{config.contains}"' if config.contains else ""
    return f"{source}{contains} → {get_action_label(config.action)}"


def find_shadowed_rules(rules: list[Rule]) -> list[int]:
    """
    Find rules that can never match because an earlier catch-all wins.

    Returns:
        Indices of unreachable rules
    """
    for index, rule in enumerate(rules):
        if rule.is_catch_all:
            return list(range(index + 1, len(rules)))
    return []
