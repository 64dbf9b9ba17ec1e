"""
Hush Rule Commands

Inspect rule configs and the routing rules derived from them.
"""

import argparse
from pathlib import Path
from typing import Any, Optional

from ..core import get_settings, get_utc_timestamp
from ..routing import (
    RuleConfigLoader,
    SourceRuleConfig,
    convert_to_routing_rules,
    find_shadowed_rules,
    generate_rule_title,
    get_action_label,
    get_priority_label,
)


def _resolve_rules_file(args: argparse.Namespace) -> Optional[Path]:
    """Rules file from --file, falling back to HUSH_RULES_FILE."""
    if getattr(args, "file", None):
        return Path(args.file)
    return get_settings().rules_file


def load_rule_configs(args: argparse.Namespace) -> list[SourceRuleConfig]:
    """
    Load rule configs for a command.

    Raises:
        FileNotFoundError: If the rules file doesn't exist
        ValueError: If the rules file is invalid
    """
    return RuleConfigLoader.load_or_default(_resolve_rules_file(args))


def _load_error(query_ts: str, error: Exception) -> dict[str, Any]:
    return {
        "query_timestamp": query_ts,
        "status": "error",
        "error": "not_found" if isinstance(error, FileNotFoundError) else "invalid",
        "message": str(error),
    }


# =============================================================================
# List Command
# =============================================================================


def cmd_rules_list(args: argparse.Namespace) -> dict[str, Any]:
    """
    List configured rules with display labels.

    Args:
        args: Parsed arguments

    Returns:
        Result dict with rule list
    """
    query_ts = get_utc_timestamp()

    try:
        configs = load_rule_configs(args)
    except (FileNotFoundError, ValueError) as e:
        return _load_error(query_ts, e)

    rules = []
    for config in configs:
        rules.append(
            {
                "title": generate_rule_title(config),
                "source": config.source,
                "contains": config.contains,
                "priority": get_priority_label(config.priority),
                "action": config.action.value,
                "action_label": get_action_label(config.action),
                "show_in_focus_mode": config.show_in_focus_mode,
            }
        )

    return {
        "query_timestamp": query_ts,
        "status": "ok",
        "source_file": str(_resolve_rules_file(args) or "built-in"),
        "count": len(rules),
        "rules": rules,
    }


# =============================================================================
# Routing Command
# =============================================================================


def cmd_rules_routing(args: argparse.Namespace) -> dict[str, Any]:
    """
    Show the ordered routing rules derived for a mode.

    Args:
        args: Parsed arguments with focus flag

    Returns:
        Result dict with routing rules and unreachable indices
    """
    query_ts = get_utc_timestamp()

    try:
        configs = load_rule_configs(args)
    except (FileNotFoundError, ValueError) as e:
        return _load_error(query_ts, e)

    rules = convert_to_routing_rules(configs, focus_mode=args.focus)

    return {
        "query_timestamp": query_ts,
        "status": "ok",
        "mode": "focus" if args.focus else "normal",
        "rules": [rule.to_dict() for rule in rules],
        "unreachable": find_shadowed_rules(rules),
    }


# =============================================================================
# Validate Command
# =============================================================================


def cmd_rules_validate(args: argparse.Namespace) -> dict[str, Any]:
    """Validate a rule config file."""
    query_ts = get_utc_timestamp()
    errors = RuleConfigLoader.validate_file(args.file)

    result: dict[str, Any] = {
        "query_timestamp": query_ts,
        "status": "ok" if not errors else "error",
        "file": str(args.file),
        "valid": not errors,
        "errors": errors,
    }
    if errors:
        result["error"] = "invalid"
    return result


# =============================================================================
# Parser Registration
# =============================================================================


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register rule command parsers."""

    rules_parser = subparsers.add_parser(
        "rules",
        help="Inspect notification rules",
        description="Inspect rule configs and the ordered routing rules derived from them.",
    )

    rules_subparsers = rules_parser.add_subparsers(
        dest="rules_command",
        help="Rule commands",
    )

    # rules list [--file F]
    list_parser = rules_subparsers.add_parser("list", help="List configured rules")
    list_parser.add_argument("--file", help="Rule config YAML (default: HUSH_RULES_FILE)")
    list_parser.set_defaults(func=cmd_rules_list)

    # rules routing [--file F] [--focus]
    routing_parser = rules_subparsers.add_parser(
        "routing",
        help="Show derived routing rules in evaluation order",
    )
    routing_parser.add_argument("--file", help="Rule config YAML (default: HUSH_RULES_FILE)")
    routing_parser.add_argument(
        "--focus",
        action="store_true",
        help="Derive the rules used while focus mode is on",
    )
    routing_parser.set_defaults(func=cmd_rules_routing)

    # rules validate --file F
    validate_parser = rules_subparsers.add_parser("validate", help="Validate a rule config file")
    validate_parser.add_argument("--file", required=True, help="Rule config YAML")
    validate_parser.set_defaults(func=cmd_rules_validate)
