"""
Hush Classify Command

One-shot classification of a single event, for trying out rule files.
"""

import argparse
from typing import Any

from ..core import format_epoch_ms, get_settings, get_utc_timestamp
from ..routing import (
    DEFAULT_MATCH_CONDITIONS,
    REGEX_MATCH_CONDITIONS,
    Event,
    Mode,
    NotificationLedger,
    SessionState,
    find_matching_rule,
)
from .rules import load_rule_configs


def cmd_classify(args: argparse.Namespace) -> dict[str, Any]:
    """
    Classify one event.

    Args:
        args: Parsed arguments with event fields and session options

    Returns:
        Result dict with action and the rule that decided it
    """
    query_ts = get_utc_timestamp()
    settings = get_settings()

    try:
        configs = load_rule_configs(args)
    except (FileNotFoundError, ValueError) as e:
        return {
            "query_timestamp": query_ts,
            "status": "error",
            "error": "not_found" if isinstance(e, FileNotFoundError) else "invalid",
            "message": str(e),
        }

    if args.away:
        mode = Mode.AWAY
    elif args.focus:
        mode = Mode.FOCUS
    else:
        mode = Mode.NORMAL

    conditions = REGEX_MATCH_CONDITIONS if args.regex else DEFAULT_MATCH_CONDITIONS
    ledger = NotificationLedger(
        state=SessionState(mode=mode),
        user_name=args.user if args.user is not None else settings.user_name,
        conditions=conditions,
        snooze_minutes=settings.snooze_minutes,
    )
    ledger.apply_rule_configs(configs)
    if args.snooze_minutes is not None:
        ledger.snooze(args.snooze_minutes)

    event = Event(source=args.source, title=args.title, body=args.body)
    action = ledger.classify(event)
    record = ledger.list_processed()[-1]

    matched_rule = None
    if not record.mentioned and mode is Mode.NORMAL and not ledger.is_snoozed():
        found = find_matching_rule(event, ledger.get_rules(), conditions)
        if found is not None:
            index, rule = found
            matched_rule = {"index": index, **rule.to_dict()}

    state = ledger.get_state()
    return {
        "query_timestamp": query_ts,
        "status": "ok",
        "event": event.to_dict(),
        "action": action.value,
        "mentioned": record.mentioned,
        "mode": state.mode.value,
        "snoozed_until": (
            format_epoch_ms(state.snooze_until) if state.snooze_until is not None else None
        ),
        "matched_rule": matched_rule,
    }


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register classify command parser."""

    parser = subparsers.add_parser(
        "classify",
        help="Classify a single notification event",
        description="Run one event through mention override, mode, snooze and rules.",
    )
    parser.add_argument("--source", required=True, help="Event source (e.g. Git, Build)")
    parser.add_argument("--title", default="", help="Event title")
    parser.add_argument("--body", default="", help="Event body")
    parser.add_argument("--file", help="Rule config YAML (default: HUSH_RULES_FILE)")
    parser.add_argument("--user", help="User name for @mentions (default: HUSH_USER_NAME)")
    parser.add_argument(
        "--snooze-minutes",
        type=int,
        help="Classify as if snoozed for this many minutes",
    )
    parser.add_argument(
        "--regex",
        action="store_true",
        help="Treat rule 'contains' filters as regular expressions",
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument("--focus", action="store_true", help="Classify in focus mode")
    mode_group.add_argument("--away", action="store_true", help="Classify in away mode")

    parser.set_defaults(func=cmd_classify)
