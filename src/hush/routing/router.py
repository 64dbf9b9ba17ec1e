"""
Notification Router.

Pure classification of an event into an Action. Evaluation order:
1. Active snooze forces digest (rules are not consulted)
2. First rule whose conditions all match wins
3. No match: digest in focus mode, otherwise allow
"""

from __future__ import annotations

import time
from typing import Callable, Sequence

from ..core.logging import get_logger
from .matchers import DEFAULT_MATCH_CONDITIONS, MatchCondition
from .models import Action, Event, Rule, SessionState

logger = get_logger(__name__)

# Returns the current time as epoch milliseconds
Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def is_snoozed(state: SessionState, clock: Clock | None = None) -> bool:
    """Check if the state's snooze window is still open."""
    if state.snooze_until is None:
        return False
    now = (clock or system_clock)()
    return now < state.snooze_until


def rule_matches(
    rule: Rule,
    event: Event,
    conditions: Sequence[MatchCondition] = DEFAULT_MATCH_CONDITIONS,
) -> bool:
    """
    Check if every condition passes for a rule.

    A condition that raises is logged and counts as a non-match.
    """
    for condition in conditions:
        try:
            if not condition(rule, event):
                return False
        except Exception as e:
            name = getattr(condition, "__name__", repr(condition))
            logger.warning(f"Match condition {name} failed for rule {rule.to_dict()}: {e}")
            return False
    return True


def find_matching_rule(
    event: Event,
    rules: Sequence[Rule],
    conditions: Sequence[MatchCondition] = DEFAULT_MATCH_CONDITIONS,
) -> tuple[int, Rule] | None:
    """
    Find the first rule that matches an event.

    Returns:
        (index, rule) of the winning rule, or None
    """
    for index, rule in enumerate(rules):
        if rule_matches(rule, event, conditions):
            return index, rule
    return None


def route(
    event: Event,
    state: SessionState,
    rules: Sequence[Rule],
    conditions: Sequence[MatchCondition] | None = None,
    clock: Clock | None = None,
) -> Action:
    """
    Classify an event into an Action.

    Args:
        event: Event to classify
        state: Session state (mode and snooze)
        rules: Ordered rules; first match wins
        conditions: Match conditions (default: source then contains)
        clock: Epoch-ms clock used for the snooze check

    Returns:
        The resulting Action
    """
    if is_snoozed(state, clock):
        return Action.DIGEST

    if conditions is None:
        conditions = DEFAULT_MATCH_CONDITIONS

    found = find_matching_rule(event, rules, conditions)
    if found is not None:
        index, rule = found
        logger.debug(f"Rule #{index} {rule.to_dict()} matched {event.source!r}")
        return rule.action

    return Action.DIGEST if state.focus_mode else Action.ALLOW
