"""
Match Conditions for Notification Routing.

A match condition is a predicate ``(rule, event) -> bool``. A rule matches
an event only if every condition in the active list returns True. The
condition list is passed to the router, so new criteria can be added
without touching evaluation order.

| Condition               | Passes when                                          |
|-------------------------|------------------------------------------------------|
| source_matches          | rule.source is "*" or equals event.source (no case)  |
| contains_matches        | rule.contains blank, or found in title + body        |
| regex_contains_matches  | rule.contains blank, or searches title + body as regex |
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable

from ..core.logging import get_logger
from .models import WILDCARD_SOURCE, Event, Rule

logger = get_logger(__name__)

MatchCondition = Callable[[Rule, Event], bool]


def _is_malformed(rule: Rule) -> bool:
    """A content filter that is neither absent nor a string never matches."""
    return rule.contains is not None and not isinstance(rule.contains, str)


def _needle(rule: Rule) -> str | None:
    """Return the trimmed content filter, or None when blank."""
    needle = (rule.contains or "").strip()
    return needle or None


def source_matches(rule: Rule, event: Event) -> bool:
    """Pass if the rule is a wildcard or names the event's source."""
    if rule.source == WILDCARD_SOURCE:
        return True
    return rule.source.lower() == event.source.lower()


def contains_matches(rule: Rule, event: Event) -> bool:
    """Pass if the rule has no content filter or the event text contains it."""
    if _is_malformed(rule):
        return False
    needle = _needle(rule)
    if needle is None:
        return True
    return needle.lower() in event.text.lower()


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        logger.warning(f"Invalid rule pattern {pattern!r}: {e}")
        return None


def regex_contains_matches(rule: Rule, event: Event) -> bool:
    """
    Treat rule.contains as a case-insensitive regular expression.

    An unparseable pattern never matches.
    """
    if _is_malformed(rule):
        return False
    needle = _needle(rule)
    if needle is None:
        return True
    compiled = _compile(needle)
    if compiled is None:
        return False
    return compiled.search(event.text) is not None


# Default conditions, evaluated in order
DEFAULT_MATCH_CONDITIONS: tuple[MatchCondition, ...] = (source_matches, contains_matches)

# Same as the defaults with content filters read as regular expressions
REGEX_MATCH_CONDITIONS: tuple[MatchCondition, ...] = (source_matches, regex_contains_matches)
