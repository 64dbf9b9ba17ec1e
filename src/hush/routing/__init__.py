"""
Notification Routing.

Classifies incoming events into allow / suppress / digest:
- models: events, rules, actions, session state
- matchers: composable rule match conditions
- router: pure first-match-wins classification
- mention: @name overrides
- ledger: stateful wrapper tracking classified records
- rules_config / loader: user-facing rule configs and YAML files
"""

from .ledger import NotificationLedger, group_by_source
from .loader import RuleConfigLoader
from .matchers import (
    DEFAULT_MATCH_CONDITIONS,
    REGEX_MATCH_CONDITIONS,
    MatchCondition,
    contains_matches,
    regex_contains_matches,
    source_matches,
)
from .mention import MentionDetector, mentions_user
from .models import (
    WILDCARD_SOURCE,
    Action,
    ClassifiedRecord,
    Event,
    Mode,
    Partition,
    Rule,
    SessionState,
)
from .router import Clock, find_matching_rule, route, system_clock
from .rules_config import (
    Priority,
    SourceRuleConfig,
    convert_to_routing_rules,
    find_shadowed_rules,
    generate_rule_title,
    get_action_label,
    get_default_rule_configs,
    get_priority_label,
)

__all__ = [
    "DEFAULT_MATCH_CONDITIONS",
    "REGEX_MATCH_CONDITIONS",
    "WILDCARD_SOURCE",
    "Action",
    "ClassifiedRecord",
    "Clock",
    "Event",
    "MatchCondition",
    "MentionDetector",
    "Mode",
    "NotificationLedger",
    "Partition",
    "Priority",
    "Rule",
    "RuleConfigLoader",
    "SessionState",
    "SourceRuleConfig",
    "contains_matches",
    "convert_to_routing_rules",
    "find_matching_rule",
    "find_shadowed_rules",
    "generate_rule_title",
    "get_action_label",
    "get_default_rule_configs",
    "get_priority_label",
    "group_by_source",
    "mentions_user",
    "regex_contains_matches",
    "route",
    "source_matches",
    "system_clock",
]
