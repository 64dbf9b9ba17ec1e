"""
Notification Ledger.

Stateful wrapper around the router. Each event passes through:
1. Mention override (always allow, recorded as important)
2. Mode short-circuit (away, then focus: digest)
3. Router (snooze, rules, default)

Allowed events are kept in the important partition, digested events in
the digested partition. Suppressed events only appear in the processed
history. Count callbacks are invoked synchronously from the operation
that changed the count.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

from ..core.logging import get_logger
from .loader import RuleConfigLoader
from .matchers import DEFAULT_MATCH_CONDITIONS, MatchCondition
from .mention import MentionDetector
from .models import Action, ClassifiedRecord, Event, Mode, Partition, Rule, SessionState
from .router import Clock, is_snoozed, route, system_clock
from .rules_config import SourceRuleConfig, convert_to_routing_rules

if TYPE_CHECKING:
    from ..core.config import HushSettings

logger = get_logger(__name__)

CountCallback = Callable[[int], None]
ToggleCallback = Callable[[bool], None]

DEFAULT_SNOOZE_MINUTES = 30


class NotificationLedger:
    """
    Classifies events and tracks the resulting records.

    Usage:
        ledger = NotificationLedger(rules=rules, user_name="alice")
        ledger.on_important_count_changed(status_bar.update)
        action = ledger.classify(Event(source="Git", title="Merge", body="conflict"))
    """

    def __init__(
        self,
        rules: Sequence[Rule] | None = None,
        state: SessionState | None = None,
        user_name: str | None = None,
        conditions: Sequence[MatchCondition] | None = None,
        clock: Clock | None = None,
        snooze_minutes: int = DEFAULT_SNOOZE_MINUTES,
    ) -> None:
        """
        Initialize the ledger.

        Args:
            rules: Ordered routing rules (default: none)
            state: Initial session state (default: normal, no snooze)
            user_name: Identity for mention overrides (None disables them)
            conditions: Match conditions passed to the router
            clock: Epoch-ms clock for timestamps and snooze
            snooze_minutes: Default length for snooze()
        """
        self._rules: list[Rule] = list(rules or [])
        self._state = state.copy() if state else SessionState()
        self._mentions = MentionDetector(user_name)
        self._conditions: tuple[MatchCondition, ...] = tuple(
            conditions if conditions is not None else DEFAULT_MATCH_CONDITIONS
        )
        self._clock: Clock = clock or system_clock
        self._snooze_minutes = snooze_minutes
        self._rule_configs: list[SourceRuleConfig] | None = None

        self._processed: list[ClassifiedRecord] = []
        self._important: list[ClassifiedRecord] = []
        self._digested: list[ClassifiedRecord] = []

        self._on_important_count: CountCallback | None = None
        self._on_digest_count: CountCallback | None = None
        self._on_focus: ToggleCallback | None = None
        self._on_away: ToggleCallback | None = None

    @classmethod
    def from_settings(
        cls,
        settings: HushSettings | None = None,
        clock: Clock | None = None,
    ) -> NotificationLedger:
        """
        Create a ledger from settings.

        Rule configs come from settings.rules_file, or the built-in set.

        Raises:
            FileNotFoundError: If the configured rules file doesn't exist
            ValueError: If the rules file is invalid
        """
        if settings is None:
            from ..core.config import get_settings

            settings = get_settings()

        ledger = cls(
            user_name=settings.user_name,
            clock=clock,
            snooze_minutes=settings.snooze_minutes,
        )
        ledger.apply_rule_configs(RuleConfigLoader.load_or_default(settings.rules_file))
        return ledger

    # =========================================================================
    # Callbacks
    # =========================================================================

    def on_important_count_changed(self, callback: CountCallback | None) -> None:
        self._on_important_count = callback

    def on_digest_count_changed(self, callback: CountCallback | None) -> None:
        self._on_digest_count = callback

    def on_focus_changed(self, callback: ToggleCallback | None) -> None:
        self._on_focus = callback

    def on_away_changed(self, callback: ToggleCallback | None) -> None:
        self._on_away = callback

    def _notify_important(self) -> None:
        if self._on_important_count:
            self._on_important_count(len(self._important))

    def _notify_digest(self) -> None:
        if self._on_digest_count:
            self._on_digest_count(len(self._digested))

    # =========================================================================
    # Rules
    # =========================================================================

    def set_rules(self, rules: Sequence[Rule]) -> None:
        """
        Replace the routing rules.

        Explicit rules replace any applied rule configs, so mode changes
        no longer re-derive them.
        """
        self._rules = list(rules)
        self._rule_configs = None

    def get_rules(self) -> list[Rule]:
        return list(self._rules)

    def apply_rule_configs(self, configs: Sequence[SourceRuleConfig]) -> None:
        """
        Install rules derived from rule configs for the current mode.

        The rules are re-derived whenever the mode changes.
        """
        self._rule_configs = list(configs)
        self._refresh_rules()

    @property
    def rule_configs(self) -> list[SourceRuleConfig] | None:
        if self._rule_configs is None:
            return None
        return list(self._rule_configs)

    def _refresh_rules(self) -> None:
        if self._rule_configs is None:
            return
        self._rules = convert_to_routing_rules(self._rule_configs, self._state.focus_mode)
        logger.debug(f"Derived {len(self._rules)} routing rules for {self._state.mode.value} mode")

    # =========================================================================
    # Session state
    # =========================================================================

    @property
    def mode(self) -> Mode:
        return self._state.mode

    def get_state(self) -> SessionState:
        return self._state.copy()

    def set_state(self, state: SessionState) -> None:
        """Replace the session state, firing callbacks for any mode change."""
        self._state.snooze_until = state.snooze_until
        self._set_mode(state.mode)

    def toggle_focus(self) -> bool:
        """
        Toggle focus mode.

        Returns:
            True if focus mode is now on
        """
        self._set_mode(Mode.NORMAL if self._state.mode is Mode.FOCUS else Mode.FOCUS)
        return self._state.focus_mode

    def toggle_away(self) -> bool:
        """
        Toggle away mode.

        Returns:
            True if away mode is now on
        """
        self._set_mode(Mode.NORMAL if self._state.mode is Mode.AWAY else Mode.AWAY)
        return self._state.away_mode

    def _set_mode(self, mode: Mode) -> None:
        previous = self._state.mode
        if mode is previous:
            return

        self._state.mode = mode
        logger.info(f"Mode changed: {previous.value} -> {mode.value}")
        self._refresh_rules()

        if (previous is Mode.FOCUS) != (mode is Mode.FOCUS):
            if self._on_focus:
                self._on_focus(mode is Mode.FOCUS)
        if (previous is Mode.AWAY) != (mode is Mode.AWAY):
            if self._on_away:
                self._on_away(mode is Mode.AWAY)

        if previous is Mode.FOCUS:
            # Reveal the important count that was masked while focused
            self._notify_important()

    def snooze(self, minutes: int | None = None) -> int:
        """
        Digest every non-mention event for a number of minutes.

        Args:
            minutes: Snooze length (default: configured snooze length)

        Returns:
            Epoch ms when the snooze ends
        """
        if minutes is None:
            minutes = self._snooze_minutes
        self._state.snooze_until = self._clock() + max(0, minutes) * 60_000
        logger.info(f"Snoozed for {minutes} minutes")
        return self._state.snooze_until

    def clear_snooze(self) -> None:
        self._state.snooze_until = None

    def is_snoozed(self) -> bool:
        return is_snoozed(self._state, self._clock)

    # =========================================================================
    # Identity
    # =========================================================================

    def set_user_name(self, name: str | None) -> None:
        self._mentions.set_user_name(name)

    def get_user_name(self) -> str | None:
        return self._mentions.user_name

    # =========================================================================
    # Classification
    # =========================================================================

    def _decide(self, event: Event) -> tuple[Action, bool]:
        if self._mentions.is_mentioned(event):
            return Action.ALLOW, True
        if self._state.away_mode or self._state.focus_mode:
            return Action.DIGEST, False
        return route(event, self._state, self._rules, self._conditions, self._clock), False

    def classify(self, event: Event) -> Action:
        """
        Classify an event and record the result.

        Args:
            event: Event to classify

        Returns:
            The resulting Action
        """
        action, mentioned = self._decide(event)
        record = ClassifiedRecord(
            event=event,
            action=action,
            timestamp=self._clock(),
            mentioned=mentioned,
        )
        self._processed.append(record)

        logger.debug(
            f"{event.source}: {event.title!r} -> {action.value}"
            + (" (mention)" if mentioned else "")
        )

        if action is Action.ALLOW:
            self._important.append(record)
            if not self._state.focus_mode:
                self._notify_important()
        elif action is Action.DIGEST:
            self._digested.append(record)
            self._notify_digest()

        return action

    # =========================================================================
    # Records
    # =========================================================================

    def _partition(self, partition: Partition | str) -> list[ClassifiedRecord]:
        if Partition(partition) is Partition.IMPORTANT:
            return self._important
        return self._digested

    @property
    def important_count(self) -> int:
        return len(self._important)

    @property
    def digest_count(self) -> int:
        return len(self._digested)

    def list_important(self) -> list[ClassifiedRecord]:
        return list(self._important)

    def list_digested(self) -> list[ClassifiedRecord]:
        return list(self._digested)

    def list_processed(self) -> list[ClassifiedRecord]:
        """Every classified record, suppressed ones included, in call order."""
        return list(self._processed)

    def list_all_sorted_by_recency(self) -> list[ClassifiedRecord]:
        """
        Retained records, important first, then most recent first.

        Records with equal timestamps keep their insertion order.
        """
        tagged = [(0, r) for r in self._important] + [(1, r) for r in self._digested]
        tagged.sort(key=lambda item: (item[0], -item[1].timestamp))
        return [record for _, record in tagged]

    def mark_read(self, partition: Partition | str, index: int) -> None:
        """
        Remove the record at index from a partition.

        An out-of-range index is ignored.
        """
        records = self._partition(partition)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(records):
            logger.debug(f"Ignoring mark_read for stale index {index} in {partition}")
            return

        del records[index]
        if records is self._important:
            self._notify_important()
        else:
            self._notify_digest()

    def clear(self, partition: Partition | str) -> None:
        """Empty a partition."""
        records = self._partition(partition)
        records.clear()
        if records is self._important:
            self._notify_important()
        else:
            self._notify_digest()


def group_by_source(records: Sequence[ClassifiedRecord]) -> dict[str, list[ClassifiedRecord]]:
    """
    Group records by event source, most recent first within each group.

    Groups appear in the order their source was first seen.
    """
    grouped: dict[str, list[ClassifiedRecord]] = {}
    for record in records:
        grouped.setdefault(record.event.source, []).append(record)
    for source_records in grouped.values():
        source_records.sort(key=lambda r: r.timestamp, reverse=True)
    return grouped
