"""
Notification Routing Data Models.

Core data structures for classifying incoming notification events into
delivery actions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Rule source that matches every event source
WILDCARD_SOURCE = "*"


class Action(str, Enum):
    """Delivery action for a classified event."""

    ALLOW = "allow"  # Show immediately
    SUPPRESS = "suppress"  # Drop silently
    DIGEST = "digest"  # Defer to a digest

    @classmethod
    def parse(cls, value: str | Action) -> Action:
        """
        Parse an action name case-insensitively.

        Raises:
            ValueError: If the name is not a known action
        """
        if isinstance(value, Action):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise ValueError(f"Unknown action '{value}'. Valid: {valid}") from None


class Mode(str, Enum):
    """Session operating mode."""

    NORMAL = "normal"
    FOCUS = "focus"
    AWAY = "away"


class Partition(str, Enum):
    """Ledger partition holding retained records."""

    IMPORTANT = "important"
    DIGESTED = "digested"


@dataclass(frozen=True)
class Event:
    """An incoming notification to be classified."""

    source: str  # Origin, e.g. "Git", "Build"
    title: str = ""
    body: str = ""

    @property
    def text(self) -> str:
        """Title and body joined the way content filters see them."""
        return f"{self.title}\n{self.body}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        """Create from dictionary."""
        return cls(
            source=str(data.get("source", "")),
            title=str(data.get("title", "")),
            body=str(data.get("body", "")),
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to JSON-serializable dict."""
        return {"source": self.source, "title": self.title, "body": self.body}


@dataclass(frozen=True)
class Rule:
    """
    A routing rule. The first rule whose conditions all match wins.

    Attributes:
        source: "*" or an exact source name (case-insensitive)
        action: Action returned when this rule matches
        contains: Optional case-insensitive substring of title + "\\n" + body.
            Blank means no content filter.
    """

    source: str
    action: Action
    contains: str | None = None

    @property
    def is_catch_all(self) -> bool:
        """Check if this rule matches every event."""
        if self.source != WILDCARD_SOURCE:
            return False
        if self.contains is None:
            return True
        # A non-string filter never matches anything
        return isinstance(self.contains, str) and not self.contains.strip()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Rule:
        """
        Create from dictionary.

        Raises:
            ValueError: If action is missing or unknown
        """
        return cls(
            source=str(data.get("source", WILDCARD_SOURCE)),
            action=Action.parse(data.get("action", "")),
            contains=data.get("contains"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {"source": self.source, "action": self.action.value}
        if self.contains:
            result["contains"] = self.contains
        return result


@dataclass
class SessionState:
    """
    Mutable session state read by the router and the ledger.

    Focus and away are exclusive modes. ``snooze_until`` is an epoch
    timestamp in milliseconds; while the clock is before it, every event
    is digested.
    """

    mode: Mode = Mode.NORMAL
    snooze_until: int | None = None

    @property
    def focus_mode(self) -> bool:
        return self.mode is Mode.FOCUS

    @property
    def away_mode(self) -> bool:
        return self.mode is Mode.AWAY

    @classmethod
    def from_flags(
        cls,
        focus_mode: bool = False,
        away_mode: bool = False,
        snooze_until: int | None = None,
    ) -> SessionState:
        """
        Create from independent focus/away flags.

        Away takes precedence when both are set.
        """
        if away_mode:
            mode = Mode.AWAY
        elif focus_mode:
            mode = Mode.FOCUS
        else:
            mode = Mode.NORMAL
        return cls(mode=mode, snooze_until=snooze_until)

    def copy(self) -> SessionState:
        return SessionState(mode=self.mode, snooze_until=self.snooze_until)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "mode": self.mode.value,
            "focus_mode": self.focus_mode,
            "away_mode": self.away_mode,
            "snooze_until": self.snooze_until,
        }


@dataclass(frozen=True)
class ClassifiedRecord:
    """An event together with the action it was classified into."""

    event: Event
    action: Action
    timestamp: int  # Epoch milliseconds
    mentioned: bool = False  # Classified by the mention override

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            **self.event.to_dict(),
            "action": self.action.value,
            "timestamp": self.timestamp,
            "mentioned": self.mentioned,
        }
