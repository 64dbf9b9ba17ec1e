"""
Mention Detection.

Recognizes ``@name`` tokens addressed to the configured user. A mention
overrides every other classification input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .models import Event


def _normalize(name: str | None) -> str | None:
    if name is None:
        return None
    name = name.strip().lstrip("@").strip()
    return name or None


@dataclass
class MentionDetector:
    """
    Detects ``@name`` mentions of a single user.

    Matching is case-insensitive and bounded on both sides: ``@alice``
    matches in "hi @Alice," but not in "@alicesmith" or "bob@alice.io".
    With no name configured, nothing is a mention.
    """

    user_name: str | None = None
    _pattern: re.Pattern[str] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.set_user_name(self.user_name)

    def set_user_name(self, name: str | None) -> None:
        self.user_name = _normalize(name)
        if self.user_name is None:
            self._pattern = None
        else:
            self._pattern = re.compile(
                rf"(?<![\w@.])@{re.escape(self.user_name)}(?![\w@])",
                re.IGNORECASE,
            )

    @property
    def enabled(self) -> bool:
        return self._pattern is not None

    def mentions(self, text: str) -> bool:
        """Check a piece of text for a mention of the user."""
        if self._pattern is None:
            return False
        return self._pattern.search(text) is not None

    def is_mentioned(self, event: Event) -> bool:
        """Check an event's title and body for a mention of the user."""
        return self.mentions(event.title) or self.mentions(event.body)


def mentions_user(event: Event, user_name: str | None) -> bool:
    """Convenience check without keeping a detector around."""
    return MentionDetector(user_name).is_mentioned(event)
