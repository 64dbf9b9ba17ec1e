"""
Hush - Notification Classification

Routes notification events to show immediately, drop silently, or defer
to a digest, based on ordered rules, focus/away modes, snooze and
@mention overrides.

Usage as library:
    from hush import Event, NotificationLedger

    ledger = NotificationLedger.from_settings()
    action = ledger.classify(Event(source="Build", title="Build failed", body="3 errors"))

Usage as CLI:
    python -m hush rules list
    python -m hush classify --source Git --title "Merge" --body "conflict in app.py"

Package structure:
    hush/
    ├── core/        # Settings and logging
    ├── routing/     # Rules, matchers, router, ledger
    └── commands/    # CLI command implementations
"""

__version__ = "1.0.0"

from .routing import (
    Action,
    ClassifiedRecord,
    Event,
    Mode,
    NotificationLedger,
    Partition,
    Rule,
    SessionState,
    route,
)

__all__ = [
    "Action",
    "ClassifiedRecord",
    "Event",
    "Mode",
    "NotificationLedger",
    "Partition",
    "Rule",
    "SessionState",
    "__version__",
    "route",
]
