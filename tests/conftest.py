"""
Hush Test Suite - Shared Fixtures
"""

from __future__ import annotations

import pytest

from hush.core.config import reset_settings
from hush.core.logging import reset_logging
from hush.routing import Action, Event, Rule

# Fixed "now" for deterministic snooze and timestamp checks (epoch ms)
FIXED_NOW = 1_700_000_000_000


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate each test from HUSH_* env vars, cached settings and logger state."""
    for name in ("HUSH_LOG_LEVEL", "HUSH_DEBUG", "HUSH_LOG_JSON", "HUSH_USER_NAME",
                 "HUSH_RULES_FILE", "HUSH_SNOOZE_MINUTES"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()


class FakeClock:
    """Manually advanced epoch-ms clock."""

    def __init__(self, now: int = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def git_pull_event() -> Event:
    return Event(source="Git", title="Done", body="pull finished")


@pytest.fixture
def git_push_event() -> Event:
    return Event(source="Git", title="Done", body="push finished")


@pytest.fixture
def sample_rules() -> list[Rule]:
    """Suppress Git pulls, digest everything else."""
    return [
        Rule(source="Git", contains="pull", action=Action.SUPPRESS),
        Rule(source="*", action=Action.DIGEST),
    ]
