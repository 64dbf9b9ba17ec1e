"""
Tests for @mention detection.
"""

from __future__ import annotations

import pytest

from hush.routing.mention import MentionDetector, mentions_user
from hush.routing.models import Event


class TestMentionDetector:
    """Tests for MentionDetector."""

    @pytest.mark.parametrize(
        "text",
        [
            "@alice can you look?",
            "hey @alice",
            "ping @Alice, thanks",
            "(@ALICE)",
            "cc @alice.",
        ],
    )
    def test_detects_mention(self, text):
        assert MentionDetector("alice").mentions(text) is True

    @pytest.mark.parametrize(
        "text",
        [
            "alice without at-sign",
            "@alicesmith is someone else",
            "mail bob@alice.io",
            "@@alice",
            "",
        ],
    )
    def test_ignores_non_mentions(self, text):
        assert MentionDetector("alice").mentions(text) is False

    def test_checks_title_and_body(self):
        detector = MentionDetector("alice")
        assert detector.is_mentioned(Event(source="Chat", title="@alice", body="")) is True
        assert detector.is_mentioned(Event(source="Chat", title="", body="hi @alice")) is True
        assert detector.is_mentioned(Event(source="Chat", title="hi", body="there")) is False

    def test_no_name_never_matches(self):
        detector = MentionDetector(None)
        assert detector.enabled is False
        assert detector.mentions("@alice @bob @") is False

    def test_blank_name_disables(self):
        assert MentionDetector("   ").enabled is False

    def test_leading_at_sign_in_name_is_ignored(self):
        detector = MentionDetector("@alice")
        assert detector.user_name == "alice"
        assert detector.mentions("hi @alice") is True

    def test_regex_characters_in_name_are_literal(self):
        detector = MentionDetector("a.b")
        assert detector.mentions("hi @a.b") is True
        assert detector.mentions("hi @axb") is False

    def test_set_user_name_replaces_identity(self):
        detector = MentionDetector("alice")
        detector.set_user_name("bob")
        assert detector.mentions("@alice") is False
        assert detector.mentions("@bob") is True

        detector.set_user_name(None)
        assert detector.mentions("@bob") is False


def test_mentions_user_helper():
    event = Event(source="Chat", title="Review", body="@alice please review")
    assert mentions_user(event, "alice") is True
    assert mentions_user(event, "bob") is False
    assert mentions_user(event, None) is False
