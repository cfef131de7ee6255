"""Tests for display identity precedence"""

from src.application.interfaces import ProfileOverride, UpstreamProfile
from src.application.services.identity_resolution import (ANONYMOUS_NAME,
                                                          first_non_empty,
                                                          resolve_identity)

CANONICAL = UpstreamProfile(id="p1", author="con1alice", username="alice", avatar="https://cdn.example/a.png")


class TestFirstNonEmpty:
    def test_skips_none_and_empty_strings(self):
        assert first_non_empty(None, "", "x", "y") == "x"

    def test_default_when_nothing_set(self):
        assert first_non_empty(None, "", default="fallback") == "fallback"

    def test_no_candidates(self):
        assert first_non_empty() == ""


class TestResolveIdentity:
    def test_override_wins_over_canonical(self):
        override = ProfileOverride(username="guest", avatar="https://cdn.example/g.png")

        identity = resolve_identity(override, CANONICAL)

        assert identity.name == "guest"
        assert identity.avatar == "https://cdn.example/g.png"

    def test_fields_fall_back_independently(self):
        """
        GIVEN an override that only sets a username
        WHEN identity is resolved
        THEN the avatar comes from the canonical profile.
        """
        identity = resolve_identity(ProfileOverride(username="guest"), CANONICAL)

        assert identity.name == "guest"
        assert identity.avatar == "https://cdn.example/a.png"

    def test_empty_override_fields_fall_through(self):
        identity = resolve_identity(ProfileOverride(username="", avatar=""), CANONICAL)

        assert identity.name == "alice"
        assert identity.avatar == "https://cdn.example/a.png"

    def test_referenced_profile_wins_over_literal_override(self):
        override = ProfileOverride(username="guest", profile_id="p2")
        referenced = UpstreamProfile(id="p2", author="con1alice", username="alter", avatar=None)

        identity = resolve_identity(override, CANONICAL, referenced)

        assert identity.name == "alter"
        assert identity.avatar == "https://cdn.example/a.png"

    def test_no_profiles_at_all(self):
        identity = resolve_identity(None, None)

        assert identity.name == ANONYMOUS_NAME
        assert identity.avatar == ""
