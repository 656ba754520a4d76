"""Tests for the Thought domain model."""
from dataclasses import FrozenInstanceError
from datetime import timedelta

import pendulum
import pytest

from mythoughts.domain import MAX_CONTENT_LENGTH, Thought, ValidationError, validate_content

NOW = pendulum.datetime(2026, 3, 1, 9, 30, 0, tz="UTC")


def make_thought(**overrides) -> Thought:
    fields = {
        "thought_id": "0123456789abcdef01234567",
        "owner_id": "user_alice",
        "content": "Hello\nWorld",
        "now": NOW,
    }
    fields.update(overrides)
    return Thought.new(**fields)


class TestContentValidation:
    """Content rules shared by create and update."""

    def test_normal_content_passes(self):
        assert validate_content("Sparkle stole pizza") == "Sparkle stole pizza"

    def test_content_at_limit(self):
        content = "x" * MAX_CONTENT_LENGTH
        assert validate_content(content) == content

    def test_content_over_limit(self):
        with pytest.raises(ValidationError, match="cannot be more than 20000"):
            validate_content("x" * (MAX_CONTENT_LENGTH + 1))

    def test_empty_and_missing_rejected(self):
        with pytest.raises(ValidationError, match="Please add content"):
            validate_content("")
        with pytest.raises(ValidationError, match="Please add content"):
            validate_content(None)

    def test_whitespace_only_is_content(self):
        """Only the empty string counts as missing."""
        assert validate_content("   ") == "   "

    def test_content_is_not_trimmed(self):
        assert validate_content("  padded  \n") == "  padded  \n"


class TestThought:
    """Test the Thought value object."""

    def test_new_sets_both_timestamps(self):
        thought = make_thought()

        assert thought.created_at == NOW
        assert thought.updated_at == NOW
        assert thought.owner_id == "user_alice"

    def test_owner_required(self):
        with pytest.raises(ValidationError, match="associated with a user"):
            make_thought(owner_id="")

    def test_invalid_content_rejected_on_creation(self):
        with pytest.raises(ValidationError):
            make_thought(content="")

    def test_thought_is_immutable(self):
        thought = make_thought()
        with pytest.raises(FrozenInstanceError):
            thought.owner_id = "user_mallory"

    def test_with_content_keeps_identity(self):
        thought = make_thought()
        later = NOW + timedelta(minutes=5)

        updated = thought.with_content("Hi\nThere", later)

        assert updated.content == "Hi\nThere"
        assert updated.updated_at == later
        assert updated.id == thought.id
        assert updated.owner_id == thought.owner_id
        assert updated.created_at == thought.created_at
        # Original untouched
        assert thought.content == "Hello\nWorld"

    def test_with_content_bumps_even_when_clock_stands_still(self):
        thought = make_thought()

        updated = thought.with_content("again", NOW)
        assert updated.updated_at > thought.updated_at

        # A clock running backwards still cannot move updated_at back
        earlier = NOW - timedelta(hours=1)
        again = updated.with_content("and again", earlier)
        assert again.updated_at > updated.updated_at

    def test_with_content_validates(self):
        thought = make_thought()
        with pytest.raises(ValidationError):
            thought.with_content("x" * (MAX_CONTENT_LENGTH + 1), NOW)
