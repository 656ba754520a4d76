"""Thought domain model."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from .base import MAX_CONTENT_LENGTH, ValidationError

# Smallest step the stores can represent; keeps updated_at strictly increasing
TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


def validate_content(content: str | None) -> str:
    """Validate thought content.

    Rules:
    - Must be present (not None)
    - Must be a non-empty string
    - Cannot exceed MAX_CONTENT_LENGTH characters

    Whitespace is kept as-is; a whitespace-only thought is still content.

    Returns the content unchanged if valid.
    Raises ValidationError if invalid.
    """
    if content is None or content == "":
        raise ValidationError("Please add content")

    if not isinstance(content, str):
        raise ValidationError("Content must be text")

    if len(content) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            f"Content cannot be more than {MAX_CONTENT_LENGTH} characters"
        )

    return content


@dataclass(frozen=True)
class Thought:
    """A single persisted text note owned by a user."""

    id: str
    content: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate the thought after creation."""
        validate_content(self.content)
        if not self.owner_id:
            raise ValidationError("Thought must be associated with a user")

    @classmethod
    def new(
        cls, thought_id: str, owner_id: str, content: str, now: datetime
    ) -> Thought:
        """Build a fresh thought with both timestamps set to ``now``."""
        return cls(
            id=thought_id,
            content=content,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )

    def with_content(self, content: str, now: datetime) -> Thought:
        """Return a copy carrying new content and a bumped updated_at."""
        return replace(
            self,
            content=validate_content(content),
            updated_at=next_update_time(self.updated_at, now),
        )


def next_update_time(previous: datetime, now: datetime) -> datetime:
    """Pick an updated_at that is strictly later than ``previous``."""
    return max(now, previous + TIMESTAMP_RESOLUTION)
