"""Base protocol and exceptions for thought storage backends."""

from datetime import datetime
from typing import Protocol

from mythoughts.domain.identifiers import IdentifierScheme
from mythoughts.domain.thought import Thought


class StorageError(Exception):
    """Raised when a storage backend fails unexpectedly."""

    pass


class ThoughtStore(Protocol):
    """Protocol for thought storage backends.

    Contract:
    - Backends persist immediately; no buffering or batching
    - Lookups return None for a missing record, never raise for it
    - When ``owner_id`` is given, records of other owners count as missing
    - Unexpected backend failures surface as StorageError
    - Content validation and id-format checks happen before a backend
      is called; backends do not repeat them
    """

    @property
    def name(self) -> str:
        """Return the backend name for logging/debugging."""
        ...

    @property
    def identifiers(self) -> IdentifierScheme:
        """Return the key scheme this backend stores records under."""
        ...

    async def insert(self, thought: Thought) -> Thought:
        """Persist a new thought and return it as stored."""
        ...

    async def find_by_owner(self, owner_id: str) -> list[Thought]:
        """Return all thoughts of an owner, newest created_at first."""
        ...

    async def find_by_id(
        self, thought_id: str, owner_id: str | None = None
    ) -> Thought | None:
        """Return one thought or None."""
        ...

    async def update_content(
        self,
        thought_id: str,
        content: str,
        now: datetime,
        owner_id: str | None = None,
    ) -> Thought | None:
        """Replace content, bump updated_at past ``now`` or the old value.

        Returns the updated thought, or None if no record matched.
        """
        ...

    async def delete(
        self, thought_id: str, owner_id: str | None = None
    ) -> Thought | None:
        """Remove a thought and return it as it was, or None."""
        ...

    async def health_check(self) -> dict:
        """Check backend health.

        Returns JSON-compatible dict with at least:
        - healthy: bool
        - backend: str

        Should not throw exceptions.
        """
        ...
