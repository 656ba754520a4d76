"""In-memory thought store for development and testing."""

from datetime import datetime
from typing import Any

from mythoughts.domain.identifiers import IdentifierScheme, ObjectIdScheme
from mythoughts.domain.thought import Thought


class InMemoryThoughtStore:
    """Thought store backed by a plain dict.

    Nothing survives a restart. Each instance owns its own records.
    """

    def __init__(self, identifiers: IdentifierScheme | None = None):
        """Initialize with an optional identifier scheme."""
        self._identifiers = identifiers or ObjectIdScheme()
        self._thoughts: dict[str, Thought] = {}
        # Track calls for testing
        self.call_count = 0

    @property
    def name(self) -> str:
        """Return the backend name."""
        return "memory"

    @property
    def identifiers(self) -> IdentifierScheme:
        """Return the key scheme."""
        return self._identifiers

    async def insert(self, thought: Thought) -> Thought:
        """Store a new thought."""
        self.call_count += 1
        self._thoughts[thought.id] = thought
        return thought

    async def find_by_owner(self, owner_id: str) -> list[Thought]:
        """Return an owner's thoughts, newest first."""
        self.call_count += 1
        owned = [t for t in self._thoughts.values() if t.owner_id == owner_id]
        # Reversed insertion order breaks created_at ties newest-first
        return sorted(reversed(owned), key=lambda t: t.created_at, reverse=True)

    async def find_by_id(
        self, thought_id: str, owner_id: str | None = None
    ) -> Thought | None:
        """Return one thought or None."""
        self.call_count += 1
        return self._lookup(thought_id, owner_id)

    async def update_content(
        self,
        thought_id: str,
        content: str,
        now: datetime,
        owner_id: str | None = None,
    ) -> Thought | None:
        """Replace the content of a stored thought."""
        self.call_count += 1
        thought = self._lookup(thought_id, owner_id)
        if thought is None:
            return None

        updated = thought.with_content(content, now)
        self._thoughts[thought_id] = updated
        return updated

    async def delete(
        self, thought_id: str, owner_id: str | None = None
    ) -> Thought | None:
        """Remove a thought and return it."""
        self.call_count += 1
        thought = self._lookup(thought_id, owner_id)
        if thought is None:
            return None

        del self._thoughts[thought_id]
        return thought

    async def health_check(self) -> dict[str, Any]:
        """Memory backend is always healthy."""
        return {
            "healthy": True,
            "backend": self.name,
            "thought_count": len(self._thoughts),
        }

    def _lookup(self, thought_id: str, owner_id: str | None) -> Thought | None:
        thought = self._thoughts.get(thought_id)
        if thought is None:
            return None
        if owner_id is not None and thought.owner_id != owner_id:
            return None
        return thought
