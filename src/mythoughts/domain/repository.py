"""Thought repository: the rules every store operation upholds."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from mythoughts.metrics import (
    thoughts_created,
    thoughts_deleted,
    thoughts_updated,
    track_operation,
)
from mythoughts.utils.time_service import TimeService

from .base import InvalidIdentifier, NotFound, ValidationError
from .identifiers import IdentifierScheme
from .thought import Thought, validate_content

if TYPE_CHECKING:
    from mythoughts.storage.base import ThoughtStore

logger = logging.getLogger(__name__)


class ThoughtRepository:
    """CRUD over thought records with validation and id checks.

    The identifier scheme comes from the backend, so the format check
    always matches the keys the backend actually stores. A malformed id
    is rejected before the backend is touched.
    """

    def __init__(
        self,
        store: ThoughtStore,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize with a storage backend and an optional clock."""
        self.store = store
        self._clock = clock or TimeService("UTC").now

    @property
    def identifiers(self) -> IdentifierScheme:
        """Key scheme of the underlying store."""
        return self.store.identifiers

    @track_operation("create")
    async def create(self, owner_id: str, content: str | None) -> Thought:
        """Create a thought for ``owner_id``.

        Raises:
            ValidationError: owner missing, content missing, empty or too long
        """
        if not owner_id:
            raise ValidationError("Thought must be associated with a user")
        validate_content(content)

        thought = Thought.new(
            thought_id=self.identifiers.new(),
            owner_id=owner_id,
            content=content,
            now=self._clock(),
        )
        stored = await self.store.insert(thought)
        thoughts_created.inc()

        logger.debug(f"Created thought {stored.id} for owner {owner_id}")
        return stored

    @track_operation("list")
    async def list_by_owner(self, owner_id: str) -> list[Thought]:
        """Return the owner's thoughts, most recent first."""
        return await self.store.find_by_owner(owner_id)

    @track_operation("get")
    async def get(self, thought_id: str, owner_id: str | None = None) -> Thought:
        """Fetch one thought.

        Raises:
            InvalidIdentifier: id does not match the key format
            NotFound: no such thought (or not owned by ``owner_id``)
        """
        key = self._check_identifier(thought_id)
        thought = await self.store.find_by_id(key, owner_id=owner_id)
        if thought is None:
            raise NotFound("Thought not found")
        return thought

    @track_operation("update")
    async def update_content(
        self, thought_id: str, content: str | None, owner_id: str | None = None
    ) -> Thought:
        """Replace a thought's content and bump updated_at.

        Raises:
            InvalidIdentifier: id does not match the key format
            ValidationError: new content is invalid; stored value untouched
            NotFound: no such thought (or not owned by ``owner_id``)
        """
        key = self._check_identifier(thought_id)
        validate_content(content)

        thought = await self.store.update_content(
            key, content, now=self._clock(), owner_id=owner_id
        )
        if thought is None:
            raise NotFound("Thought not found")

        thoughts_updated.inc()
        return thought

    @track_operation("delete")
    async def delete(self, thought_id: str, owner_id: str | None = None) -> Thought:
        """Permanently remove a thought and return it as it was.

        Raises:
            InvalidIdentifier: id does not match the key format
            NotFound: no such thought (or not owned by ``owner_id``)
        """
        key = self._check_identifier(thought_id)
        thought = await self.store.delete(key, owner_id=owner_id)
        if thought is None:
            raise NotFound("Thought not found")

        thoughts_deleted.inc()
        return thought

    async def health_check(self) -> dict:
        """Delegate to the backend's health check."""
        return await self.store.health_check()

    def _check_identifier(self, thought_id: str) -> str:
        """Validate the id shape and return the stored (lowercase) key."""
        if not self.identifiers.is_valid(thought_id):
            raise InvalidIdentifier("Invalid thought ID format")
        return thought_id.lower()
