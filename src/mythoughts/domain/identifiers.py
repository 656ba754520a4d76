"""Identifier schemes for thought records.

The id format check runs before any storage access, so each backend
declares which scheme its keys follow.
"""

import itertools
import os
import re
import threading
import time
from typing import Protocol


class IdentifierScheme(Protocol):
    """Protocol for record key schemes.

    Contract:
    - ``new()`` never returns the same value twice within a process
    - ``is_valid()`` is a pure shape check and never touches storage
    """

    @property
    def name(self) -> str:
        """Return the scheme name for logging/debugging."""
        ...

    def new(self) -> str:
        """Issue a fresh identifier."""
        ...

    def is_valid(self, value: str) -> bool:
        """Return True if ``value`` has the shape of an identifier."""
        ...


class ObjectIdScheme:
    """24-character hex identifiers in the ObjectId layout.

    Bytes: 4 for seconds since the epoch, 5 random per process, 3 for a
    counter seeded randomly.
    """

    PATTERN = re.compile(r"[0-9a-fA-F]{24}")

    def __init__(self):
        self._process_unique = os.urandom(5)
        self._counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        """Return the scheme name."""
        return "objectid"

    def new(self) -> str:
        """Issue a new identifier."""
        with self._lock:
            count = next(self._counter) & 0xFFFFFF
        timestamp = int(time.time()).to_bytes(4, "big")
        return (
            timestamp + self._process_unique + count.to_bytes(3, "big")
        ).hex()

    def is_valid(self, value: str) -> bool:
        """Check the 24-hex-character shape."""
        return isinstance(value, str) and bool(self.PATTERN.fullmatch(value))
