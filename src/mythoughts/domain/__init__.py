"""Domain models for MyThoughts."""

from .base import (
    MAX_CONTENT_LENGTH,
    InvalidIdentifier,
    NotFound,
    ThoughtError,
    Unauthenticated,
    ValidationError,
)
from .identifiers import IdentifierScheme, ObjectIdScheme
from .repository import ThoughtRepository
from .thought import Thought, validate_content

__all__ = [
    "MAX_CONTENT_LENGTH",
    "IdentifierScheme",
    "InvalidIdentifier",
    "NotFound",
    "ObjectIdScheme",
    "Thought",
    "ThoughtError",
    "ThoughtRepository",
    "Unauthenticated",
    "ValidationError",
    "validate_content",
]
