"""Base exceptions and constants for the thought domain."""


class ThoughtError(Exception):
    """Base exception for all thought-related errors."""

    pass


class ValidationError(ThoughtError):
    """Raised when thought content fails validation."""

    pass


class InvalidIdentifier(ThoughtError):  # noqa: N818
    """Raised when an id does not match the store's key format."""

    pass


class NotFound(ThoughtError):  # noqa: N818
    """Raised when a well-formed id has no matching record."""

    pass


class Unauthenticated(ThoughtError):  # noqa: N818
    """Raised when an operation needs an identity and none was resolved."""

    pass


# Constants
MAX_CONTENT_LENGTH = 20000
