"""Prometheus metrics definitions for MyThoughts."""

from functools import wraps

from prometheus_client import Counter, Histogram

# Business metrics
thoughts_created = Counter(
    "mythoughts_thoughts_created_total",
    "Total thoughts created",
)

thoughts_updated = Counter(
    "mythoughts_thoughts_updated_total",
    "Total thought content updates",
)

thoughts_deleted = Counter(
    "mythoughts_thoughts_deleted_total",
    "Total thoughts deleted",
)

contact_messages = Counter(
    "mythoughts_contact_messages_total",
    "Total contact form submissions accepted",
)

store_operation_duration = Histogram(
    "mythoughts_store_operation_duration_seconds",
    "Thought store operation duration",
    ["operation", "backend"],
)

# Error tracking
operation_errors = Counter(
    "mythoughts_operation_errors_total",
    "Total errors by operation",
    ["operation", "error_type"],
)


def track_operation(operation: str):
    """Decorator for tracking async repository operations with metrics.

    Times the operation against the repository's backend and counts
    errors by exception type.

    Example:
        @track_operation("create")
        async def create(self, owner_id: str, content: str):
            ...
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            labels = {"operation": operation, "backend": self.store.name}

            with store_operation_duration.labels(**labels).time():
                try:
                    return await func(self, *args, **kwargs)
                except Exception as e:
                    operation_errors.labels(
                        operation=operation,
                        error_type=type(e).__name__,
                    ).inc()
                    raise

        return wrapper

    return decorator
