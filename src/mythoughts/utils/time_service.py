"""Time service for timezone-aware datetime handling using Pendulum."""

import os
from datetime import datetime

import pendulum
from pendulum import DateTime


class TimeService:
    """Handles the current time and datetime formatting."""

    def __init__(self, timezone: str | None = None):
        """Initialize with optional timezone override."""
        self.timezone = timezone or self._detect_timezone()

    def _detect_timezone(self) -> str:
        """Detect timezone using cascade: env → system → UTC."""
        if tz := os.environ.get("MYTHOUGHTS_TIMEZONE"):
            try:
                pendulum.timezone(tz)  # Validate it
                return tz
            except Exception:  # noqa: S110
                pass

        try:
            return pendulum.local_timezone().name
        except Exception:  # noqa: S110
            pass

        return "UTC"

    def now(self) -> DateTime:
        """Get current time in UTC."""
        return pendulum.now("UTC")

    def format_datetime(self, dt: datetime | DateTime, tz: str | None = None) -> str:
        """Format datetime for display in specified or default timezone."""
        if not isinstance(dt, DateTime):
            dt = pendulum.instance(dt)

        dt_local = dt.in_timezone(tz or self.timezone)

        # Format like "Monday, August 4, 2025, 12:42 PM"
        formatted = dt_local.format("dddd, MMMM D, YYYY, h:mm A")
        tz_abbr = dt_local.strftime("%Z")

        return f"{formatted} {tz_abbr}"
