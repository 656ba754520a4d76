"""MyThoughts - personal thoughts, stored per user."""

__version__ = "0.1.0"
