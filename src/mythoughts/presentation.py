"""Display helpers for thoughts.

A thought has no title field. Front ends show the first line as the
title and the rest as the body; this module is the one place that
split is defined.
"""

UNTITLED = "Untitled"


def split_title(content: str) -> tuple[str, str]:
    """Split content into (title, body) on the first line break.

    >>> split_title("Hello\\nWorld")
    ('Hello', 'World')
    >>> split_title("Just a title")
    ('Just a title', '')
    """
    title, _, body = content.partition("\n")
    title = title.rstrip("\r").strip()
    return (title or UNTITLED), body
