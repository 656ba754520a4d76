"""Tests for display helpers."""
import pytest

from mythoughts.presentation import UNTITLED, split_title


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("Hello\nWorld", ("Hello", "World")),
        ("Title only", ("Title only", "")),
        ("Title\nline one\nline two", ("Title", "line one\nline two")),
        ("Windows\r\nbody", ("Windows", "body")),
        ("  padded title  \nbody", ("padded title", "body")),
        ("\nno title", (UNTITLED, "no title")),
    ],
)
def test_split_title(content, expected):
    assert split_title(content) == expected
