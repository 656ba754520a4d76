"""Tests for identifier schemes."""
import pytest

from mythoughts.domain import ObjectIdScheme


@pytest.fixture
def scheme() -> ObjectIdScheme:
    return ObjectIdScheme()


def test_new_ids_have_the_key_shape(scheme):
    value = scheme.new()

    assert len(value) == 24
    assert scheme.is_valid(value)
    assert value == value.lower()


def test_new_ids_are_unique(scheme):
    ids = {scheme.new() for _ in range(5000)}
    assert len(ids) == 5000


def test_separate_schemes_do_not_collide():
    first, second = ObjectIdScheme(), ObjectIdScheme()
    assert first.new() != second.new()


@pytest.mark.parametrize(
    "value",
    [
        "",
        "abc123defg",  # 10 characters
        "0123456789abcdef0123456",  # 23
        "0123456789abcdef012345678",  # 25
        "0123456789abcdef0123456z",  # non-hex
        "0123456789abcdef0123456\n",
        " 0123456789abcdef012345",
        None,
        12345,
    ],
)
def test_malformed_ids_rejected(scheme, value):
    assert scheme.is_valid(value) is False


def test_uppercase_hex_accepted(scheme):
    assert scheme.is_valid("0123456789ABCDEF01234567")
