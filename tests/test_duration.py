"""Tests for Duration formatting and JSON encoding."""

import json

import pytest

from caldiff import Duration, DurationEncoder


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        (
            Duration(years=1, months=2, days=3, hours=4, minutes=5, seconds=6),
            "1y 2m 3d 4h 5m 6s",
        ),
        (Duration(days=3, minutes=5), "3d 5m"),
        (Duration(), "0s"),
        (Duration(hours=7), "7h"),
        (Duration(months=4), "4m"),
        (Duration(minutes=4), "4m"),
        (Duration(hours=49, seconds=1), "49h 1s"),
    ],
)
def test_format(duration, expected):
    """Test that zero fields are dropped and order is fixed."""
    assert duration.format() == expected
    assert str(duration) == expected


def test_to_json_is_quoted_string():
    """Test that to_json encodes the formatted text as a JSON string."""
    d = Duration(years=3, months=3, days=14, hours=6, minutes=30, seconds=15)

    assert d.to_json() == '"3y 3m 14d 6h 30m 15s"'
    assert json.loads(d.to_json()) == "3y 3m 14d 6h 30m 15s"


def test_to_json_zero():
    """Test that an empty duration serializes as "0s"."""
    assert Duration().to_json() == '"0s"'


def test_encoder_nested_in_structure():
    """Test that DurationEncoder writes nested durations as strings."""
    data = {"duration": Duration(days=2, hours=1), "name": "job"}

    encoded = json.dumps(data, cls=DurationEncoder, separators=(",", ":"))

    assert encoded == '{"duration":"2d 1h","name":"job"}'


def test_encoder_rejects_other_objects():
    """Test that DurationEncoder still refuses unknown types."""
    with pytest.raises(TypeError):
        json.dumps({"value": object()}, cls=DurationEncoder)


def test_value_equality_and_hash():
    """Test that durations compare and hash by value."""
    assert Duration(days=1) == Duration(days=1)
    assert Duration(days=1) != Duration(hours=24)
    assert len({Duration(days=1), Duration(days=1)}) == 1


def test_immutable():
    """Test that fields cannot be reassigned."""
    d = Duration(days=1)
    with pytest.raises(AttributeError):
        d.days = 2  # type: ignore[misc]


def test_keyword_only():
    """Test that positional construction is rejected."""
    with pytest.raises(TypeError):
        Duration(1, 2)  # type: ignore[misc]


def test_negative_field_rejected():
    """Test that negative fields raise ValueError."""
    with pytest.raises(ValueError, match="hours must be >= 0"):
        Duration(hours=-1)


@pytest.mark.parametrize("value", [1.5, "3", True])
def test_non_int_field_rejected(value):
    """Test that non-int fields raise TypeError."""
    with pytest.raises(TypeError, match="days must be an int"):
        Duration(days=value)
