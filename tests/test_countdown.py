"""Tests for countdown text formatting."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from lvzj.countdown import (
    EXPIRED_COMPACT,
    EXPIRED_VERBOSE,
    czech_plural,
    format_countdown,
    is_expired,
    remaining,
)
from lvzj.nodes import CountdownStyle, Direction, LvzjNode, NodeType

TARGET = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


def countdown(
    direction: Direction = Direction.TO_TARGET,
    style: CountdownStyle = CountdownStyle.COMPACT,
) -> LvzjNode:
    return LvzjNode(
        type=NodeType.COUNTDOWN,
        target=TARGET,
        direction=direction,
        countdown_style=style,
    )


class TestPlural:
    @pytest.mark.parametrize("n,expected", [
        (0, "dní"), (1, "den"), (2, "dny"), (4, "dny"), (5, "dní"), (21, "dní"),
    ])
    def test_forms(self, n: int, expected: str) -> None:
        assert czech_plural(n, "den", "dny", "dní") == expected


class TestCompact:
    def test_remaining_time(self) -> None:
        now = TARGET - timedelta(days=1, hours=2, minutes=3, seconds=4)
        assert format_countdown(countdown(), now) == "1:02:03:04"

    def test_days_are_not_padded(self) -> None:
        now = TARGET - timedelta(days=123)
        assert format_countdown(countdown(), now) == "123:00:00:00"

    def test_past_target_is_expired(self) -> None:
        now = TARGET + timedelta(hours=5)
        assert format_countdown(countdown(), now) == EXPIRED_COMPACT
        assert is_expired(countdown(), now)

    def test_exactly_at_target_is_expired(self) -> None:
        assert is_expired(countdown(), TARGET)

    def test_since_target_counts_up(self) -> None:
        node = countdown(Direction.SINCE_TARGET)
        now = TARGET + timedelta(hours=1, minutes=1, seconds=1)
        assert format_countdown(node, now) == "0:01:01:01"
        assert not is_expired(node, now)

    def test_since_target_never_expires(self) -> None:
        node = countdown(Direction.SINCE_TARGET)
        assert format_countdown(node, TARGET + timedelta(days=400)).startswith("400:")

    def test_naive_now_uses_target_zone(self) -> None:
        now = (TARGET - timedelta(minutes=1)).replace(tzinfo=None)
        assert format_countdown(countdown(), now) == "0:00:01:00"


class TestVerbose:
    def test_joins_nonzero_units(self) -> None:
        node = countdown(style=CountdownStyle.VERBOSE)
        now = TARGET - timedelta(days=1, hours=2)
        assert format_countdown(node, now) == "1 den, 2 hodiny"

    def test_all_units(self) -> None:
        node = countdown(style=CountdownStyle.VERBOSE)
        now = TARGET - timedelta(days=5, hours=1, minutes=3, seconds=22)
        assert format_countdown(node, now) == "5 dní, 1 hodina, 3 minuty, 22 sekund"

    def test_seconds_shown_when_alone(self) -> None:
        node = countdown(style=CountdownStyle.VERBOSE)
        assert format_countdown(node, TARGET - timedelta(milliseconds=500)) == "0 sekund"

    def test_expired(self) -> None:
        node = countdown(style=CountdownStyle.VERBOSE)
        assert format_countdown(node, TARGET + timedelta(seconds=1)) == EXPIRED_VERBOSE


class TestRemaining:
    def test_split(self) -> None:
        r = remaining(countdown(), TARGET - timedelta(seconds=90061))
        assert (r.days, r.hours, r.minutes, r.seconds) == (1, 1, 1, 1)
        assert not r.expired

    def test_missing_target(self) -> None:
        with pytest.raises(ValueError):
            remaining(LvzjNode(type=NodeType.COUNTDOWN), TARGET)
