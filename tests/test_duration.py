"""Tests for docsite.duration."""

from __future__ import annotations

import pytest

from docsite.duration import time_delta_string


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "less than a minute"),
        (59, "less than a minute"),
        (60, "1 minute"),
        (119, "1 minute"),
        (120, "2 minutes"),
        (2999, "49 minutes"),
        (3000, "about one hour"),
        (5399, "about one hour"),
        (5400, "1 hours"),
        (64799, "17 hours"),
        (64800, "one day"),
        (86399, "one day"),
        (86400, "about one day"),
        (172799, "about one day"),
        (172800, "2 days"),
        (604799, "6 days"),
        (604800, "about one week"),
        (1209599, "about one week"),
        (1209600, "2 weeks"),
        (7257599, "11 weeks"),
        (7257600, "3 months"),
        (31535999, "13 months"),
        (31536000, "1 years"),
        (3 * 31536000 + 5, "3 years"),
    ],
)
def test_time_delta_string_thresholds(seconds: int, expected: str) -> None:
    assert time_delta_string(seconds) == expected
