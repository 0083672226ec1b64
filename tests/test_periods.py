"""
Tests for date-range detection and recency ordering.
"""

from fastresume.core.periods import (
    NO_PERIOD_KEY,
    PRESENT_KEY,
    extract_period,
    is_period_only,
    period_end_key,
    strip_period,
)


def test_extract_period_from_header():
    assert extract_period("Sales Assistant | Market Hub | 2021 - 2023") == "2021 - 2023"


def test_open_end_normalized():
    assert extract_period("Jan 2023 – present") == "Jan 2023 - Present"


def test_chinese_period():
    assert extract_period("2020年9月 - 至今") == "2020年9月 - 至今"


def test_no_period():
    assert extract_period("Customer Service Manager") is None
    assert extract_period("") is None


def test_strip_period_leaves_organisation():
    assert strip_period("Bethel Bread of Life Church Jan 2023 – Present") == "Bethel Bread of Life Church"


def test_strip_period_drops_dangling_separator():
    assert strip_period("Barista | Cafe Uno | 2021 - 2023") == "Barista | Cafe Uno"


def test_period_only_lines():
    assert is_period_only("(2021 – 2023)")
    assert is_period_only("Jan 2023 - Present")
    assert not is_period_only("Barista 2021 - 2023")
    assert not is_period_only("")


def test_end_keys_rank_open_periods_first():
    assert period_end_key("Jan 2022 - Present") == PRESENT_KEY
    assert period_end_key("Mar 2020 - Jun 2021") == 2021 * 12 + 6
    # Year-only end dates count as January
    assert period_end_key("2019 - 2021") == 2021 * 12 + 1
    assert period_end_key(None) == NO_PERIOD_KEY
    assert period_end_key("sometime") == NO_PERIOD_KEY
