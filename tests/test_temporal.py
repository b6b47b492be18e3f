"""Tests for temporal expression normalization."""

from datetime import date

import pytest

from art_navigator.temporal import expand_two_digit_year, normalize_year


def fixed_today():
    return date(2026, 10, 18)


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("1939年", 1939),
        ("1945", 1945),
        ("2024年3月1日", 2024),
        ("公元1503年左右", 1503),
        ("05", 2005),
        ("85", 1985),
        ("49年", 2049),
        ("50年", 1950),
        ("800年", 800),
        ("0", 0),
    ],
)
def test_digit_runs(expression, expected):
    assert normalize_year(expression) == expected


def test_relative_markers_use_current_year():
    assert normalize_year("今年", today=fixed_today) == 2026
    assert normalize_year("现在", today=fixed_today) == 2026
    assert normalize_year("Today", today=fixed_today) == 2026
    assert normalize_year("right now", today=fixed_today) == 2026


def test_unmatched_text_is_none():
    assert normalize_year("明天") is None
    assert normalize_year("文艺复兴时期") is None
    assert normalize_year("well known") is None


def test_digits_win_over_relative_marker():
    assert normalize_year("今年是2025年", today=fixed_today) == 2025


@pytest.mark.parametrize("expression", [None, "", "   ", "no year", "年", "?!", True, 3.5, ["1939"], {"y": 1}])
def test_never_raises(expression):
    result = normalize_year(expression)
    assert result is None or isinstance(result, int)


def test_integers_pass_through_disambiguation():
    assert normalize_year(1939) == 1939
    assert normalize_year(7) == 2007


def test_expand_two_digit_year():
    assert expand_two_digit_year(1) == 2001
    assert expand_two_digit_year(99) == 1999
    assert expand_two_digit_year(100) == 100
    assert expand_two_digit_year(0) == 0
