import math

import pytest

from subsidy_assistant.utils.coercion import (
    round_half_up,
    same_value_zero,
    strict_equals,
    to_js_string,
    to_number,
)


@pytest.mark.parametrize("raw, expected", [
    (15, 15.0),
    (2.5, 2.5),
    (" 42 ", 42.0),
    ("1e3", 1000.0),
    ("0x10", 16.0),
    ("", 0.0),
    (True, 1.0),
    (False, 0.0),
    ([], 0.0),
    (["7"], 7.0),
])
def test_to_number_parses_numeric_values(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "12abc", "1_000", "inf", "nan", [1, 2], {"a": 1}])
def test_to_number_returns_nan_for_non_numeric(raw):
    assert math.isnan(to_number(raw))


def test_nan_fails_every_comparison():
    nan = to_number("abc")
    assert not (nan > 0 or nan < 0 or nan >= 0 or nan <= 0)


@pytest.mark.parametrize("raw, expected", [
    (1000000, "1000000"),
    (1000000.0, "1000000"),
    (0.5, "0.5"),
    (True, "true"),
    (None, "null"),
    (["a", 1, None], "a,1,"),
    (1e20, "100000000000000000000"),
    (1e21, "1e+21"),
    (2.5e22, "2.5e+22"),
    (10 ** 21, "1e+21"),
    ("text", "text"),
])
def test_to_js_string(raw, expected):
    assert to_js_string(raw) == expected


def test_strict_equals_does_not_cross_types():
    assert strict_equals(1, 1.0)
    assert strict_equals("it", "it")
    assert not strict_equals(1, "1")
    assert not strict_equals(True, 1)
    assert not strict_equals([1], [1])


def test_same_value_zero_matches_nan():
    assert same_value_zero(math.nan, math.nan)
    assert not strict_equals(math.nan, math.nan)


@pytest.mark.parametrize("raw, expected", [(12.5, 13), (12.49, 12), (0.5, 1), (99.5, 100), (0.0, 0)])
def test_round_half_up(raw, expected):
    assert round_half_up(raw) == expected
