import pytest

from scraper.parsing import parse_float, parse_int


# ================================================================
# parse_int
# ================================================================

@pytest.mark.parametrize("value, expected", [
    ("382", 382),
    (" 4 ", 4),
    ("410 yds", 410),
    ("Out", None),
    (4.9, 4),
    (True, None),
    (None, None),
])
def test_parse_int(value, expected):
    assert parse_int(value) == expected


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_parse_int_non_finite_is_unknown(value):
    assert parse_int(value) is None


# ================================================================
# parse_float
# ================================================================

def test_parse_float():
    assert parse_float("72.4") == 72.4
    assert parse_float(71) == 71.0
    assert parse_float("n/a") is None


@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_parse_float_non_finite_is_unknown(value):
    assert parse_float(value) is None
