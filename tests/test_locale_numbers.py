import pytest

from salarylens.locale_numbers import parse_salary


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("100000", 100000.0),
        ("100.000", 100000.0),
        ("100.000,50", 100000.5),
        ("1.234.567,891", 1234567.89),
        (" 42 500 ", 42500.0),
        ("₺75.000", 75000.0),
        ("12,5", 12.5),
    ],
)
def test_parses_turkish_formatted_amounts(raw, expected):
    assert parse_salary(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "1,2,3", ",50", "abc"])
def test_unparseable_input_returns_none(raw):
    assert parse_salary(raw) is None
