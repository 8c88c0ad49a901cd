import pytest

from hesab.domain.amounts import format_amount, group_digits, parse_grouped


def test_format_amount_is_localized_with_suffix():
    assert format_amount(1_500_000) == "۱٬۵۰۰٬۰۰۰ تومان"
    assert format_amount(0) == "۰ تومان"
    assert format_amount(999) == "۹۹۹ تومان"


def test_format_amount_negative():
    assert format_amount(-2_500) == "-۲٬۵۰۰ تومان"


def test_group_digits():
    assert group_digits(1_500_000) == "1,500,000"
    assert group_digits(999) == "999"
    assert group_digits(1000) == "1,000"
    # already grouped input is regrouped, not doubled
    assert group_digits("1,0000") == "10,000"


@pytest.mark.parametrize("value", [None, ""])
def test_group_digits_empty(value):
    assert group_digits(value) == ""


def test_parse_grouped():
    assert parse_grouped("1,500,000") == 1_500_000
    assert parse_grouped(" 42 ") == 42
    assert parse_grouped("۱٬۲۰۰") == 1_200


@pytest.mark.parametrize("value", ["", None, "abc", "12.5", "1,2a", "--3"])
def test_parse_grouped_invalid_is_zero(value):
    assert parse_grouped(value) == 0


def test_parse_is_left_inverse_of_group():
    samples = list(range(0, 2_000_000, 7919)) + [10**k for k in range(0, 16)] + [10**15 - 1]
    for n in samples:
        assert parse_grouped(group_digits(n)) == n
