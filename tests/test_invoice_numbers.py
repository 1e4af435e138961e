import pytest

from ncf_pos.services.invoice_numbers import (
    extract_numeric_suffix,
    format_invoice_number,
    split_invoice_number,
)


def test_format_pads_to_eight_digits():
    assert format_invoice_number("B02", 43) == "B02-00000043"
    assert format_invoice_number("B01", 0) == "B01-00000000"


def test_format_keeps_numbers_wider_than_padding():
    assert format_invoice_number("B02", 123456789) == "B02-123456789"


@pytest.mark.parametrize("value", [-1, 1.5, "12", True])
def test_format_rejects_non_counter_values(value):
    with pytest.raises(ValueError):
        format_invoice_number("B02", value)


@pytest.mark.parametrize(
    "invoice_number, expected",
    [
        ("B02-00000012", 12),
        ("B01-00001780", 1780),
        ("E-31-00000012", 12),
        ("invalid", None),
        ("B02-", None),
        ("B02-0000001A", None),
        ("B02-00000012\n", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_numeric_suffix(invoice_number, expected):
    assert extract_numeric_suffix(invoice_number) == expected


def test_extract_reverses_format():
    for prefix, number in [("B02", 0), ("B15", 1765), ("E-32", 99999999)]:
        assert extract_numeric_suffix(format_invoice_number(prefix, number)) == number


def test_split_invoice_number():
    assert split_invoice_number("E-31-00000007") == ("E-31", 7)
    assert split_invoice_number("B02-00001739") == ("B02", 1739)
    assert split_invoice_number("B02-OFFLINE-x") is None
