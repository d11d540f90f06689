from decimal import Decimal

import pytest

from hostel_ledger.utils.formatters import CurrencyFormatter, phone_link, view_bed_url


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₹0"),
        (999, "₹999"),
        (1000, "₹1,000"),
        (123456, "₹1,23,456"),
        (Decimal("12345678"), "₹1,23,45,678"),
        (Decimal("1499.5"), "₹1,500"),
        (None, "₹0"),
        ("not-a-number", "₹0"),
    ],
)
def test_rupee_amounts_use_indian_grouping(amount, expected):
    assert CurrencyFormatter.format_amount(amount) == expected


def test_negative_and_decimal_places():
    assert CurrencyFormatter.format_amount(-2500) == "-₹2,500"
    assert CurrencyFormatter.format_amount(Decimal("1234.5"), decimal_places=2) == "₹1,234.50"
    assert CurrencyFormatter.format_amount(100, currency="USD") == "$100"
    assert CurrencyFormatter.format_amount(100, include_symbol=False) == "100"


def test_view_bed_url():
    assert view_bed_url("o1", "f1", "r1") == "/addroomswithbeds?ownerId=o1&floorId=f1&roomId=r1"
    assert view_bed_url("o1", "f1") == "/addroomswithbeds?ownerId=o1&floorId=f1"
    assert view_bed_url(None, "f 1") == "/addroomswithbeds?floorId=f+1"


def test_phone_link():
    assert phone_link(" 9876543210 ") == "tel:9876543210"
    assert phone_link("") is None
    assert phone_link(None) is None
