"""
Data formatting utilities for income reports
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Union
from urllib.parse import urlencode


class CurrencyFormatter:
    """Currency formatting utilities"""

    CURRENCY_SYMBOLS = {
        'INR': '₹',
        'USD': '$',
        'EUR': '€',
        'GBP': '£'
    }

    @staticmethod
    def _to_decimal(amount: Any) -> Decimal:
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            return Decimal("0")
        return value if value.is_finite() else Decimal("0")

    @staticmethod
    def group_indian(digits: str) -> str:
        """Group digits Indian style: 12,34,56,789"""
        if len(digits) <= 3:
            return digits
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        return ",".join(groups + [tail])

    @classmethod
    def format_amount(cls, amount: Union[Decimal, float, int, str, None],
                      currency: str = 'INR',
                      include_symbol: bool = True,
                      decimal_places: int = 0) -> str:
        """Format monetary amount with Indian digit grouping"""
        value = cls._to_decimal(amount if amount is not None else 0)
        quantum = Decimal(1).scaleb(-decimal_places)
        value = value.quantize(quantum, rounding=ROUND_HALF_UP)

        sign = "-" if value < 0 else ""
        integer_part, _, fraction = f"{abs(value):f}".partition(".")
        text = cls.group_indian(integer_part)
        if decimal_places > 0:
            text = f"{text}.{fraction}"

        symbol = cls.CURRENCY_SYMBOLS.get(currency, f"{currency} ") if include_symbol else ""
        return f"{sign}{symbol}{text}"


def view_bed_url(owner_id: Optional[str], floor_id: Optional[str], room_id: Optional[str] = None) -> str:
    """Dashboard link to the bed editor for an entry's floor and room."""
    params = {}
    if owner_id:
        params["ownerId"] = owner_id
    if floor_id:
        params["floorId"] = floor_id
    if room_id:
        params["roomId"] = room_id
    return f"/addroomswithbeds?{urlencode(params)}"


def phone_link(person_number: Optional[str]) -> Optional[str]:
    """``tel:`` link for the call button, None when there is no number."""
    if not person_number or not person_number.strip():
        return None
    return f"tel:{person_number.strip()}"
