from decimal import Decimal, InvalidOperation
from typing import Any


def coerce_int(value: Any) -> int:
    """Whole-number value of a loosely typed amount; anything non-numeric counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(Decimal(str(value).strip().replace(",", "")))
    except (InvalidOperation, ValueError, OverflowError):
        return 0


def optional_number(value: Any) -> Decimal | None:
    """Numeric value of a form field, or None when it is missing or not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        number = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def format_inr(amount: Any) -> str:
    """Rupee amount with Indian digit grouping, e.g. 4200000 -> '₹42,00,000'."""
    value = coerce_int(amount)
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"{sign}₹{digits}"
