"""
Money helpers.

Uses Decimal for precision to avoid floating-point errors.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from rental.core.exceptions import ValidationError

CENT = Decimal("0.01")


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_money(value: Any, field: str = "amount") -> Decimal:
    """
    Convert user input to a non-negative, two-decimal amount.

    Raises:
        ValidationError: If the value is missing, not numeric or negative
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a valid number") from None
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0:
        raise ValidationError(f"{field} must not be negative")
    return quantize(amount)


def coerce_decimal(v: Any) -> Decimal:
    """Read back stored amounts (Decimal128, float, str) as Decimal."""
    if v is None:
        return Decimal("0")
    # Handle Decimal128 and other types by converting to string first
    return Decimal(str(v))
