"""Exact decimal helpers for monetary arithmetic."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Union

from finledger.core.exceptions import ValidationError

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number, field_name: str = "amount") -> Decimal:
    """Coerce a number-like value to Decimal without going through binary floats."""
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field_name} is not a valid number: {value!r}")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return result


def require_positive(value: Number, field_name: str = "amount") -> Decimal:
    """Return value as Decimal, raising ValidationError unless it is > 0 with at most 2 decimals."""
    amount = to_decimal(value, field_name)
    if amount <= ZERO:
        raise ValidationError(f"{field_name} must be greater than 0")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field_name} cannot have more than 2 decimal places")
    return amount


def quantize_money(value: Decimal) -> Decimal:
    """Round to cents, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    total = ZERO
    for value in values:
        total += value
    return total


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """Share of part in whole as a percentage with 2 decimals; 0 when whole is 0."""
    if whole == ZERO:
        return ZERO.quantize(CENT)
    return quantize_money(part / whole * HUNDRED)


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """
    Period-over-period change in percent.

    A zero previous value yields 100 when current is positive, else 0.
    """
    if previous == ZERO:
        return (HUNDRED if current > ZERO else ZERO).quantize(CENT)
    return quantize_money((current - previous) / previous * HUNDRED)
