"""
Amount normalization

Monetary amounts are stored with one decimal place. Rounding is biased
half-up: a trailing ``5`` beyond the first decimal place is bumped to ``6``
before rounding to the nearest tenth, so ``12.35`` becomes ``12.4`` no matter
how the float was represented.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

TENTH = Decimal("0.1")


def to_decimal(value: int | float | str | Decimal) -> Decimal:
    """Read a raw amount as a Decimal; floats go through their shortest text."""
    if isinstance(value, bool):
        raise ValueError("amount must be a number")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # repr gives the shortest round-tripping text, e.g. 12.35 -> "12.35"
        return Decimal(repr(value))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"amount is not a number: {value!r}") from exc


def normalize_amount(value: int | float | str | Decimal) -> Decimal:
    """
    Round an amount to one decimal place.

    The sign is kept aside and only the magnitude is rounded, so
    ``-12.35`` normalizes to ``-12.4``.

    Args:
        value: raw amount as received

    Returns:
        Decimal quantized to ``0.1``

    Raises:
        ValueError: when the value is not a finite number or is too large
            to round

    Example:
        >>> normalize_amount(12.35)
        Decimal('12.4')
        >>> normalize_amount(12.34)
        Decimal('12.3')
    """
    number = to_decimal(value)
    if not number.is_finite():
        raise ValueError(f"amount must be finite: {value!r}")

    negative = number.is_signed()
    # "12.350" and "12.35" must behave the same
    magnitude = abs(number).normalize()

    sign, digits, exponent = magnitude.as_tuple()
    if isinstance(exponent, int) and exponent < -1 and digits[-1] == 5:
        magnitude = Decimal((sign, digits[:-1] + (6,), exponent))

    try:
        rounded = magnitude.quantize(TENTH, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        # more digits than the decimal context carries
        raise ValueError(f"amount is too large: {value!r}") from exc
    return -rounded if negative and rounded else rounded
