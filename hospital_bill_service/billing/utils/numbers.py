# billing/utils/numbers.py
from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Union

Number = Union[str, int, float, Decimal, Fraction]

# Largest decimal exponent accepted from user input (either direction)
MAX_EXPONENT = 12


class NumberOutOfRange(ValueError):
    pass


def to_fraction(value: Number) -> Fraction:
    """
    Exact rational value of a user/JSON number. Goes through str() so that
    0.1 means one tenth and not its binary approximation.
    Raises InvalidOperation / ValueError / TypeError on non-numbers and
    NumberOutOfRange when the exponent is beyond ±MAX_EXPONENT, before any
    big-integer expansion happens.
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a quantity")
    d = Decimal(str(value).strip())
    if not d.is_finite():
        raise InvalidOperation(f"non-finite value {value!r}")
    if d and abs(d.adjusted()) > MAX_EXPONENT:
        raise NumberOutOfRange(f"{value!r} is outside 1e-{MAX_EXPONENT}..1e{MAX_EXPONENT}")
    return Fraction(d)


def round2(value: Fraction) -> Fraction:
    """Round half-up to 2 decimals (half away from zero for the non-negative values we bill)."""
    if value < 0:
        return -round2(-value)
    return Fraction(math.floor(value * 100 + Fraction(1, 2)), 100)


def fmt(value: Fraction, places: int = 4) -> str:
    """Integers without decimals, everything else to `places` with trailing zeros dropped."""
    if value.denominator == 1:
        return str(value.numerator)
    return f"{float(value):.{places}f}".rstrip("0").rstrip(".")


def fmt2(value: Fraction) -> str:
    return f"{float(round2(value)):.2f}"
