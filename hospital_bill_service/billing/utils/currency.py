# billing/utils/currency.py
import re
from decimal import InvalidOperation
from typing import Union

from billing.core.settings import CURRENCY_SYMBOL
from billing.utils.numbers import round2, to_fraction

_NON_NUMERIC_RE = re.compile(r"[^\d.\-]")


def format_taka(amount: Union[float, int, str]) -> str:
    """150 -> "৳150.00", 1234.5 -> "৳1,234.50"; unparseable input -> "৳0.00"."""
    try:
        value = round2(to_fraction(amount))
    except (InvalidOperation, ValueError, TypeError):
        return f"{CURRENCY_SYMBOL}0.00"
    return f"{CURRENCY_SYMBOL}{float(value):,.2f}"

def parse_taka_amount(text: str) -> float:
    """Strip symbols and separators ("৳1,200.50" -> 1200.5); 0.0 when nothing numeric is left."""
    cleaned = _NON_NUMERIC_RE.sub("", text or "")
    try:
        return float(to_fraction(cleaned))
    except (InvalidOperation, ValueError, TypeError):
        return 0.0
