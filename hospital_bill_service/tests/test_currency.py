import pytest

from billing.utils.currency import format_taka, parse_taka_amount


@pytest.mark.parametrize("amount,expected", [
    (150, "৳150.00"),
    (1234.5, "৳1,234.50"),
    ("2500", "৳2,500.00"),
    (0.125, "৳0.13"),
    ("abc", "৳0.00"),
    (None, "৳0.00"),
])
def test_format_taka(amount, expected):
    assert format_taka(amount) == expected

@pytest.mark.parametrize("text,expected", [
    ("৳1,200.50", 1200.5),
    ("150", 150.0),
    ("Tk 75", 75.0),
    ("", 0.0),
    ("৳", 0.0),
])
def test_parse_taka_amount(text, expected):
    assert parse_taka_amount(text) == expected


def test_format_taka_uses_configured_symbol(monkeypatch):
    from billing.utils import currency

    monkeypatch.setattr(currency, "CURRENCY_SYMBOL", "Tk ")
    assert format_taka(1500) == "Tk 1,500.00"
    assert format_taka("x") == "Tk 0.00"
