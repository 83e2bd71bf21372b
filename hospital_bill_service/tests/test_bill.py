import pytest

from billing.schemas.models import BillItem, DosageRequest, MedicalItem
from billing.services.bill import add_item, bill_total, calculate_medicine_line, line_total
from billing.services.categories import (
    INPATIENT_CATEGORIES,
    OUTPATIENT_CATEGORIES,
    categories_for,
    is_daily_category,
    is_discharge_category,
)
from billing.services.dosage import InvalidDose, InvalidFrequency


def _item(id=1, name="Cough Syrup", category="Medicine", price=120.0, is_outpatient=True) -> MedicalItem:
    return MedicalItem(
        id=id, name=name, category=category, price=price, is_outpatient=is_outpatient,
        currency="BDT", created_at="2024-01-01T00:00:00+00:00",
    )

def _line(name, category, price, quantity=1) -> BillItem:
    return BillItem(id=name, name=name, category=category, price=price, quantity=quantity)


def test_outpatient_total_is_price_times_quantity():
    items = [_line("CBC", "Laboratory", 250, 2), _line("Paracetamol", "Medicine", 15, 3)]
    assert bill_total(items, "outpatient") == 545

def test_inpatient_daily_categories_are_multiplied_by_days():
    items = [
        _line("Regular Diet", "Food", 350),
        _line("Oxygen", "Halo, O2, NO2, etc.", 400),
        _line("Bed Fee", "Seat & Ad. Fee", 500),
        _line("Transfusion", "Blood", 2500),
    ]
    assert bill_total(items, "inpatient", days_admitted=3) == (350 + 400 + 500) * 3 + 2500

def test_days_do_not_apply_to_outpatient_bills():
    items = [_line("Regular Diet", "Food", 350)]
    assert bill_total(items, "outpatient", days_admitted=3) == 350

def test_totals_are_exact_to_the_paisa():
    items = [_line("A", "Medicine", 0.1, 1), _line("B", "Medicine", 0.2, 1)]
    assert bill_total(items, "outpatient") == 0.3
    assert line_total(_line("Syrup", "Medicine", 120, 1.4), "inpatient") == 168

def test_empty_bill_is_zero():
    assert bill_total([], "inpatient", 5) == 0

def test_add_item_merges_same_price_list_item():
    item = _item(id=7, name="CBC", category="Laboratory", price=250)
    items = add_item([], item)
    items = add_item(items, item, quantity=2)
    assert len(items) == 1
    assert items[0].id == "7"
    assert items[0].quantity == 3

def test_add_item_keeps_other_lines():
    items = add_item([_line("x", "Blood", 100)], _item(id=2, name="Urinalysis", category="Laboratory", price=150))
    assert [i.name for i in items] == ["x", "Urinalysis"]

def test_medicine_line_carries_calculation():
    request = DosageRequest(
        dose_prescribed="10", med_type="Syrup", dose_frequency="BID", total_days=7,
        base_price=120, is_inpatient=True,
    )
    line, result = calculate_medicine_line(_item(is_outpatient=False), request)
    assert line.id.startswith("med_")
    assert line.quantity == 1.4
    assert line.unit == "bottle"
    assert line.price == 120
    assert line.details.startswith("Cough Syrup - 10 Syrup, Twice daily, 7 days (Total: 1.4 bottle) • 10 Syrup")
    assert result.total_price == 168

def test_medicine_lines_are_never_merged():
    request = DosageRequest(dose_prescribed="1", med_type="Tablet", dose_frequency="QD", total_days=2, base_price=15)
    first, _ = calculate_medicine_line(_item(price=15), request)
    second, _ = calculate_medicine_line(_item(price=15), request)
    assert first.id != second.id

def test_quantity_rounding_to_zero_is_rejected():
    # 0.1 ml of a ward bottle -> 0.001 bottles -> 0.00
    request = DosageRequest(
        dose_prescribed="0.1", med_type="Syrup", dose_frequency="QD", total_days=1,
        base_price=120, is_inpatient=True,
    )
    with pytest.raises(InvalidDose):
        calculate_medicine_line(_item(), request)

def test_calculation_errors_propagate():
    request = DosageRequest(dose_prescribed="1", med_type="Tablet", dose_frequency="Q8H", total_days=2, base_price=15)
    with pytest.raises(InvalidFrequency):
        calculate_medicine_line(_item(), request)


# --------------------------
# Categories
# --------------------------
def test_category_lists():
    assert [c.name for c in categories_for("outpatient")][:3] == ["Registration Fees", "Dr. Fees", "Medic Fee"]
    assert len(OUTPATIENT_CATEGORIES) == 8
    assert len(INPATIENT_CATEGORIES) == 19
    assert [c.order for c in INPATIENT_CATEGORIES] == list(range(1, 20))

def test_category_flags():
    by_name = {c.name: c for c in INPATIENT_CATEGORIES}
    assert by_name["Food"].charged_per_day is True
    assert by_name["Blood"].charged_per_day is False
    assert by_name["Laboratory"].has_search is True
    assert by_name["Blood"].has_dropdown is True
    assert by_name["Physical Therapy"].has_manual_entry is True

def test_category_predicates():
    assert is_daily_category("Seat & Ad. Fee")
    assert not is_daily_category("Laboratory")
    assert is_discharge_category("Discharge Medicine")
    assert not is_discharge_category("Medicine")
