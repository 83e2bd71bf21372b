# billing/services/bill.py
import uuid
from fractions import Fraction
from typing import List, Tuple

from billing.schemas.models import BillItem, BillType, DosageRequest, DosageResult, MedicalItem
from billing.services.categories import is_daily_category
from billing.services.dosage import InvalidDose, calculate_medicine_dosage, format_dosage_for_bill
from billing.utils.numbers import round2, to_fraction


def _line_id() -> str:
    return "med_" + uuid.uuid4().hex[:10]

def line_total(item: BillItem, bill_type: BillType, days_admitted: int = 1) -> Fraction:
    total = to_fraction(item.price) * to_fraction(item.quantity)
    if bill_type == "inpatient" and is_daily_category(item.category):
        total *= days_admitted
    return total

def bill_total(items: List[BillItem], bill_type: BillType, days_admitted: int = 1) -> float:
    return float(round2(sum((line_total(i, bill_type, days_admitted) for i in items), Fraction(0))))

def add_item(items: List[BillItem], item: MedicalItem, quantity: float = 1) -> List[BillItem]:
    """Same price-list item again -> bump its quantity instead of a second line."""
    key = str(item.id)
    out: List[BillItem] = []
    merged = False
    for line in items:
        if line.id == key:
            line = line.model_copy(update={"quantity": float(to_fraction(line.quantity) + to_fraction(quantity))})
            merged = True
        out.append(line)
    if not merged:
        out.append(BillItem(id=key, name=item.name, category=item.category, price=item.price, quantity=quantity))
    return out

def medicine_line(item: MedicalItem, request: DosageRequest, result: DosageResult) -> BillItem:
    bill_line = format_dosage_for_bill(
        item.name, request.dose_prescribed, request.med_type,
        request.dose_frequency, request.total_days, result,
    )
    return BillItem(
        id=_line_id(),
        name=item.name,
        category=item.category,
        price=result.price_per_unit,
        quantity=result.total_quantity,
        unit=result.quantity_unit,
        details=f"{bill_line} • {result.calculation_details}",
    )

def calculate_medicine_line(item: MedicalItem, request: DosageRequest) -> Tuple[BillItem, DosageResult]:
    """
    Calculate a medicine course against a price-list item. Raises the calculator's
    errors unchanged; a quantity that rounds to zero is rejected rather than billed.
    """
    result = calculate_medicine_dosage(request)
    if result.total_quantity <= 0:
        raise InvalidDose("Dose is too small to bill; the calculated quantity rounds to zero.")
    return medicine_line(item, request, result), result
