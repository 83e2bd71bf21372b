# billing/services/dosage.py
"""
Medicine dosage -> billable quantity and price.

Everything here is a pure function of its arguments and the read-only rule
table. Arithmetic runs on exact fractions; the only rounding is ceil() for
whole units and round-half-up to 2 decimals for partial quantities and money.
"""
import logging
import math
from decimal import InvalidOperation
from fractions import Fraction
from typing import Mapping, NamedTuple, Optional, Union

from billing.schemas.models import DosageRequest, DosageResult
from billing.services.medicine_rules import (
    BOTTLED_TYPES,
    FREQUENCY_LABELS,
    FREQUENCY_MULTIPLIERS,
    LIQUID_TYPES,
    MEDICINE_RULES,
    SOLID_TYPES,
    VOLUME_CONVERSIONS,
    DoseFrequency,
    MedicineTypeRule,
    MedType,
)
from billing.utils.numbers import Number, NumberOutOfRange, fmt, fmt2, round2, to_fraction

logger = logging.getLogger(__name__)


class DosageCalculationError(ValueError):
    code = "CALCULATION_FAILED"
    field = "dose_prescribed"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        if field is not None:
            self.field = field


class InvalidDose(DosageCalculationError):
    code = "INVALID_DOSE"
    field = "dose_prescribed"


class InvalidDuration(DosageCalculationError):
    code = "INVALID_DURATION"
    field = "total_days"


class InvalidFrequency(DosageCalculationError):
    code = "INVALID_FREQUENCY"
    field = "dose_frequency"


class InvalidMedicineType(DosageCalculationError):
    code = "INVALID_MEDICINE_TYPE"
    field = "med_type"


class InvalidPrice(DosageCalculationError):
    code = "INVALID_PRICE"
    field = "base_price"


class Quantity(NamedTuple):
    quantity: Fraction
    unit: str
    details: str
    partial_allowed: bool
    partial_billed: bool = False


# --------------------------
# Input resolution
# --------------------------
def parse_dose(dose_prescribed: Number) -> Fraction:
    try:
        dose = to_fraction(dose_prescribed)
    except NumberOutOfRange:
        raise InvalidDose(f"Invalid dose prescribed: {dose_prescribed!r} is out of range.") from None
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidDose(f"Invalid dose prescribed: {dose_prescribed!r} is not a number.") from None
    if dose <= 0:
        raise InvalidDose(f"Invalid dose prescribed: must be > 0 (got {dose_prescribed}).")
    return dose

def resolve_frequency(dose_frequency: Union[DoseFrequency, str]) -> DoseFrequency:
    try:
        return DoseFrequency(str(getattr(dose_frequency, "value", dose_frequency)).strip().upper())
    except ValueError:
        allowed = ", ".join(f.value for f in DoseFrequency)
        raise InvalidFrequency(f"Unknown dose frequency {dose_frequency!r}; expected one of {allowed}.") from None

def get_daily_frequency_multiplier(dose_frequency: Union[DoseFrequency, str]) -> Fraction:
    return FREQUENCY_MULTIPLIERS[resolve_frequency(dose_frequency)]

def resolve_med_type(med_type: Union[MedType, str]) -> Optional[MedType]:
    """MedType for a registered form, None for anything the rule table doesn't know."""
    if isinstance(med_type, MedType):
        return med_type
    try:
        return MedType(str(med_type).strip())
    except ValueError:
        return None

def convert_to_ml(amount: Number, med_type: Union[MedType, str],
                  conversions: Mapping[MedType, int] = VOLUME_CONVERSIONS) -> Fraction:
    """Volume units become ml; anything else passes through unchanged."""
    mt = resolve_med_type(med_type)
    factor = conversions.get(mt, 1) if mt is not None else 1
    return to_fraction(amount) * factor


# --------------------------
# Quantity per medicine group
# --------------------------
def calculate_solid_medicine_quantity(
    dose: Number,
    med_type: Union[MedType, str],
    daily_frequency: Number,
    total_days: int,
    rules: Mapping[MedType, MedicineTypeRule] = MEDICINE_RULES,
) -> Quantity:
    mt = resolve_med_type(med_type)
    if mt not in SOLID_TYPES or mt not in rules:
        raise InvalidMedicineType(f"Invalid solid medicine type: {med_type}")
    rule = rules[mt]

    dose_f, freq_f = to_fraction(dose), to_fraction(daily_frequency)
    total_needed = dose_f * freq_f * total_days
    final = Fraction(math.ceil(total_needed))

    head = f"{fmt(dose_f)} {rule.unit} × {fmt(freq_f)} times daily × {total_days} days = {fmt2(total_needed)} {rule.unit}s"
    if rule.can_be_partial:
        # the dose may be a broken tablet, the dispensed count is whole tablets
        details = f"{head} (rounded up to {final.numerator} whole {rule.unit}s)"
    else:
        details = f"{head} (rounded up to {final.numerator}, no partial {rule.unit}s)"

    return Quantity(final, rule.unit, details, rule.can_be_partial)


def calculate_liquid_medicine_quantity(
    dose: Number,
    med_type: Union[MedType, str],
    daily_frequency: Number,
    total_days: int,
    is_inpatient: bool = False,
    is_discharge_medicine: bool = False,
    rules: Mapping[MedType, MedicineTypeRule] = MEDICINE_RULES,
    conversions: Mapping[MedType, int] = VOLUME_CONVERSIONS,
) -> Quantity:
    mt = resolve_med_type(med_type)
    if mt not in LIQUID_TYPES or mt not in rules:
        raise InvalidMedicineType(f"Invalid liquid medicine type: {med_type}")
    rule = rules[mt]

    dose_f, freq_f = to_fraction(dose), to_fraction(daily_frequency)
    course_amount = dose_f * freq_f * total_days
    total_ml = convert_to_ml(course_amount, mt, conversions)
    head = f"{fmt(dose_f)} {mt.value} × {fmt(freq_f)} times daily × {total_days} days = {fmt(total_ml, 2)} ml"

    if mt in BOTTLED_TYPES and rule.is_bottled:
        bottle = rule.standard_bottle_size_ml
        partial_here = is_inpatient and not is_discharge_medicine and rule.can_be_partial_inpatient
        if partial_here:
            bottles = round2(total_ml / bottle)
            details = f"{head} = {fmt2(total_ml / bottle)} bottles (partial bottle allowed for ward medicine)"
        else:
            bottles = Fraction(math.ceil(total_ml / bottle))
            details = f"{head} = {bottles.numerator} bottles (full {bottle} ml bottles required)"
        return Quantity(bottles, rule.unit, details, rule.can_be_partial, partial_here)

    # bare volume: billed exactly as measured, in the prescribed unit ("ml/cc", "tsp", "tbsp")
    quantity = round2(course_amount)
    if mt is MedType.ML_CC:
        details = head
    else:
        details = f"{head} = {fmt(quantity, 2)} {mt.value}"
    return Quantity(quantity, mt.value, details, rule.can_be_partial, rule.can_be_partial)


def calculate_generic_quantity(
    dose: Number,
    med_type: Union[MedType, str],
    daily_frequency: Number,
    total_days: int,
    rules: Mapping[MedType, MedicineTypeRule] = MEDICINE_RULES,
) -> Quantity:
    """Weights, ampoules, tubes, packs and unregistered forms: always whole units."""
    mt = resolve_med_type(med_type)
    rule = rules.get(mt) if mt is not None else None
    unit = rule.unit if rule else str(getattr(med_type, "value", med_type)).strip().lower()

    dose_f, freq_f = to_fraction(dose), to_fraction(daily_frequency)
    total_needed = dose_f * freq_f * total_days
    final = Fraction(math.ceil(total_needed))
    details = (
        f"{fmt(dose_f)} {unit} × {fmt(freq_f)} times daily × {total_days} days = "
        f"{fmt2(total_needed)} {unit} (rounded up to {final.numerator})"
    )
    partial_allowed = rule.can_be_partial if rule else True
    return Quantity(final, unit, details, partial_allowed)


# --------------------------
# Entry points
# --------------------------
def calculate_medicine_dosage(
    request: DosageRequest,
    rules: Mapping[MedType, MedicineTypeRule] = MEDICINE_RULES,
    conversions: Mapping[MedType, int] = VOLUME_CONVERSIONS,
) -> DosageResult:
    """
    Billable quantity and price for one prescription line.

    Raises a DosageCalculationError subclass (InvalidDose, InvalidDuration,
    InvalidFrequency, InvalidMedicineType, InvalidPrice) instead of returning a
    partial result. Types with no rule go through the whole-unit path and come
    back with is_registered_type=False.
    """
    dose = parse_dose(request.dose_prescribed)

    if not (isinstance(request.total_days, int) and request.total_days > 0):
        raise InvalidDuration(f"total_days must be a positive integer (got {request.total_days}).")

    try:
        base_price = to_fraction(request.base_price)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidPrice(f"Invalid base price: {request.base_price!r}.") from None
    if base_price < 0:
        raise InvalidPrice(f"base_price must be >= 0 (got {request.base_price}).")

    daily_frequency = get_daily_frequency_multiplier(request.dose_frequency)
    mt = resolve_med_type(request.med_type)

    if mt in SOLID_TYPES:
        q = calculate_solid_medicine_quantity(dose, mt, daily_frequency, request.total_days, rules)
    elif mt in LIQUID_TYPES:
        q = calculate_liquid_medicine_quantity(
            dose, mt, daily_frequency, request.total_days,
            request.is_inpatient, request.is_discharge_medicine,
            rules, conversions,
        )
    else:
        if mt is None or mt not in rules:
            logger.warning("No rule for medicine type %r; billing whole units", request.med_type)
        q = calculate_generic_quantity(dose, mt or request.med_type, daily_frequency, request.total_days, rules)

    return DosageResult(
        total_quantity=float(q.quantity),
        quantity_unit=q.unit,
        price_per_unit=float(base_price),
        total_price=float(round2(base_price * q.quantity)),
        is_partial_allowed=q.partial_allowed,
        is_partial_billed=q.partial_billed,
        calculation_details=q.details,
        is_registered_type=mt is not None and mt in rules,
    )


def format_dosage_for_bill(
    medicine_name: str,
    dose_prescribed: Number,
    med_type: Union[MedType, str],
    dose_frequency: Union[DoseFrequency, str],
    total_days: int,
    result: DosageResult,
) -> str:
    """e.g. "Paracetamol 500mg - 500 Mg, Three times daily, 5 days (Total: 7500 mg)"."""
    code = str(getattr(dose_frequency, "value", dose_frequency)).strip()
    try:
        label = FREQUENCY_LABELS[DoseFrequency(code.upper())]
    except ValueError:
        label = code
    mt = str(getattr(med_type, "value", med_type)).strip()
    qty = fmt(to_fraction(result.total_quantity), 2)
    return f"{medicine_name} - {str(dose_prescribed).strip()} {mt}, {label}, {total_days} days (Total: {qty} {result.quantity_unit})"
