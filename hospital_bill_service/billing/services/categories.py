# Category names, order and interface kinds live in code, never in the database.
# The database only holds priced items and bills.
from typing import Dict, Tuple

from billing.schemas.models import BillType, CategoryConfig

# Inpatient categories billed once per admitted day
DAILY_CATEGORIES = frozenset({"Food", "Halo, O2, NO2, etc.", "Seat & Ad. Fee"})

# Medicine sent home at discharge: full-unit rules regardless of admission
DISCHARGE_MEDICINE_CATEGORY = "Discharge Medicine"


def _cat(name: str, order: int, interface: str, description: str) -> CategoryConfig:
    searchable = interface in ("search", "special")
    return CategoryConfig(
        name=name,
        order=order,
        interface=interface,
        description=description,
        has_search=searchable,
        has_dropdown=searchable or interface == "dropdown",
        has_manual_entry=interface == "manual",
        charged_per_day=name in DAILY_CATEGORIES,
    )


OUTPATIENT_CATEGORIES: Tuple[CategoryConfig, ...] = (
    _cat("Registration Fees", 1, "toggle", "Click to add/remove items"),
    _cat("Dr. Fees", 2, "toggle", "Doctor consultation fees"),
    _cat("Medic Fee", 3, "toggle", "Medical service fees"),
    _cat("Laboratory", 4, "search", "Lab tests with search and dropdown"),
    _cat("X-Ray", 5, "special", "X-Ray services with film selection"),
    _cat("Medicine", 6, "special", "Medicine with dosage calculator"),
    _cat("Physical Therapy", 7, "manual", "Enter custom PT services and prices"),
    _cat("Limb and Brace", 8, "manual", "Enter orthopedic devices and prices"),
)

INPATIENT_CATEGORIES: Tuple[CategoryConfig, ...] = (
    _cat("Blood", 1, "dropdown", "Blood services and transfusions with quantity controls"),
    _cat("Laboratory", 2, "search", "Lab tests with search and dropdown"),
    _cat("Limb and Brace", 3, "manual", "Orthopedic devices and braces"),
    _cat("Food", 4, "manual", "Hospital meal services"),
    _cat("Halo, O2, NO2, etc.", 5, "search", "Respiratory and traction services"),
    _cat("Orthopedic, S.Roll, etc.", 6, "search", "Orthopedic consultations and support"),
    _cat("Surgery, O.R. & Delivery", 7, "search", "Surgical procedures and delivery"),
    _cat("Registration Fees", 8, "toggle", "Admission and registration fees"),
    _cat(DISCHARGE_MEDICINE_CATEGORY, 9, "special", "Discharge medications with dosage"),
    _cat("Medicine, ORS & Anesthesia, Ket, Spinal", 10, "search", "Anesthesia and ORS solutions"),
    _cat("Physical Therapy", 11, "manual", "Physical therapy sessions"),
    _cat("IV.'s", 12, "special", "IV fluids and medications with quantity"),
    _cat("Plaster/Milk", 13, "search", "Casting and nutrition services"),
    _cat("Procedures", 14, "search", "Medical procedures"),
    _cat("Seat & Ad. Fee", 15, "search", "Seating and additional fees"),
    _cat("X-Ray", 16, "special", "X-Ray services with film selection"),
    _cat("Lost Laundry", 17, "search", "Laundry replacement charges"),
    _cat("Travel", 18, "search", "Travel and transport services"),
    _cat("Others", 19, "search", "Miscellaneous services"),
)

_BY_TYPE: Dict[str, Tuple[CategoryConfig, ...]] = {
    "outpatient": OUTPATIENT_CATEGORIES,
    "inpatient": INPATIENT_CATEGORIES,
}


def categories_for(bill_type: BillType) -> Tuple[CategoryConfig, ...]:
    return _BY_TYPE[bill_type]

def is_daily_category(category: str) -> bool:
    return category in DAILY_CATEGORIES

def is_discharge_category(category: str) -> bool:
    return category == DISCHARGE_MEDICINE_CATEGORY
