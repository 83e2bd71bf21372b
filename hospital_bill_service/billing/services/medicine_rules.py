# billing/services/medicine_rules.py
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Mapping, Optional

from billing.core.settings import STANDARD_BOTTLE_SIZE_ML, TBSP_ML, TSP_ML


class MedType(str, Enum):
    TABLET = "Tablet"
    CAPSULE = "Capsule"
    SYRUP = "Syrup"
    SOLUTION = "Solution"
    ML_CC = "ml/cc"
    TSP = "tsp"
    TBSP = "tbsp"
    MG = "Mg"
    MCG = "mcg"
    MEQ = "meq"
    AMP = "amp"
    TUBE = "tube"
    FORMULA = "formula"
    QTY = "Qty"


class DoseFrequency(str, Enum):
    QD = "QD"
    BID = "BID"
    TID = "TID"
    QID = "QID"
    QOD = "QOD"
    QWEEK = "QWEEK"


# Dispatch groups. Every MedType belongs to exactly one of them.
SOLID_TYPES = frozenset({MedType.TABLET, MedType.CAPSULE})
BOTTLED_TYPES = frozenset({MedType.SYRUP, MedType.SOLUTION})
VOLUME_TYPES = frozenset({MedType.ML_CC, MedType.TSP, MedType.TBSP})
LIQUID_TYPES = BOTTLED_TYPES | VOLUME_TYPES
GENERIC_TYPES = frozenset(MedType) - SOLID_TYPES - LIQUID_TYPES

# Administrations per day. Exact fractions so weekly courses don't drift.
FREQUENCY_MULTIPLIERS: Mapping[DoseFrequency, Fraction] = MappingProxyType({
    DoseFrequency.QD: Fraction(1),
    DoseFrequency.BID: Fraction(2),
    DoseFrequency.TID: Fraction(3),
    DoseFrequency.QID: Fraction(4),
    DoseFrequency.QOD: Fraction(1, 2),
    DoseFrequency.QWEEK: Fraction(1, 7),
})

FREQUENCY_LABELS: Mapping[DoseFrequency, str] = MappingProxyType({
    DoseFrequency.QD: "Once daily",
    DoseFrequency.BID: "Twice daily",
    DoseFrequency.TID: "Three times daily",
    DoseFrequency.QID: "Four times daily",
    DoseFrequency.QOD: "Every other day",
    DoseFrequency.QWEEK: "Weekly",
})


@dataclass(frozen=True)
class MedicineTypeRule:
    """
    Billing rule for one medicine form.

    unit                     : unit the pharmacy charges in (tablet, bottle, ml, ...)
    can_be_partial           : a fractional unit may be billed outright
    can_be_partial_inpatient : bottled liquids only; ward (non-discharge) courses
                               may bill a fractional bottle
    standard_bottle_size_ml  : bottled liquids only; ml in one sealed bottle
    """
    unit: str
    can_be_partial: bool
    can_be_partial_inpatient: bool = False
    standard_bottle_size_ml: Optional[int] = None

    @property
    def is_bottled(self) -> bool:
        return self.standard_bottle_size_ml is not None


def build_volume_conversions(tsp_ml: int = TSP_ML, tbsp_ml: int = TBSP_ML) -> Mapping[MedType, int]:
    return MappingProxyType({
        MedType.ML_CC: 1,
        MedType.TSP: int(tsp_ml),
        MedType.TBSP: int(tbsp_ml),
    })


def build_medicine_rules(bottle_size_ml: int = STANDARD_BOTTLE_SIZE_ML) -> Mapping[MedType, MedicineTypeRule]:
    """
    Build a read-only rule table. The module-level MEDICINE_RULES is built once
    from configuration; deployments with another bottle size can build their own
    and hand it to the calculator.
    """
    if not (isinstance(bottle_size_ml, int) and bottle_size_ml > 0):
        raise ValueError(f"bottle_size_ml must be a positive integer (got {bottle_size_ml}).")

    bottled = dict(can_be_partial=False, can_be_partial_inpatient=True, standard_bottle_size_ml=bottle_size_ml)
    return MappingProxyType({
        # solids
        MedType.TABLET: MedicineTypeRule(unit="tablet", can_be_partial=True),
        MedType.CAPSULE: MedicineTypeRule(unit="capsule", can_be_partial=False),
        # bottled liquids
        MedType.SYRUP: MedicineTypeRule(unit="bottle", **bottled),
        MedType.SOLUTION: MedicineTypeRule(unit="bottle", **bottled),
        # volumes
        MedType.ML_CC: MedicineTypeRule(unit="ml", can_be_partial=True),
        MedType.TSP: MedicineTypeRule(unit="tsp", can_be_partial=True),
        MedType.TBSP: MedicineTypeRule(unit="tbsp", can_be_partial=True),
        # weights
        MedType.MG: MedicineTypeRule(unit="mg", can_be_partial=True),
        MedType.MCG: MedicineTypeRule(unit="mcg", can_be_partial=True),
        MedType.MEQ: MedicineTypeRule(unit="meq", can_be_partial=True),
        # containers / packs
        MedType.AMP: MedicineTypeRule(unit="ampoule", can_be_partial=False),
        MedType.TUBE: MedicineTypeRule(unit="tube", can_be_partial=False),
        MedType.FORMULA: MedicineTypeRule(unit="pack", can_be_partial=False),
        MedType.QTY: MedicineTypeRule(unit="unit", can_be_partial=False),
    })


MEDICINE_RULES = build_medicine_rules()
VOLUME_CONVERSIONS = build_volume_conversions()
