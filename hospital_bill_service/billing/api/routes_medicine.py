# billing/api/routes_medicine.py
import logging

from fastapi import APIRouter

from billing.api.deps import calculation_http_error
from billing.schemas.models import MedicineCalculationRequest, MedicineCalculationResponse
from billing.services.dosage import DosageCalculationError, calculate_medicine_dosage, format_dosage_for_bill
from billing.services.medicine_rules import FREQUENCY_LABELS, MEDICINE_RULES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/medicine", tags=["medicine"])


@router.get("/types")
def medicine_types():
    """Medicine forms and frequency codes the calculator accepts (drives the form dropdowns)."""
    return {
        "med_types": [
            {
                "med_type": mt.value,
                "unit": rule.unit,
                "can_be_partial": rule.can_be_partial,
                "can_be_partial_inpatient": rule.can_be_partial_inpatient,
                "standard_bottle_size_ml": rule.standard_bottle_size_ml,
            }
            for mt, rule in MEDICINE_RULES.items()
        ],
        "frequencies": [{"code": f.value, "label": label} for f, label in FREQUENCY_LABELS.items()],
    }

@router.post("/calculate", response_model=MedicineCalculationResponse)
def calculate(req: MedicineCalculationRequest):
    try:
        result = calculate_medicine_dosage(req)
    except DosageCalculationError as e:
        logger.warning("Rejected medicine calculation (%s): %s", e.code, e)
        raise calculation_http_error(e)

    bill_line = None
    if req.medicine_name:
        bill_line = format_dosage_for_bill(
            req.medicine_name, req.dose_prescribed, req.med_type,
            req.dose_frequency, req.total_days, result,
        )
    return MedicineCalculationResponse(result=result, bill_line=bill_line)
