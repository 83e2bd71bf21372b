# billing/api/routes_bills.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from billing.api.deps import calculation_http_error, get_storage
from billing.schemas.models import (
    AddItemRequest, AddMedicineRequest, AddMedicineResponse,
    Bill, BillSaveRequest, BillType, DosageRequest,
)
from billing.services.bill import add_item, bill_total, calculate_medicine_line
from billing.services.categories import is_discharge_category
from billing.services.dosage import DosageCalculationError
from billing.services.storage import BillingStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bills", tags=["bills"])


@router.post("", response_model=Bill)
def save_bill(req: BillSaveRequest, storage: BillingStorage = Depends(get_storage)):
    total = bill_total(req.items, req.type, req.days_admitted)
    return storage.save_bill(req.session_id, req.type, req.items, req.days_admitted, total)

@router.get("", response_model=Optional[Bill])
def get_bill(
    session_id: Optional[str] = None,
    bill_type: Optional[BillType] = Query(default=None, alias="type"),
    storage: BillingStorage = Depends(get_storage),
):
    if not session_id or not bill_type:
        raise HTTPException(status_code=400, detail="Session ID and type are required")
    return storage.get_bill(session_id, bill_type)

@router.post("/items", response_model=Bill)
def add_bill_item(req: AddItemRequest, storage: BillingStorage = Depends(get_storage)):
    item = storage.get_item(req.item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Medical item not found")

    def merge(current: Optional[Bill]):
        items = add_item(current.items if current else [], item, req.quantity)
        days = req.days_admitted or (current.days_admitted if current else 1)
        return items, days, bill_total(items, req.type, days)

    return storage.update_bill(req.session_id, req.type, merge)

@router.post("/medicine", response_model=AddMedicineResponse)
def add_medicine(req: AddMedicineRequest, storage: BillingStorage = Depends(get_storage)):
    item = storage.get_item(req.item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Medical item not found")

    dosage = DosageRequest(
        dose_prescribed=req.dose_prescribed,
        med_type=req.med_type,
        dose_frequency=req.dose_frequency,
        total_days=req.total_days,
        base_price=item.price,
        is_inpatient=req.type == "inpatient",
        is_discharge_medicine=req.is_discharge_medicine or is_discharge_category(item.category),
    )
    try:
        line, result = calculate_medicine_line(item, dosage)
    except DosageCalculationError as e:
        logger.warning("Medicine line not added for session %s (%s): %s", req.session_id, e.code, e)
        raise calculation_http_error(e)

    def append(current: Optional[Bill]):
        items = (current.items if current else []) + [line]
        days = current.days_admitted if current else 1
        return items, days, bill_total(items, req.type, days)

    bill = storage.update_bill(req.session_id, req.type, append)
    logger.info("Added %s x%s %s to %s bill %s", item.name, result.total_quantity, result.quantity_unit, req.type, req.session_id)

    return AddMedicineResponse(bill=bill, line=line, result=result)
