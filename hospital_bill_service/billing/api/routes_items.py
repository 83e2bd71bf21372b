# billing/api/routes_items.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from billing.api.deps import get_storage
from billing.schemas.models import (
    BillType, CategoryConfig,
    MedicalItem, MedicalItemCreate, MedicalItemUpdate,
)
from billing.services.categories import categories_for
from billing.services.storage import BillingStorage

router = APIRouter(prefix="/api", tags=["price-list"])


def _is_outpatient(bill_type: Optional[BillType]) -> Optional[bool]:
    return None if bill_type is None else bill_type == "outpatient"

@router.get("/categories", response_model=List[CategoryConfig])
def list_categories(bill_type: BillType = Query(..., alias="type")):
    return list(categories_for(bill_type))

@router.get("/medical-items", response_model=List[MedicalItem])
def list_medical_items(
    bill_type: Optional[BillType] = Query(default=None, alias="type"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    storage: BillingStorage = Depends(get_storage),
):
    is_outpatient = _is_outpatient(bill_type)
    if search:
        return storage.search_items(search, is_outpatient)
    if category:
        return storage.items_by_category(category, is_outpatient)
    return storage.list_items(is_outpatient)

@router.post("/medical-items", response_model=MedicalItem)
def create_medical_item(item: MedicalItemCreate, storage: BillingStorage = Depends(get_storage)):
    return storage.create_item(item)

@router.put("/medical-items/{item_id}", response_model=MedicalItem)
def update_medical_item(item_id: int, changes: MedicalItemUpdate, storage: BillingStorage = Depends(get_storage)):
    item = storage.update_item(item_id, changes)
    if not item:
        raise HTTPException(status_code=404, detail="Medical item not found")
    return item

@router.delete("/medical-items/{item_id}")
def delete_medical_item(item_id: int, storage: BillingStorage = Depends(get_storage)):
    if not storage.delete_item(item_id):
        raise HTTPException(status_code=404, detail="Medical item not found")
    return {"message": "Medical item deleted successfully"}
