from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

BillType = Literal["outpatient", "inpatient"]
InterfaceKind = Literal["search", "dropdown", "manual", "toggle", "special"]

MEDICINE_TYPE_HELP = "Tablet, Capsule, Syrup, Solution, ml/cc, tsp, tbsp, Mg, mcg, meq, amp, tube, formula, Qty"
FREQUENCY_HELP = "QD, BID, TID, QID, QOD, QWEEK"


# ---------------------------
# Medicine dosage
# ---------------------------
class DosageRequest(BaseModel):
    dose_prescribed: Union[str, float] = Field(..., description="Amount per administration, in the medicine's unit")
    med_type: str = Field(..., description=MEDICINE_TYPE_HELP)
    dose_frequency: str = Field(..., description=FREQUENCY_HELP)
    total_days: int
    base_price: float = Field(..., description="Price of one billing unit")
    is_inpatient: bool = False
    is_discharge_medicine: bool = False

class DosageResult(BaseModel):
    total_quantity: float
    quantity_unit: str
    price_per_unit: float
    total_price: float
    is_partial_allowed: bool  # rule.can_be_partial for the form
    # quantity billed as measured rather than rounded up to whole units (ward bottles, bare volumes)
    is_partial_billed: bool = False
    calculation_details: str
    # False when med_type has no rule; quantity/unit are a best-effort guess
    is_registered_type: bool = True

class MedicineCalculationRequest(DosageRequest):
    medicine_name: Optional[str] = None

class MedicineCalculationResponse(BaseModel):
    result: DosageResult
    bill_line: Optional[str] = None

class CalculationError(BaseModel):
    code: str
    field: str
    message: str


# ---------------------------
# Price list
# ---------------------------
class MedicalItemCreate(BaseModel):
    category: str
    name: str
    price: float = Field(..., ge=0)
    description: Optional[str] = None
    is_outpatient: bool

class MedicalItemUpdate(BaseModel):
    category: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    is_outpatient: Optional[bool] = None

class MedicalItem(MedicalItemCreate):
    id: int
    currency: str
    created_at: str  # ISO8601 UTC


# ---------------------------
# Categories
# ---------------------------
class CategoryConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    order: int
    interface: InterfaceKind
    description: str = ""
    has_search: bool = False
    has_dropdown: bool = False
    has_manual_entry: bool = False
    charged_per_day: bool = False


# ---------------------------
# Bills
# ---------------------------
class BillItem(BaseModel):
    id: str
    name: str
    category: str
    price: float = Field(..., ge=0)
    quantity: float = Field(..., gt=0)
    unit: Optional[str] = None
    details: Optional[str] = None  # medicine calculation trace / bill line

class BillSaveRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    type: BillType
    items: List[BillItem] = Field(default_factory=list)
    days_admitted: int = Field(default=1, ge=1)

class Bill(BaseModel):
    id: int
    session_id: str
    type: BillType
    items: List[BillItem]
    days_admitted: int
    total: float
    currency: str
    created_at: str
    updated_at: str

class AddItemRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    type: BillType
    item_id: int
    quantity: float = Field(default=1, gt=0)
    days_admitted: Optional[int] = Field(default=None, ge=1)

class AddMedicineRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    type: BillType
    item_id: int
    dose_prescribed: Union[str, float]
    med_type: str = Field(..., description=MEDICINE_TYPE_HELP)
    dose_frequency: str = Field(..., description=FREQUENCY_HELP)
    total_days: int
    is_discharge_medicine: bool = False

class AddMedicineResponse(BaseModel):
    bill: Bill
    line: BillItem
    result: DosageResult
