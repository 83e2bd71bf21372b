# billing/api/deps.py
from typing import Optional

from fastapi import HTTPException

from billing.core.settings import SEED_DEFAULT_ITEMS
from billing.db.db_config import get_sqlite_connection
from billing.schemas.models import CalculationError
from billing.services.dosage import DosageCalculationError
from billing.services.storage import BillingStorage

_storage: Optional[BillingStorage] = None


def get_storage() -> BillingStorage:
    """Process-wide storage on the configured sqlite file; tests override this dependency."""
    global _storage
    if _storage is None:
        _storage = BillingStorage(get_sqlite_connection())
        _storage.initialize_database(seed=SEED_DEFAULT_ITEMS)
    return _storage

def calculation_http_error(exc: DosageCalculationError) -> HTTPException:
    # 422 with the field to highlight in the form
    return HTTPException(
        status_code=422,
        detail=CalculationError(code=exc.code, field=exc.field, message=str(exc)).model_dump(),
    )
