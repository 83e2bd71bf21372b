from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from billing.api.deps import get_storage
from billing.api.routes_bills import router as bills_router
from billing.api.routes_items import router as items_router
from billing.api.routes_medicine import router as medicine_router
from billing.core.logging_config import configure_logging
from billing.core.settings import SERVICE_NAME, SERVICE_VERSION

configure_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    get_storage()  # create tables / seed price list before the first request
    yield

app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION, lifespan=lifespan)

app.include_router(items_router)
app.include_router(bills_router)
app.include_router(medicine_router)

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

@app.get("/health")
def health():
    return {"status": "healthy", "timestamp": _now(), "service": SERVICE_NAME, "version": SERVICE_VERSION}
@app.get("/api/health")
def api_health():
    return {"status": "healthy", "timestamp": _now(), "service": f"{SERVICE_NAME} API", "database": "connected"}
