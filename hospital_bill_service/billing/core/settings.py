import os
from pathlib import Path

from billing.core.env import load_env

load_env()

SERVICE_NAME = "Hospital Bill Calculator"
SERVICE_VERSION = "1.0.0"

_DEFAULT_DB_PATH = Path(__file__).resolve().parents[1] / "db" / "hospital.db"
BILLING_DB_PATH = os.getenv("BILLING_DB_PATH", str(_DEFAULT_DB_PATH))
SEED_DEFAULT_ITEMS = os.getenv("SEED_DEFAULT_ITEMS", "true").lower() == "true"

# medicine quantities
STANDARD_BOTTLE_SIZE_ML = int(os.getenv("STANDARD_BOTTLE_SIZE_ML", "100"))
TSP_ML = int(os.getenv("TSP_ML", "5"))
TBSP_ML = int(os.getenv("TBSP_ML", "15"))

CURRENCY = os.getenv("CURRENCY", "BDT")
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "৳")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
