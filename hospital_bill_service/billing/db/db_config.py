# billing/db/db_config.py

import sqlite3
from pathlib import Path
from typing import Optional, Union

from billing.core.settings import BILLING_DB_PATH

# Database file path (default: hospital_bill_service/billing/db/hospital.db)
DB_PATH = Path(BILLING_DB_PATH)

SCHEMA = """
CREATE TABLE IF NOT EXISTS medical_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category TEXT NOT NULL,
    name TEXT NOT NULL,
    price REAL NOT NULL,
    currency TEXT NOT NULL DEFAULT 'BDT',
    description TEXT,
    is_outpatient INTEGER NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS bills (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    type TEXT NOT NULL CHECK (type IN ('outpatient', 'inpatient')),
    session_id TEXT NOT NULL,
    bill_data TEXT NOT NULL,
    days_admitted INTEGER DEFAULT 1,
    total REAL NOT NULL,
    currency TEXT NOT NULL DEFAULT 'BDT',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE (session_id, type)
);
"""


def get_sqlite_connection(db_path: Optional[Union[str, Path]] = None) -> sqlite3.Connection:
    """
    Create and configure SQLite connection with recommended PRAGMA settings.
    """
    path = Path(db_path or DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row

    # Performance & concurrency settings
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA busy_timeout=5000;")

    return conn
