# billing/services/storage.py
import json
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from billing.core.settings import CURRENCY
from billing.db.db_config import SCHEMA
from billing.db.seed import DEFAULT_ITEMS
from billing.schemas.models import (
    Bill, BillItem, BillType,
    MedicalItem, MedicalItemCreate, MedicalItemUpdate,
)

logger = logging.getLogger(__name__)

_ITEM_ORDER = "ORDER BY category COLLATE NOCASE, name COLLATE NOCASE"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def _row_to_item(row: sqlite3.Row) -> MedicalItem:
    return MedicalItem(
        id=row["id"],
        category=row["category"],
        name=row["name"],
        price=row["price"],
        currency=row["currency"],
        description=row["description"],
        is_outpatient=bool(row["is_outpatient"]),
        created_at=row["created_at"],
    )

def _row_to_bill(row: sqlite3.Row) -> Bill:
    return Bill(
        id=row["id"],
        session_id=row["session_id"],
        type=row["type"],
        items=[BillItem(**d) for d in json.loads(row["bill_data"] or "[]")],
        days_admitted=row["days_admitted"] or 1,
        total=row["total"],
        currency=row["currency"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class BillingStorage:
    """
    Price list and per-session bills on one sqlite connection.
    Calls are serialized with a lock; FastAPI runs sync routes on a thread pool.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self._lock = threading.Lock()

    def initialize_database(self, seed: bool = True) -> None:
        with self._lock:
            self.conn.executescript(SCHEMA)
            count = self.conn.execute("SELECT COUNT(*) FROM medical_items").fetchone()[0]
            if seed and count == 0:
                now = _now_iso()
                self.conn.executemany(
                    "INSERT INTO medical_items (category, name, price, currency, description, is_outpatient, created_at) "
                    "VALUES (?, ?, ?, ?, NULL, ?, ?)",
                    [(c, n, p, CURRENCY, int(op), now) for c, n, p, op in DEFAULT_ITEMS],
                )
                logger.info("Seeded %d default price list items", len(DEFAULT_ITEMS))
            self.conn.commit()
        logger.info("Billing database initialized")

    # ---------------------------
    # Medical items
    # ---------------------------
    def _select_items(self, where: str = "", params: tuple = ()) -> List[MedicalItem]:
        sql = f"SELECT * FROM medical_items {where} {_ITEM_ORDER}"
        with self._lock:
            rows = self.conn.execute(sql, params).fetchall()
        return [_row_to_item(r) for r in rows]

    def list_items(self, is_outpatient: Optional[bool] = None) -> List[MedicalItem]:
        if is_outpatient is None:
            return self._select_items()
        return self._select_items("WHERE is_outpatient = ?", (int(is_outpatient),))

    def items_by_category(self, category: str, is_outpatient: Optional[bool] = None) -> List[MedicalItem]:
        if is_outpatient is None:
            return self._select_items("WHERE category = ?", (category,))
        return self._select_items("WHERE category = ? AND is_outpatient = ?", (category, int(is_outpatient)))

    def search_items(self, query: str, is_outpatient: Optional[bool] = None) -> List[MedicalItem]:
        # instr() keeps % and _ in the query literal
        q = query.strip().lower()
        where = "WHERE (instr(lower(name), ?) > 0 OR instr(lower(category), ?) > 0)"
        params: tuple = (q, q)
        if is_outpatient is not None:
            where += " AND is_outpatient = ?"
            params += (int(is_outpatient),)
        return self._select_items(where, params)

    def get_item(self, item_id: int) -> Optional[MedicalItem]:
        with self._lock:
            row = self.conn.execute("SELECT * FROM medical_items WHERE id = ?", (item_id,)).fetchone()
        return _row_to_item(row) if row else None

    def create_item(self, item: MedicalItemCreate) -> MedicalItem:
        with self._lock:
            cur = self.conn.execute(
                "INSERT INTO medical_items (category, name, price, currency, description, is_outpatient, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (item.category, item.name, item.price, CURRENCY, item.description, int(item.is_outpatient), _now_iso()),
            )
            self.conn.commit()
            item_id = cur.lastrowid
        return self.get_item(item_id)

    def update_item(self, item_id: int, changes: MedicalItemUpdate) -> Optional[MedicalItem]:
        fields = changes.model_dump(exclude_unset=True)
        if "is_outpatient" in fields and fields["is_outpatient"] is not None:
            fields["is_outpatient"] = int(fields["is_outpatient"])
        # NOT NULL columns keep their value when sent as null
        fields = {k: v for k, v in fields.items() if v is not None or k == "description"}

        if fields:
            assignments = ", ".join(f"{k} = ?" for k in fields)
            with self._lock:
                cur = self.conn.execute(
                    f"UPDATE medical_items SET {assignments} WHERE id = ?",
                    (*fields.values(), item_id),
                )
                self.conn.commit()
            if cur.rowcount == 0:
                return None
        return self.get_item(item_id)

    def delete_item(self, item_id: int) -> bool:
        with self._lock:
            cur = self.conn.execute("DELETE FROM medical_items WHERE id = ?", (item_id,))
            self.conn.commit()
        return cur.rowcount > 0

    # ---------------------------
    # Bills
    # ---------------------------
    def save_bill(self, session_id: str, bill_type: BillType, items: List[BillItem],
                  days_admitted: int, total: float) -> Bill:
        """Insert or replace the current bill for (session_id, bill_type)."""
        with self._lock:
            self._upsert_bill(session_id, bill_type, items, days_admitted, total)
        logger.info("Saved %s bill for session %s (%d items, total %.2f)", bill_type, session_id, len(items), total)
        return self.get_bill(session_id, bill_type)

    def update_bill(
        self,
        session_id: str,
        bill_type: BillType,
        change: Callable[[Optional[Bill]], Tuple[List[BillItem], int, float]],
    ) -> Bill:
        """
        Read, change and write one session bill while holding the storage lock,
        so concurrent adds to the same bill are applied one after another.
        `change` gets the current bill (or None) and returns (items, days_admitted, total);
        an exception from it leaves the stored bill untouched.
        """
        with self._lock:
            items, days_admitted, total = change(self._select_bill(session_id, bill_type))
            self._upsert_bill(session_id, bill_type, items, days_admitted, total)
            bill = self._select_bill(session_id, bill_type)
        logger.info("Updated %s bill for session %s (%d items, total %.2f)", bill_type, session_id, len(items), total)
        return bill

    def get_bill(self, session_id: str, bill_type: BillType) -> Optional[Bill]:
        with self._lock:
            return self._select_bill(session_id, bill_type)

    # callers hold self._lock
    def _upsert_bill(self, session_id: str, bill_type: BillType, items: List[BillItem],
                     days_admitted: int, total: float) -> None:
        now = _now_iso()
        bill_data = json.dumps([i.model_dump() for i in items])
        self.conn.execute(
            """
            INSERT INTO bills (type, session_id, bill_data, days_admitted, total, currency, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (session_id, type) DO UPDATE SET
                bill_data = excluded.bill_data,
                days_admitted = excluded.days_admitted,
                total = excluded.total,
                currency = excluded.currency,
                updated_at = excluded.updated_at
            """,
            (bill_type, session_id, bill_data, days_admitted, total, CURRENCY, now, now),
        )
        self.conn.commit()

    def _select_bill(self, session_id: str, bill_type: BillType) -> Optional[Bill]:
        row = self.conn.execute(
            "SELECT * FROM bills WHERE session_id = ? AND type = ? ORDER BY updated_at DESC LIMIT 1",
            (session_id, bill_type),
        ).fetchone()
        return _row_to_bill(row) if row else None
