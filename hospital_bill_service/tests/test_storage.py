from concurrent.futures import ThreadPoolExecutor

import pytest

from billing.db.seed import DEFAULT_ITEMS
from billing.schemas.models import BillItem, MedicalItemCreate, MedicalItemUpdate


def test_initialize_seeds_once(storage):
    assert len(storage.list_items()) == len(DEFAULT_ITEMS)
    storage.initialize_database(seed=True)
    assert len(storage.list_items()) == len(DEFAULT_ITEMS)

def test_initialize_without_seed(empty_storage):
    assert empty_storage.list_items() == []

def test_items_by_encounter_type(storage):
    outpatient = storage.list_items(is_outpatient=True)
    inpatient = storage.list_items(is_outpatient=False)
    assert outpatient and all(i.is_outpatient for i in outpatient)
    assert inpatient and not any(i.is_outpatient for i in inpatient)
    assert len(outpatient) + len(inpatient) == len(DEFAULT_ITEMS)

def test_items_are_ordered_by_category_then_name(storage):
    items = storage.list_items(is_outpatient=True)
    keys = [(i.category.lower(), i.name.lower()) for i in items]
    assert keys == sorted(keys)

def test_items_by_category(storage):
    items = storage.items_by_category("Laboratory", is_outpatient=True)
    assert [i.name for i in items] == ["Blood Chemistry", "Complete Blood Count", "Urinalysis"]
    assert len(storage.items_by_category("Laboratory")) == 6

def test_search_matches_name_or_category(storage):
    xray = storage.search_items("x-ray", is_outpatient=True)
    assert [i.name for i in xray] == ["Chest X-Ray", "Extremity X-Ray"]

    blood = storage.search_items("BLOOD", is_outpatient=False)
    names = {i.name for i in blood}
    assert "Platelet Transfusion" in names  # category match
    assert "Complete Blood Count" in names  # name match

def test_search_treats_wildcards_literally(storage):
    assert storage.search_items("%") == []
    assert storage.search_items("_") == []

def test_create_update_delete_item(empty_storage):
    created = empty_storage.create_item(MedicalItemCreate(
        category="Medicine", name="Amoxicillin Syrup", price=95.5, is_outpatient=True,
    ))
    assert created.id > 0
    assert created.currency == "BDT"
    assert empty_storage.get_item(created.id) == created

    updated = empty_storage.update_item(created.id, MedicalItemUpdate(price=110))
    assert updated.price == 110
    assert updated.name == "Amoxicillin Syrup"

    assert empty_storage.delete_item(created.id) is True
    assert empty_storage.get_item(created.id) is None
    assert empty_storage.delete_item(created.id) is False

def test_update_missing_item_returns_none(empty_storage):
    assert empty_storage.update_item(999, MedicalItemUpdate(name="x")) is None

def test_save_bill_upserts_per_session_and_type(empty_storage):
    line = BillItem(id="1", name="CBC", category="Laboratory", price=250, quantity=1)
    first = empty_storage.save_bill("sess_1", "outpatient", [line], 1, 250)
    second = empty_storage.save_bill("sess_1", "outpatient", [line, line.model_copy(update={"id": "2"})], 1, 500)
    other = empty_storage.save_bill("sess_1", "inpatient", [], 2, 0)

    assert second.id == first.id
    assert second.total == 500
    assert len(second.items) == 2
    assert second.created_at == first.created_at
    assert other.id != first.id
    assert empty_storage.get_bill("sess_1", "inpatient").days_admitted == 2

def test_get_missing_bill(empty_storage):
    assert empty_storage.get_bill("nobody", "outpatient") is None

def test_update_bill_applies_concurrent_changes_in_turn(empty_storage):
    def append(n):
        line = BillItem(id=f"med_{n}", name="Paracetamol", category="Medicine", price=15, quantity=1)

        def change(current):
            items = (current.items if current else []) + [line]
            return items, 1, 15.0 * len(items)

        return empty_storage.update_bill("sess_c", "outpatient", change)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(append, range(25)))

    bill = empty_storage.get_bill("sess_c", "outpatient")
    assert sorted(i.id for i in bill.items) == sorted(f"med_{n}" for n in range(25))
    assert bill.total == 375

def test_update_bill_failure_leaves_bill_untouched(empty_storage):
    line = BillItem(id="1", name="CBC", category="Laboratory", price=250, quantity=1)
    empty_storage.save_bill("sess_f", "outpatient", [line], 1, 250)

    def change(current):
        raise ValueError("rejected")

    with pytest.raises(ValueError):
        empty_storage.update_bill("sess_f", "outpatient", change)

    bill = empty_storage.get_bill("sess_f", "outpatient")
    assert [i.id for i in bill.items] == ["1"]
    assert bill.total == 250
    # the lock was released
    assert empty_storage.update_bill("sess_f", "outpatient", lambda b: (b.items, 2, 250.0)).days_admitted == 2
