import uuid
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
import streamlit as st
from dotenv import load_dotenv

from billing.utils.currency import format_taka

load_dotenv()

st.set_page_config(page_title="Hospital Bill Calculator", layout="wide")

# ---------------------------
# Config
# ---------------------------
DEFAULT_API_BASE = "http://127.0.0.1:8000"
API_BASE = st.sidebar.text_input("API Base URL", value=DEFAULT_API_BASE)

# ---------------------------
# Helpers (API)
# ---------------------------
class ApiError(RuntimeError):
    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code} {detail}")
        self.status_code = status_code
        self.detail = detail

def _raise_for(r: requests.Response) -> None:
    if r.status_code >= 400:
        try:
            detail = r.json().get("detail")
        except ValueError:
            detail = r.text
        raise ApiError(r.status_code, detail)

def api_post(path: str, payload: Dict[str, Any]) -> Any:
    r = requests.post(f"{API_BASE}{path}", json=payload, timeout=20)
    _raise_for(r)
    return r.json()

def api_get(path: str, params: Optional[Dict[str, Any]] = None) -> Any:
    r = requests.get(f"{API_BASE}{path}", params=params or {}, timeout=20)
    _raise_for(r)
    return r.json()

def show_api_error(e: ApiError) -> None:
    # calculator errors come back as {"code", "field", "message"}
    if isinstance(e.detail, dict) and "field" in e.detail:
        st.error(f"{e.detail['field']}: {e.detail['message']}")
    else:
        st.error(str(e))

# ---------------------------
# Session state
# ---------------------------
if "session_id" not in st.session_state:
    st.session_state.session_id = "sess_" + uuid.uuid4().hex[:10]
if "bill" not in st.session_state:
    st.session_state.bill = None

session_id = st.sidebar.text_input("Session", value=st.session_state.session_id)
bill_type = st.sidebar.radio("Encounter", ["outpatient", "inpatient"], index=0)

def refresh_bill() -> None:
    try:
        st.session_state.bill = api_get("/api/bills", {"session_id": session_id, "type": bill_type})
    except (ApiError, requests.RequestException):
        st.session_state.bill = None

# ---------------------------
# UI
# ---------------------------
st.title("Hospital Bill Calculator")

col_left, col_right = st.columns([1.2, 1])

with col_left:
    st.subheader("1) Price list")
    try:
        categories: List[Dict[str, Any]] = api_get("/api/categories", {"type": bill_type})
    except (ApiError, requests.RequestException) as e:
        st.error(f"API not reachable: {e}")
        st.stop()

    cat_names = [c["name"] for c in sorted(categories, key=lambda c: c["order"])]
    category = st.selectbox("Category", cat_names)
    search = st.text_input("Search (name or category)", value="")

    params: Dict[str, Any] = {"type": bill_type}
    if search.strip():
        params["search"] = search.strip()
    else:
        params["category"] = category
    items = api_get("/api/medical-items", params)

    if items:
        st.dataframe(pd.DataFrame(items)[["id", "category", "name", "price"]], use_container_width=True, hide_index=True)
        item_labels = {f"{i['name']} ({format_taka(i['price'])})": i for i in items}
        picked = item_labels[st.selectbox("Item", list(item_labels.keys()))]
    else:
        st.info("No items in this category.")
        picked = None

    if picked:
        qty = st.number_input("Quantity", min_value=1, value=1, step=1)
        days_admitted = st.number_input("Days admitted", min_value=1, value=1, step=1) if bill_type == "inpatient" else None
        if st.button("Add item to bill"):
            payload = {"session_id": session_id, "type": bill_type, "item_id": picked["id"], "quantity": qty}
            if days_admitted:
                payload["days_admitted"] = int(days_admitted)
            try:
                st.session_state.bill = api_post("/api/bills/items", payload)
                st.success("Added.")
            except ApiError as e:
                show_api_error(e)

    st.divider()
    st.subheader("2) Medicine dosage")
    types = api_get("/api/medicine/types")
    med_types = [t["med_type"] for t in types["med_types"]]
    freq_labels = {f"{f['code']} - {f['label']}": f["code"] for f in types["frequencies"]}

    c1, c2, c3 = st.columns(3)
    with c1:
        dose = st.text_input("Dose per administration", value="1")
        med_type = st.selectbox("Form", med_types)
    with c2:
        freq = freq_labels[st.selectbox("Frequency", list(freq_labels.keys()), index=2)]
        total_days = st.number_input("Days", min_value=1, value=5, step=1)
    with c3:
        is_discharge = st.checkbox("Discharge medicine", value=False, disabled=bill_type != "inpatient")

    if picked:
        # live trace while the form is edited
        calc_payload = {
            "dose_prescribed": dose,
            "med_type": med_type,
            "dose_frequency": freq,
            "total_days": int(total_days),
            "base_price": picked["price"],
            "is_inpatient": bill_type == "inpatient",
            "is_discharge_medicine": bool(is_discharge),
            "medicine_name": picked["name"],
        }
        can_add = False
        try:
            calc = api_post("/api/medicine/calculate", calc_payload)
            res = calc["result"]
            st.code(res["calculation_details"])
            st.write(f"**{calc['bill_line']}** = {format_taka(res['total_price'])}")
            if not res["is_registered_type"]:
                st.warning("Unregistered medicine form: quantity is a best-effort guess.")
            can_add = True
        except ApiError as e:
            show_api_error(e)

        if st.button("Add medicine to bill", disabled=not can_add):
            payload = {
                "session_id": session_id,
                "type": bill_type,
                "item_id": picked["id"],
                "dose_prescribed": dose,
                "med_type": med_type,
                "dose_frequency": freq,
                "total_days": int(total_days),
                "is_discharge_medicine": bool(is_discharge),
            }
            try:
                st.session_state.bill = api_post("/api/bills/medicine", payload)["bill"]
                st.success("Medicine added.")
            except ApiError as e:
                show_api_error(e)

with col_right:
    st.subheader("Current bill")
    if st.button("Refresh bill"):
        refresh_bill()

    bill = st.session_state.bill
    if bill and bill.get("type") == bill_type and bill["items"]:
        df = pd.DataFrame(bill["items"])
        df["line_total"] = df["price"] * df["quantity"]
        st.dataframe(df[["name", "category", "quantity", "unit", "price", "line_total"]],
                     use_container_width=True, hide_index=True)
        if bill_type == "inpatient":
            st.caption(f"Per-day categories are multiplied by {bill['days_admitted']} day(s) in the total.")
        st.metric("Total", format_taka(bill["total"]))
        with st.expander("Calculation details"):
            for line in bill["items"]:
                if line.get("details"):
                    st.write(f"- {line['details']}")
    else:
        st.caption("No items yet.")
