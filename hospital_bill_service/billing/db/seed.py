# billing/db/seed.py
# Default price list (BDT), loaded into an empty medical_items table.
# (category, name, price, is_outpatient)
from typing import List, Tuple

DEFAULT_ITEMS: List[Tuple[str, str, float, bool]] = [
    # Outpatient
    ("Laboratory", "Complete Blood Count", 250.00, True),
    ("Laboratory", "Urinalysis", 150.00, True),
    ("Laboratory", "Blood Chemistry", 400.00, True),
    ("X-Ray", "Chest X-Ray", 800.00, True),
    ("X-Ray", "Extremity X-Ray", 600.00, True),
    ("Registration Fees", "Outpatient Registration", 100.00, True),
    ("Registration Fees", "Emergency Registration", 200.00, True),
    ("Dr. Fees", "General Consultation", 500.00, True),
    ("Dr. Fees", "Specialist Consultation", 800.00, True),
    ("Dr. Fees", "Emergency Consultation", 1000.00, True),
    ("Medic Fee", "Basic Medical Service", 300.00, True),
    ("Medic Fee", "Advanced Medical Service", 500.00, True),
    ("Medic Fee", "Emergency Medical Service", 700.00, True),
    ("Medicine", "Paracetamol 500mg", 15.00, True),
    ("Physical Therapy", "PT Session", 300.00, True),
    ("Limb and Brace", "Ankle Brace", 1200.00, True),
    ("Limb and Brace", "Knee Brace", 1800.00, True),
    ("Limb and Brace", "Wrist Splint", 800.00, True),
    ("Limb and Brace", "Elbow Support", 900.00, True),
    ("Limb and Brace", "Back Brace", 2500.00, True),
    ("Limb and Brace", "Arm Sling", 400.00, True),
    ("Limb and Brace", "Cervical Collar", 1500.00, True),
    ("Limb and Brace", "Walking Crutches (pair)", 1600.00, True),

    # Inpatient
    ("Blood", "Blood Transfusion", 2500.00, False),
    ("Blood", "Blood Cross-matching", 800.00, False),
    ("Blood", "Platelet Transfusion", 3500.00, False),
    ("Laboratory", "Complete Blood Count", 300.00, False),
    ("Laboratory", "Blood Chemistry Panel", 500.00, False),
    ("Laboratory", "Liver Function Test", 600.00, False),
    ("Limb and Brace", "Post-surgical Brace", 2000.00, False),
    ("Limb and Brace", "Hospital Walker", 1800.00, False),
    ("Limb and Brace", "Compression Stockings", 900.00, False),
    ("Food", "Regular Diet (per day)", 350.00, False),
    ("Food", "Special Diet (per day)", 450.00, False),
    ("Food", "Liquid Diet (per day)", 300.00, False),
    ("Halo, O2, NO2, etc.", "Oxygen Therapy (per day)", 400.00, False),
    ("Halo, O2, NO2, etc.", "Nitrous Oxide", 600.00, False),
    ("Halo, O2, NO2, etc.", "Halo Traction", 1200.00, False),
    ("Orthopedic, S.Roll, etc.", "Orthopedic Consultation", 800.00, False),
    ("Orthopedic, S.Roll, etc.", "Spinal Roll Support", 1500.00, False),
    ("Orthopedic, S.Roll, etc.", "Orthopedic Brace", 2200.00, False),
    ("Orthopedic, S.Roll, etc.", "Spine Support System", 3500.00, False),
    ("Orthopedic, S.Roll, etc.", "Orthopedic Device Setup", 1800.00, False),
    ("Surgery, O.R. & Delivery", "Minor Surgery", 15000.00, False),
    ("Surgery, O.R. & Delivery", "Major Surgery", 35000.00, False),
    ("Surgery, O.R. & Delivery", "Normal Delivery", 8000.00, False),
    ("Surgery, O.R. & Delivery", "C-Section Delivery", 25000.00, False),
    ("Registration Fees", "Admission Fee", 500.00, False),
    ("Registration Fees", "ICU Admission", 1000.00, False),
    ("Discharge Medicine", "Discharge Medication Package", 800.00, False),
    ("Discharge Medicine", "Pain Relief Package", 400.00, False),
    ("Discharge Medicine", "Antibiotic Course", 600.00, False),
    ("Medicine, ORS & Anesthesia, Ket, Spinal", "General Anesthesia", 3000.00, False),
    ("Medicine, ORS & Anesthesia, Ket, Spinal", "Spinal Anesthesia", 2500.00, False),
    ("Medicine, ORS & Anesthesia, Ket, Spinal", "Ketamine Injection", 800.00, False),
    ("Medicine, ORS & Anesthesia, Ket, Spinal", "ORS Solution (per bottle)", 50.00, False),
    ("Medicine, ORS & Anesthesia, Ket, Spinal", "IV Fluid with ORS", 300.00, False),
    ("Physical Therapy", "Physical Therapy Session", 400.00, False),
    ("Physical Therapy", "Rehabilitation Package", 1200.00, False),
    ("IV.'s", "IV Fluid (Normal Saline)", 200.00, False),
    ("IV.'s", "IV Antibiotics", 800.00, False),
    ("IV.'s", "IV Pain Medication", 300.00, False),
    ("Plaster/Milk", "Plaster Cast Application", 1500.00, False),
    ("Plaster/Milk", "Cast Removal", 500.00, False),
    ("Plaster/Milk", "Milk Formula (per day)", 150.00, False),
    ("Procedures", "Wound Dressing", 300.00, False),
    ("Procedures", "Catheter Insertion", 800.00, False),
    ("Procedures", "Suture Removal", 200.00, False),
    ("Seat & Ad. Fee", "Admission Processing (per day)", 200.00, False),
    ("Seat & Ad. Fee", "Bed Fee (General Ward)", 500.00, False),
    ("Seat & Ad. Fee", "Bed Fee (Private Room)", 1200.00, False),
    ("X-Ray", "Chest X-Ray", 800.00, False),
    ("X-Ray", "Extremity X-Ray", 600.00, False),
    ("X-Ray", "CT Scan", 4000.00, False),
    ("Lost Laundry", "Hospital Gown Replacement", 300.00, False),
    ("Lost Laundry", "Bed Sheet Replacement", 200.00, False),
    ("Travel", "Ambulance Service (Local)", 1500.00, False),
    ("Travel", "Ambulance Service (Long Distance)", 3000.00, False),
    ("Others", "Miscellaneous Charges", 500.00, False),
    ("Others", "Administrative Fee", 300.00, False),
]
