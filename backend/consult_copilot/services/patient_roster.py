# backend/consult_copilot/services/patient_roster.py
"""Sample patient roster standing in for the clinic's patient store."""

from typing import Dict, List

from consult_copilot.core.errors import PatientNotFoundError
from consult_copilot.models.consultation import PatientProfile, PriorVisit, RiskLevel

SAMPLE_PATIENTS: List[PatientProfile] = [
    PatientProfile(
        id=1,
        name="Rajesh Kumar",
        age=58,
        risk_level=RiskLevel.HIGH,
        conditions=["Type 2 Diabetes", "Hypertension"],
        last_visit="2024-12-15",
        appointment_time="9:00 AM",
        vitals={"bp": "145/92", "glucose": "180 mg/dL", "weight": "78 kg"},
        prior_visits=[
            PriorVisit(date="2024-12-15", complaints="Frequent urination, fatigue", diagnosis="Uncontrolled diabetes"),
            PriorVisit(date="2024-11-20", complaints="Headache, dizziness", diagnosis="Hypertension monitoring"),
        ],
    ),
    PatientProfile(
        id=2,
        name="Priya Sharma",
        age=45,
        risk_level=RiskLevel.HIGH,
        conditions=["Asthma", "Allergies"],
        last_visit="2024-12-10",
        appointment_time="9:30 AM",
        vitals={"bp": "130/85", "spo2": "94%", "weight": "62 kg"},
        prior_visits=[
            PriorVisit(date="2024-12-10", complaints="Shortness of breath", diagnosis="Asthma exacerbation"),
        ],
    ),
    PatientProfile(
        id=3,
        name="Amit Patel",
        age=35,
        risk_level=RiskLevel.MEDIUM,
        conditions=["Seasonal allergies"],
        last_visit="2024-11-25",
        appointment_time="10:00 AM",
        vitals={"bp": "120/80", "weight": "70 kg"},
    ),
    PatientProfile(
        id=4,
        name="Sunita Reddy",
        age=28,
        risk_level=RiskLevel.LOW,
        conditions=[],
        last_visit="2024-10-15",
        appointment_time="10:30 AM",
        vitals={"bp": "115/75", "weight": "58 kg"},
    ),
    PatientProfile(
        id=5,
        name="Mohammed Ali",
        age=62,
        risk_level=RiskLevel.HIGH,
        conditions=["CAD", "Type 2 Diabetes"],
        last_visit="2024-12-18",
        appointment_time="11:00 AM",
        vitals={"bp": "150/95", "glucose": "195 mg/dL", "weight": "85 kg"},
        prior_visits=[
            PriorVisit(date="2024-12-18", complaints="Chest discomfort", diagnosis="Stable angina"),
        ],
    ),
]


def list_patients() -> List[PatientProfile]:
    return list(SAMPLE_PATIENTS)


def get_patient(patient_id: int) -> PatientProfile:
    for patient in SAMPLE_PATIENTS:
        if patient.id == patient_id:
            return patient
    raise PatientNotFoundError(patient_id)


def risk_summary() -> Dict[str, int]:
    counts = {level.value: 0 for level in RiskLevel}
    for patient in SAMPLE_PATIENTS:
        counts[patient.risk_level.value] += 1
    return counts
