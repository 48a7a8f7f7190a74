import pytest

from consult_copilot.models.consultation import PatientProfile, RiskLevel, Speaker
from consult_copilot.services.consultation_service import start_consultation
from consult_copilot.services.consultation_store import consultation_memory
from consult_copilot.services.patient_roster import get_patient


@pytest.fixture
def diabetic_patient():
    return PatientProfile(
        id=101,
        name="Test Diabetic",
        age=60,
        risk_level=RiskLevel.HIGH,
        conditions=["Type 2 Diabetes"],
        vitals={"glucose": "180 mg/dL"},
    )


@pytest.fixture
def hypertensive_diabetic():
    return get_patient(1)


@pytest.fixture
def session(hypertensive_diabetic):
    return start_consultation(hypertensive_diabetic, consultation_id="test-consultation")


@pytest.fixture
def say():
    """Submit a sequence of (speaker, text) turns to a session."""
    from consult_copilot.services.consultation_service import submit_turn

    def _say(session, *lines):
        result = None
        for speaker, text in lines:
            result = submit_turn(session, Speaker(speaker), text)
        return result

    return _say


@pytest.fixture(autouse=True)
def _clear_store():
    consultation_memory.clear()
    yield
    consultation_memory.clear()
