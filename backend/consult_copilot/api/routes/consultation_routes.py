# backend/consult_copilot/api/routes/consultation_routes.py

from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field, model_validator

from consult_copilot.core.config import settings
from consult_copilot.core.errors import EmptyInputError
from consult_copilot.models.consultation import (
    ConsultationSession,
    ConsultationSummary,
    PatientProfile,
    Speaker,
    Suggestion,
    TurnResult,
)
from consult_copilot.services.consultation_service import (
    end_consultation,
    refresh_suggestions,
    select_suggestion,
    submit_turn,
)
from consult_copilot.services.consultation_store import consultation_memory
from consult_copilot.services.patient_roster import get_patient, list_patients, risk_summary
from consult_copilot.services.topic_extractor import ordered_topics

router = APIRouter(tags=["consultation"])


class StartConsultationRequest(BaseModel):
    patient_id: Optional[int] = None
    patient: Optional[PatientProfile] = None

    @model_validator(mode="after")
    def _one_patient_source(self):
        if (self.patient_id is None) == (self.patient is None):
            raise ValueError("Provide exactly one of patient_id or patient")
        return self


class TurnRequest(BaseModel):
    speaker: Speaker
    text: str
    wait: bool = Field(True, description="Queue behind a pass in flight instead of failing with 409.")


class SelectSuggestionRequest(BaseModel):
    suggestion: Suggestion


def _snapshot(session: ConsultationSession) -> Dict[str, Any]:
    data = session.model_dump(mode="json", exclude={"ledger"})
    data["ledger"] = [tag.value for tag in ordered_topics(session.ledger)]
    return data


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/patients")
async def patients():
    return {
        "patients": [p.model_dump(mode="json") for p in list_patients()],
        "risk_summary": risk_summary(),
    }


@router.get("/patients/{patient_id}")
async def patient_detail(patient_id: int):
    return get_patient(patient_id).model_dump(mode="json")


@router.post("/consultation")
async def start(request: StartConsultationRequest):
    profile = request.patient or get_patient(request.patient_id)
    session = consultation_memory.create(profile)
    return _snapshot(session)


@router.get("/consultation/{consultation_id}")
async def consultation_detail(consultation_id: str):
    return _snapshot(consultation_memory.get(consultation_id))


@router.post("/consultation/{consultation_id}/turns", response_model=TurnResult)
async def submit(consultation_id: str, request: TurnRequest):
    """
    Append a transcript line and return the refreshed ledger and
    top-ranked suggestions.
    """
    consultation_memory.get(consultation_id)
    # Reject blank text before queueing behind a pass in flight
    if not request.text.strip():
        raise EmptyInputError()
    return await consultation_memory.run_exclusive(
        consultation_id,
        lambda session: submit_turn(session, request.speaker, request.text),
        delay=settings.ANALYSIS_DELAY_SECONDS,
        wait=request.wait,
    )


@router.post("/consultation/{consultation_id}/suggestions/select")
async def select(consultation_id: str, request: SelectSuggestionRequest):
    consultation_memory.get(consultation_id)
    return {"question": select_suggestion(request.suggestion)}


@router.post("/consultation/{consultation_id}/end", response_model=ConsultationSummary)
async def end(consultation_id: str):
    return await consultation_memory.run_exclusive(
        consultation_id,
        end_consultation,
        delay=settings.SUMMARY_DELAY_SECONDS,
    )


@router.get("/consultation/{consultation_id}/suggestions", response_model=List[Suggestion])
async def suggestions(consultation_id: str):
    return await consultation_memory.run_exclusive(
        consultation_id,
        refresh_suggestions,
        delay=settings.ANALYSIS_DELAY_SECONDS,
    )


@router.delete("/consultation/{consultation_id}", status_code=204)
async def discard(consultation_id: str):
    consultation_memory.get(consultation_id)
    consultation_memory.discard(consultation_id)
