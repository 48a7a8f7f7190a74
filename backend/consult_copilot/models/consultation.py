# backend/consult_copilot/models/consultation.py

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field


class Speaker(str, Enum):
    DOCTOR = "Doctor"
    PATIENT = "Patient"


class TopicTag(str, Enum):
    MEDICATION = "medication"
    DIET = "diet"
    EXERCISE = "exercise"
    GLUCOSE_MONITORING = "glucose_monitoring"
    VISION = "vision"
    FOOT_CARE = "foot_care"
    SYMPTOMS = "symptoms"
    POLYURIA = "polyuria"
    WOUND_HEALING = "wound_healing"
    MENTAL_HEALTH = "mental_health"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ConversationTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    speaker: Speaker
    text: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class PriorVisit(BaseModel):
    date: str
    complaints: str
    diagnosis: str


class PatientProfile(BaseModel):
    id: int
    name: str
    age: int
    risk_level: RiskLevel
    conditions: List[str] = []
    vitals: Dict[str, str] = {}
    prior_visits: List[PriorVisit] = []
    last_visit: Optional[str] = None
    appointment_time: Optional[str] = None


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: Priority
    question: str
    reason: str
    category: str


class RecommendedAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: str
    urgency: str
    reason: str


class ClinicalPathway(BaseModel):
    model_config = ConfigDict(frozen=True)

    pathway: str
    actions: List[str] = []


class ClinicalContent(BaseModel):
    """Static findings, actions and pathways attached to an end-of-visit summary."""

    key_findings: List[str] = []
    recommended_actions: List[RecommendedAction] = []
    clinical_pathways: List[ClinicalPathway] = []


class ConsultationSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    discussed_topics: List[TopicTag] = []
    missed_critical_areas: List[str] = []
    key_findings: List[str] = []
    recommended_actions: List[RecommendedAction] = []
    clinical_pathways: List[ClinicalPathway] = []


class TurnResult(BaseModel):
    history: List[ConversationTurn]
    ledger: List[TopicTag]
    suggestions: List[Suggestion]


class ConsultationSession(BaseModel):
    consultation_id: str
    patient: Optional[PatientProfile] = None
    history: List[ConversationTurn] = []
    ledger: Set[TopicTag] = set()
    live_suggestions: List[Suggestion] = []
    summary: Optional[ConsultationSummary] = None
    is_processing: bool = False
