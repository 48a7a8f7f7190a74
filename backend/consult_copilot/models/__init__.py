"""Pydantic models for the consultation copilot."""

from .consultation import (
    ClinicalContent,
    ClinicalPathway,
    ConsultationSession,
    ConsultationSummary,
    ConversationTurn,
    PatientProfile,
    Priority,
    PriorVisit,
    RecommendedAction,
    RiskLevel,
    Speaker,
    Suggestion,
    TopicTag,
    TurnResult,
)

__all__ = [
    "ClinicalContent",
    "ClinicalPathway",
    "ConsultationSession",
    "ConsultationSummary",
    "ConversationTurn",
    "PatientProfile",
    "Priority",
    "PriorVisit",
    "RecommendedAction",
    "RiskLevel",
    "Speaker",
    "Suggestion",
    "TopicTag",
    "TurnResult",
]
