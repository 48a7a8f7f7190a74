# backend/consult_copilot/services/consultation_service.py

import logging
from typing import List, Optional, Set
from uuid import uuid4

from consult_copilot.core.errors import EmptyInputError, NoActivePatientError
from consult_copilot.models.consultation import (
    ClinicalContent,
    ConsultationSession,
    ConsultationSummary,
    ConversationTurn,
    PatientProfile,
    Speaker,
    Suggestion,
    TopicTag,
    TurnResult,
)
from consult_copilot.services.ranker import rank
from consult_copilot.services.suggestion_rules import evaluate
from consult_copilot.services.summarizer import DEFAULT_CLINICAL_CONTENT, summarize
from consult_copilot.services.topic_extractor import (
    TopicDetector,
    conversation_text,
    ordered_topics,
    update_ledger,
)

logger = logging.getLogger(__name__)


def start_consultation(profile: PatientProfile, consultation_id: Optional[str] = None) -> ConsultationSession:
    """Open a consultation for `profile` with an empty history and ledger."""
    session = ConsultationSession(
        consultation_id=consultation_id or str(uuid4()),
        patient=profile,
    )
    logger.info(f"Consultation {session.consultation_id} started for patient {profile.id}")
    return session


def _require_patient(session: Optional[ConsultationSession]) -> PatientProfile:
    if session is None or session.patient is None:
        raise NoActivePatientError()
    return session.patient


def _ranked_suggestions(profile: PatientProfile, ledger: Set[TopicTag], history: List[ConversationTurn]) -> List[Suggestion]:
    candidates = evaluate(profile, ledger, len(history), conversation_text(history))
    return rank(candidates)


def submit_turn(
    session: Optional[ConsultationSession],
    speaker: Speaker,
    text: str,
    detector: Optional[TopicDetector] = None,
) -> TurnResult:
    """
    Append one transcript turn and run a full evaluation pass.

    Raises:
        NoActivePatientError: If no consultation has been started
        EmptyInputError: If `text` is blank; the session is left untouched
    """
    profile = _require_patient(session)
    if not text or not text.strip():
        logger.warning(f"Consultation {session.consultation_id}: rejected blank turn")
        raise EmptyInputError()

    turn = ConversationTurn(speaker=Speaker(speaker), text=text)
    history = [*session.history, turn]
    ledger = update_ledger(session.ledger, history, detector)
    suggestions = _ranked_suggestions(profile, ledger, history)

    session.history = history
    session.ledger = ledger
    session.live_suggestions = suggestions
    logger.debug(
        f"Consultation {session.consultation_id}: turn {len(history)}, "
        f"{len(ledger)} topics covered, {len(suggestions)} suggestions"
    )
    return TurnResult(history=list(history), ledger=ordered_topics(ledger), suggestions=list(suggestions))


def refresh_suggestions(session: Optional[ConsultationSession]) -> List[Suggestion]:
    """Re-run the rule engine on the current state without adding a turn."""
    profile = _require_patient(session)
    session.live_suggestions = _ranked_suggestions(profile, session.ledger, session.history)
    return list(session.live_suggestions)


def select_suggestion(suggestion: Suggestion) -> str:
    return suggestion.question


def end_consultation(
    session: Optional[ConsultationSession],
    content: ClinicalContent = DEFAULT_CLINICAL_CONTENT,
) -> ConsultationSummary:
    """
    Summarize the visit from the current ledger and live suggestions.

    Each call recomputes from whatever state is current; nothing is cached.
    """
    _require_patient(session)
    summary = summarize(session.ledger, session.live_suggestions, content)
    session.summary = summary
    logger.info(
        f"Consultation {session.consultation_id} ended after {len(session.history)} turns "
        f"({len(summary.discussed_topics)} topics discussed)"
    )
    return summary
