# backend/consult_copilot/services/summarizer.py

import logging
from typing import Iterable, List, Set

from consult_copilot.models.consultation import (
    ClinicalContent,
    ClinicalPathway,
    ConsultationSummary,
    Priority,
    RecommendedAction,
    Suggestion,
    TopicTag,
)
from consult_copilot.services.topic_extractor import ordered_topics

logger = logging.getLogger(__name__)

# Illustrative content only; not a vetted clinical knowledge base.
DEFAULT_CLINICAL_CONTENT = ClinicalContent(
    key_findings=[
        "Patient reports medication non-adherence (missing doses)",
        "Peripheral symptoms suggest possible diabetic neuropathy",
        "Current glucose levels remain elevated at 180 mg/dL",
        "Diet and lifestyle modification needed",
    ],
    recommended_actions=[
        RecommendedAction(
            action="Order HbA1c test and comprehensive metabolic panel",
            urgency="Within 1 week",
            reason="Assess long-term glucose control",
        ),
        RecommendedAction(
            action="Refer to endocrinologist for medication adjustment",
            urgency="Within 2 weeks",
            reason="Persistent hyperglycemia despite current regimen",
        ),
        RecommendedAction(
            action="Schedule diabetic neuropathy assessment",
            urgency="Within 1 month",
            reason="Patient reporting peripheral tingling symptoms",
        ),
        RecommendedAction(
            action="Arrange diabetic educator consultation",
            urgency="Within 2 weeks",
            reason="Reinforce medication adherence and lifestyle modifications",
        ),
    ],
    clinical_pathways=[
        ClinicalPathway(
            pathway="Uncontrolled Type 2 Diabetes",
            actions=["Adjust oral hypoglycemics", "Consider insulin therapy", "Dietary counseling"],
        ),
        ClinicalPathway(
            pathway="Suspected Diabetic Neuropathy",
            actions=["Nerve conduction studies", "Monofilament test", "Pain management plan"],
        ),
    ],
)


def missed_critical_areas(suggestions: Iterable[Suggestion]) -> List[str]:
    """Categories of the high-priority suggestions still live at end of visit."""
    return [s.category for s in suggestions if s.priority == Priority.HIGH]


def summarize(
    ledger: Set[TopicTag],
    suggestions: List[Suggestion],
    content: ClinicalContent = DEFAULT_CLINICAL_CONTENT,
) -> ConsultationSummary:
    discussed = ordered_topics(ledger)
    missed = missed_critical_areas(suggestions)
    if missed:
        logger.info(f"Summary flagged {len(missed)} missed critical area(s)")
    return ConsultationSummary(
        discussed_topics=discussed,
        missed_critical_areas=missed,
        key_findings=list(content.key_findings),
        recommended_actions=list(content.recommended_actions),
        clinical_pathways=list(content.clinical_pathways),
    )
