# backend/consult_copilot/services/suggestion_rules.py
"""
Suggestion Rule Engine

Maps (patient conditions x topics covered x conversation length) to
candidate prompts for the doctor.

- Stateless: identical (profile, ledger, turn_count, text) gives identical output
- Rules for one condition are evaluated independently, in table order
- A rule fires iff its topic is absent from the ledger and turn_count >= min_turns
- Unknown conditions contribute nothing
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Set, Tuple

from consult_copilot.models.consultation import (
    PatientProfile,
    Priority,
    Suggestion,
    TopicTag,
)

logger = logging.getLogger(__name__)

MISSING_VITAL = "not recorded"


@dataclass(frozen=True)
class SuggestionRule:
    topic: TopicTag
    min_turns: int
    priority: Priority
    question: str
    reason: str
    category: str

    def fires(self, ledger: Set[TopicTag], turn_count: int) -> bool:
        return self.topic not in ledger and turn_count >= self.min_turns


CONDITION_RULES: Dict[str, Tuple[SuggestionRule, ...]] = {
    "Type 2 Diabetes": (
        SuggestionRule(
            topic=TopicTag.GLUCOSE_MONITORING,
            min_turns=0,
            priority=Priority.HIGH,
            question="Have you been monitoring your blood glucose levels at home? What are the typical readings?",
            reason="Critical for diabetes management - previous visit showed uncontrolled levels ({glucose})",
            category="Diabetes Monitoring",
        ),
        SuggestionRule(
            topic=TopicTag.VISION,
            min_turns=0,
            priority=Priority.HIGH,
            question="Have you noticed any changes in your vision, such as blurriness or difficulty seeing at night?",
            reason="Diabetic retinopathy screening - essential for long-term diabetes patients",
            category="Complications Screening",
        ),
        SuggestionRule(
            topic=TopicTag.FOOT_CARE,
            min_turns=0,
            priority=Priority.HIGH,
            question="Any numbness, tingling, or pain in your feet? Have you noticed any wounds or sores?",
            reason="Peripheral symptoms may indicate diabetic neuropathy",
            category="Neuropathy Assessment",
        ),
        SuggestionRule(
            topic=TopicTag.POLYURIA,
            min_turns=0,
            priority=Priority.MEDIUM,
            question="Are you experiencing increased thirst or more frequent urination than usual?",
            reason="Classic symptoms of uncontrolled diabetes",
            category="Symptom Assessment",
        ),
        SuggestionRule(
            topic=TopicTag.WOUND_HEALING,
            min_turns=0,
            priority=Priority.MEDIUM,
            question="Have you noticed any cuts or wounds that seem to be healing slower than normal?",
            reason="Poor wound healing is an indicator of diabetes control",
            category="Complications Screening",
        ),
        SuggestionRule(
            topic=TopicTag.DIET,
            min_turns=3,
            priority=Priority.MEDIUM,
            question="Walk me through what you typically eat in a day. Are you following the diabetic diet plan?",
            reason="Diet is crucial for diabetes management",
            category="Lifestyle Factors",
        ),
        SuggestionRule(
            topic=TopicTag.EXERCISE,
            min_turns=5,
            priority=Priority.LOW,
            question="How much physical activity are you getting each week?",
            reason="Exercise improves insulin sensitivity",
            category="Lifestyle Factors",
        ),
    ),
    "Hypertension": (
        SuggestionRule(
            topic=TopicTag.MEDICATION,
            min_turns=3,
            priority=Priority.HIGH,
            question="Are you taking your blood pressure medications as prescribed? Any side effects?",
            reason="BP reading today is {bp}",
            category="Medication Adherence",
        ),
        SuggestionRule(
            topic=TopicTag.MENTAL_HEALTH,
            min_turns=0,
            priority=Priority.MEDIUM,
            question="How have your stress levels been? Any major life changes or concerns?",
            reason="Stress can significantly impact blood pressure",
            category="Psychosocial Factors",
        ),
    ),
}

# Condition-independent: checked against the raw conversation text, never the ledger
FOLLOW_UP_MIN_TURNS = 4
FOLLOW_UP_MARKERS = ("last visit", "previous")
FOLLOW_UP_SUGGESTION = Suggestion(
    priority=Priority.MEDIUM,
    question="Since your last visit, have the symptoms we discussed then improved, stayed the same, or worsened?",
    reason="Follow-up on previous visit concerns",
    category="Follow-up",
)


class _VitalsLookup(dict):
    def __missing__(self, key):
        return MISSING_VITAL


def _render_reason(template: str, vitals: Mapping[str, str]) -> str:
    return template.format_map(_VitalsLookup(vitals))


def _follow_up_reason(profile: PatientProfile) -> str:
    if profile.prior_visits:
        return f"{FOLLOW_UP_SUGGESTION.reason} ({profile.prior_visits[0].diagnosis.lower()})"
    return FOLLOW_UP_SUGGESTION.reason


def needs_follow_up(turn_count: int, conversation_text: str) -> bool:
    text = conversation_text.lower()
    return turn_count >= FOLLOW_UP_MIN_TURNS and not any(m in text for m in FOLLOW_UP_MARKERS)


def evaluate(
    profile: PatientProfile,
    ledger: Set[TopicTag],
    turn_count: int,
    conversation_text: Optional[str] = None,
) -> List[Suggestion]:
    """
    Produce every candidate suggestion for the current state (unranked).

    Args:
        profile: Patient whose conditions select the rule lists
        ledger: Topics already covered in this consultation
        turn_count: Number of turns in the conversation so far
        conversation_text: Raw conversation for the follow-up rule; when None the
            follow-up rule is not evaluated

    Returns:
        Suggestions in emission order: rule table order of the conditions,
        then rule order within each condition,
        then the follow-up prompt.
    """
    suggestions: List[Suggestion] = []

    conditions = set(profile.conditions)
    for condition, rules in CONDITION_RULES.items():
        if condition not in conditions:
            continue
        for rule in rules:
            if rule.fires(ledger, turn_count):
                suggestions.append(
                    Suggestion(
                        priority=rule.priority,
                        question=rule.question,
                        reason=_render_reason(rule.reason, profile.vitals),
                        category=rule.category,
                    )
                )

    if conversation_text is not None and needs_follow_up(turn_count, conversation_text):
        suggestions.append(FOLLOW_UP_SUGGESTION.model_copy(update={"reason": _follow_up_reason(profile)}))

    logger.debug(f"Patient {profile.id}: {len(suggestions)} candidate suggestions at turn {turn_count}")
    return suggestions
