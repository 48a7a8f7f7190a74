"""
Tests for the suggestion rule engine.
"""

from consult_copilot.models.consultation import PatientProfile, Priority, RiskLevel, TopicTag
from consult_copilot.services.suggestion_rules import (
    CONDITION_RULES,
    MISSING_VITAL,
    evaluate,
    needs_follow_up,
)

ALWAYS_ELIGIBLE = {
    TopicTag.GLUCOSE_MONITORING,
    TopicTag.VISION,
    TopicTag.FOOT_CARE,
    TopicTag.POLYURIA,
    TopicTag.WOUND_HEALING,
}

RULE_TOPIC_BY_QUESTION = {
    rule.question: rule.topic for rules in CONDITION_RULES.values() for rule in rules
}


def _topics(suggestions):
    return [RULE_TOPIC_BY_QUESTION.get(s.question) for s in suggestions]


def test_diabetes_empty_ledger_at_start(diabetic_patient):
    suggestions = evaluate(diabetic_patient, set(), 0)

    assert _topics(suggestions) == [
        TopicTag.GLUCOSE_MONITORING,
        TopicTag.VISION,
        TopicTag.FOOT_CARE,
        TopicTag.POLYURIA,
        TopicTag.WOUND_HEALING,
    ]
    assert [s.priority for s in suggestions] == [
        Priority.HIGH,
        Priority.HIGH,
        Priority.HIGH,
        Priority.MEDIUM,
        Priority.MEDIUM,
    ]


def test_diabetes_only_lifestyle_rules_remain(diabetic_patient):
    suggestions = evaluate(diabetic_patient, set(ALWAYS_ELIGIBLE), 5)

    assert _topics(suggestions) == [TopicTag.DIET, TopicTag.EXERCISE]
    assert [s.priority for s in suggestions] == [Priority.MEDIUM, Priority.LOW]
    assert {s.category for s in suggestions} == {"Lifestyle Factors"}


def test_diet_and_exercise_turn_gates(diabetic_patient):
    ledger = set(ALWAYS_ELIGIBLE)
    assert evaluate(diabetic_patient, ledger, 2) == []
    assert _topics(evaluate(diabetic_patient, ledger, 3)) == [TopicTag.DIET]
    assert _topics(evaluate(diabetic_patient, ledger, 4)) == [TopicTag.DIET]
    assert _topics(evaluate(diabetic_patient, ledger, 5)) == [TopicTag.DIET, TopicTag.EXERCISE]


def test_hypertension_rules(hypertensive_diabetic):
    ledger = set(ALWAYS_ELIGIBLE) | {TopicTag.DIET, TopicTag.EXERCISE}

    early = evaluate(hypertensive_diabetic, ledger, 2)
    assert _topics(early) == [TopicTag.MENTAL_HEALTH]
    assert early[0].category == "Psychosocial Factors"

    later = evaluate(hypertensive_diabetic, ledger, 3)
    assert _topics(later) == [TopicTag.MEDICATION, TopicTag.MENTAL_HEALTH]
    assert later[0].priority == Priority.HIGH
    assert later[0].reason == "BP reading today is 145/92"


def test_mentioning_stress_covers_psychosocial_prompt(hypertensive_diabetic):
    ledger = set(ALWAYS_ELIGIBLE) | {TopicTag.MENTAL_HEALTH}
    assert TopicTag.MENTAL_HEALTH not in _topics(evaluate(hypertensive_diabetic, ledger, 0))


def test_emission_follows_rule_table_not_profile_order():
    profile = PatientProfile(
        id=7,
        name="Order Check",
        age=50,
        risk_level=RiskLevel.MEDIUM,
        conditions=["Hypertension", "Type 2 Diabetes"],
    )
    topics = _topics(evaluate(profile, set(), 0))
    assert topics[0] == TopicTag.GLUCOSE_MONITORING
    assert topics[-1] == TopicTag.MENTAL_HEALTH


def test_missing_vital_renders_placeholder():
    profile = PatientProfile(
        id=8, name="No Vitals", age=40, risk_level=RiskLevel.LOW, conditions=["Hypertension"]
    )
    medication = evaluate(profile, set(), 3)[0]
    assert medication.reason == f"BP reading today is {MISSING_VITAL}"


def test_unknown_conditions_contribute_nothing():
    profile = PatientProfile(
        id=9, name="Asthma Only", age=30, risk_level=RiskLevel.HIGH, conditions=["Asthma", "Allergies"]
    )
    assert evaluate(profile, set(), 10) == []


def test_evaluation_is_idempotent(hypertensive_diabetic):
    ledger = {TopicTag.VISION, TopicTag.DIET}
    first = evaluate(hypertensive_diabetic, ledger, 6, "good morning")
    second = evaluate(hypertensive_diabetic, ledger, 6, "good morning")
    assert first == second


def test_covered_topic_never_reappears(hypertensive_diabetic):
    for topic in TopicTag:
        for turn_count in range(0, 8):
            suggestions = evaluate(hypertensive_diabetic, {topic}, turn_count, "")
            assert topic not in _topics(suggestions)


def test_follow_up_gate():
    assert not needs_follow_up(3, "good morning")
    assert needs_follow_up(4, "good morning")
    assert not needs_follow_up(4, "since your last visit")
    assert not needs_follow_up(10, "the previous tablets")
    assert not needs_follow_up(10, "The PREVIOUS tablets")


def test_follow_up_is_condition_independent():
    profile = PatientProfile(
        id=10,
        name="Follow Up",
        age=45,
        risk_level=RiskLevel.MEDIUM,
        conditions=[],
        prior_visits=[{"date": "2024-12-10", "complaints": "Cough", "diagnosis": "Asthma exacerbation"}],
    )
    suggestions = evaluate(profile, set(), 4, "good morning")

    assert len(suggestions) == 1
    assert suggestions[0].category == "Follow-up"
    assert suggestions[0].priority == Priority.MEDIUM
    assert suggestions[0].reason.endswith("(asthma exacerbation)")


def test_follow_up_needs_conversation_text(diabetic_patient):
    without_text = evaluate(diabetic_patient, set(ALWAYS_ELIGIBLE), 5)
    with_text = evaluate(diabetic_patient, set(ALWAYS_ELIGIBLE), 5, "")
    assert len(without_text) == 2
    assert [s.category for s in with_text] == ["Lifestyle Factors", "Lifestyle Factors", "Follow-up"]
