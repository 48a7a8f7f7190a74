# backend/consult_copilot/services/topic_extractor.py
"""
Topic detection over the conversation so far.

Detection is a case-insensitive substring test over the whole history,
re-scanned on every turn. Whatever it finds is merged into the ledger and
never removed for the rest of the consultation.
"""

import logging
from typing import Dict, Iterable, List, Optional, Protocol, Set, Tuple

from consult_copilot.models.consultation import ConversationTurn, TopicTag

logger = logging.getLogger(__name__)

TOPIC_KEYWORDS: Dict[TopicTag, Tuple[str, ...]] = {
    TopicTag.MEDICATION: ("medication", "medicine"),
    TopicTag.DIET: ("diet", "food", "eating"),
    TopicTag.EXERCISE: ("exercise", "physical activity"),
    TopicTag.GLUCOSE_MONITORING: ("glucose", "blood sugar"),
    TopicTag.VISION: ("vision", "eyes", "see"),
    TopicTag.FOOT_CARE: ("foot", "feet", "toes"),
    TopicTag.SYMPTOMS: ("symptoms", "feeling"),
    TopicTag.POLYURIA: ("thirst", "urination", "bathroom"),
    TopicTag.WOUND_HEALING: ("wound", "cut", "heal"),
    TopicTag.MENTAL_HEALTH: ("stress", "anxiety"),
}


class TopicDetector(Protocol):
    def detect(self, text: str) -> Set[TopicTag]:
        ...


class KeywordTopicDetector:
    """Flags a topic when any of its trigger substrings occurs in the text."""

    def __init__(self, keywords: Optional[Dict[TopicTag, Iterable[str]]] = None):
        source = TOPIC_KEYWORDS if keywords is None else keywords
        self.keywords = {tag: tuple(k.lower() for k in triggers) for tag, triggers in source.items()}

    def detect(self, text: str) -> Set[TopicTag]:
        normalized = text.lower()
        return {
            tag
            for tag, triggers in self.keywords.items()
            if any(trigger in normalized for trigger in triggers)
        }


default_detector = KeywordTopicDetector()


def conversation_text(history: List[ConversationTurn]) -> str:
    return " ".join(turn.text.lower() for turn in history)


def extract(history: List[ConversationTurn], detector: Optional[TopicDetector] = None) -> Set[TopicTag]:
    detector = detector or default_detector
    return detector.detect(conversation_text(history))


def update_ledger(
    ledger: Set[TopicTag],
    history: List[ConversationTurn],
    detector: Optional[TopicDetector] = None,
) -> Set[TopicTag]:
    """Return a new ledger: the old one plus every topic found in `history`."""
    found = extract(history, detector)
    new_topics = found - ledger
    if new_topics:
        logger.debug(f"Ledger gained topics: {sorted(t.value for t in new_topics)}")
    return set(ledger) | found


def ordered_topics(ledger: Set[TopicTag]) -> List[TopicTag]:
    """Ledger topics in declaration order, for stable output."""
    return [tag for tag in TopicTag if tag in ledger]
