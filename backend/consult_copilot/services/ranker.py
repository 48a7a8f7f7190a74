# backend/consult_copilot/services/ranker.py

from typing import Dict, List, Optional

from consult_copilot.core.config import settings
from consult_copilot.models.consultation import Priority, Suggestion

PRIORITY_ORDER: Dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


def rank(suggestions: List[Suggestion], limit: Optional[int] = None) -> List[Suggestion]:
    """Stable sort by priority tier, then keep the first `limit` (display budget)."""
    if limit is None:
        limit = settings.MAX_SUGGESTIONS
    ordered = sorted(suggestions, key=lambda s: PRIORITY_ORDER[s.priority])
    return ordered[:limit]
