# backend/consult_copilot/services/consultation_store.py
"""
In-memory registry of live consultations.

Each consultation gets one asyncio.Lock so that at most one evaluation
pass is in flight per consultation; later submissions wait behind it in
submission order.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional, TypeVar

from consult_copilot.core.errors import ConsultationBusyError, ConsultationNotFoundError
from consult_copilot.models.consultation import ConsultationSession, PatientProfile
from consult_copilot.services.consultation_service import start_consultation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConsultationStore:
    def __init__(self):
        self._sessions: Dict[str, ConsultationSession] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def __contains__(self, consultation_id: str) -> bool:
        return consultation_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, profile: PatientProfile, consultation_id: Optional[str] = None) -> ConsultationSession:
        session = start_consultation(profile, consultation_id)
        # Restarting under an existing id resets history and ledger
        self._sessions[session.consultation_id] = session
        self._locks.setdefault(session.consultation_id, asyncio.Lock())
        return session

    def get(self, consultation_id: str) -> ConsultationSession:
        session = self._sessions.get(consultation_id)
        if session is None:
            raise ConsultationNotFoundError(consultation_id)
        return session

    def lock_for(self, consultation_id: str) -> asyncio.Lock:
        self.get(consultation_id)
        return self._locks.setdefault(consultation_id, asyncio.Lock())

    def discard(self, consultation_id: str) -> None:
        self._sessions.pop(consultation_id, None)
        self._locks.pop(consultation_id, None)
        logger.info(f"Consultation {consultation_id} discarded")

    def clear(self) -> None:
        self._sessions.clear()
        self._locks.clear()

    async def run_exclusive(
        self,
        consultation_id: str,
        operation: Callable[[ConsultationSession], T],
        delay: float = 0.0,
        wait: bool = True,
    ) -> T:
        """
        Run `operation` on the session while holding its lock.

        `is_processing` is set for the whole pass, including the simulated
        `delay`. With `wait=False` a pass already in flight raises
        ConsultationBusyError instead of queueing.
        """
        session = self.get(consultation_id)
        lock = self.lock_for(consultation_id)
        if not wait and lock.locked():
            raise ConsultationBusyError(consultation_id)

        async with lock:
            session.is_processing = True
            try:
                if delay > 0:
                    await asyncio.sleep(delay)
                return operation(session)
            finally:
                session.is_processing = False


consultation_memory = ConsultationStore()
