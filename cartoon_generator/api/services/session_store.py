"""In-memory store of wizard sessions."""

import threading
import uuid
from typing import Optional

from cartoon_generator.core.types import WizardState


class SessionStore:
    """
    Holds one WizardState per session id.

    Sessions live only as long as the process; nothing is persisted.
    """

    def __init__(self):
        self._sessions: dict[str, WizardState] = {}
        self._lock = threading.Lock()

    def create(self) -> tuple[str, WizardState]:
        """Create a fresh session at stage 1."""
        session_id = str(uuid.uuid4())
        state = WizardState()

        with self._lock:
            self._sessions[session_id] = state

        return session_id, state

    def get(self, session_id: str) -> Optional[WizardState]:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


# Global instance - one per API process
session_store = SessionStore()
