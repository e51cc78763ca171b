import uuid
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..execution.sequencer import StepSequencer


class WizardSessionRepository(ABC):
    """
    Defines where running wizards live between driver requests.
    A sequencer holds live collaborators, so sessions are process-local.
    """

    @abstractmethod
    def create(self, sequencer: StepSequencer) -> str:
        """Stores a new wizard and returns its session id."""
        pass

    @abstractmethod
    def get(self, session_id: str) -> Optional[StepSequencer]:
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Deletes a session. Returns True if found and deleted."""
        pass


class InMemoryWizardSessionRepository(WizardSessionRepository):
    def __init__(self):
        self._store: Dict[str, StepSequencer] = {}

    def create(self, sequencer: StepSequencer) -> str:
        new_id = str(uuid.uuid4())
        self._store[new_id] = sequencer
        return new_id

    def get(self, session_id: str) -> Optional[StepSequencer]:
        return self._store.get(session_id)

    def delete(self, session_id: str) -> bool:
        if session_id in self._store:
            del self._store[session_id]
            return True
        return False
