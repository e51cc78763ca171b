"""
Wizard Service - Application Orchestration Layer

This service is the entry point for drivers (HTTP API, terminal). It creates
sequencers for commands, keeps them between requests, translates a driver's
item indexes into Selections and drops sessions once they terminate.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..commands.push import PushCommand
from ..domain.models import Selection
from ..execution.schemas.state_machine import AwaitingSelection, StepOutcome
from ..execution.sequencer import StepSequencer, WizardBusyError
from ..repositories.git import RepositorySource
from ..repositories.session import WizardSessionRepository
from ..state.models import PartialPushState, PushCommandArgs
from .exceptions import (
    InvalidSelectionError,
    UnknownCommandError,
    UnknownRepositoryError,
    WizardNotFoundError,
)

logger = logging.getLogger(__name__)

SUPPORTED_COMMANDS = ("push",)


class WizardService:
    def __init__(
        self,
        session_repository: WizardSessionRepository,
        source: RepositorySource,
    ):
        self.session_repo = session_repository
        self.source = source

    async def start(
        self,
        command: str,
        repository_ids: Optional[Sequence[str]] = None,
        flags: Optional[Sequence[str]] = None,
        confirm: Optional[bool] = None,
    ) -> Tuple[str, StepOutcome]:
        """
        Starts a wizard and runs it to its first suspension point.

        Returns the session id with the first outcome. A wizard that finishes
        without asking anything is not kept.
        """
        if command not in SUPPORTED_COMMANDS:
            raise UnknownCommandError(f"No wizard for command '{command}'.")

        args = await self._build_push_args(repository_ids, flags, confirm)
        sequencer = StepSequencer(PushCommand(self.source, args))
        session_id = self.session_repo.create(sequencer)
        logger.info(f"Started {command} wizard {session_id}")

        return session_id, await self._advance(session_id, sequencer, None)

    def get(self, session_id: str) -> StepSequencer:
        sequencer = self.session_repo.get(session_id)
        if sequencer is None:
            raise WizardNotFoundError(f"Wizard {session_id} not found")
        return sequencer

    async def respond(
        self, session_id: str, indexes: Sequence[int] = (), back: bool = False
    ) -> StepOutcome:
        """
        Answers the current step with the items at `indexes`, or backs out.
        """
        sequencer = self.get(session_id)
        if sequencer.step is None:
            raise InvalidSelectionError("The wizard is not waiting for a selection.")
        selection = Selection.go_back() if back else self._select(sequencer, indexes)
        return await self._advance(session_id, sequencer, selection)

    def cancel(self, session_id: str) -> bool:
        return self.session_repo.delete(session_id)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    async def _advance(
        self,
        session_id: str,
        sequencer: StepSequencer,
        selection: Optional[Selection],
    ) -> StepOutcome:
        try:
            outcome = await sequencer.advance(selection)
        except WizardBusyError as e:
            # The earlier call still owns the session
            raise InvalidSelectionError(str(e)) from e
        except Exception:
            self.session_repo.delete(session_id)
            raise

        if not isinstance(outcome, AwaitingSelection):
            self.session_repo.delete(session_id)
        return outcome

    def _select(self, sequencer: StepSequencer, indexes: Sequence[int]) -> Selection:
        step = sequencer.step

        if len(set(indexes)) != len(indexes):
            raise InvalidSelectionError("Each item can be chosen only once.")

        items = []
        for index in indexes:
            if not 0 <= index < len(step.items):
                raise InvalidSelectionError(
                    f"Item {index} does not exist (step has {len(step.items)} items)."
                )
            items.append(step.items[index])
        return Selection.of(*items)

    async def _build_push_args(
        self,
        repository_ids: Optional[Sequence[str]],
        flags: Optional[Sequence[str]],
        confirm: Optional[bool],
    ) -> PushCommandArgs:
        if repository_ids is None and flags is None:
            return PushCommandArgs(confirm=confirm)

        repos = None
        if repository_ids is not None:
            candidates = {r.id: r for r in await self.source.get_ordered_repositories()}
            missing: List[str] = [i for i in repository_ids if i not in candidates]
            if missing:
                raise UnknownRepositoryError(
                    f"Unknown repositories: {', '.join(missing)}"
                )
            repos = [candidates[i] for i in repository_ids]

        return PushCommandArgs(
            state=PartialPushState(
                repos=repos, flags=list(flags) if flags is not None else None
            ),
            confirm=confirm,
        )
