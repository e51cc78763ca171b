"""
Sequencer - Wizard Orchestration Layer

The StepSequencer is the deterministic state machine that walks a command
through its steps: choose the entities to act on, confirm the action, then
execute it exactly once.
-----------------------------------------------

The sequencer never renders anything and never waits on its own. Each call
to `advance` runs until the machine reaches a suspension point (a Step the
user must answer) or a terminal phase, and returns an outcome describing it.
The driver renders the Step, collects a Selection and calls `advance` again.

    START -> SELECT_ENTITIES -> CONFIRM -> EXECUTE -> DONE
    SELECT_ENTITIES --(invalid selection)--> CANCELLED
    CONFIRM --(invalid selection, several candidates)--> SELECT_ENTITIES
    CONFIRM --(invalid selection, single candidate)--> CANCELLED
    any phase --(collaborator error)--> FAILED (re-raised)

Backing out of CONFIRM after the only candidate was auto-selected ends the
run: there is no earlier step to return to.
"""

import logging
from typing import Awaitable, Callable, Generic, Optional

from ..commands.base import CommandBinding, StateT
from ..domain.models import ActionItem, Directive, Selection, Step
from . import transitions
from .schemas.state_machine import (
    TERMINAL_PHASES,
    AwaitingSelection,
    Cancelled,
    Completed,
    StepOutcome,
    WizardPhase,
)

logger = logging.getLogger(__name__)


class WizardTerminatedError(Exception):
    """Raised when a driver advances a sequencer that has already finished."""
    pass


class WizardBusyError(Exception):
    """Raised when `advance` is called while an earlier call is still running."""
    pass


class StepSequencer(Generic[StateT]):
    def __init__(self, command: CommandBinding[StateT]):
        self.command = command
        self.state: StateT = command.create_state()
        self.phase = WizardPhase.START
        self.step: Optional[Step] = None

        # Set when Phase A had nothing to offer (zero or one candidate)
        self._single_candidate = False
        self._running = False

    @property
    def is_terminated(self) -> bool:
        return self.phase in TERMINAL_PHASES

    async def start(self) -> StepOutcome:
        return await self.advance()

    async def advance(self, selection: Optional[Selection] = None) -> StepOutcome:
        """
        Feeds the answer to the current Step and runs to the next suspension
        point or terminal phase.
        """
        if self.is_terminated:
            raise WizardTerminatedError(
                f"{self.command.title} wizard already finished ({self.phase.name})."
            )
        if self._running:
            raise WizardBusyError(
                f"{self.command.title} wizard is busy in phase {self.phase.name}."
            )
        if self.phase != WizardPhase.START and selection is None:
            raise ValueError(f"A selection is required in phase {self.phase.name}.")

        self._running = True
        try:
            if self.phase == WizardPhase.START:
                return await self._enter_entity_selection()
            if self.phase == WizardPhase.SELECT_ENTITIES:
                return await self._handle_pick(selection)
            if self.phase == WizardPhase.CONFIRM:
                return await self._handle_confirm(selection)
            raise ValueError(f"No selection is expected in phase {self.phase.name}.")

        except Exception as e:
            logger.error(f"{self.command.title} failed: {e}")
            self.phase = WizardPhase.FAILED
            self.step = None
            raise
        finally:
            self._running = False

    # ==========================================================================
    # Phase A - Entity Selection
    # ==========================================================================

    async def _enter_entity_selection(self) -> StepOutcome:
        # Answered by the caller before the wizard started
        if self.state.entities and self.state.counter >= 1:
            return await self._enter_confirmation()

        candidates = list(await self.command.get_candidates())

        if not candidates:
            self._single_candidate = True
            return self._suspend(
                WizardPhase.CONFIRM, self.command.create_no_candidates_step()
            )

        if len(candidates) == 1:
            self._single_candidate = True
            self.state = transitions.auto_select(self.state, candidates[0])
            return await self._enter_confirmation()

        step = await self.command.create_pick_step(candidates, self.state)
        return self._suspend(WizardPhase.SELECT_ENTITIES, step)

    async def _handle_pick(self, selection: Selection) -> StepOutcome:
        if not self._can_move_next(selection):
            return self._cancel("No selection")

        self.state = transitions.apply_entity_selection(self.state, selection)
        return await self._enter_confirmation()

    # ==========================================================================
    # Phase B - Confirmation
    # ==========================================================================

    async def _enter_confirmation(self) -> StepOutcome:
        if not self.command.should_confirm(self.state.confirm):
            self.state = transitions.skip_confirmation(self.state)
            return await self._execute()

        step = await self.command.create_confirm_step(self.state)
        return self._suspend(WizardPhase.CONFIRM, step)

    async def _handle_confirm(self, selection: Selection) -> StepOutcome:
        if selection.directive == Directive.CANCEL:
            return self._cancel("Cancelled")

        if not self._can_move_next(selection):
            if self._single_candidate:
                return self._cancel("Nothing to go back to")

            self.state = transitions.clear_counter_credit(self.state)
            return await self._enter_entity_selection()

        self.state = transitions.apply_confirmation(self.state, selection)
        return await self._execute()

    # ==========================================================================
    # Terminal Transitions
    # ==========================================================================

    async def _execute(self) -> StepOutcome:
        self.phase = WizardPhase.EXECUTE
        self.step = None

        await self.command.execute(self.state)

        self.phase = WizardPhase.DONE
        logger.info(f"{self.command.title} completed")
        return Completed(state=self.state)

    def _cancel(self, reason: str) -> StepOutcome:
        cancelled_in = self.phase
        self.phase = WizardPhase.CANCELLED
        self.step = None
        logger.info(f"{self.command.title} cancelled in {cancelled_in.name}: {reason}")
        return Cancelled(phase=cancelled_in, reason=reason)

    # ==========================================================================
    # Standard Helpers
    # ==========================================================================

    def _suspend(self, phase: WizardPhase, step: Step) -> StepOutcome:
        self.phase = phase
        self.step = step
        return AwaitingSelection(phase=phase, step=step)

    def _can_move_next(self, selection: Selection) -> bool:
        """
        A Selection moves the wizard forward only if it chose real items
        offered by the current step.
        """
        step = self.step
        if step is None or selection.back or not selection.items:
            return False
        if selection.directive is not None:
            return False
        if not step.multiselect and len(selection.items) != 1:
            return False
        if len({id(i) for i in selection.items}) != len(selection.items):
            return False
        return all(
            isinstance(i, ActionItem) and i in step.items for i in selection.items
        )


async def drive(
    sequencer: StepSequencer,
    respond: Callable[[Step], Awaitable[Selection]],
) -> StepOutcome:
    """
    Runs a sequencer to completion, asking `respond` for every Step.

    Returns the terminal outcome (Completed or Cancelled); failures raise.
    """
    outcome = await sequencer.start()
    while isinstance(outcome, AwaitingSelection):
        selection = await respond(outcome.step)
        outcome = await sequencer.advance(selection)
    return outcome
