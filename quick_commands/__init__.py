"""
Git Quick Commands

An interactive multi-step wizard engine: a deterministic step sequencer that
asks the user to pick entities, confirm an action and then executes it, with
back-navigation, auto-skip of pre-answered steps and cancellation.
The push command is its first instantiation.
"""

from quick_commands.domain import (
    ActionItem,
    ConfirmStep,
    Directive,
    DirectiveItem,
    PickStep,
    Repository,
    RepositoryStatus,
    Selection,
    Step,
)
from quick_commands.state import (
    PartialPushState,
    PushCommandArgs,
    PushState,
    WizardState,
)
from quick_commands.execution.schemas import (
    AwaitingSelection,
    Cancelled,
    Completed,
    StepOutcome,
    WizardPhase,
)
from quick_commands.execution import StepSequencer, WizardBusyError, WizardTerminatedError, drive

__all__ = [
    # Domain Layer
    "ActionItem",
    "ConfirmStep",
    "Directive",
    "DirectiveItem",
    "PickStep",
    "Repository",
    "RepositoryStatus",
    "Selection",
    "Step",
    # State Layer
    "PartialPushState",
    "PushCommandArgs",
    "PushState",
    "WizardState",
    # Schemas
    "AwaitingSelection",
    "Cancelled",
    "Completed",
    "StepOutcome",
    "WizardPhase",
    # Execution Layer
    "StepSequencer",
    "WizardBusyError",
    "WizardTerminatedError",
    "drive",
]
