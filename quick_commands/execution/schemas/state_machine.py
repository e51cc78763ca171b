"""
Wizard Phases - FSM State Definitions

Type definitions for the step sequencer's state machine and the outcomes it
hands back to a driver after each advance.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Union

from ...domain.models import Step
from ...state.models import WizardState


class WizardPhase(Enum):
    """
    Where the sequencer currently is.

    SELECT_ENTITIES and CONFIRM are the two suspension points; a driver can
    only feed a Selection in while the sequencer sits in one of them.
    """

    START = auto()
    SELECT_ENTITIES = auto()  # Suspended on a PickStep
    CONFIRM = auto()  # Suspended on a ConfirmStep
    EXECUTE = auto()
    DONE = auto()
    CANCELLED = auto()
    FAILED = auto()


TERMINAL_PHASES = frozenset(
    {WizardPhase.DONE, WizardPhase.CANCELLED, WizardPhase.FAILED}
)


@dataclass(frozen=True)
class AwaitingSelection:
    """The sequencer is suspended and needs a Selection for `step`."""

    phase: WizardPhase
    step: Step


@dataclass(frozen=True)
class Completed:
    """Every step produced a valid Selection and the command executed."""

    state: WizardState[Any]


@dataclass(frozen=True)
class Cancelled:
    """The user backed out or chose a cancel directive."""

    phase: WizardPhase  # Phase the cancellation happened in
    reason: str


StepOutcome = Union[AwaitingSelection, Completed, Cancelled]
