from quick_commands.execution.schemas.state_machine import (
    TERMINAL_PHASES,
    AwaitingSelection,
    Cancelled,
    Completed,
    StepOutcome,
    WizardPhase,
)

__all__ = [
    "TERMINAL_PHASES",
    "AwaitingSelection",
    "Cancelled",
    "Completed",
    "StepOutcome",
    "WizardPhase",
]
