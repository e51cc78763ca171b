"""
Execution Layer - Wizard Orchestration

Defines the StepSequencer (deterministic state machine) that walks a
CommandBinding through entity selection, confirmation and execution.
"""

from quick_commands.execution.sequencer import (
    StepSequencer,
    WizardBusyError,
    WizardTerminatedError,
    drive,
)


__all__ = [
    "StepSequencer",
    "WizardBusyError",
    "WizardTerminatedError",
    "drive",
]
