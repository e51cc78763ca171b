"""
State Layer - Runtime Data Models

Defines the WizardState accumulator threaded through a wizard run and the
arguments used to pre-seed it.
"""

from quick_commands.state.models import (
    PartialPushState,
    PushCommandArgs,
    PushState,
    WizardState,
    seed_push_state,
)

__all__ = [
    "PartialPushState",
    "PushCommandArgs",
    "PushState",
    "WizardState",
    "seed_push_state",
]
