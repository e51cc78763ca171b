"""
State Layer - Runtime Data Models

This module defines the accumulating state threaded through one wizard run,
and the arguments a caller uses to pre-seed part of it.
"""

from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel

from ..domain.models import Repository

EntityT = TypeVar("EntityT")


class WizardState(BaseModel, Generic[EntityT]):
    """
    The mutable accumulator owned by a single running wizard.

    counter: How many fields were already answered by the caller before the
        wizard started (or auto-answered during it). A populated field with
        counter >= 1 lets the sequencer skip the step that asks for it.
    confirm: Overrides whether the confirmation step is shown.
    """
    counter: int = 0
    confirm: Optional[bool] = None

    entities: Optional[List[EntityT]] = None
    flags: Optional[List[str]] = None


class PushState(WizardState[Repository]):
    @property
    def repos(self) -> Optional[List[Repository]]:
        return self.entities


class PartialPushState(BaseModel):
    repos: Optional[List[Repository]] = None
    flags: Optional[List[str]] = None


class PushCommandArgs(BaseModel):
    """Construction arguments for the push wizard. Everything is optional."""
    command: Literal["push"] = "push"
    state: Optional[PartialPushState] = None
    confirm: Optional[bool] = None


def seed_push_state(args: Optional[PushCommandArgs]) -> PushState:
    """
    Builds the initial state from the caller's partial state.

    Only a non-empty pre-chosen collection earns counter credit.
    """
    if args is None:
        return PushState()

    counter = 0
    partial = args.state or PartialPushState()
    if partial.repos:
        counter += 1

    return PushState(
        counter=counter,
        confirm=args.confirm,
        entities=list(partial.repos) if partial.repos is not None else None,
        flags=list(partial.flags) if partial.flags is not None else None,
    )
