"""
Domain Layer - Quick Pick Models

Defines the immutable Steps, items and Selections exchanged with a driver,
plus the Repository entity that push candidates are made of.
"""

from quick_commands.domain.formatting import pluralize, title_with
from quick_commands.domain.models import (
    ActionItem,
    ConfirmStep,
    Directive,
    DirectiveItem,
    PickStep,
    Repository,
    RepositoryStatus,
    Selection,
    Step,
    StepItem,
)

__all__ = [
    "ActionItem",
    "ConfirmStep",
    "Directive",
    "DirectiveItem",
    "PickStep",
    "Repository",
    "RepositoryStatus",
    "Selection",
    "Step",
    "StepItem",
    "pluralize",
    "title_with",
]
