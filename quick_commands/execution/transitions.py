"""
State Transitions.

Each function folds one validated answer into a WizardState and returns the
new state. The input state is never modified, so tests can compare before and
after; the sequencer swaps its state for the returned one.
"""

from typing import Any, TypeVar

from ..domain.models import ActionItem, Selection
from ..state.models import WizardState

S = TypeVar("S", bound=WizardState)


def auto_select(state: S, entity: Any) -> S:
    """The only candidate is chosen without asking; it counts as answered."""
    return state.model_copy(
        update={"entities": [entity], "counter": state.counter + 1}
    )


def apply_entity_selection(state: S, selection: Selection) -> S:
    """Replaces (never merges) the chosen entities."""
    entities = [i.item for i in selection.items if isinstance(i, ActionItem)]
    return state.model_copy(update={"entities": entities})


def apply_confirmation(state: S, selection: Selection) -> S:
    """Takes the flags carried by the chosen confirm item."""
    item = selection.items[0]
    return state.model_copy(update={"flags": list(item.item)})


def skip_confirmation(state: S) -> S:
    """Keeps any pre-seeded flags, otherwise no flags."""
    return state.model_copy(update={"flags": list(state.flags or [])})


def clear_counter_credit(state: S) -> S:
    """Backing out of a step forfeits the credit that let the wizard skip it."""
    return state.model_copy(update={"counter": max(0, state.counter - 1)})
