"""
Domain Layer - Quick Pick Models

This module defines the immutable values exchanged between the StepSequencer
and whatever driver renders it: Steps (pick or confirm), the items they offer,
and the Selection a driver feeds back. It also defines the git Repository
entity the push command chooses from.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, Optional, Tuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Directive(str, Enum):
    """
    Non-data choices mixed into a step's items.

    BACK: Return to the previous step.
    CANCEL: Terminate the wizard, whatever else the step offers.
    """
    BACK = "back"
    CANCEL = "cancel"


@dataclass(frozen=True)
class ActionItem(Generic[T]):
    """
    A selectable item carrying an opaque payload.

    Attributes:
        label: Main text shown for the item.
        item: Payload returned verbatim when the item is selected
            (a Repository for pick steps, a flags tuple for confirm steps).
        description: Short text shown next to the label.
        detail: Secondary line explaining what selecting the item does.
        picked: Whether the item starts out selected (multi-select only).
    """
    label: str
    item: T
    description: str = ""
    detail: str = ""
    picked: bool = False


@dataclass(frozen=True)
class DirectiveItem:
    """A directive presented as an item (e.g. "Cancel Push")."""
    directive: Directive
    label: str
    detail: str = ""


StepItem = Union[ActionItem, DirectiveItem]


@dataclass(frozen=True)
class PickStep:
    """
    Choose one or more of an ordered list of items.

    Attributes:
        title: Title of the wizard (e.g. "Push").
        placeholder: Prompt text (e.g. "Choose repositories").
        items: Ordered items to choose from.
        multiselect: Whether more than one item may be chosen.
    """
    kind: ClassVar[str] = "pick"

    title: str
    placeholder: str
    items: Tuple[StepItem, ...]
    multiselect: bool = False


@dataclass(frozen=True)
class ConfirmStep:
    """
    Choose exactly one of a small fixed set of actions.

    The last item is usually a cancel directive; a step whose only item is the
    cancel directive tells the user there is nothing to do.
    """
    kind: ClassVar[str] = "confirm"

    title: str
    placeholder: str
    items: Tuple[StepItem, ...]

    @property
    def multiselect(self) -> bool:
        return False

    @property
    def cancel(self) -> Optional[DirectiveItem]:
        return next(
            (
                i
                for i in self.items
                if isinstance(i, DirectiveItem) and i.directive == Directive.CANCEL
            ),
            None,
        )


Step = Union[PickStep, ConfirmStep]


@dataclass(frozen=True)
class Selection:
    """
    A driver's response to a Step.

    Either the ordered items the user chose, or the "back" value meaning the
    user backed out of the step without choosing.
    """
    items: Tuple[StepItem, ...] = ()
    back: bool = False

    @classmethod
    def of(cls, *items: StepItem) -> "Selection":
        return cls(items=tuple(items))

    @classmethod
    def go_back(cls) -> "Selection":
        return cls(back=True)

    @property
    def directive(self) -> Optional[Directive]:
        """The first directive among the chosen items, if any."""
        for item in self.items:
            if isinstance(item, DirectiveItem):
                return item.directive
        return None


class Repository(BaseModel):
    """
    A git working tree offered as a push candidate.

    Identity is the `id` (the absolute path of the top-level directory).
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    path: str

    @property
    def formatted_name(self) -> str:
        return self.name


class RepositoryStatus(BaseModel):
    """Branch tracking information for a repository."""
    branch: Optional[str] = None
    upstream: Optional[str] = None
    ahead: int = Field(default=0, ge=0)
    behind: int = Field(default=0, ge=0)

    @property
    def pending_change_count(self) -> Optional[int]:
        """Commits waiting to be pushed, or None when no upstream is set."""
        if self.upstream is None:
            return None
        return self.ahead
