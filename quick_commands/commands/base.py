from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Sequence, TypeVar

from ..config import settings
from ..domain.models import (
    ActionItem,
    ConfirmStep,
    Directive,
    DirectiveItem,
    PickStep,
    StepItem,
)
from ..state.models import WizardState

StateT = TypeVar("StateT", bound=WizardState)


class CommandBinding(ABC, Generic[StateT]):
    """
    Contract between the StepSequencer and one concrete command.

    The binding supplies the initial (possibly pre-seeded) state, the content
    of the pick and confirm steps, and the side-effecting action performed
    once every step has been answered. The sequencer owns the ordering.
    """

    def __init__(
        self,
        key: str,
        label: str,
        title: str,
        description: str = "",
        initial_state: Optional[StateT] = None,
    ):
        self.key = key
        self.label = label
        self.title = title
        self.description = description
        self._initial_state = initial_state

    @property
    def skip_confirm_key(self) -> str:
        return f"{self.key}:command"

    def create_state(self) -> StateT:
        """A private copy of the initial state for one run."""
        if self._initial_state is None:
            return self.new_state()
        return self._initial_state.model_copy(deep=True)

    def should_confirm(self, override: Optional[bool] = None) -> bool:
        if override is not None:
            return override
        return self.skip_confirm_key not in settings.SKIP_CONFIRMATIONS

    # --- Step factories ---

    def pick_step(
        self, placeholder: str, items: Sequence[StepItem], multiselect: bool = False
    ) -> PickStep:
        return PickStep(
            title=self.title,
            placeholder=placeholder,
            items=tuple(items),
            multiselect=multiselect,
        )

    def confirm_step(
        self,
        placeholder: str,
        confirmations: Sequence[ActionItem],
        cancel: Optional[DirectiveItem] = None,
    ) -> ConfirmStep:
        """Every confirm step ends with a cancel directive."""
        return ConfirmStep(
            title=self.title,
            placeholder=placeholder,
            items=(
                *confirmations,
                cancel or DirectiveItem(directive=Directive.CANCEL, label="Cancel"),
            ),
        )

    def create_no_candidates_step(self) -> ConfirmStep:
        return self.confirm_step(
            f"{self.title} unavailable",
            [],
            cancel=DirectiveItem(
                directive=Directive.CANCEL,
                label=f"Cancel {self.title}",
                detail="Nothing to choose from",
            ),
        )

    # --- Command specifics ---

    @abstractmethod
    def new_state(self) -> StateT:
        """An empty state for a run that was not pre-seeded."""
        pass

    @abstractmethod
    async def get_candidates(self) -> Sequence[Any]:
        """Ordered entities the user can choose from."""
        pass

    @abstractmethod
    async def get_status(self, entity: Any) -> Optional[Any]:
        """Descriptive metadata for one entity, used to shape the steps."""
        pass

    @abstractmethod
    async def create_pick_step(
        self, candidates: Sequence[Any], state: StateT
    ) -> PickStep:
        pass

    @abstractmethod
    async def create_confirm_step(self, state: StateT) -> ConfirmStep:
        pass

    @abstractmethod
    async def execute(self, state: StateT) -> None:
        """
        Performs the command. Returns normally on success; raising is the only
        failure channel.
        """
        pass
