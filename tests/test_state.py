"""Tests for WizardState seeding and the pure state transitions."""

from quick_commands.commands.push import PushCommand
from quick_commands.domain.models import ActionItem, Selection
from quick_commands.execution import transitions
from quick_commands.repositories.git import StaticRepositorySource
from quick_commands.state.models import (
    PartialPushState,
    PushCommandArgs,
    PushState,
    seed_push_state,
)


class TestSeeding:
    """Counter credit comes only from non-empty pre-chosen collections."""

    def test_no_args_gives_empty_state(self):
        state = seed_push_state(None)

        assert state == PushState()
        assert state.counter == 0

    def test_seeded_repositories_earn_one_credit(self, alpha):
        state = seed_push_state(PushCommandArgs(state=PartialPushState(repos=[alpha])))

        assert state.counter == 1
        assert state.repos == [alpha]

    def test_empty_repository_list_earns_nothing(self):
        state = seed_push_state(PushCommandArgs(state=PartialPushState(repos=[])))

        assert state.counter == 0
        assert state.repos == []

    def test_flags_alone_earn_nothing(self):
        state = seed_push_state(
            PushCommandArgs(state=PartialPushState(flags=["--force"]))
        )

        assert state.counter == 0
        assert state.flags == ["--force"]

    def test_confirm_override_without_state(self):
        state = seed_push_state(PushCommandArgs(confirm=False))

        assert state.confirm is False
        assert state.repos is None

    def test_each_run_gets_a_private_copy(self, alpha):
        command = PushCommand(
            StaticRepositorySource(),
            PushCommandArgs(state=PartialPushState(repos=[alpha])),
        )

        first = command.create_state()
        first.entities.clear()

        assert command.create_state().repos == [alpha]


class TestTransitions:
    """Each transition returns a new state and leaves its input untouched."""

    def test_auto_select_sets_entity_and_credit(self, alpha):
        before = PushState()

        after = transitions.auto_select(before, alpha)

        assert after.repos == [alpha]
        assert after.counter == 1
        assert before.repos is None
        assert before.counter == 0

    def test_entity_selection_replaces(self, alpha, beta):
        before = PushState(entities=[alpha])
        selection = Selection.of(ActionItem(label="beta", item=beta))

        after = transitions.apply_entity_selection(before, selection)

        assert after.repos == [beta]
        assert before.repos == [alpha]

    def test_confirmation_takes_item_payload(self, alpha):
        before = PushState(entities=[alpha])
        selection = Selection.of(ActionItem(label="Force Push", item=("--force",)))

        after = transitions.apply_confirmation(before, selection)

        assert after.flags == ["--force"]
        assert before.flags is None

    def test_skip_confirmation_defaults_to_no_flags(self):
        assert transitions.skip_confirmation(PushState()).flags == []
        assert transitions.skip_confirmation(PushState(flags=["--force"])).flags == ["--force"]

    def test_clearing_credit_never_goes_negative(self):
        assert transitions.clear_counter_credit(PushState(counter=1)).counter == 0
        assert transitions.clear_counter_credit(PushState(counter=0)).counter == 0
