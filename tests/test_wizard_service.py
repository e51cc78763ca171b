"""Tests for WizardService session handling."""

import asyncio

import pytest

from quick_commands.execution.schemas.state_machine import (
    AwaitingSelection,
    Cancelled,
    Completed,
    WizardPhase,
)
from quick_commands.repositories.session import InMemoryWizardSessionRepository
from quick_commands.services.exceptions import (
    InvalidSelectionError,
    UnknownCommandError,
    UnknownRepositoryError,
    WizardNotFoundError,
)
from quick_commands.services.wizard import WizardService

from conftest import FailingRepositorySource, SlowPushSource


@pytest.fixture
def service(three_repos, always_confirm):
    return WizardService(InMemoryWizardSessionRepository(), three_repos)


class TestStart:

    @pytest.mark.asyncio
    async def test_start_returns_first_step_and_keeps_session(self, service):
        session_id, outcome = await service.start("push")

        assert isinstance(outcome, AwaitingSelection)
        assert outcome.phase == WizardPhase.SELECT_ENTITIES
        assert service.get(session_id).step is outcome.step

    @pytest.mark.asyncio
    async def test_unknown_command(self, service):
        with pytest.raises(UnknownCommandError):
            await service.start("pull")

    @pytest.mark.asyncio
    async def test_seeded_repository_ids_are_resolved(self, service, alpha):
        session_id, outcome = await service.start("push", repository_ids=[alpha.id])

        assert outcome.phase == WizardPhase.CONFIRM
        assert service.get(session_id).state.repos == [alpha]

    @pytest.mark.asyncio
    async def test_unknown_repository_id(self, service):
        with pytest.raises(UnknownRepositoryError, match="/work/nope"):
            await service.start("push", repository_ids=["/work/nope"])

    @pytest.mark.asyncio
    async def test_wizard_finishing_immediately_is_not_kept(self, service, three_repos, alpha):
        session_id, outcome = await service.start(
            "push", repository_ids=[alpha.id], confirm=False
        )

        assert isinstance(outcome, Completed)
        assert three_repos.pushes == [([alpha.id], False)]
        with pytest.raises(WizardNotFoundError):
            service.get(session_id)


class TestRespond:

    @pytest.mark.asyncio
    async def test_full_run_by_indexes(self, service, three_repos, alpha, gamma):
        session_id, _ = await service.start("push")

        outcome = await service.respond(session_id, [0, 2])
        assert outcome.phase == WizardPhase.CONFIRM

        outcome = await service.respond(session_id, [1])
        assert isinstance(outcome, Completed)
        assert three_repos.pushes == [([alpha.id, gamma.id], True)]
        with pytest.raises(WizardNotFoundError):
            service.get(session_id)

    @pytest.mark.asyncio
    async def test_back_returns_to_picker(self, service):
        session_id, _ = await service.start("push")
        await service.respond(session_id, [0, 1])

        outcome = await service.respond(session_id, back=True)

        assert outcome.phase == WizardPhase.SELECT_ENTITIES
        assert [i.picked for i in outcome.step.items] == [True, True, False]

    @pytest.mark.asyncio
    async def test_cancel_drops_session(self, service):
        session_id, _ = await service.start("push")

        outcome = await service.respond(session_id, back=True)

        assert isinstance(outcome, Cancelled)
        with pytest.raises(WizardNotFoundError):
            service.get(session_id)

    @pytest.mark.asyncio
    async def test_out_of_range_index(self, service):
        session_id, _ = await service.start("push")

        with pytest.raises(InvalidSelectionError):
            await service.respond(session_id, [7])

        # The wizard is still waiting
        assert service.get(session_id).phase == WizardPhase.SELECT_ENTITIES

    @pytest.mark.asyncio
    async def test_repeated_index(self, service, three_repos):
        session_id, _ = await service.start("push")

        with pytest.raises(InvalidSelectionError, match="only once"):
            await service.respond(session_id, [0, 0])

        assert service.get(session_id).phase == WizardPhase.SELECT_ENTITIES
        assert three_repos.pushes == []

    @pytest.mark.asyncio
    async def test_answer_while_executing_is_rejected(self, alpha, always_confirm):
        source = SlowPushSource([alpha])
        service = WizardService(InMemoryWizardSessionRepository(), source)
        session_id, _ = await service.start("push")

        first, second = await asyncio.gather(
            service.respond(session_id, [0]),
            service.respond(session_id, back=True),
            return_exceptions=True,
        )

        assert isinstance(first, Completed)
        assert isinstance(second, InvalidSelectionError)
        assert source.pushes == [([alpha.id], False)]
        with pytest.raises(WizardNotFoundError):
            service.get(session_id)

    @pytest.mark.asyncio
    async def test_unknown_session(self, service):
        with pytest.raises(WizardNotFoundError):
            await service.respond("missing", [0])

    @pytest.mark.asyncio
    async def test_failure_drops_session(self, alpha, always_confirm):
        source = FailingRepositorySource("push_all", [alpha])
        service = WizardService(InMemoryWizardSessionRepository(), source)
        session_id, _ = await service.start("push")

        with pytest.raises(OSError):
            await service.respond(session_id, [0])

        with pytest.raises(WizardNotFoundError):
            service.get(session_id)

    @pytest.mark.asyncio
    async def test_explicit_cancel(self, service):
        session_id, _ = await service.start("push")

        assert service.cancel(session_id) is True
        assert service.cancel(session_id) is False
