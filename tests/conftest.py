"""Shared fixtures for the quick command tests."""

import asyncio

import pytest

from quick_commands.commands.push import PushCommand
from quick_commands.domain.models import Repository, RepositoryStatus
from quick_commands.repositories.git import RepositorySource, StaticRepositorySource
from quick_commands.state.models import PartialPushState, PushCommandArgs


def make_repo(name: str) -> Repository:
    return Repository(id=f"/work/{name}", name=name, path=f"/work/{name}")


class FailingRepositorySource(RepositorySource):
    """Every call raises; records which call was attempted."""

    def __init__(self, fail_on: str, repos=()):
        self.fail_on = fail_on
        self.inner = StaticRepositorySource(repos)
        self.calls = []

    async def get_ordered_repositories(self):
        self.calls.append("get_ordered_repositories")
        if self.fail_on == "get_ordered_repositories":
            raise OSError("git not available")
        return await self.inner.get_ordered_repositories()

    async def get_status(self, repo):
        self.calls.append("get_status")
        if self.fail_on == "get_status":
            raise OSError("status failed")
        return await self.inner.get_status(repo)

    async def push_all(self, repos, force=False):
        self.calls.append("push_all")
        if self.fail_on == "push_all":
            raise OSError("remote rejected")
        await self.inner.push_all(repos, force)


class SlowPushSource(StaticRepositorySource):
    """Yields to the event loop before pushing."""

    async def push_all(self, repos, force=False):
        await asyncio.sleep(0.01)
        await super().push_all(repos, force)


@pytest.fixture
def alpha():
    return make_repo("alpha")


@pytest.fixture
def beta():
    return make_repo("beta")


@pytest.fixture
def gamma():
    return make_repo("gamma")


@pytest.fixture
def three_repos(alpha, beta, gamma):
    return StaticRepositorySource(
        [gamma, alpha, beta],
        statuses={
            alpha.id: RepositoryStatus(branch="main", upstream="origin/main", ahead=2),
            beta.id: RepositoryStatus(branch="dev", upstream="origin/dev", ahead=0, behind=1),
            gamma.id: RepositoryStatus(branch="main"),
        },
    )


@pytest.fixture
def single_repo(alpha):
    def build(ahead=3, upstream="origin/main"):
        return StaticRepositorySource(
            [alpha],
            statuses={
                alpha.id: RepositoryStatus(branch="main", upstream=upstream, ahead=ahead)
            },
        )
    return build


@pytest.fixture
def seeded_push():
    """PushCommand pre-seeded with repositories."""
    def build(source, repos, confirm=None, flags=None):
        args = PushCommandArgs(
            state=PartialPushState(repos=repos, flags=flags), confirm=confirm
        )
        return PushCommand(source, args)
    return build


@pytest.fixture
def always_confirm(monkeypatch):
    """Ignore any SKIP_CONFIRMATIONS from the environment."""
    from quick_commands.config import settings
    monkeypatch.setattr(settings, "SKIP_CONFIRMATIONS", [])
    return settings
