"""
Push Command - the push wizard.

Chooses repositories, confirms a plain or forced push, then pushes.
"""

import logging
from typing import List, Optional, Sequence

from ..domain.formatting import pluralize, title_with
from ..domain.models import (
    ActionItem,
    ConfirmStep,
    Directive,
    DirectiveItem,
    PickStep,
    Repository,
    RepositoryStatus,
)
from ..repositories.git import RepositorySource
from ..state.models import PushCommandArgs, PushState, seed_push_state
from .base import CommandBinding

logger = logging.getLogger(__name__)

FORCE_FLAG = "--force"


class PushCommand(CommandBinding[PushState]):
    def __init__(self, source: RepositorySource, args: Optional[PushCommandArgs] = None):
        super().__init__(
            "push",
            "push",
            "Push",
            description="pushes changes from the current branch to a remote",
            initial_state=seed_push_state(args),
        )
        self.source = source

    def new_state(self) -> PushState:
        return PushState()

    async def get_candidates(self) -> List[Repository]:
        return await self.source.get_ordered_repositories()

    async def get_status(self, entity: Repository) -> Optional[RepositoryStatus]:
        return await self.source.get_status(entity)

    async def execute(self, state: PushState) -> None:
        force = FORCE_FLAG in (state.flags or [])
        logger.info(f"Pushing {len(state.repos)} repositories (force={force})")
        await self.source.push_all(state.repos, force=force)

    # ==========================================================================
    # Steps
    # ==========================================================================

    async def create_pick_step(
        self, candidates: Sequence[Repository], state: PushState
    ) -> PickStep:
        chosen = {r.id for r in state.repos or []}
        items = []
        for repo in candidates:
            status = await self.get_status(repo)
            items.append(
                ActionItem(
                    label=repo.formatted_name,
                    item=repo,
                    description=describe_status(status),
                    detail=repo.path,
                    picked=repo.id in chosen,
                )
            )
        return self.pick_step("Choose repositories", items, multiselect=True)

    async def create_confirm_step(self, state: PushState) -> ConfirmStep:
        repos = state.repos
        if len(repos) > 1:
            count = f"{len(repos)} repositories"
            return self.confirm_step(
                title_with(f"Confirm {self.title}", count),
                self._confirmations(count),
            )

        return await self._single_repo_confirm_step(repos[0])

    async def _single_repo_confirm_step(self, repo: Repository) -> ConfirmStep:
        placeholder = title_with(f"Confirm {self.title}", repo.formatted_name)
        status = await self.get_status(repo)

        detail = repo.formatted_name
        pending = status.pending_change_count if status is not None else None
        if status is not None and status.upstream is None:
            # git refuses a plain push until an upstream is configured
            detail = f"{repo.formatted_name} (no upstream set)"
        elif pending is not None:
            if pending == 0:
                return self.confirm_step(
                    placeholder,
                    [],
                    cancel=DirectiveItem(
                        directive=Directive.CANCEL,
                        label=f"Cancel {self.title}",
                        detail="No commits to push",
                    ),
                )
            detail = pluralize("commit", pending)

        return self.confirm_step(placeholder, self._confirmations(detail))

    def _confirmations(self, detail: str) -> List[ActionItem]:
        return [
            ActionItem(
                label=self.title,
                description="",
                detail=f"Will push {detail}",
                item=(),
            ),
            ActionItem(
                label=f"Force {self.title}",
                description=FORCE_FLAG,
                detail=f"Will force push {detail}",
                item=(FORCE_FLAG,),
            ),
        ]


def describe_status(status: Optional[RepositoryStatus]) -> str:
    """e.g. 'main ↑2 ↓1', or just the branch when there is no upstream."""
    if status is None:
        return ""
    parts = [status.branch or "(detached)"]
    if status.upstream is not None:
        parts.append(f"↑{status.ahead} ↓{status.behind}")
    return " ".join(parts)
