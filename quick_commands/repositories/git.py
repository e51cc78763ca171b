import asyncio
import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from ..domain.models import Repository, RepositoryStatus

logger = logging.getLogger(__name__)


class GitCommandError(Exception):
    """Raised when a git invocation exits with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"'{' '.join(self.command)}' exited with {returncode}: {stderr.strip()}"
        )


# The Interface
class RepositorySource(ABC):
    """
    Defines how the wizard reaches git.
    The push command only talks to this interface, so repositories can come
    from a local git install or from memory (tests, demos) interchangeably.
    """

    @abstractmethod
    async def get_ordered_repositories(self) -> List[Repository]:
        """Candidate repositories, ordered by name."""
        pass

    @abstractmethod
    async def get_status(self, repo: Repository) -> Optional[RepositoryStatus]:
        """Tracking status, or None if it cannot be determined."""
        pass

    @abstractmethod
    async def push_all(self, repos: Sequence[Repository], force: bool = False) -> None:
        """
        Pushes the current branch of every repository.
        Raises on the first failure.
        """
        pass


class StaticRepositorySource(RepositorySource):
    """
    Serves repositories from memory and records pushes instead of running them.
    """

    def __init__(
        self,
        repos: Sequence[Repository] = (),
        statuses: Optional[Dict[str, RepositoryStatus]] = None,
    ):
        self._repos = list(repos)
        # Keyed by Repository.id
        self._statuses: Dict[str, RepositoryStatus] = dict(statuses or {})
        self.pushes: List[Tuple[List[str], bool]] = []

    async def get_ordered_repositories(self) -> List[Repository]:
        return sorted(self._repos, key=lambda r: r.name)

    async def get_status(self, repo: Repository) -> Optional[RepositoryStatus]:
        return self._statuses.get(repo.id)

    async def push_all(self, repos: Sequence[Repository], force: bool = False) -> None:
        self.pushes.append(([r.id for r in repos], force))


class LocalGitRepositorySource(RepositorySource):
    """
    Runs the git executable against working trees on this machine.
    """

    def __init__(self, paths: Sequence[str], git_executable: str = "git"):
        self.paths = list(paths)
        self.git = git_executable

    async def get_ordered_repositories(self) -> List[Repository]:
        found: Dict[str, Repository] = {}
        for path in self.paths:
            try:
                toplevel = (await self._run(path, "rev-parse", "--show-toplevel")).strip()
            except GitCommandError:
                logger.warning(f"Skipping '{path}': not a git working tree.")
                continue
            if toplevel not in found:
                found[toplevel] = Repository(
                    id=toplevel, name=os.path.basename(toplevel), path=toplevel
                )
        return sorted(found.values(), key=lambda r: r.name)

    async def get_status(self, repo: Repository) -> Optional[RepositoryStatus]:
        output = await self._run(repo.path, "status", "--porcelain=v2", "--branch")
        return parse_branch_status(output)

    async def push_all(self, repos: Sequence[Repository], force: bool = False) -> None:
        # Sequential on purpose: a failure stops the remaining pushes
        for repo in repos:
            args = ["push", "--force"] if force else ["push"]
            logger.info(f"Pushing {repo.formatted_name} ({' '.join(args)})")
            await self._run(repo.path, *args)

    async def _run(self, cwd: str, *args: str) -> str:
        command = [self.git, *args]
        logger.debug(f"Running {' '.join(command)} in {cwd}")
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            # Missing git executable or working directory
            raise GitCommandError(command, 127, str(e)) from e

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            raise GitCommandError(command, process.returncode, stderr.decode())
        return stdout.decode()


def parse_branch_status(output: str) -> Optional[RepositoryStatus]:
    """
    Reads the '# branch.*' headers of `git status --porcelain=v2 --branch`.

    Returns None when there are no branch headers at all.
    """
    status = RepositoryStatus()
    seen = False
    for line in output.splitlines():
        if not line.startswith("# branch."):
            continue
        seen = True
        key, _, value = line[len("# branch."):].partition(" ")
        if key == "head":
            status.branch = None if value == "(detached)" else value
        elif key == "upstream":
            status.upstream = value
        elif key == "ab":
            ahead, _, behind = value.partition(" ")
            status.ahead = int(ahead.lstrip("+"))
            status.behind = int(behind.lstrip("-"))
    return status if seen else None
