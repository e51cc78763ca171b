"""
Dependency Injection Wiring (Composition Root).

This module instantiates the singleton services (repository source, session
store, wizard service) and wires them together. Tests replace them through
`app.dependency_overrides`.
"""


import os
from functools import lru_cache
from fastapi import Depends

from ..config import settings
from ..repositories.git import RepositorySource, LocalGitRepositorySource
from ..repositories.session import WizardSessionRepository, InMemoryWizardSessionRepository
from ..services.wizard import WizardService


# Repository Source (Singleton)
@lru_cache()
def get_repository_source() -> RepositorySource:
    return LocalGitRepositorySource(
        paths=settings.REPOSITORY_PATHS or [os.getcwd()],
        git_executable=settings.GIT_EXECUTABLE,
    )

# Session Repository (Singleton)
# Note: running wizards live in memory, so this must be a singleton.
@lru_cache()
def get_session_repository() -> WizardSessionRepository:
    return InMemoryWizardSessionRepository()

# The Wizard Service (Singleton Service)
@lru_cache()
def get_wizard_service(
    session_repo: WizardSessionRepository = Depends(get_session_repository),
    source: RepositorySource = Depends(get_repository_source),
) -> WizardService:
    return WizardService(session_repository=session_repo, source=source)
