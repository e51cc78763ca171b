from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Command skip keys (e.g. "push:command") whose confirmation step is skipped
    SKIP_CONFIRMATIONS: List[str] = []

    # Git Configuration
    # Working trees offered as push candidates. Empty means the current directory.
    REPOSITORY_PATHS: List[str] = []
    GIT_EXECUTABLE: str = "git"

    LOG_LEVEL: str = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
