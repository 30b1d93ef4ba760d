"""Runtime configuration for cms-publish."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration read from the environment and an optional ``.env`` file.

    Every field is optional. Without ``REPO_URL`` commits stay local; without
    ``GITHUB_TOKEN`` the remote is addressed by its plain URL.
    ``PUBLISH_PATHS`` takes a comma-separated list (``data,public``) or a
    JSON array (``["data", "public"]``).
    """

    # Repository
    repo_path: Path = Field(default_factory=Path.cwd)
    repo_url: Optional[str] = None
    remote_name: str = "origin"
    default_branch: str = "main"
    publish_paths: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["data", "public"]
    )

    # Committer identity
    git_user_name: str = "CMS Bot"
    git_user_email: str = "cms@example.com"

    # Authentication for HTTPS pushes
    github_token: Optional[SecretStr] = None

    # Display
    history_limit: int = 10
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("publish_paths", mode="before")
    @classmethod
    def _split_paths(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [path.strip() for path in value.split(",") if path.strip()]

    @property
    def token(self) -> Optional[str]:
        """The plain access token, if one is configured."""
        if self.github_token is None:
            return None
        return self.github_token.get_secret_value() or None


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings instance."""
    return Settings()
