"""Shared fixtures for cms-publish tests."""

import tempfile
from pathlib import Path

import pytest
from git import Repo

from cms_publish.config import Settings, get_settings
from cms_publish.core.binding import RepositoryBinding

SETTINGS_ENV_VARS = [
    "REPO_PATH",
    "REPO_URL",
    "REMOTE_NAME",
    "DEFAULT_BRANCH",
    "PUBLISH_PATHS",
    "GIT_USER_NAME",
    "GIT_USER_EMAIL",
    "GITHUB_TOKEN",
    "HISTORY_LIMIT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's environment out of Settings."""
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def content_dir():
    """Create a site directory with content written by the content store."""
    with tempfile.TemporaryDirectory() as temp_dir:
        site = Path(temp_dir) / "site"
        (site / "data").mkdir(parents=True)
        (site / "public").mkdir()
        (site / "data" / "content.json").write_text('[{"id": "hero"}]\n')
        (site / "public" / "hero.html").write_text("<h1>Welcome</h1>\n")
        yield site


@pytest.fixture
def bare_remote():
    """Create a bare repository to push to."""
    with tempfile.TemporaryDirectory() as temp_dir:
        remote_path = Path(temp_dir) / "remote.git"
        Repo.init(remote_path, bare=True)
        yield remote_path


@pytest.fixture
def make_binding():
    """Build a binding for a directory with explicit settings."""

    def _make(repo_path: Path, **overrides) -> RepositoryBinding:
        settings = Settings(_env_file=None, repo_path=repo_path, **overrides)
        return RepositoryBinding(settings)

    return _make
