"""Binding between the process and the content git repository."""

import logging
from enum import Enum
from typing import List, Optional

import git
from git import Repo

from cms_publish.config import Settings
from cms_publish.core.credentials import (
    CredentialProvider,
    TokenCredentialProvider,
    redact_url,
    scrub,
)
from cms_publish.models.commit import CommitRecord
from cms_publish.models.result import OperationResult
from cms_publish.models.status import WorkingTreeStatus

logger = logging.getLogger(__name__)


class PushFailure(str, Enum):
    """Why a push was refused."""

    NO_UPSTREAM = "no_upstream"
    REJECTED = "rejected"


class PushError(Exception):
    """Raised when pushing to the remote fails."""

    def __init__(self, kind: PushFailure, detail: str):
        super().__init__(detail)
        self.kind = kind
        self.detail = detail


class RepositoryBinding:
    """Owns the git repository that holds the published content.

    One binding is created per process and handed to the orchestrators.
    Configuration writes (identity, remote URL) are repeated on every
    operation so that a rotated token is picked up without a restart.
    """

    def __init__(
        self,
        settings: Settings,
        credentials: Optional[CredentialProvider] = None,
    ):
        self.settings = settings
        self.path = settings.repo_path.resolve()
        self.credentials = credentials or TokenCredentialProvider()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        """Get the git repository, opening it on first use."""
        if self._repo is None:
            self._repo = Repo(self.path)
        return self._repo

    # === Setup ===

    def ensure_initialized(self) -> OperationResult:
        """Open the working directory as a repository, running git init if needed."""
        try:
            try:
                self._repo = Repo(self.path)
            except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
                self.path.mkdir(parents=True, exist_ok=True)
                self._repo = Repo.init(
                    self.path, initial_branch=self.settings.default_branch
                )
                logger.info("Initialized git repository in %s", self.path)
        except (git.exc.GitError, OSError) as e:
            logger.error("Could not initialize git repository in %s: %s", self.path, e)
            return OperationResult.failed(
                "Failed to initialize Git repository", error=str(e)
            )
        return OperationResult.ok("Git repository ready")

    def ensure_identity(self) -> None:
        """Set the committer name and email from the settings."""
        try:
            with self.repo.config_writer() as config:
                config.set_value("user", "name", self.settings.git_user_name)
                config.set_value("user", "email", self.settings.git_user_email)
        except Exception as e:
            logger.warning("Git identity setup failed: %s", e)

    def ensure_remote(self, token: Optional[str] = None) -> None:
        """Create or rewrite the publish remote.

        Args:
            token: Access token to embed in the URL. Defaults to the
                configured token; the plain URL is used when neither is set.
        """
        base_url = self.settings.repo_url
        if not base_url:
            logger.debug("No remote URL configured, commits stay local")
            return

        token = token or self.settings.token
        url = self.credentials.authenticated_url(base_url, token)
        name = self.settings.remote_name
        try:
            if name in [remote.name for remote in self.repo.remotes]:
                self.repo.remote(name).set_url(url)
                logger.info("Updated remote %s: %s", name, redact_url(url))
            else:
                self.repo.create_remote(name, url)
                logger.info("Configured remote %s: %s", name, redact_url(url))
        except Exception as e:
            logger.warning(
                "Failed to configure remote %s: %s", name, scrub(str(e), token)
            )

    def prepare(self) -> None:
        """Refresh identity and remote configuration before an operation."""
        self.ensure_identity()
        self.ensure_remote()

    # === Working tree ===

    def stage(self, paths: List[str]) -> None:
        """Stage additions, modifications and deletions under the given paths."""
        present = [path for path in paths if self._is_stageable(path)]
        if not present:
            logger.debug("Nothing to stage under %s", paths)
            return
        self.repo.git.add("--all", "--", *present)

    def _is_stageable(self, path: str) -> bool:
        if (self.path / path).exists():
            return True
        # Deleted directories are still known to the index
        return bool(self.repo.git.ls_files("--", path))

    def status(self) -> WorkingTreeStatus:
        """Read the working tree status."""
        output = self.repo.git.status("--porcelain=v1", "-z", "--branch")
        return WorkingTreeStatus.from_porcelain(output)

    def commit(self, message: str) -> str:
        """Commit the staged changes and return the new commit hash."""
        self.repo.git.commit("-m", message)
        return self.repo.head.commit.hexsha

    # === History ===

    def has_commits(self) -> bool:
        """Check if HEAD points at a commit."""
        return self.repo.head.is_valid()

    def head_commit(self) -> Optional[CommitRecord]:
        """Get the most recent commit, if any."""
        if not self.has_commits():
            return None
        return CommitRecord.from_commit(self.repo.head.commit)

    def log(self, limit: int) -> List[CommitRecord]:
        """Get up to ``limit`` commits, most recent first."""
        if limit <= 0 or not self.has_commits():
            return []
        return [
            CommitRecord.from_commit(commit)
            for commit in self.repo.iter_commits(max_count=limit)
        ]

    def revert_head(self) -> str:
        """Create a commit reversing HEAD and return its hash."""
        self.repo.git.revert("--no-edit", "HEAD")
        return self.repo.head.commit.hexsha

    # === Remote ===

    def has_remote(self) -> bool:
        """Check if the publish remote exists."""
        return self.settings.remote_name in [remote.name for remote in self.repo.remotes]

    def remote_url(self) -> Optional[str]:
        """Get the configured URL of the publish remote."""
        if not self.has_remote():
            return None
        return self.repo.remote(self.settings.remote_name).url

    def push(self) -> None:
        """Push the current branch to its upstream.

        Raises:
            PushError: with ``PushFailure.NO_UPSTREAM`` when the branch does
                not track a remote branch yet, ``PushFailure.REJECTED`` for
                any other failure.
        """
        tracking = self._tracking_branch()
        try:
            if tracking is None:
                self.repo.git.push()
            else:
                self.repo.git.push(tracking.remote_name, f"HEAD:{tracking.remote_head}")
        except git.exc.GitCommandError as e:
            kind = PushFailure.NO_UPSTREAM if tracking is None else PushFailure.REJECTED
            raise PushError(kind, self._push_detail(e)) from e

    def push_set_upstream(self, branch: str) -> None:
        """Push HEAD to ``branch`` on the remote and track it."""
        try:
            self.repo.git.push(
                "--set-upstream", self.settings.remote_name, f"HEAD:{branch}"
            )
        except git.exc.GitCommandError as e:
            raise PushError(PushFailure.REJECTED, self._push_detail(e)) from e

    def _tracking_branch(self) -> Optional[git.RemoteReference]:
        try:
            return self.repo.active_branch.tracking_branch()
        except TypeError:
            # Detached HEAD
            return None

    def _push_detail(self, error: git.exc.GitCommandError) -> str:
        detail = (error.stderr or "").strip()
        if detail.startswith("stderr:"):
            detail = detail[len("stderr:"):].strip().strip("'")
        detail = detail or str(error)
        return scrub(detail, self.settings.token)
