"""Commit-and-push workflow for published content."""

import logging
from typing import Optional

import git

from cms_publish.core.binding import PushError, PushFailure, RepositoryBinding
from cms_publish.models.request import PublishRequest
from cms_publish.models.result import OperationResult

logger = logging.getLogger(__name__)


def push_with_upstream(binding: RepositoryBinding) -> Optional[str]:
    """Push the current branch, tracking the default branch on first push.

    Returns:
        None when the push went through, otherwise the failure detail.
    """
    try:
        binding.push()
        return None
    except PushError as e:
        if e.kind is not PushFailure.NO_UPSTREAM:
            return e.detail
        logger.info(
            "Setting upstream branch %s/%s",
            binding.settings.remote_name,
            binding.settings.default_branch,
        )

    try:
        binding.push_set_upstream(binding.settings.default_branch)
        return None
    except PushError as e:
        return e.detail


class PublishOrchestrator:
    """Stages the content paths, commits them and pushes the result."""

    def __init__(self, binding: RepositoryBinding):
        self.binding = binding

    def commit_and_push(self, request: PublishRequest) -> OperationResult:
        """Commit the current content and push it to the remote.

        A failed push does not fail the operation: the commit is kept
        locally and goes out with the next successful push.
        """
        initialized = self.binding.ensure_initialized()
        if not initialized.success:
            return initialized

        self.binding.prepare()

        try:
            self.binding.stage(self.binding.settings.publish_paths)
            status = self.binding.status()
            if not status.has_staged_changes:
                return OperationResult.ok("No changes to commit")

            commit_hash = self.binding.commit(request.commit_message())
            logger.info("Committed %s: %s", commit_hash[:8], request.message)
        except git.exc.GitError as e:
            logger.error("Commit failed: %s", e)
            return OperationResult.failed(
                "Failed to commit and push changes", error=str(e)
            )

        if not self.binding.has_remote():
            logger.info("No remote repository configured, commit saved locally")
            return OperationResult.ok(
                f"Committed locally (no remote configured): {request.message}"
            )

        push_error = push_with_upstream(self.binding)
        if push_error is not None:
            logger.warning("Push failed, but commit was successful: %s", push_error)
            return OperationResult.ok(
                f"Committed successfully, but push failed: {push_error}"
            )

        logger.info("Changes pushed to remote repository")
        return OperationResult.ok(f"Successfully committed and pushed: {request.message}")
