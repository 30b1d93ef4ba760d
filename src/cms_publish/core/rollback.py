"""Rollback of the most recent published commit."""

import logging

import git

from cms_publish.core.binding import RepositoryBinding
from cms_publish.core.publisher import push_with_upstream
from cms_publish.models.result import OperationResult

logger = logging.getLogger(__name__)


class RollbackOrchestrator:
    """Reverts the latest commit with a new commit and pushes the revert."""

    def __init__(self, binding: RepositoryBinding):
        self.binding = binding

    def rollback(self) -> OperationResult:
        """Revert HEAD. History is never rewritten."""
        initialized = self.binding.ensure_initialized()
        if not initialized.success:
            return initialized

        self.binding.prepare()

        try:
            latest = self.binding.head_commit()
            if latest is None:
                return OperationResult.failed("No commits to rollback")

            revert_hash = self.binding.revert_head()
            logger.info("Reverted %s as %s", latest.hash[:8], revert_hash[:8])
        except git.exc.GitError as e:
            logger.error("Rollback failed: %s", e)
            return OperationResult.failed("Failed to rollback changes", error=str(e))

        message = f"Successfully rolled back commit: {latest.message}"
        if self.binding.has_remote():
            push_error = push_with_upstream(self.binding)
            if push_error is not None:
                logger.warning("Push failed after revert: %s", push_error)
                message = f"{message} (push failed: {push_error})"

        return OperationResult.ok(message)
