"""Read-only views of the content repository for display."""

import logging
from typing import Any, Dict, List

from cms_publish.core.binding import RepositoryBinding
from cms_publish.models.commit import CommitRecord
from cms_publish.models.status import WorkingTreeStatus

logger = logging.getLogger(__name__)


class HistoryReader:
    """Commit history and working tree status. Never raises."""

    def __init__(self, binding: RepositoryBinding):
        self.binding = binding

    def get_history(self, limit: int = 10) -> List[CommitRecord]:
        """Get up to ``limit`` commits, most recent first."""
        try:
            return self.binding.log(limit)
        except Exception as e:
            logger.error("Failed to get git history: %s", e)
            return []

    def get_status(self) -> WorkingTreeStatus:
        """Get the working tree status, reported clean if it cannot be read."""
        try:
            return self.binding.status()
        except Exception as e:
            logger.error("Failed to get git status: %s", e)
            return WorkingTreeStatus(clean=True, error=f"Failed to get status: {e}")

    def snapshot(self, limit: int = 10) -> Dict[str, Any]:
        """Status and recent history together, as shown after each action."""
        return {
            "status": self.get_status().model_dump(),
            "history": [record.model_dump(mode="json") for record in self.get_history(limit)],
        }
