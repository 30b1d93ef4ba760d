"""Data models for cms-publish."""

from .commit import CommitRecord
from .request import PublishRequest
from .result import OperationResult
from .status import WorkingTreeStatus

__all__ = ["CommitRecord", "OperationResult", "PublishRequest", "WorkingTreeStatus"]
