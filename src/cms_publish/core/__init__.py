"""Core git operations for cms-publish."""

from .binding import PushError, PushFailure, RepositoryBinding
from .credentials import CredentialProvider, TokenCredentialProvider
from .history import HistoryReader
from .publisher import PublishOrchestrator
from .rollback import RollbackOrchestrator

__all__ = [
    "CredentialProvider",
    "HistoryReader",
    "PublishOrchestrator",
    "PushError",
    "PushFailure",
    "RepositoryBinding",
    "RollbackOrchestrator",
    "TokenCredentialProvider",
]
