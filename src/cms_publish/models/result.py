"""Result model returned by publish and rollback operations."""

from typing import Optional

from pydantic import BaseModel


class OperationResult(BaseModel):
    """Outcome of a repository operation, returned to the caller as is."""

    success: bool
    message: str
    error: Optional[str] = None

    @classmethod
    def ok(cls, message: str) -> "OperationResult":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str, error: Optional[str] = None) -> "OperationResult":
        return cls(success=False, message=message, error=error)
