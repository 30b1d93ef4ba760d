"""Publish request model."""

from pydantic import BaseModel, field_validator


class PublishRequest(BaseModel):
    """A request to commit and push the current content."""

    message: str
    author: str

    @field_validator("message", "author")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    def commit_message(self) -> str:
        """Commit message with the author annotated on a trailing line."""
        return f"{self.message}\n\nAuthor: {self.author}"
