"""Commit model for published content history."""

from datetime import datetime

from pydantic import BaseModel


class CommitRecord(BaseModel):
    """Read-only projection of a commit in the content repository."""

    hash: str
    message: str  # Summary line
    body: str = ""
    author_name: str
    author_email: str
    date: datetime

    @classmethod
    def from_commit(cls, commit) -> "CommitRecord":
        """Build a record from a GitPython commit object."""
        full_message = commit.message.strip()
        summary, _, body = full_message.partition("\n")
        return cls(
            hash=commit.hexsha,
            message=summary,
            body=body.strip(),
            author_name=commit.author.name or "",
            author_email=commit.author.email or "",
            date=commit.committed_datetime,
        )
