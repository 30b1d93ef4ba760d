"""Working tree status model."""

from typing import List, Optional

from pydantic import BaseModel


class WorkingTreeStatus(BaseModel):
    """Working tree state of the content repository.

    ``error`` is only set when the status could not be read, in which case
    the tree is reported clean so polling callers are not blocked.
    """

    clean: bool
    modified: List[str] = []
    created: List[str] = []
    deleted: List[str] = []
    staged: List[str] = []
    not_added: List[str] = []
    error: Optional[str] = None

    @property
    def has_staged_changes(self) -> bool:
        """Check if anything is staged for the next commit."""
        return bool(self.staged)

    @classmethod
    def from_porcelain(cls, output: str) -> "WorkingTreeStatus":
        """Parse the output of ``git status --porcelain=v1 -z --branch``.

        Entries are NUL separated and paths are never quoted. A rename or
        copy entry is followed by a separate entry holding the old path.
        """
        modified: List[str] = []
        created: List[str] = []
        deleted: List[str] = []
        staged: List[str] = []
        not_added: List[str] = []

        entries = iter(output.split("\0"))
        for entry in entries:
            # Branch header from --branch
            if entry.startswith("##") or len(entry) < 4:
                continue
            index_state, tree_state, path = entry[0], entry[1], entry[3:]
            if "R" in (index_state, tree_state) or "C" in (index_state, tree_state):
                next(entries, None)

            if index_state == "?" and tree_state == "?":
                not_added.append(path)
                continue
            if index_state not in (" ", "?"):
                staged.append(path)
            if index_state == "A":
                created.append(path)
            if "M" in (index_state, tree_state):
                modified.append(path)
            if "D" in (index_state, tree_state):
                deleted.append(path)

        clean = not (modified or created or deleted or staged or not_added)
        return cls(
            clean=clean,
            modified=modified,
            created=created,
            deleted=deleted,
            staged=staged,
            not_added=not_added,
        )
