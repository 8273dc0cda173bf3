"""Git operations on a single local clone.

Usage:
    from relbranch.git import Repository, clone

    repo = Repository.open(Path("work/acme/doc-style"))
"""

from relbranch.git.repository import (
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
    clone,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
    "clone",
]
