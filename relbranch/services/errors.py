from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relbranch.catalog.errors import CatalogFormatError, ProjectNotFoundError


@dataclass(frozen=True, slots=True)
class FilesystemError:
    """A directory could not be created, removed or locked."""

    path: Path
    reason: str
    project: str | None = None
    hint: str | None = None

    @property
    def message(self) -> str:
        prefix = f"{self.project}: " if self.project else ""
        return f"{prefix}{self.reason}: {self.path}"


@dataclass(frozen=True, slots=True)
class RepositoryUnavailableError:
    """The remote could not be cloned (auth, network, missing remote)."""

    project: str
    url: str
    path: Path
    reason: str
    attempts: int = 1
    hint: str | None = "Check that the remote exists and that your SSH key is loaded"

    @property
    def message(self) -> str:
        tries = f" after {self.attempts} attempts" if self.attempts > 1 else ""
        return f"{self.project}: cannot clone {self.url} into {self.path}{tries}: {self.reason}"


@dataclass(frozen=True, slots=True)
class CheckoutError:
    """The branch is missing locally or the working tree is unusable."""

    project: str
    branch: str
    path: Path
    reason: str
    hint: str | None = None

    @property
    def message(self) -> str:
        return f"{self.project}: cannot checkout {self.branch or '<empty>'} in {self.path}: {self.reason}"


MaterializeError = FilesystemError | RepositoryUnavailableError

WorkflowError = (
    CatalogFormatError
    | ProjectNotFoundError
    | FilesystemError
    | RepositoryUnavailableError
    | CheckoutError
)


@dataclass(frozen=True, slots=True)
class WorkflowFailure:
    """All errors of a run: one in fail-fast mode, possibly more with keep-going.

    Attributes:
        errors: Errors in the order they occurred
        skipped: Requested names never attempted because the run stopped early
    """

    errors: tuple[WorkflowError, ...]
    skipped: tuple[str, ...] = ()

    @property
    def first(self) -> WorkflowError:
        return self.errors[0]
