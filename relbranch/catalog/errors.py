from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CatalogFormatError:
    """The catalog source is unreadable or not a well-formed list of projects."""

    message: str
    path: Path | None = None
    entry: int | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ProjectNotFoundError:
    """No catalog entry carries the requested name."""

    name: str
    available: tuple[str, ...] = ()
    hint: str | None = None

    @property
    def message(self) -> str:
        return f"No project {self.name} found in the catalog"
