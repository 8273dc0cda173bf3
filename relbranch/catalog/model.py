from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Release:
    """Release coordinates recorded for a project.

    Attributes:
        branch: Branch the stable branch is cut from
        version: Version being released
        current_snapshot_version: Snapshot version currently on `branch`
        next_snapshot_version: Snapshot version after the release
    """

    branch: str = ""
    version: str = ""
    current_snapshot_version: str = ""
    next_snapshot_version: str = ""


@dataclass(frozen=True, slots=True)
class Project:
    """A catalog entry. `organization` maps to the `git_organization` field."""

    name: str
    organization: str
    labels: str = ""
    maven_property_version: str = ""
    release: Release = field(default_factory=Release)

    @property
    def slug(self) -> str:
        """`<organization>/<name>`, as used in remote URLs and clone paths."""
        return f"{self.organization}/{self.name}"
