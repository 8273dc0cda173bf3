"""Catalog loading and lookup.

The catalog is a JSON list of project records:

    [
      {
        "name": "doc-style",
        "git_organization": "acme",
        "labels": "docs",
        "maven_property_version": "doc-style.version",
        "release": {
          "branch": "main",
          "version": "2.1.0",
          "current_snapshot_version": "2.1.0-SNAPSHOT",
          "next_snapshot_version": "2.2.0-SNAPSHOT"
        }
      }
    ]

A catalog is loaded once, completely or not at all, and is read-only after.
"""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from relbranch.core.result import Err, Ok, Result
from relbranch.core.structured import (
    FieldTypeError,
    StrDict,
    as_obj_list,
    as_str_dict,
    require_str,
    require_table,
)

from .errors import CatalogFormatError, ProjectNotFoundError
from .model import Project, Release

__all__ = ["CatalogIndex", "load_catalog", "read_catalog"]

_FORBIDDEN_SEGMENT_CHARS = ("/", "\\", "\0")


@dataclass(frozen=True, slots=True)
class CatalogIndex:
    """Immutable, ordered collection of projects with first-match lookup."""

    projects: tuple[Project, ...] = ()

    def resolve(self, name: str) -> Result[Project, ProjectNotFoundError]:
        for project in self.projects:
            if project.name == name:
                return Ok(project)
        return Err(ProjectNotFoundError(name=name, available=self.names()))

    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.projects)

    def duplicates(self) -> tuple[str, ...]:
        """Names present more than once; lookup silently picks the first."""
        counts = Counter(self.names())
        return tuple(name for name, count in counts.items() if count > 1)

    def __iter__(self) -> Iterator[Project]:
        return iter(self.projects)

    def __len__(self) -> int:
        return len(self.projects)


def _require_path_segment(item: StrDict, key: str) -> str:
    """Read a field that becomes one directory level under the work root."""
    value = require_str(item, key)
    if not value:
        raise ValueError(f"'{key}' is required")
    if value in (".", "..") or any(c in value for c in _FORBIDDEN_SEGMENT_CHARS):
        raise ValueError(f"'{key}' must be a single path segment, got {value!r}")
    return value


def _parse_project(item: StrDict) -> Project:
    name = _require_path_segment(item, "name")
    organization = _require_path_segment(item, "git_organization")

    release = require_table(item, "release")
    return Project(
        name=name,
        organization=organization,
        labels=require_str(item, "labels"),
        maven_property_version=require_str(item, "maven_property_version"),
        release=Release(
            branch=require_str(release, "branch"),
            version=require_str(release, "version"),
            current_snapshot_version=require_str(release, "current_snapshot_version"),
            next_snapshot_version=require_str(release, "next_snapshot_version"),
        ),
    )


def load_catalog(data: bytes, *, path: Path | None = None) -> Result[CatalogIndex, CatalogFormatError]:
    """Parse catalog bytes into a CatalogIndex.

    Args:
        data: Raw catalog content (UTF-8 JSON)
        path: Source location, only used in error messages

    Returns:
        Ok(CatalogIndex), or Err(CatalogFormatError) for any malformed entry
    """
    try:
        raw: object = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        return Err(CatalogFormatError(f"catalog is not valid UTF-8: {e}", path=path))
    except json.JSONDecodeError as e:
        return Err(CatalogFormatError(f"catalog is not valid JSON: {e}", path=path))
    except RecursionError:
        return Err(CatalogFormatError("catalog is nested too deeply", path=path))

    items = as_obj_list(raw)
    if items is None:
        return Err(
            CatalogFormatError(
                f"catalog root must be a list of projects, got {type(raw).__name__}",
                path=path,
            )
        )

    projects: list[Project] = []
    for index, item in enumerate(items):
        entry = as_str_dict(item)
        if entry is None:
            return Err(
                CatalogFormatError(
                    f"catalog entry {index} must be an object",
                    path=path,
                    entry=index,
                )
            )
        try:
            projects.append(_parse_project(entry))
        except (FieldTypeError, ValueError) as e:
            return Err(
                CatalogFormatError(
                    f"catalog entry {index}: {e}",
                    path=path,
                    entry=index,
                )
            )

    return Ok(CatalogIndex(projects=tuple(projects)))


def read_catalog(path: Path) -> Result[CatalogIndex, CatalogFormatError]:
    """Read and parse a catalog file."""
    try:
        data = path.read_bytes()
    except OSError as e:
        return Err(
            CatalogFormatError(
                f"error reading catalog file {path}: {e.strerror or e}",
                path=path,
                hint="Pass the path of the catalog JSON file as first argument",
            )
        )
    return load_catalog(data, path=path)
