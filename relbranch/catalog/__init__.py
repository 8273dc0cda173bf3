"""Project catalog: data model, loading and lookup."""

from relbranch.catalog.errors import CatalogFormatError, ProjectNotFoundError
from relbranch.catalog.index import CatalogIndex, load_catalog, read_catalog
from relbranch.catalog.model import Project, Release

__all__ = [
    "CatalogFormatError",
    "CatalogIndex",
    "Project",
    "ProjectNotFoundError",
    "Release",
    "load_catalog",
    "read_catalog",
]
