"""Tests for relbranch.output.errors."""

from __future__ import annotations

from pathlib import Path

import pytest

from relbranch.catalog.errors import CatalogFormatError, ProjectNotFoundError
from relbranch.core.errors import ErrorCode
from relbranch.output.console import MockConsole
from relbranch.output.errors import (
    print_workflow_error,
    print_workflow_failure,
    workflow_error_exit_code,
)
from relbranch.services.errors import (
    CheckoutError,
    FilesystemError,
    RepositoryUnavailableError,
    WorkflowError,
    WorkflowFailure,
)

UNAVAILABLE = RepositoryUnavailableError(
    project="doc-style",
    url="git@github.com:acme/doc-style",
    path=Path("work/acme/doc-style"),
    reason="Repository not found.",
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (CatalogFormatError("catalog root must be a list"), ErrorCode.USER_ERROR),
        (ProjectNotFoundError(name="core"), ErrorCode.USER_ERROR),
        (FilesystemError(path=Path("work/acme"), reason="cannot create directory"), ErrorCode.IO_ERROR),
        (UNAVAILABLE, ErrorCode.NETWORK_ERROR),
        (
            CheckoutError(project="core", branch="main", path=Path("work/acme/core"), reason="x"),
            ErrorCode.GIT_ERROR,
        ),
    ],
)
def test_exit_codes(error: WorkflowError, code: ErrorCode) -> None:
    assert workflow_error_exit_code(error) == int(code)


def test_unavailable_names_project_path_and_cause() -> None:
    console = MockConsole()

    print_workflow_error(UNAVAILABLE, console)

    assert console.messages[0] == (
        "error: doc-style: cannot clone git@github.com:acme/doc-style into "
        "work/acme/doc-style: Repository not found."
    )
    assert console.messages[1].startswith("hint: Check that the remote exists")


def test_project_not_found_lists_available() -> None:
    console = MockConsole()
    print_workflow_error(ProjectNotFoundError(name="core", available=("doc-style", "ui")), console)
    assert console.messages == [
        "error: No project core found in the catalog",
        "Available: doc-style, ui",
    ]


def test_catalog_error_names_path() -> None:
    console = MockConsole()
    print_workflow_error(CatalogFormatError("catalog entry 2: 'name' is required", path=Path("c.json")), console)
    assert console.messages == ["error: invalid catalog c.json: catalog entry 2: 'name' is required"]


def test_failure_lists_skipped_projects() -> None:
    console = MockConsole()
    print_workflow_failure(WorkflowFailure(errors=(UNAVAILABLE,), skipped=("ui", "core")), console)
    assert console.messages[-1] == "not attempted: ui, core"
