"""Error presentation utilities.

Centralized error formatting and exit code mapping for the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relbranch.catalog.errors import CatalogFormatError, ProjectNotFoundError
from relbranch.core.errors import ErrorCode
from relbranch.output.console import Style
from relbranch.services.errors import (
    CheckoutError,
    FilesystemError,
    RepositoryUnavailableError,
    WorkflowError,
    WorkflowFailure,
)

if TYPE_CHECKING:
    from relbranch.output.console import ConsoleProtocol

__all__ = ["print_workflow_error", "print_workflow_failure", "workflow_error_exit_code"]


def print_workflow_error(error: WorkflowError, console: ConsoleProtocol) -> None:
    """Print one error with its project, path and cause."""
    match error:
        case CatalogFormatError(message=message, path=path):
            console.error(f"invalid catalog {path}: {message}" if path else f"invalid catalog: {message}")
        case ProjectNotFoundError(available=available):
            console.error(error.message)
            if available:
                console.print(f"Available: {', '.join(available)}", Style.DIM)
        case FilesystemError() | RepositoryUnavailableError() | CheckoutError():
            console.error(error.message)

    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def print_workflow_failure(failure: WorkflowFailure, console: ConsoleProtocol) -> None:
    for error in failure.errors:
        print_workflow_error(error, console)
    if failure.skipped:
        console.print(f"not attempted: {', '.join(failure.skipped)}", Style.DIM)


def workflow_error_exit_code(error: WorkflowError) -> int:
    match error:
        case CatalogFormatError() | ProjectNotFoundError():
            return int(ErrorCode.USER_ERROR)
        case FilesystemError():
            return int(ErrorCode.IO_ERROR)
        case RepositoryUnavailableError():
            return int(ErrorCode.NETWORK_ERROR)
        case CheckoutError():
            return int(ErrorCode.GIT_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
