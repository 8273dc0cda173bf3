"""Workflow services: materialize clones, provision branches, orchestrate runs."""

from relbranch.services.errors import (
    CheckoutError,
    FilesystemError,
    RepositoryUnavailableError,
    WorkflowError,
    WorkflowFailure,
)
from relbranch.services.lock import WorkRootLock, acquire_lock
from relbranch.services.materializer import RepositoryMaterializer
from relbranch.services.provisioner import BranchProvisioner
from relbranch.services.workflow import PreparedProject, StableBranchWorkflow, parse_project_list

__all__ = [
    "BranchProvisioner",
    "CheckoutError",
    "FilesystemError",
    "PreparedProject",
    "RepositoryMaterializer",
    "RepositoryUnavailableError",
    "StableBranchWorkflow",
    "WorkRootLock",
    "WorkflowError",
    "WorkflowFailure",
    "acquire_lock",
    "parse_project_list",
]
