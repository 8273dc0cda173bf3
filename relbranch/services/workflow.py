"""Stable-branch preparation workflow.

For each requested project, in order:

    resolve -> materialize -> name stable branch -> checkout origin branch

The stable branch itself is only named here, never created: the run leaves
each clone on its release origin branch, ready for the branch to be cut.

By default the first error ends the run (projects already prepared stay as
they are). With keep_going=True every project is attempted and all errors
are reported together.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from relbranch.catalog.index import CatalogIndex
from relbranch.catalog.model import Project
from relbranch.core.result import Err, Ok, Result
from relbranch.output.console import ConsoleProtocol
from relbranch.release.naming import SNAPSHOT_SUFFIX, STABLE_PREFIX, stable_branch_name

from .errors import WorkflowError, WorkflowFailure
from .materializer import RepositoryMaterializer
from .provisioner import BranchProvisioner

__all__ = ["PreparedProject", "StableBranchWorkflow", "parse_project_list"]


@dataclass(frozen=True, slots=True)
class PreparedProject:
    project: Project
    path: Path
    origin_branch: str
    stable_branch: str


def parse_project_list(raw: str) -> list[str]:
    """Split "platform-ui, doc-style" into names, dropping blanks."""
    return [name.strip() for name in raw.split(",") if name.strip()]


class StableBranchWorkflow:
    def __init__(
        self,
        *,
        catalog: CatalogIndex,
        materializer: RepositoryMaterializer,
        provisioner: BranchProvisioner,
        console: ConsoleProtocol,
        snapshot_suffix: str = SNAPSHOT_SUFFIX,
        stable_prefix: str = STABLE_PREFIX,
    ) -> None:
        self._catalog = catalog
        self._materializer = materializer
        self._provisioner = provisioner
        self._console = console
        self._snapshot_suffix = snapshot_suffix
        self._stable_prefix = stable_prefix

    def run(
        self,
        names: Sequence[str],
        *,
        keep_going: bool = False,
    ) -> Result[list[PreparedProject], WorkflowFailure]:
        prepared: list[PreparedProject] = []
        errors: list[WorkflowError] = []

        for index, name in enumerate(names):
            result = self.prepare(name)
            match result:
                case Ok(done):
                    prepared.append(done)
                case Err(error):
                    errors.append(error)
                    if not keep_going:
                        return Err(
                            WorkflowFailure(errors=(error,), skipped=tuple(names[index + 1 :]))
                        )

        if errors:
            return Err(WorkflowFailure(errors=tuple(errors)))
        return Ok(prepared)

    def touches_work_root(self, names: Sequence[str], *, keep_going: bool = False) -> bool:
        """Whether `run(names)` would reach a materialize step.

        Without keep_going the run stops at the first unknown name, so only
        the first name decides.
        """
        if not names:
            return False
        if keep_going:
            return any(isinstance(self._catalog.resolve(name), Ok) for name in names)
        return isinstance(self._catalog.resolve(names[0]), Ok)

    def prepare(self, name: str) -> Result[PreparedProject, WorkflowError]:
        """Run every step for a single project."""
        self._console.header(f"Creating stable branch for project {name}")

        resolved = self._catalog.resolve(name)
        if isinstance(resolved, Err):
            return resolved
        project = resolved.value
        self._console.info(
            "project found",
            name=project.name,
            orga=project.organization,
            current_version=project.release.current_snapshot_version,
            next_version=project.release.next_snapshot_version,
        )

        materialized = self._materializer.materialize(project)
        if isinstance(materialized, Err):
            return materialized
        repo = materialized.value

        stable_branch = stable_branch_name(
            project.release.current_snapshot_version,
            suffix=self._snapshot_suffix,
            prefix=self._stable_prefix,
        )
        origin_branch = project.release.branch
        self._console.info(
            "Creating stable branch",
            project=project.name,
            originBranch=origin_branch,
            stableBranch=stable_branch,
        )

        checked_out = self._provisioner.checkout_and_reset(repo, origin_branch, project=project.name)
        if isinstance(checked_out, Err):
            return checked_out

        # stable_branch is not created; it is handed back for the next step.
        self._console.success(f"{project.name} is on {origin_branch}, stable branch {stable_branch}")
        return Ok(
            PreparedProject(
                project=project,
                path=repo.path,
                origin_branch=origin_branch,
                stable_branch=stable_branch,
            )
        )
