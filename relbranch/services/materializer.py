"""Obtain a usable local clone for a catalog project.

Policy:
- The clone lives at `<work-root>/<organization>/<name>`.
- An existing clone is reused as-is (no fetch).
- Anything at that path that does not open as a repository is destroyed
  (or, with on_corrupt="quarantine", moved aside) and recloned. Uncommitted
  work in an unusable clone is lost.
- At most one run may use a work root at a time (see services.lock).
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from pathlib import Path

from relbranch.catalog.model import Project
from relbranch.core.config import Settings
from relbranch.core.result import Err, Ok, Result
from relbranch.git.repository import GitError, Repository, clone
from relbranch.output.console import ConsoleProtocol
from relbranch.platform.files import quarantine_path, remove_path

from .errors import FilesystemError, MaterializeError, RepositoryUnavailableError

__all__ = ["RepositoryMaterializer"]


class RepositoryMaterializer:
    def __init__(
        self,
        *,
        settings: Settings,
        console: ConsoleProtocol,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings
        self._console = console
        self._sleep = sleep

    def remote_url(self, project: Project) -> str:
        return f"{self._settings.git_host}:{project.slug}"

    def local_path(self, project: Project) -> Path:
        return self._settings.work_root / project.organization / project.name

    def materialize(self, project: Project) -> Result[Repository, MaterializeError]:
        """Return a handle on the project's local clone, cloning if needed."""
        url = self.remote_url(project)
        path = self.local_path(project)
        self._console.info("Materializing repository", gitUrl=url, directory=path)

        relative = (project.organization, project.name)
        if Path(*relative).parts != relative or ".." in relative:
            return Err(
                FilesystemError(
                    path=path,
                    reason="organization and name must each be a single directory name",
                    project=project.name,
                    hint="Fix the project entry in the catalog",
                )
            )

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(
                FilesystemError(
                    path=path.parent,
                    reason=f"cannot create directory ({e.strerror or e})",
                    project=project.name,
                )
            )

        opened = Repository.open(path)
        if isinstance(opened, Ok):
            self._console.info(f"Reusing existing repository {path}")
            return opened

        cleared = self._clear(project, path, opened.error)
        if isinstance(cleared, Err):
            return cleared

        return self._clone(project, url, path)

    def _clear(self, project: Project, path: Path, cause: GitError) -> Result[None, FilesystemError]:
        if not os.path.lexists(path):
            self._console.info(f"No repository at {path}, cloning it")
            return Ok(None)

        try:
            if self._settings.on_corrupt == "quarantine":
                moved = quarantine_path(path)
                self._console.warning(
                    f"cannot open {path} ({cause.message}); moved it to {moved} and recloning"
                )
            else:
                self._console.warning(
                    f"cannot open {path} ({cause.message}); removing it and recloning"
                )
                remove_path(path)
        except OSError as e:
            return Err(
                FilesystemError(
                    path=path,
                    reason=f"cannot clear unusable repository ({e.strerror or e})",
                    project=project.name,
                    hint="Remove the directory manually, then rerun",
                )
            )
        return Ok(None)

    def _clone(self, project: Project, url: str, path: Path) -> Result[Repository, MaterializeError]:
        attempts = max(1, self._settings.clone_attempts)
        last_error: GitError | None = None

        for attempt in range(1, attempts + 1):
            result = clone(url, path, timeout=self._settings.clone_timeout)
            if isinstance(result, Ok):
                self._console.success(f"cloned {project.slug}")
                return result

            last_error = result.error
            if attempt == attempts:
                break

            self._console.warning(
                f"clone attempt {attempt}/{attempts} of {url} failed: {last_error.message}"
            )
            try:
                remove_path(path)
            except OSError as e:
                return Err(
                    FilesystemError(
                        path=path,
                        reason=f"cannot remove partial clone ({e.strerror or e})",
                        project=project.name,
                    )
                )
            self._sleep(self._settings.clone_retry_delay * attempt)

        reason = last_error.message if last_error is not None else "clone failed"
        return Err(
            RepositoryUnavailableError(
                project=project.name,
                url=url,
                path=path,
                reason=reason,
                attempts=attempts,
            )
        )
