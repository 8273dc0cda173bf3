from __future__ import annotations

from relbranch.core.result import Err, Ok, Result
from relbranch.git.repository import Repository
from relbranch.output.console import ConsoleProtocol

from .errors import CheckoutError

__all__ = ["BranchProvisioner"]


class BranchProvisioner:
    """Force a clone's working tree onto a local branch.

    Local modifications to tracked files are discarded without being saved.
    Untracked files are left alone.
    """

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def checkout_and_reset(
        self,
        repo: Repository,
        branch: str,
        *,
        project: str | None = None,
    ) -> Result[None, CheckoutError]:
        name = project or repo.path.name
        self._console.info(f"checkout and reset {branch}", project=name)

        def fail(reason: str, hint: str | None = None) -> Result[None, CheckoutError]:
            return Err(CheckoutError(project=name, branch=branch, path=repo.path, reason=reason, hint=hint))

        if not branch:
            return fail("no origin branch recorded", hint="Set release.branch in the catalog")

        status = repo.status()
        if isinstance(status, Err):
            return fail(f"working tree unavailable ({status.error.message})")

        if not repo.has_local_branch(branch):
            return fail(
                f"branch refs/heads/{branch} does not exist locally",
                hint=f"Check release.branch for {name} in the catalog",
            )

        discarded = status.value.tracked_changes
        if discarded:
            self._console.warning(f"{name}: discarding {len(discarded)} local change(s)")

        checkout = repo.checkout_force(branch)
        if isinstance(checkout, Err):
            return fail(checkout.error.message)

        reset = repo.reset_hard(f"refs/heads/{branch}")
        if isinstance(reset, Err):
            return fail(reset.error.message)

        return Ok(None)
