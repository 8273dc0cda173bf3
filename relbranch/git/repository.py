"""Git repository abstraction.

All operations shell out to `git` and return Result types.

Usage:
    match Repository.open(path):
        case Ok(repo):
            repo.checkout_force("main")
        case Err(e):
            print(f"not usable: {e.message}")

    match clone("git@github.com:acme/doc-style", path):
        case Ok(repo):
            print(repo.current_branch())
        case Err(e):
            print(f"clone failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from relbranch.core.result import Err, Ok, Result
from relbranch.platform.process import ProcessError
from relbranch.platform.process import run as run_process
from relbranch.platform.process import run_streaming

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
    "clone",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    message = error.stderr.strip() or error.stdout.strip() or fallback
    return GitError(command=command, message=message, returncode=error.returncode)


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single `git status --porcelain` entry, e.g. xy=" M"."""

    xy: str
    path: str

    @property
    def is_untracked(self) -> bool:
        return self.xy == "??"


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed working tree status.

    Attributes:
        branch: Current branch name ("HEAD (no branch)" when detached)
        upstream: Upstream branch (e.g. "origin/main"), None if not set
        entries: Staged, unstaged and untracked entries
    """

    branch: str
    upstream: str | None = None
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return len(self.entries) == 0

    @property
    def tracked_changes(self) -> list[StatusEntry]:
        """Entries a forced checkout would discard."""
        return [e for e in self.entries if not e.is_untracked]


class Repository:
    """Handle on a local clone.

    Attributes:
        path: Path to the repository root (containing .git)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"Repository({str(self.path)!r})"

    @classmethod
    def open(cls, path: Path) -> Result[Repository, GitError]:
        """Open an existing repository rooted exactly at path.

        Fails if path is missing, is not a directory, is nested inside some
        other repository without being one itself, or has no valid HEAD
        commit (e.g. a clone interrupted before checkout).
        """
        if not path.exists():
            return Err(GitError(command="open", message=f"repository does not exist: {path}"))
        if not path.is_dir():
            return Err(GitError(command="open", message=f"not a directory: {path}"))

        repo = cls(path)
        toplevel = repo._run(["rev-parse", "--show-toplevel"])
        if isinstance(toplevel, Err):
            return Err(_git_error("rev-parse", toplevel.error, f"not a git repository: {path}"))
        if Path(toplevel.value.strip()).resolve() != path.resolve():
            return Err(
                GitError(
                    command="rev-parse",
                    message=f"not a git repository root: {path} (inside {toplevel.value.strip()})",
                )
            )

        head = repo._run(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
        if isinstance(head, Err):
            return Err(_git_error("rev-parse", head.error, f"repository has no valid HEAD: {path}"))

        return Ok(repo)

    def status(self) -> Result[GitStatus, GitError]:
        """Run `git status --porcelain=v1 -b` and parse the output."""
        result = self._run(["status", "--porcelain=v1", "-b"])
        match result:
            case Err(e):
                return Err(_git_error("status", e, "git status failed"))
            case Ok(stdout):
                return Ok(_parse_status(stdout))

    def current_branch(self) -> str | None:
        """Current branch name, None if detached HEAD or error."""
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def has_local_branch(self, branch: str) -> bool:
        result = self._run(["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"])
        return isinstance(result, Ok)

    def checkout_force(self, branch: str) -> Result[None, GitError]:
        """Switch to a local branch, throwing away local modifications."""
        result = self._run(["checkout", "--force", branch, "--"])
        if isinstance(result, Err):
            return Err(_git_error("checkout", result.error, f"checkout of {branch} failed"))
        return Ok(None)

    def reset_hard(self, ref: str) -> Result[None, GitError]:
        result = self._run(["reset", "--hard", "--quiet", ref])
        if isinstance(result, Err):
            return Err(_git_error("reset", result.error, f"reset to {ref} failed"))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )


def clone(
    url: str,
    dest: Path,
    *,
    recurse_submodules: bool = True,
    timeout: float | None = None,
) -> Result[Repository, GitError]:
    """Clone url into dest, streaming progress to the terminal.

    dest must not exist (or be an empty directory); its parent must exist.
    """
    cmd = ["git", "clone", "--progress"]
    if recurse_submodules:
        cmd.append("--recurse-submodules")
    cmd.extend([url, str(dest)])

    result = run_streaming(cmd, cwd=dest.parent, timeout=timeout)
    if isinstance(result, Err):
        error = result.error
        detail = error.stderr.strip() or f"git clone exited with code {error.returncode}"
        return Err(GitError(command="clone", message=detail, returncode=error.returncode))
    return Ok(Repository(dest))


def _parse_status(output: str) -> GitStatus:
    lines = [ln for ln in output.splitlines() if ln.strip()]
    if not lines:
        return GitStatus(branch="")

    branch, upstream = _parse_branch_line(lines[0])
    entries = tuple(
        StatusEntry(xy=line[:2], path=line[3:]) for line in lines[1:] if len(line) >= 4
    )
    return GitStatus(branch=branch, upstream=upstream, entries=entries)


def _parse_branch_line(line: str) -> tuple[str, str | None]:
    """Parse `## branch...upstream [ahead N]` into (branch, upstream)."""
    s = line.strip()
    if s.startswith("##"):
        s = s[2:].lstrip()
    s = s.split(" [", 1)[0].strip()
    if "..." in s:
        left, right = s.split("...", 1)
        return (left.strip(), right.strip())
    return (s, None)
