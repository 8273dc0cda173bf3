"""Tests for relbranch.services.provisioner."""

from __future__ import annotations

from pathlib import Path

from relbranch.core.result import Err, Ok
from relbranch.git.repository import Repository, clone
from relbranch.output.console import MockConsole
from relbranch.services.errors import CheckoutError
from relbranch.services.provisioner import BranchProvisioner
from relbranch.test._git import git, init_remote_repo, requires_git


def _clone(tmp_path: Path, branches: tuple[str, ...] = ("main", "develop")) -> Repository:
    remote = init_remote_repo(tmp_path / "remotes", "acme/doc-style", branches=branches)
    dest = tmp_path / "work" / "acme" / "doc-style"
    dest.parent.mkdir(parents=True)
    return clone(remote.as_uri(), dest).unwrap()


@requires_git
class TestCheckoutAndReset:
    def test_switches_to_local_branch(self, tmp_path: Path) -> None:
        repo = _clone(tmp_path)
        git(repo.path, "branch", "develop", "origin/develop")

        result = BranchProvisioner(console=MockConsole()).checkout_and_reset(repo, "develop")

        assert result == Ok(None)
        assert repo.current_branch() == "develop"

    def test_discards_modifications_and_local_commits(self, tmp_path: Path) -> None:
        repo = _clone(tmp_path)
        git(repo.path, "config", "user.email", "test@example.com")
        git(repo.path, "config", "user.name", "Test")
        git(repo.path, "checkout", "-b", "scratch")
        (repo.path / "pom.xml").write_text("scratch\n", encoding="utf-8")
        git(repo.path, "commit", "-am", "scratch work")
        (repo.path / "pom.xml").write_text("uncommitted\n", encoding="utf-8")
        console = MockConsole()

        result = BranchProvisioner(console=console).checkout_and_reset(
            repo, "main", project="doc-style"
        )

        assert result == Ok(None)
        assert repo.current_branch() == "main"
        assert (repo.path / "pom.xml").read_text(encoding="utf-8") == "<project/>\n"
        assert repo.status().unwrap().is_clean
        assert console.find("doc-style: discarding 1 local change(s)")

    def test_staged_changes_are_discarded(self, tmp_path: Path) -> None:
        repo = _clone(tmp_path)
        (repo.path / "extra.txt").write_text("staged\n", encoding="utf-8")
        git(repo.path, "add", "extra.txt")

        result = BranchProvisioner(console=MockConsole()).checkout_and_reset(repo, "main")

        assert result == Ok(None)
        assert not (repo.path / "extra.txt").exists()

    def test_branch_missing_locally(self, tmp_path: Path) -> None:
        repo = _clone(tmp_path)

        result = BranchProvisioner(console=MockConsole()).checkout_and_reset(
            repo, "develop", project="doc-style"
        )

        assert isinstance(result, Err)
        assert result.error.project == "doc-style"
        assert result.error.branch == "develop"
        assert "refs/heads/develop does not exist locally" in result.error.reason
        assert repo.current_branch() == "main"

    def test_empty_branch(self, tmp_path: Path) -> None:
        repo = _clone(tmp_path)
        result = BranchProvisioner(console=MockConsole()).checkout_and_reset(repo, "")
        assert isinstance(result, Err)
        assert "no origin branch" in result.error.reason


def test_working_tree_unavailable(tmp_path: Path) -> None:
    repo = Repository(tmp_path / "gone")

    result = BranchProvisioner(console=MockConsole()).checkout_and_reset(repo, "main")

    assert isinstance(result, Err)
    assert isinstance(result.error, CheckoutError)
    assert "working tree unavailable" in result.error.reason
