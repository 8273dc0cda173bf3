from __future__ import annotations

from pathlib import Path

import typer

from relbranch import __version__
from relbranch.catalog.index import read_catalog
from relbranch.cli.context import build_context
from relbranch.core.errors import ErrorCode
from relbranch.core.result import Err, Ok
from relbranch.output.console import Style
from relbranch.output.errors import (
    print_workflow_error,
    print_workflow_failure,
    workflow_error_exit_code,
)
from relbranch.services.lock import acquire_lock
from relbranch.services.materializer import RepositoryMaterializer
from relbranch.services.provisioner import BranchProvisioner
from relbranch.services.workflow import StableBranchWorkflow, parse_project_list

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def prepare(
    catalog: Path = typer.Argument(..., help="Path to the catalog file"),
    projects: str = typer.Argument(
        ...,
        help="Projects to release, comma separated, ex: platform-ui,doc-style",
    ),
    work_dir: Path | None = typer.Option(
        None,
        "--work-dir",
        help="Directory holding the clones [env: WORK_DIR, default: work]",
        show_default=False,
    ),
    git_host: str | None = typer.Option(
        None,
        "--git-host",
        help="Remote host prefix [env: RELBRANCH_GIT_HOST, default: git@github.com]",
        show_default=False,
    ),
    config: Path | None = typer.Option(None, "--config", help="Optional settings TOML file"),
    keep_going: bool = typer.Option(
        False, "--keep-going", help="Continue with remaining projects after a failure"
    ),
    quarantine: bool = typer.Option(
        False, "--quarantine", help="Move unusable clones aside instead of deleting them"
    ),
    clone_attempts: int | None = typer.Option(
        None, "--clone-attempts", min=1, help="Clone attempts per project (default 1)"
    ),
    no_lock: bool = typer.Option(False, "--no-lock", help="Do not lock the work directory"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Clone or reuse each project and reset it to its release origin branch."""
    ctx = build_context(
        config_path=config,
        work_dir=work_dir,
        git_host=git_host,
        clone_attempts=clone_attempts,
        quarantine=quarantine,
    )
    console = ctx.console
    settings = ctx.settings

    names = parse_project_list(projects)
    if not names:
        console.error("no project given")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    console.info(f"Loading catalog file {catalog}")
    loaded = read_catalog(catalog)
    if isinstance(loaded, Err):
        print_workflow_error(loaded.error, console)
        raise typer.Exit(code=workflow_error_exit_code(loaded.error))
    index = loaded.value
    console.info("Catalog loaded", projects=len(index))
    for name in index.duplicates():
        console.warning(f"project {name} appears more than once in the catalog; using the first")

    workflow = StableBranchWorkflow(
        catalog=index,
        materializer=RepositoryMaterializer(settings=settings, console=console),
        provisioner=BranchProvisioner(console=console),
        console=console,
        snapshot_suffix=settings.snapshot_suffix,
        stable_prefix=settings.stable_prefix,
    )

    lock = None
    if not no_lock and workflow.touches_work_root(names, keep_going=keep_going):
        locked = acquire_lock(settings.work_root)
        if isinstance(locked, Err):
            print_workflow_error(locked.error, console)
            raise typer.Exit(code=workflow_error_exit_code(locked.error))
        lock = locked.value

    try:
        result = workflow.run(names, keep_going=keep_going)
    finally:
        if lock is not None:
            lock.release()

    match result:
        case Err(failure):
            print_workflow_failure(failure, console)
            raise typer.Exit(code=workflow_error_exit_code(failure.first))
        case Ok(prepared):
            console.header("Summary")
            for item in prepared:
                console.print(
                    f"{item.project.name}: {item.path} on {item.origin_branch} "
                    f"(stable branch {item.stable_branch})",
                    Style.DIM,
                )


def main() -> None:
    app()
