from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import typer

from relbranch.core.config import Settings, load_settings
from relbranch.core.errors import ErrorCode
from relbranch.core.result import Err
from relbranch.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    console: ConsoleProtocol


def build_context(
    *,
    config_path: Path | None = None,
    work_dir: Path | None = None,
    git_host: str | None = None,
    clone_attempts: int | None = None,
    quarantine: bool = False,
    console: ConsoleProtocol | None = None,
) -> CLIContext:
    """Resolve settings (file, then environment, then flags) and a console."""
    out = console or RichConsole()

    settings_result = load_settings(config_path)
    if isinstance(settings_result, Err):
        out.error(settings_result.error.message)
        if settings_result.error.hint:
            out.print(f"hint: {settings_result.error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    settings = settings_result.value
    if work_dir is not None:
        settings = replace(settings, work_root=work_dir)
    if git_host:
        settings = replace(settings, git_host=git_host)
    if clone_attempts is not None:
        settings = replace(settings, clone_attempts=clone_attempts)
    if quarantine:
        settings = replace(settings, on_corrupt="quarantine")

    return CLIContext(settings=settings, console=out)
