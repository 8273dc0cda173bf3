"""Filesystem helpers for clearing unusable clone directories."""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

__all__ = ["quarantine_path", "remove_path"]


def _remove_readonly(_func: Callable[[str], object], path: str, exc: BaseException) -> None:
    # git marks object files read-only; Windows refuses to unlink those.
    if isinstance(exc, PermissionError):
        os.chmod(path, stat.S_IWRITE)
        os.unlink(path)
    else:
        raise exc


def remove_path(path: Path) -> None:
    """Remove whatever occupies path: directory tree, file or symlink.

    Missing paths are ignored.

    Raises:
        OSError: The path exists but could not be removed.
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path, onexc=_remove_readonly)
    elif os.path.lexists(path):
        path.unlink()


def quarantine_path(path: Path, *, now: datetime | None = None) -> Path | None:
    """Move path aside to `<name>.corrupt-<UTC timestamp>`.

    Returns:
        The new location, or None if path did not exist.

    Raises:
        OSError: The rename failed.
    """
    if not os.path.lexists(path):
        return None
    stamp = (now or datetime.now(UTC)).strftime("%Y%m%dT%H%M%SZ")
    target = path.with_name(f"{path.name}.corrupt-{stamp}")
    suffix = 1
    while os.path.lexists(target):
        target = path.with_name(f"{path.name}.corrupt-{stamp}-{suffix}")
        suffix += 1
    path.rename(target)
    return target
