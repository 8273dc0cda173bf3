"""Advisory lock on a work root.

Two runs sharing a work root can destroy each other's clones, so a run holds
`<work-root>/.relbranch.lock` (containing its pid) until it finishes. The
lock is advisory: it only guards against other relbranch runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from relbranch.core.result import Err, Ok, Result

from .errors import FilesystemError

LOCK_FILENAME = ".relbranch.lock"

__all__ = ["LOCK_FILENAME", "WorkRootLock", "acquire_lock"]


@dataclass(frozen=True, slots=True)
class WorkRootLock:
    path: Path

    def release(self) -> None:
        self.path.unlink(missing_ok=True)


def _holder(lock_path: Path) -> str:
    try:
        pid = lock_path.read_text(encoding="utf-8").strip()
    except OSError:
        return ""
    return f" (pid {pid})" if pid else ""


def acquire_lock(work_root: Path) -> Result[WorkRootLock, FilesystemError]:
    lock_path = work_root / LOCK_FILENAME
    try:
        work_root.mkdir(parents=True, exist_ok=True)
        fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
    except FileExistsError:
        return Err(
            FilesystemError(
                path=lock_path,
                reason=f"work root is locked by another run{_holder(lock_path)}",
                hint="Wait for the other run to finish, or delete the lock file if it is stale",
            )
        )
    except OSError as e:
        return Err(FilesystemError(path=lock_path, reason=f"cannot create lock ({e.strerror or e})"))

    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(f"{os.getpid()}\n")
    return Ok(WorkRootLock(path=lock_path))
