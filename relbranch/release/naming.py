from __future__ import annotations

SNAPSHOT_SUFFIX = "-SNAPSHOT"
STABLE_PREFIX = "stable/"

__all__ = ["SNAPSHOT_SUFFIX", "STABLE_PREFIX", "stable_branch_name"]


def stable_branch_name(
    current_snapshot: str,
    *,
    suffix: str = SNAPSHOT_SUFFIX,
    prefix: str = STABLE_PREFIX,
) -> str:
    """Derive the stable branch name from a snapshot version.

    Every occurrence of suffix is removed, not only a trailing one:
    "1.4.0-SNAPSHOT" -> "stable/1.4.0", "" -> "stable/".
    """
    version = current_snapshot.replace(suffix, "") if suffix else current_snapshot
    return f"{prefix}{version}"
