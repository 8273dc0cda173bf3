"""Release naming rules."""

from relbranch.release.naming import SNAPSHOT_SUFFIX, STABLE_PREFIX, stable_branch_name

__all__ = ["SNAPSHOT_SUFFIX", "STABLE_PREFIX", "stable_branch_name"]
