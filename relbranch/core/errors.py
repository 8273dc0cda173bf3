"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the relbranch CLI.

    - 0: Success
    - 1: User error (bad arguments, malformed catalog, unknown project)
    - 3: Git error (branch missing, working tree unusable)
    - 4: Network error (clone failed, remote unreachable)
    - 5: I/O error (directory creation, removal, lock)
    """

    OK = 0
    USER_ERROR = 1
    GIT_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
