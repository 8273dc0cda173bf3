"""Platform layer: subprocesses and filesystem."""

from .files import quarantine_path, remove_path
from .process import ProcessError, run, run_streaming

__all__ = [
    "ProcessError",
    "quarantine_path",
    "remove_path",
    "run",
    "run_streaming",
]
