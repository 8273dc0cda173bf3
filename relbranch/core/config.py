"""Typed run settings.

Settings come from, lowest to highest precedence: built-in defaults, an
optional TOML file, environment variables, then CLI flags (applied by the
caller through `dataclasses.replace`).

Example settings file:

    [git]
    host = "git@github.com"

    [work]
    root = "work"

    [clone]
    attempts = 3
    retry_delay = 2.0
    on_corrupt = "quarantine"

    [naming]
    snapshot_suffix = "-SNAPSHOT"
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_table

__all__ = [
    "ConfigError",
    "CorruptPolicy",
    "Settings",
    "DEFAULT_GIT_HOST",
    "DEFAULT_WORK_ROOT",
    "ENV_GIT_HOST",
    "ENV_WORK_DIR",
    "load_settings",
    "settings_from_env",
]

DEFAULT_GIT_HOST = "git@github.com"
DEFAULT_WORK_ROOT = "work"
DEFAULT_SNAPSHOT_SUFFIX = "-SNAPSHOT"
DEFAULT_STABLE_PREFIX = "stable/"

ENV_WORK_DIR = "WORK_DIR"
ENV_GIT_HOST = "RELBRANCH_GIT_HOST"

CorruptPolicy = Literal["remove", "quarantine"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the settings file cannot be loaded or parsed."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class Settings:
    """Settings for one workflow run.

    Attributes:
        work_root: Directory holding `<organization>/<name>` clones
        git_host: SSH host prefix of remote URLs (`<host>:<org>/<name>`)
        snapshot_suffix: Token stripped from snapshot versions
        stable_prefix: Prefix of computed stable branch names
        clone_attempts: Total clone attempts per project (1 = no retry)
        clone_retry_delay: Base backoff in seconds, multiplied by attempt number
        clone_timeout: Seconds before a clone is abandoned, None to wait forever
        on_corrupt: What to do with an unusable local path before recloning
    """

    work_root: Path = Path(DEFAULT_WORK_ROOT)
    git_host: str = DEFAULT_GIT_HOST
    snapshot_suffix: str = DEFAULT_SNAPSHOT_SUFFIX
    stable_prefix: str = DEFAULT_STABLE_PREFIX
    clone_attempts: int = 1
    clone_retry_delay: float = 2.0
    clone_timeout: float | None = None
    on_corrupt: CorruptPolicy = "remove"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Settings:
        """Create Settings from a parsed TOML mapping."""
        git: StrDict = get_table(data, "git") or {}
        work: StrDict = get_table(data, "work") or {}
        clone: StrDict = get_table(data, "clone") or {}
        naming: StrDict = get_table(data, "naming") or {}

        on_corrupt = get_str(clone, "on_corrupt") or "remove"
        if on_corrupt not in ("remove", "quarantine"):
            raise ValueError(f"clone.on_corrupt must be 'remove' or 'quarantine', got {on_corrupt!r}")

        attempts = get_int(clone, "attempts")
        if attempts is not None and attempts < 1:
            raise ValueError("clone.attempts must be at least 1")

        root = get_str(work, "root")
        # An explicitly empty suffix is kept: it disables stripping.
        suffix = naming.get("snapshot_suffix")
        return cls(
            work_root=Path(root) if root else Path(DEFAULT_WORK_ROOT),
            git_host=get_str(git, "host") or DEFAULT_GIT_HOST,
            snapshot_suffix=suffix if isinstance(suffix, str) else DEFAULT_SNAPSHOT_SUFFIX,
            stable_prefix=get_str(naming, "stable_prefix") or DEFAULT_STABLE_PREFIX,
            clone_attempts=attempts or 1,
            clone_retry_delay=get_float(clone, "retry_delay") or 2.0,
            clone_timeout=get_float(clone, "timeout"),
            on_corrupt="quarantine" if on_corrupt == "quarantine" else "remove",
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Settings file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading settings: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Settings root must be a TOML table", path=path))
    return Ok(data)


def settings_from_env(base: Settings, env: Mapping[str, str] | None = None) -> Settings:
    """Overlay WORK_DIR and RELBRANCH_GIT_HOST onto base."""
    environ = os.environ if env is None else env
    work_dir = environ.get(ENV_WORK_DIR, "").strip()
    git_host = environ.get(ENV_GIT_HOST, "").strip()
    if work_dir:
        base = replace(base, work_root=Path(work_dir))
    if git_host:
        base = replace(base, git_host=git_host)
    return base


def load_settings(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Result[Settings, ConfigError]:
    """Load settings from an optional TOML file, then overlay the environment.

    Args:
        path: Settings file, or None to start from defaults
        env: Environment mapping (defaults to os.environ)

    Returns:
        Ok(Settings) on success, Err(ConfigError) on failure
    """
    settings = Settings()
    if path is not None:
        parsed = _parse_toml(path)
        if isinstance(parsed, Err):
            return parsed
        try:
            settings = Settings.from_dict(parsed.value)
        except (KeyError, TypeError, ValueError) as e:
            return Err(ConfigError(f"Invalid settings: {e}", path=path))

    return Ok(settings_from_env(settings, env))
