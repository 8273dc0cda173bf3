"""Helpers for safely working with untyped JSON/TOML structures.

Used at the boundaries where the catalog (JSON) and the settings file (TOML)
are ingested. Each helper validates at runtime and narrows the static type.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


class FieldTypeError(ValueError):
    """A key is present but holds a value of the wrong type."""

    def __init__(self, key: str, expected: str, actual: object) -> None:
        super().__init__(f"'{key}' must be {expected}, got {type(actual).__name__}")
        self.key = key


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def as_obj_list(obj: object) -> ObjList | None:
    if isinstance(obj, list):
        return cast(ObjList, obj)
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripping whitespace.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_int(table: Mapping[str, object], key: str) -> int | None:
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_float(table: Mapping[str, object], key: str) -> float | None:
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def require_str(table: Mapping[str, object], key: str, *, default: str = "") -> str:
    """Get a string value verbatim, or default when the key is absent or null.

    Raises:
        FieldTypeError: The key holds a non-string value.
    """
    value = table.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise FieldTypeError(key, "a string", value)
    return value


def require_table(table: Mapping[str, object], key: str) -> StrDict:
    """Get a nested table, or an empty one when the key is absent or null.

    Raises:
        FieldTypeError: The key holds something other than an object.
    """
    value = table.get(key)
    if value is None:
        return {}
    result = as_str_dict(value)
    if result is None:
        raise FieldTypeError(key, "an object", value)
    return result
