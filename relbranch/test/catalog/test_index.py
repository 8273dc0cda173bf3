"""Tests for relbranch.catalog."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from relbranch.catalog import (
    CatalogFormatError,
    CatalogIndex,
    Project,
    ProjectNotFoundError,
    Release,
    load_catalog,
    read_catalog,
)
from relbranch.core.result import Err, Ok

DOC_STYLE = {
    "name": "doc-style",
    "git_organization": "acme",
    "labels": "docs,frontend",
    "maven_property_version": "doc-style.version",
    "release": {
        "branch": "main",
        "version": "2.1.0",
        "current_snapshot_version": "2.1.0-SNAPSHOT",
        "next_snapshot_version": "2.2.0-SNAPSHOT",
    },
}


def _load(entries: object) -> CatalogIndex:
    result = load_catalog(json.dumps(entries).encode("utf-8"))
    assert isinstance(result, Ok), result
    return result.value


def _load_error(data: bytes) -> CatalogFormatError:
    result = load_catalog(data)
    assert isinstance(result, Err)
    return result.error


class TestLoad:
    def test_round_trips_all_fields(self) -> None:
        index = _load([DOC_STYLE])

        result = index.resolve("doc-style")

        assert result == Ok(
            Project(
                name="doc-style",
                organization="acme",
                labels="docs,frontend",
                maven_property_version="doc-style.version",
                release=Release(
                    branch="main",
                    version="2.1.0",
                    current_snapshot_version="2.1.0-SNAPSHOT",
                    next_snapshot_version="2.2.0-SNAPSHOT",
                ),
            )
        )

    def test_keeps_catalog_order(self) -> None:
        index = _load(
            [
                {"name": "platform-ui", "git_organization": "acme"},
                {"name": "doc-style", "git_organization": "acme"},
            ]
        )
        assert index.names() == ("platform-ui", "doc-style")
        assert len(index) == 2

    def test_optional_fields_default_to_empty(self) -> None:
        index = _load([{"name": "core", "git_organization": "acme"}])
        project = index.resolve("core").unwrap()
        assert project.labels == ""
        assert project.release == Release()

    def test_unknown_fields_ignored(self) -> None:
        index = _load([{**DOC_STYLE, "owner": "team-docs"}])
        assert index.names() == ("doc-style",)

    def test_empty_list(self) -> None:
        assert len(_load([])) == 0

    def test_not_json(self) -> None:
        error = _load_error(b"{not json")
        assert "not valid JSON" in error.message

    def test_not_utf8(self) -> None:
        error = _load_error(b"\xff\xfe\x00")
        assert "UTF-8" in error.message

    def test_root_must_be_list(self) -> None:
        error = _load_error(json.dumps({"projects": [DOC_STYLE]}).encode())
        assert "must be a list" in error.message

    def test_entry_must_be_object(self) -> None:
        error = _load_error(json.dumps([DOC_STYLE, "core"]).encode())
        assert error.entry == 1

    @pytest.mark.parametrize("field", ["name", "git_organization"])
    def test_required_field_missing(self, field: str) -> None:
        entry = {k: v for k, v in DOC_STYLE.items() if k != field}
        error = _load_error(json.dumps([entry]).encode())
        assert field in error.message
        assert error.entry == 0

    @pytest.mark.parametrize("field", ["name", "git_organization"])
    @pytest.mark.parametrize("value", [".", "..", "a/../b", "acme/doc-style", "..\\docs", "doc\0style"])
    def test_path_like_values_rejected(self, field: str, value: str) -> None:
        error = _load_error(json.dumps([{**DOC_STYLE, field: value}]).encode())
        assert f"'{field}' must be a single path segment" in error.message
        assert error.entry == 0

    def test_deeply_nested_json(self) -> None:
        error = _load_error(b"[" * 100_000)
        assert "nested too deeply" in error.message

    def test_wrong_field_type(self) -> None:
        error = _load_error(json.dumps([{**DOC_STYLE, "labels": ["docs"]}]).encode())
        assert "'labels' must be a string" in error.message

    def test_release_must_be_object(self) -> None:
        error = _load_error(json.dumps([{**DOC_STYLE, "release": "main"}]).encode())
        assert "'release' must be an object" in error.message

    def test_no_partial_catalog(self) -> None:
        bad = {**DOC_STYLE, "name": 12}
        result = load_catalog(json.dumps([DOC_STYLE, bad]).encode())
        assert isinstance(result, Err)


class TestResolve:
    def test_missing_name(self) -> None:
        index = _load([DOC_STYLE])

        result = index.resolve("platform-ui")

        assert result == Err(ProjectNotFoundError(name="platform-ui", available=("doc-style",)))
        assert result.error.message == "No project platform-ui found in the catalog"

    def test_first_match_wins(self) -> None:
        index = _load(
            [
                {"name": "core", "git_organization": "first"},
                {"name": "core", "git_organization": "second"},
            ]
        )
        assert index.resolve("core").unwrap().organization == "first"
        assert index.duplicates() == ("core",)

    def test_match_is_exact(self) -> None:
        index = _load([DOC_STYLE])
        assert isinstance(index.resolve("Doc-Style"), Err)
        assert isinstance(index.resolve("doc-style "), Err)


class TestReadCatalog:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([DOC_STYLE]), encoding="utf-8")
        result = read_catalog(path)
        assert isinstance(result, Ok)
        assert result.value.names() == ("doc-style",)

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.json"
        result = read_catalog(path)
        assert isinstance(result, Err)
        assert result.error.path == path
        assert "error reading catalog file" in result.error.message

    def test_error_carries_path(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text("[1]", encoding="utf-8")
        result = read_catalog(path)
        assert isinstance(result, Err)
        assert result.error.path == path
