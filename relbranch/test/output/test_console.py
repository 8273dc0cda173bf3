"""Tests for relbranch.output.console."""

from __future__ import annotations

from pathlib import Path

import pytest

from relbranch.output.console import MockConsole, RichConsole, Style, format_fields


def test_format_fields_keeps_order() -> None:
    assert format_fields({"project": "doc-style", "directory": Path("work/acme")}) == (
        "project=doc-style directory=work/acme"
    )


class TestMockConsole:
    def test_info_with_fields(self) -> None:
        console = MockConsole()
        console.info("project found", name="doc-style", orga="acme")
        assert console.messages == ["info: project found name=doc-style orga=acme"]
        assert console.outputs[0].style == Style.INFO

    def test_levels(self) -> None:
        console = MockConsole()
        console.success("done")
        console.warning("careful")
        console.error("broken")
        assert console.has_warning()
        assert console.has_error()
        assert console.find("careful")[0].message == "warning: careful"


class TestRichConsole:
    def test_markup_in_messages_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("cannot open [bold]work/acme[/bold]")
        out = capsys.readouterr().out
        assert "[bold]work/acme[/bold]" in out

    def test_info_prints_fields(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().info("Creating stable branch", stableBranch="stable/2.1.0")
        out = capsys.readouterr().out
        assert "Creating stable branch" in out
        assert "stableBranch=stable/2.1.0" in out
