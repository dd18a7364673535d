"""Tests for output/console.py."""

from __future__ import annotations

import pytest

from tagver.output.console import MockConsole, RichConsole, Style


class TestRichConsole:
    def test_dim_hidden_unless_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().print("skip tag (not a release version): nightly", Style.DIM)
        assert capsys.readouterr().err == ""

    def test_dim_shown_when_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(verbose=True).print("skip tag (not a release version): nightly", Style.DIM)
        assert "nightly" in capsys.readouterr().err

    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("no package file")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "no package file" in captured.err


class TestMockConsole:
    def test_records_styles(self) -> None:
        console = MockConsole()
        console.print("note", Style.DIM)
        console.warning("malformed codename line in tag v1.0.0")
        console.error("branch mismatch")

        assert console.count(Style.DIM) == 1
        assert console.has_error()
        assert console.find("codename")[0].style == Style.WARNING
        assert console.text.splitlines()[0] == "note"
