"""Tests for relbuild.output.console module."""

from __future__ import annotations

import pytest

from relbuild.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("Artifacts will be copied into /artifacts/polkadot")
        assert console.outputs[0].message == "Artifacts will be copied into /artifacts/polkadot"
        assert console.outputs[0].style == Style.DEFAULT

    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("failed")
        console.warning("careful")
        assert console.messages == ["OK done", "error: failed", "warning: careful"]
        assert console.has_error()
        assert console.has_warning()

    def test_find(self) -> None:
        console = MockConsole()
        console.print("a EXTRATAG b")
        console.print("other", Style.DIM)
        assert len(console.find("EXTRATAG")) == 1
        assert console.find("missing") == []


class TestRichConsole:
    def test_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("abc123 Merge [bot] changes")
        console.error("path [red]x[/red]")

        out = capsys.readouterr().out
        assert "Merge [bot] changes" in out
        assert "[red]x[/red]" in out

    def test_long_lines_are_not_wrapped(self, capsys: pytest.CaptureFixture[str]) -> None:
        line = "f" * 64 + "  " + "polkadot-parachain" * 10
        RichConsole().print(line)
        assert line in capsys.readouterr().out

    def test_error_goes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("Invalid TOML syntax")
        captured = capsys.readouterr()
        assert "error: Invalid TOML syntax" in captured.out
        assert captured.err == ""
