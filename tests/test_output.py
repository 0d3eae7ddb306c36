"""Tests for the output formatting system and log configuration."""

from __future__ import annotations

import json
import logging

import pytest
from rich.logging import RichHandler

from staticcache.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    configure_logging,
    get_output,
    reset_output,
    set_output,
)


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_enabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestPrintTable:
    def test_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.JSON).print_table(["a", "b"], [["1", "2"]])
        assert json.loads(capsys.readouterr().out) == [{"a": "1", "b": "2"}]

    def test_plain(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN).print_table(["a", "b"], [["1", "2"]])
        assert capsys.readouterr().out == "a\tb\n1\t2\n"


class TestDiagnostics:
    def test_quiet_suppresses_info_not_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        out = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        out.info("hidden")
        out.error("shown")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hidden" not in captured.err
        assert "Error: shown" in captured.err


class TestGlobalInstance:
    def test_lazy_default(self) -> None:
        reset_output()
        assert isinstance(get_output(), OutputManager)

    def test_set_output(self) -> None:
        out = OutputManager(format=OutputFormat.JSON)
        set_output(out)
        assert get_output() is out


class TestConfigureLogging:
    def test_levels(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("staticcache").level == logging.DEBUG
        configure_logging(verbose=False)
        assert logging.getLogger("staticcache").level == logging.WARNING

    def test_does_not_stack_handlers(self) -> None:
        configure_logging()
        configure_logging()
        handlers = logging.getLogger("staticcache").handlers
        assert len([h for h in handlers if isinstance(h, RichHandler)]) == 1
