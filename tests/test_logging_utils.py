"""Tests for console logging helpers and configuration display."""

from fusionmap.config import Config
from fusionmap.logging_utils import (
    Color,
    LOG_TAG_BUILD,
    colored,
    log_build,
    log_error,
    log_warning,
)


def test_colored_wraps_text(monkeypatch):
    monkeypatch.delenv("FUSIONMAP_NO_COLOR", raising=False)
    text = colored("hello", Color.GREEN, bold=True)
    assert text == f"{Color.BOLD.value}{Color.GREEN.value}hello{Color.RESET.value}"


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.setenv("FUSIONMAP_NO_COLOR", "1")
    assert colored("hello", Color.RED) == "hello"


def test_build_logs_only_in_verbose_mode(monkeypatch, capsys):
    monkeypatch.setenv("FUSIONMAP_NO_COLOR", "1")
    monkeypatch.delenv("FUSIONMAP_VERBOSE", raising=False)
    log_build("Built layer 'ground'")
    assert capsys.readouterr().out == ""

    monkeypatch.setenv("FUSIONMAP_VERBOSE", "true")
    log_build("Built layer 'ground'")
    assert capsys.readouterr().out == f"{LOG_TAG_BUILD} Built layer 'ground'\n"


def test_warnings_and_errors_always_print(monkeypatch, capsys):
    monkeypatch.setenv("FUSIONMAP_NO_COLOR", "1")
    monkeypatch.delenv("FUSIONMAP_VERBOSE", raising=False)

    log_warning("careful")
    log_error("broken")

    out = capsys.readouterr().out.splitlines()
    assert out == ["[?] careful", "[!] broken"]


def test_config_display_lists_settings():
    display = Config.display()
    assert "Start Z Index" in display
    assert "Fetch Timeout" in display
    Config.validate()
