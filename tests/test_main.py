"""Tests for the command line entry point."""
import pyperclip
import pytest

import main
from woodcalc import MathEngine
from woodcalc import config_manager
from woodcalc.UnitEngine import UnitSystem


@pytest.fixture
def default_settings(monkeypatch):
    monkeypatch.setattr(config_manager, "load_settings", lambda path=None: config_manager.Settings())


@pytest.fixture(autouse=True)
def reset_debug():
    yield
    MathEngine.debug = False


def test_single_expression(default_settings, capsys):
    assert main.main(["1/2", "+", "1/4"]) == 0
    assert capsys.readouterr().out.strip() == '= 3/4"'


def test_units_and_precision_overrides(default_settings, capsys):
    assert main.main(["--units", "metric-mm", "1", "÷", "3"]) == 0
    assert capsys.readouterr().out.strip() == "≈ 0.3333 mm"

    assert main.main(["--units", "imperial-inches", "--precision", "exact", "1 ÷ 3"]) == 0
    assert capsys.readouterr().out.strip() == '= 1/3"'


def test_error_exit_status(default_settings, capsys):
    assert main.main(["5 ÷ 0"]) == 1
    assert capsys.readouterr().out.strip() == "Cannot divide by zero"


def test_bad_override_is_configuration_error(default_settings, capsys):
    assert main.main(["--precision", "7", "1"]) == 2
    assert "5001" in capsys.readouterr().out


def test_prompt_loop_stops_on_empty_line(default_settings, monkeypatch, capsys):
    answers = iter(["2 + 3 × 4", ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    assert main.main([]) == 0
    assert '= 1\' 2"' in capsys.readouterr().out


def test_prompt_loop_stops_on_eof(default_settings, monkeypatch):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)
    assert main.main([]) == 0


def test_result_is_copied_when_enabled(monkeypatch, capsys):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    main.run_once("3/4 + 1/4", UnitSystem.IMPERIAL, 16, copy_to_clipboard=True)
    assert copied == ['1"']


def test_errors_are_not_copied(monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    main.run_once("", UnitSystem.IMPERIAL, 16, copy_to_clipboard=True)
    assert copied == []


def test_clipboard_failure_only_warns(monkeypatch, capsys):
    def broken_copy(text):
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(pyperclip, "copy", broken_copy)
    main.copy_result("1\"")
    assert "Warning" in capsys.readouterr().out


def test_debug_setting_enables_engine_prints(monkeypatch, capsys):
    monkeypatch.setattr(config_manager, "load_settings",
                        lambda path=None: config_manager.Settings(debug=True))
    assert main.main(["1 + 1"]) == 0
    out = capsys.readouterr().out
    assert "Config loaded:" in out
    assert "Result:" in out


def test_check_files_exist_passes_in_repo():
    main.check_files_exist()


def test_start_announces_developer_mode(default_settings, capsys):
    assert main.start(["1 + 1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Developer Mode: Checking file paths..."
    assert lines[-1] == '= 2"'


def test_start_announces_production_mode(default_settings, monkeypatch, capsys):
    checked = []
    monkeypatch.setattr(main.sys, "frozen", True, raising=False)
    monkeypatch.setattr(main, "check_files_exist", lambda: checked.append(True))

    assert main.start(["1 + 1"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Production mode (.exe) is starting..."
    assert checked == []
