"""Tests for loading and validating settings."""
import json

import pytest

from woodcalc import config_manager
from woodcalc import error as E
from woodcalc.ResultFormatter import EXACT, FractionPrecision
from woodcalc.UnitEngine import UnitSystem


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path):
    settings = config_manager.load_settings(tmp_path / "missing.json")
    assert settings == config_manager.Settings()
    assert config_manager.load_setting_value("all", tmp_path / "missing.json") == {}


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert config_manager.load_settings(path) == config_manager.Settings()


def test_load_setting_value_falls_back_to_default(tmp_path):
    path = _write(tmp_path / "config.json", {"unit_system": "metric-cm"})
    assert config_manager.load_setting_value("unit_system", path) == "metric-cm"
    assert config_manager.load_setting_value("fraction_precision", path) == 16


def test_load_settings_validates_values(tmp_path):
    path = _write(tmp_path / "config.json", {
        "unit_system": "metric",
        "fraction_precision": "32",
        "auto_save": False,
    })
    settings = config_manager.load_settings(path)
    assert settings.unit_system is UnitSystem.METRIC_MM
    assert settings.fraction_precision is FractionPrecision.THIRTY_SECOND
    assert settings.auto_save is False
    assert settings.copy_to_clipboard is False


def test_exact_precision(tmp_path):
    path = _write(tmp_path / "config.json", {"fraction_precision": "Exact"})
    assert config_manager.load_settings(path).fraction_precision == EXACT


@pytest.mark.parametrize("data, code", [
    ({"unit_system": "furlongs"}, "5000"),
    ({"fraction_precision": 3}, "5001"),
    ({"fraction_precision": True}, "5001"),
    ({"auto_save": "yes"}, "5002"),
])
def test_invalid_settings(tmp_path, data, code):
    path = _write(tmp_path / "config.json", data)
    with pytest.raises(E.ConfigurationError) as excinfo:
        config_manager.load_settings(path)
    assert excinfo.value.code == code


def test_save_and_reload(tmp_path):
    path = tmp_path / "config.json"
    settings = config_manager.Settings(UnitSystem.IMPERIAL_INCHES, EXACT, False, True, False)

    config_manager.save_setting(config_manager.settings_to_dict(settings), path)

    assert config_manager.load_settings(path) == settings
    assert config_manager.load_setting_value("unit_system", path) == "imperial-inches"


def test_auto_save_is_kept_for_the_history_store(tmp_path):
    path = tmp_path / "config.json"
    settings = config_manager.Settings(auto_save=False)

    config_manager.save_setting(config_manager.settings_to_dict(settings), path)

    assert config_manager.load_setting_value("auto_save", path) is False
    assert config_manager.load_settings(path).auto_save is False


def test_save_to_missing_directory_fails(tmp_path):
    with pytest.raises(E.ConfigurationError):
        config_manager.save_setting({}, tmp_path / "nope" / "config.json")


def test_shipped_config_is_valid():
    settings = config_manager.load_settings()
    assert settings.unit_system is UnitSystem.IMPERIAL
    assert settings.fraction_precision == 16
