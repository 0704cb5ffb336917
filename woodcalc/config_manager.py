# config_manager.py
from dataclasses import dataclass
from pathlib import Path
from typing import Union
import json

from . import error as E
from .ResultFormatter import EXACT, FractionPrecision
from .UnitEngine import UnitSystem

config_json = Path(__file__).resolve().parent.parent / "config.json"


DEFAULT_SETTINGS = {
    "unit_system": "imperial",
    "fraction_precision": 16,
    "auto_save": True,
    "copy_to_clipboard": False,
    "debug": False,
}


@dataclass(frozen=True)
class Settings:
    unit_system: UnitSystem = UnitSystem.IMPERIAL
    fraction_precision: Union[FractionPrecision, str] = FractionPrecision.SIXTEENTH
    # Read by the history store, not by the engine or the command line
    auto_save: bool = True
    copy_to_clipboard: bool = False
    debug: bool = False


def load_setting_value(key_value, path=None):
    try:
        with open(path or config_json, 'r', encoding= 'utf-8') as f:
            settings_dict = json.load(f)

    except (FileNotFoundError, json.JSONDecodeError):
        return {}

    if not isinstance(settings_dict, dict):
        return {}


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value, 0))


def save_setting(settings_dict, path=None):
    try:
        with open (path or config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError as e:
        raise E.ConfigurationError(f"Settings could not be saved: {e}", code="5003")


def parse_unit_system(value):
    try:
        return UnitSystem(value)
    except ValueError:
        raise E.ConfigurationError(f"Unknown unit system: {value!r}", code="5000")


def parse_precision(value):
    """Accepts 2/4/8/16/32 (int or digit string) or 'exact'."""
    if isinstance(value, str):
        value = value.strip().lower()
        if value == EXACT:
            return EXACT
        if value.isdigit():
            value = int(value)
    try:
        if isinstance(value, bool):
            raise ValueError(value)
        return FractionPrecision(value)
    except ValueError:
        raise E.ConfigurationError(f"Unsupported fraction precision: {value!r}", code="5001")


def parse_flag(key, value):
    if not isinstance(value, bool):
        raise E.ConfigurationError(f"Setting must be true or false: {key}", code="5002")
    return value


def settings_from_dict(settings_dict):
    merged = dict(DEFAULT_SETTINGS)
    merged.update(settings_dict)
    return Settings(
        unit_system=parse_unit_system(merged["unit_system"]),
        fraction_precision=parse_precision(merged["fraction_precision"]),
        auto_save=parse_flag("auto_save", merged["auto_save"]),
        copy_to_clipboard=parse_flag("copy_to_clipboard", merged["copy_to_clipboard"]),
        debug=parse_flag("debug", merged["debug"]),
    )


def load_settings(path=None):
    """Validated settings; a missing or unreadable file gives the defaults."""
    return settings_from_dict(load_setting_value("all", path))


def settings_to_dict(settings):
    precision = settings.fraction_precision
    return {
        "unit_system": settings.unit_system.value,
        "fraction_precision": precision if precision == EXACT else int(precision),
        "auto_save": settings.auto_save,
        "copy_to_clipboard": settings.copy_to_clipboard,
        "debug": settings.debug,
    }




if __name__ == "__main__":
    print(load_setting_value("unit_system"))
    print(load_settings())
