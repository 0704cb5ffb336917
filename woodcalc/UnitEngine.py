# UnitEngine.py
"""""
Operand parsing and unit handling.

A single operand token (e.g. 5' 3-1/2", 3/4, 12.5mm) is turned into an exact
Rational in the base unit of the active unit system:

- imperial / imperial-inches: inches
- metric-mm: millimeters
- metric-cm: centimeters

Imperial inch text is matched against four explicit forms, in order:
dash-mixed (3-1/2), space-mixed (3 1/2), bare fraction (1/2), bare number (3).
"""""

import re
from decimal import Decimal, InvalidOperation
from enum import Enum

from . import FractionMath as FM
from . import error as E


INCHES_PER_FOOT = 12
MM_PER_INCH = FM.Rational(127, 5)  # 25.4 exactly
MM_PER_CM = 10

# Intermediate precision for typed decimal values
DECIMAL_DENOMINATOR = 10000

_INTEGER = re.compile(r"^[+-]?\d+$")
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")
_METRIC_SUFFIX = re.compile(r"(mm|cm)\s*$")
_CM_MENTION = re.compile(r"cm\b", re.IGNORECASE)


class UnitSystem(Enum):
    IMPERIAL = "imperial"
    IMPERIAL_INCHES = "imperial-inches"
    METRIC_MM = "metric-mm"
    METRIC_CM = "metric-cm"

    @classmethod
    def _missing_(cls, value):
        # Accept "metric" (older settings files) and loose spellings like "Metric_CM"
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            if key == "metric":
                return cls.METRIC_MM
            for member in cls:
                if member.value == key:
                    return member
        return None

    @property
    def is_metric(self):
        return self in (UnitSystem.METRIC_MM, UnitSystem.METRIC_CM)

    @property
    def base_unit(self):
        """Unit the evaluated Rational is expressed in."""
        if self is UnitSystem.METRIC_CM:
            return "cm"
        if self is UnitSystem.METRIC_MM:
            return "mm"
        return "in"


def unit_system(value):
    """Coerce a UnitSystem or its name; unknown names raise ValueError."""
    if isinstance(value, UnitSystem):
        return value
    return UnitSystem(value)


# -----------------------------
# Imperial
# -----------------------------

def parse_fraction(text):
    """Parse '<n>/<d>' into a reduced Rational. Non-integer parts or d == 0 are invalid."""
    numerator_text, _, denominator_text = text.strip().partition("/")
    numerator_text = numerator_text.strip()
    denominator_text = denominator_text.strip()

    if not _INTEGER.match(numerator_text) or not _INTEGER.match(denominator_text):
        raise E.InvalidOperand(f"Invalid fraction input: '{text.strip()}'", code="3011")

    denominator = int(denominator_text)
    if denominator == 0:
        raise E.InvalidOperand(f"Invalid fraction input: '{text.strip()}'", code="3011")

    return FM.reduce(FM.Rational(int(numerator_text), denominator))


def parse_whole(text):
    """Parse the whole-inch part of a mixed number."""
    text = text.strip()
    if not _INTEGER.match(text):
        raise E.InvalidOperand(f"Invalid whole inches: '{text}'", code="3013")
    return FM.Rational(int(text))


def parse_number(text):
    """Parse a bare inch value; integers stay exact, decimals go through from_decimal."""
    text = text.strip()
    if _INTEGER.match(text):
        return FM.Rational(int(text))
    if _DECIMAL.match(text):
        return FM.from_decimal(Decimal(text), DECIMAL_DENOMINATOR)
    raise E.InvalidOperand(f"Invalid measurement: '{text}'", code="3010")


def parse_inches(text):
    """Inch portion of an imperial operand, without the feet marker or '"' marks."""
    # (a) dash-mixed: 3-1/2
    if "-" in text and "/" in text:
        whole_text, _, fraction_text = text.partition("-")
        return FM.add(parse_whole(whole_text), parse_fraction(fraction_text))

    # (b) space-mixed: 3 1/2, split at the last space before the '/'
    slash = text.find("/")
    space = text.rfind(" ", 0, slash) if slash != -1 else -1
    if space != -1:
        return FM.add(parse_whole(text[:space]), parse_fraction(text[space + 1:]))

    # (c) bare fraction: 1/2
    if slash != -1:
        return parse_fraction(text)

    # (d) bare number: 3
    return parse_number(text)


def parse_imperial_value(raw):
    """Parse feet/inches notation into inches."""
    clean = raw.strip()
    total = FM.Rational(0)

    if "'" in clean:
        feet_text, _, clean = clean.partition("'")
        feet_text = feet_text.strip()
        if feet_text:
            if not _INTEGER.match(feet_text):
                raise E.InvalidOperand(f"Invalid feet value: '{feet_text}'", code="3012")
            total = FM.Rational(int(feet_text) * INCHES_PER_FOOT)

    inch_part = clean.replace('"', "").strip()
    if not inch_part:
        return FM.reduce(total)

    return FM.add(total, parse_inches(inch_part))


# -----------------------------
# Metric
# -----------------------------

def parse_metric_value(raw, base_unit):
    """Parse '12.5', '12.5mm' or '1.25 cm' into base_unit ('mm' or 'cm')."""
    trimmed = raw.strip().lower()

    suffix = _METRIC_SUFFIX.search(trimmed)
    unit = suffix.group(1) if suffix else base_unit
    clean = _METRIC_SUFFIX.sub("", trimmed)
    clean = re.sub(r"[^\d.+-]", "", clean)

    if not clean:
        raise E.InvalidOperand(f"Invalid metric value: '{raw.strip()}'", code="3014")
    try:
        value = Decimal(clean)
    except InvalidOperation:
        raise E.InvalidOperand(f"Invalid metric value: '{raw.strip()}'", code="3014")

    result = FM.from_decimal(value, DECIMAL_DENOMINATOR)
    if unit == base_unit:
        return result
    if base_unit == "mm" and unit == "cm":
        return FM.multiply(result, FM.Rational(MM_PER_CM))
    return FM.divide(result, FM.Rational(MM_PER_CM))


def parse_operand(raw, system):
    """Dispatch one operand token to the parser for the active unit system."""
    system = unit_system(system)
    if system.is_metric:
        return parse_metric_value(raw, system.base_unit)
    return parse_imperial_value(raw)


# -----------------------------
# Conversion / labelling
# -----------------------------

def _to_mm(value, system):
    if system is UnitSystem.METRIC_MM:
        return value
    if system is UnitSystem.METRIC_CM:
        return FM.multiply(value, FM.Rational(MM_PER_CM))
    return FM.multiply(value, MM_PER_INCH)


def convert(value, from_system, to_system):
    """Exactly convert a base-unit Rational between unit systems."""
    from_system = unit_system(from_system)
    to_system = unit_system(to_system)
    if from_system.base_unit == to_system.base_unit:
        return FM.reduce(value)

    mm = _to_mm(value, from_system)
    if to_system is UnitSystem.METRIC_MM:
        return mm
    if to_system is UnitSystem.METRIC_CM:
        return FM.divide(mm, FM.Rational(MM_PER_CM))
    return FM.divide(mm, MM_PER_INCH)


def metric_output_unit(expression, system):
    """Sub-unit a metric result is shown in: cm when the system or the expression uses cm."""
    system = unit_system(system)
    if system is UnitSystem.METRIC_CM:
        return "cm"
    if system is UnitSystem.METRIC_MM and _CM_MENTION.search(expression):
        return "cm"
    return "mm"


def input_unit_label(expression, system):
    system = unit_system(system)
    if system is UnitSystem.IMPERIAL_INCHES:
        return "in"
    if system is UnitSystem.IMPERIAL:
        return "ft/in"
    return metric_output_unit(expression, system)
