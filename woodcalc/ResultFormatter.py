# ResultFormatter.py
"""""
Render an exact Rational back into display text.

Imperial values are split into feet (imperial only) and inches, and the
remaining inches are snapped to the nearest 1/precision. Metric values are
shown with up to four decimals in mm or cm. Every call also reports whether
the text lost precision relative to the exact value ("rounded").
"""""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from enum import IntEnum

from . import FractionMath as FM
from . import UnitEngine

METRIC_DECIMALS = 4


class FractionPrecision(IntEnum):
    HALF = 2
    QUARTER = 4
    EIGHTH = 8
    SIXTEENTH = 16
    THIRTY_SECOND = 32


# Sentinel precision: render the exact fraction, never snap
EXACT = "exact"


@dataclass(frozen=True)
class FormattedResult:
    text: str
    rounded: bool


def resolve_precision(precision):
    """Return a positive int denominator, or None for exact mode."""
    if precision is None or precision == EXACT:
        return None
    if isinstance(precision, bool) or not isinstance(precision, int) or precision <= 0:
        raise ValueError(f"Fraction precision must be a positive integer or 'exact', got {precision!r}")
    return int(precision)


# -----------------------------
# Imperial
# -----------------------------

def snap_to_denominator(value, denominator):
    """Snap a non-negative Rational to the nearest 1/denominator (halves round up).

    Returns (whole, numerator, denominator) with the fraction in lowest terms
    and 0 <= numerator < denominator.
    """
    whole = FM.floor(value)
    remainder = FM.subtract(value, FM.Rational(whole))
    # round(remainder * denominator) == floor((2 * n * D + d) / (2 * d))
    numerator = ((2 * remainder.numerator * denominator + remainder.denominator)
                 // (2 * remainder.denominator))

    if numerator == denominator:
        whole += 1
        numerator = 0

    g = FM.gcd(numerator, denominator)
    if numerator == 0:
        return whole, 0, 1
    return whole, numerator // g, denominator // g


def split_exact(value):
    """Exact (whole, numerator, denominator) split of a non-negative Rational."""
    value = FM.reduce(value)
    whole = FM.floor(value)
    remainder = FM.subtract(value, FM.Rational(whole))
    return whole, remainder.numerator, remainder.denominator


def format_imperial(value, precision, with_feet=True):
    """Format inches as  5' 3-1/2"  (with_feet) or  63-1/2"  (inches only)."""
    denominator = resolve_precision(precision)
    negative = value.is_negative()
    inches = FM.absolute(value)

    feet = 0
    if with_feet:
        feet = FM.floor(FM.divide(inches, FM.Rational(UnitEngine.INCHES_PER_FOOT)))
        inches = FM.subtract(inches, FM.Rational(feet * UnitEngine.INCHES_PER_FOOT))

    if denominator is None:
        whole, num, den = split_exact(inches)
    else:
        whole, num, den = snap_to_denominator(inches, denominator)

    rounded = FM.add(FM.Rational(whole), FM.Rational(num, den)) != inches

    if with_feet and whole >= UnitEngine.INCHES_PER_FOOT:
        feet += 1
        whole -= UnitEngine.INCHES_PER_FOOT

    parts = []
    if feet > 0:
        parts.append(f"{feet}'")
    if num > 0 and whole > 0:
        parts.append(f'{whole}-{num}/{den}"')
    elif num > 0:
        parts.append(f'{num}/{den}"')
    else:
        parts.append(f'{whole}"')

    # Never show "-0\"" when everything snapped away
    sign = "-" if negative and (feet > 0 or whole > 0 or num > 0) else ""
    return FormattedResult(sign + " ".join(parts), rounded)


# -----------------------------
# Metric
# -----------------------------

def format_decimal(value, places=METRIC_DECIMALS):
    """Round a Rational half-up to `places` decimals and strip trailing zeros.

    Returns (text, rounded).
    """
    scale = 10 ** places
    rounded = (value.numerator * scale) % value.denominator != 0

    with localcontext() as ctx:
        # Headroom so quantize() never raises on long values
        ctx.prec = 128
        exact = Decimal(value.numerator) / Decimal(value.denominator)
        quantized = exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)

    text = format(quantized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text, rounded


def format_metric(value, output_unit="mm", base_unit="mm"):
    """Format a value stored in base_unit as  12.5 mm  or  1.25 cm."""
    if output_unit not in ("mm", "cm") or base_unit not in ("mm", "cm"):
        raise ValueError(f"Metric units must be 'mm' or 'cm', got {output_unit!r}/{base_unit!r}")

    if base_unit == "mm" and output_unit == "cm":
        value = FM.divide(value, FM.Rational(UnitEngine.MM_PER_CM))
    elif base_unit == "cm" and output_unit == "mm":
        value = FM.multiply(value, FM.Rational(UnitEngine.MM_PER_CM))
    else:
        value = FM.reduce(value)

    text, rounded = format_decimal(value)
    return FormattedResult(f"{text} {output_unit}", rounded)


# -----------------------------
# Public entry point
# -----------------------------

def format_result(value, unit_system, precision, metric_sub_unit=None):
    """Render value (in the unit system's base unit) for display.

    precision only affects imperial systems; metric_sub_unit only metric ones
    and defaults to the system's base unit.
    """
    system = UnitEngine.unit_system(unit_system)

    if system.is_metric:
        return format_metric(value, metric_sub_unit or system.base_unit, system.base_unit)
    if system is UnitEngine.UnitSystem.IMPERIAL_INCHES:
        return format_imperial(value, precision, with_feet=False)
    return format_imperial(value, precision, with_feet=True)
