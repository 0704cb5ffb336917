# FractionMath.py
"""""
Exact fraction arithmetic for measurement values.

Every operation that builds a new Rational hands it through reduce(), so values
leaving this module are always in lowest terms with a positive denominator and
zero is always 0/1. Python integers are unbounded, so numerators and
denominators never overflow.
"""""

import fractions
import math
from decimal import Decimal, ROUND_FLOOR


class Rational:
    """Plain numerator/denominator pair. Use reduce() to normalize."""

    __slots__ = ("numerator", "denominator")

    def __init__(self, numerator, denominator=1):
        self.numerator = int(numerator)
        self.denominator = int(denominator)

    def is_zero(self):
        return self.numerator == 0

    def is_negative(self):
        return (self.numerator < 0) != (self.denominator < 0) and self.numerator != 0

    def as_fraction(self):
        return fractions.Fraction(self.numerator, self.denominator)

    # Rational(1, 2) == Rational(2, 4) == Fraction(1, 2), with matching hashes
    def __eq__(self, other):
        if isinstance(other, Rational):
            other = other.as_fraction()
        elif not isinstance(other, (int, fractions.Fraction)):
            return NotImplemented
        return self.as_fraction() == other

    def __hash__(self):
        return hash(self.as_fraction())

    def __repr__(self):
        return f"Rational({self.numerator}/{self.denominator})"

    def __str__(self):
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"


ZERO = Rational(0, 1)
ONE = Rational(1, 1)


def gcd(a, b):
    """Greatest common divisor of |a| and |b|; gcd(0, 0) is 1 so reduce never divides by zero."""
    return math.gcd(a, b) or 1


def reduce(r):
    """Return r in lowest terms with a positive denominator (zero becomes 0/1)."""
    if r.numerator == 0:
        return Rational(0, 1)
    sign = -1 if r.denominator < 0 else 1
    g = gcd(r.numerator, r.denominator)
    return Rational((r.numerator * sign) // g, (r.denominator * sign) // g)


def add(a, b):
    return reduce(Rational(a.numerator * b.denominator + b.numerator * a.denominator,
                           a.denominator * b.denominator))


def subtract(a, b):
    return reduce(Rational(a.numerator * b.denominator - b.numerator * a.denominator,
                           a.denominator * b.denominator))


def multiply(a, b):
    return reduce(Rational(a.numerator * b.numerator, a.denominator * b.denominator))


def divide(a, b):
    """Return a / b, or None when b is zero."""
    if b.numerator == 0:
        return None
    return reduce(Rational(a.numerator * b.denominator, a.denominator * b.numerator))


def negate(r):
    return reduce(Rational(-r.numerator, r.denominator))


def absolute(r):
    return reduce(Rational(abs(r.numerator), abs(r.denominator)))


def floor(r):
    """Largest integer <= r."""
    r = reduce(r)
    return r.numerator // r.denominator


def to_decimal(r):
    """Float value of r. Display only; never feed this back into exact arithmetic."""
    return r.numerator / r.denominator


def from_decimal(value, max_denominator=10000):
    """Round value to the nearest multiple of 1/max_denominator and reduce.

    Decimal (and str) input is scaled exactly; floats are scaled in floating point.
    Halves round up, towards positive infinity.
    """
    if not isinstance(max_denominator, int) or max_denominator <= 0:
        raise ValueError(f"max_denominator must be a positive integer, got {max_denominator!r}")

    if isinstance(value, str):
        value = Decimal(value.strip())

    if isinstance(value, Decimal):
        scaled = value * max_denominator + Decimal("0.5")
        numerator = int(scaled.to_integral_value(rounding=ROUND_FLOOR))
    elif isinstance(value, int):
        numerator = value * max_denominator
    else:
        numerator = math.floor(value * max_denominator + 0.5)

    return reduce(Rational(numerator, max_denominator))
