"""Exact feet/inch and metric measurement calculator engine."""

from .FractionMath import Rational
from .MathEngine import calculate, evaluate, translator
from .ResultFormatter import EXACT, FormattedResult, FractionPrecision, format_result
from .UnitEngine import UnitSystem
