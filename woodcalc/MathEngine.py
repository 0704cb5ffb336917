# MathEngine.py
"""""
Core calculation engine for the measurement calculator.

Pipeline
--------
1) Tokenizer: splits a raw input string into operand / operator / paren tokens.
2) Parser + evaluator: precedence-climbing recursive descent over the tokens,
   handing each operand to UnitEngine and combining with exact Rationals.
3) Formatter: ResultFormatter renders the Rational in the chosen unit/precision.

Unit system and precision are always passed in by the caller; nothing here
reads settings.
"""""

from dataclasses import dataclass
from typing import Optional, Union

from . import FractionMath as FM
from . import ResultFormatter
from . import UnitEngine
from . import error as E

# Debug toggle for optional prints in this module
debug = False

PLUS = "+"
MINUS = "\u2212"  # "−"
TIMES = "\u00d7"  # "×"
DIVIDE = "\u00f7"  # "÷"

# Keyboard aliases → canonical operator symbols
OPERATOR_ALIASES = {
    "+": PLUS,
    "-": MINUS,
    MINUS: MINUS,
    "*": TIMES,
    "x": TIMES,
    "X": TIMES,
    TIMES: TIMES,
    DIVIDE: DIVIDE,
}

PRECEDENCE = {PLUS: 1, MINUS: 1, TIMES: 2, DIVIDE: 2}


# -----------------------------
# Token types
# -----------------------------

@dataclass(frozen=True)
class Operator:
    symbol: str


@dataclass(frozen=True)
class Paren:
    is_open: bool


@dataclass(frozen=True)
class Operand:
    text: str


Token = Union[Operator, Paren, Operand]


# -----------------------------
# Result types
# -----------------------------

@dataclass(frozen=True)
class EvalOk:
    value: FM.Rational

    ok = True


@dataclass(frozen=True)
class EvalErr:
    kind: E.ErrorKind
    message: str
    code: str

    ok = False


EvalResult = Union[EvalOk, EvalErr]


# -----------------------------
# Tokenizer
# -----------------------------

def is_division_slash(expression, index, metric=False):
    """A '/' divides when metric (no fractions there) or when spaced on both sides.

    Tight slashes (3/4, 3 1/2) stay inside the operand as fractions.
    """
    if metric:
        return True
    before = expression[index - 1] if index > 0 else ""
    after = expression[index + 1] if index + 1 < len(expression) else ""
    return before.isspace() and after.isspace()


def translator(expression, unit_system=None):
    """Convert a raw expression string into a list of tokens.

    Whitespace stays inside operand text (5' 3 1/2") and is trimmed when the
    operand is flushed. A spaced ' / ' is division; a tight '/' belongs to a
    fraction, except under a metric unit system where every '/' divides.
    """
    metric = unit_system is not None and UnitEngine.unit_system(unit_system).is_metric
    tokens = []
    buffer = ""

    for index, current_char in enumerate(expression):
        if current_char == "/" and is_division_slash(expression, index, metric):
            current_char = DIVIDE

        if current_char in OPERATOR_ALIASES or current_char in "()":
            if buffer.strip():
                tokens.append(Operand(buffer.strip()))
            buffer = ""

            if current_char == "(":
                tokens.append(Paren(True))
            elif current_char == ")":
                tokens.append(Paren(False))
            else:
                tokens.append(Operator(OPERATOR_ALIASES[current_char]))
        else:
            buffer += current_char

    if buffer.strip():
        tokens.append(Operand(buffer.strip()))

    return tokens


# -----------------------------
# Parser / evaluator
# -----------------------------

def apply_operator(symbol, left, right):
    if symbol == PLUS:
        return FM.add(left, right)
    elif symbol == MINUS:
        return FM.subtract(left, right)
    elif symbol == TIMES:
        return FM.multiply(left, right)
    elif symbol == DIVIDE:
        quotient = FM.divide(left, right)
        if quotient is None:
            raise E.DivideByZero()
        return quotient
    else:
        raise E.MalformedExpression(f"Unexpected token: {symbol}", code="3022")


def evaluate_strict(expression, unit_system):
    """Evaluate expression to a Rational in the unit system's base unit.

    Raises one of the EvaluationError subclasses on the first problem found.
    """
    system = UnitEngine.unit_system(unit_system)
    tokens = translator(expression, system)

    if debug == True:
        print(tokens)

    if not tokens:
        raise E.EmptyExpression(equation=expression)

    position = 0

    def peek():
        return tokens[position] if position < len(tokens) else None

    def consume():
        nonlocal position
        token = tokens[position]
        position += 1
        return token

    def parse_atom():
        """A parenthesized sub-expression or a single operand."""
        token = peek()
        if token is None:
            raise E.MalformedExpression("Missing number.", code="3021")

        if isinstance(token, Paren) and token.is_open:
            consume()
            value = parse_expr(0)
            # A missing ')' at the end of input is tolerated
            closing = peek()
            if isinstance(closing, Paren) and not closing.is_open:
                consume()
            return value

        if isinstance(token, Operand):
            consume()
            return UnitEngine.parse_operand(token.text, system)

        raise E.MalformedExpression(f"Unexpected token: {_token_text(token)}", code="3022")

    def parse_expr(min_precedence):
        """Atom followed by operators binding at least as tightly as min_precedence."""
        left = parse_atom()
        while True:
            token = peek()
            if not isinstance(token, Operator) or PRECEDENCE[token.symbol] < min_precedence:
                break
            operator = consume().symbol
            right = parse_expr(PRECEDENCE[operator] + 1)
            left = apply_operator(operator, left, right)
        return left

    try:
        result = parse_expr(0)

        if position < len(tokens):
            leftover = tokens[position]
            if isinstance(leftover, Paren) and not leftover.is_open:
                raise E.MalformedExpression("Missing '('. ", code="3023")
            raise E.MalformedExpression(f"Unexpected token: {_token_text(leftover)}", code="3022")

    # Attach the source equation to whatever went wrong
    except E.EvaluationError as e:
        e.equation = expression
        raise e

    if debug == True:
        print("Result:", result)

    return result


def evaluate(expression, unit_system):
    """Main API: pure and total. Returns EvalOk(Rational) or EvalErr(kind, message, code)."""
    try:
        return EvalOk(evaluate_strict(expression, unit_system))
    except E.EvaluationError as e:
        return EvalErr(e.kind, e.message, e.code)


def _token_text(token):
    if isinstance(token, Operator):
        return token.symbol
    if isinstance(token, Paren):
        return "(" if token.is_open else ")"
    return token.text


# -----------------------------
# Calculation (evaluate + format)
# -----------------------------

@dataclass(frozen=True)
class Calculation:
    """Everything a history store keeps about one evaluated expression."""

    expression: str
    unit_system: UnitEngine.UnitSystem
    input_unit: str
    result: Optional[ResultFormatter.FormattedResult] = None
    raw_value: Optional[float] = None
    error: Optional[EvalErr] = None

    @property
    def display(self):
        if self.error is not None:
            return self.error.message
        if self.result.rounded:
            return "\u2248 " + self.result.text  # "≈"
        return "= " + self.result.text


def calculate(expression, unit_system, precision, metric_sub_unit=None):
    """Evaluate and format in one step.

    For metric systems the output sub-unit defaults to the one the
    expression was typed in (see UnitEngine.metric_output_unit).
    """
    system = UnitEngine.unit_system(unit_system)
    input_unit = UnitEngine.input_unit_label(expression, system)
    evaluation = evaluate(expression, system)

    if not evaluation.ok:
        return Calculation(expression, system, input_unit, error=evaluation)

    if system.is_metric and metric_sub_unit is None:
        metric_sub_unit = UnitEngine.metric_output_unit(expression, system)

    formatted = ResultFormatter.format_result(evaluation.value, system, precision, metric_sub_unit)
    return Calculation(
        expression,
        system,
        input_unit,
        result=formatted,
        raw_value=FM.to_decimal(evaluation.value),
    )


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    print(calculate(problem, UnitEngine.UnitSystem.IMPERIAL, 16).display)


if __name__ == "__main__":
    test_main()
