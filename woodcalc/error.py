from enum import Enum


class ErrorKind(Enum):
    EMPTY_EXPRESSION = "empty-expression"
    INVALID_OPERAND = "invalid-operand"
    DIVIDE_BY_ZERO = "divide-by-zero"
    MALFORMED_EXPRESSION = "malformed-expression"


class MathError(Exception):
    def __init__(self, message=None, code="9999", equation=None):
        if message is None:
            message = ERROR_MESSAGES.get(code, ERROR_MESSAGES["9999"])
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation


class EvaluationError(MathError):
    kind = None


class EmptyExpression(EvaluationError):
    kind = ErrorKind.EMPTY_EXPRESSION

    def __init__(self, message=None, code="3000", equation=None):
        super().__init__(message, code, equation)


class InvalidOperand(EvaluationError):
    kind = ErrorKind.INVALID_OPERAND

    def __init__(self, message=None, code="3010", equation=None):
        super().__init__(message, code, equation)


class DivideByZero(EvaluationError):
    kind = ErrorKind.DIVIDE_BY_ZERO

    def __init__(self, message=None, code="3003", equation=None):
        super().__init__(message, code, equation)


class MalformedExpression(EvaluationError):
    kind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(self, message=None, code="3020", equation=None):
        super().__init__(message, code, equation)


class ConfigurationError(MathError):
    pass



Error_Dictionary = {

    "3" : "Calculator Error",
    "5" : "Configuration Error",
    "9" : "Unexpected Error",

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "3000" : "Enter a valid expression",
    "3003" : "Cannot divide by zero",

    "3010" : "Invalid measurement",
    "3011" : "Invalid fraction input",
    "3012" : "Invalid feet value",
    "3013" : "Invalid whole inches",
    "3014" : "Invalid metric value",

    "3020" : "Enter a valid expression",
    "3021" : "Missing number.",
    "3022" : "Unexpected token: ", # + token
    "3023" : "Missing '('. ",


    "5000" : "Unknown unit system: ", # + value
    "5001" : "Unsupported fraction precision: ", # + value
    "5002" : "Setting must be true or false: ", # + key
    "5003" : "Settings could not be saved: ", # + path


    "9999" : "Unexpected Error: " #+error
}
