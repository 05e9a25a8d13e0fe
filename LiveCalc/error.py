# error.py
"""Error types raised by the expression engine.

Every failure of the evaluator surfaces as InvalidExpression; the four-digit
code tells which rule was broken.
"""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    def describe(self):
        """Return "Error <code>: <catalogue text><message>" for logs and dialogs."""
        return f"Error {self.code}: {ERROR_MESSAGES.get(self.code, 'Unknown error')}{self.message}"


class InvalidExpression(MathError):
    pass


#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "3001" : "Invalid character in expression: ", # + Given Problem
    "3002" : "More than one '.' in one number: ", # + Number
    "3003" : "Division by Zero: ", # + Given Problem
    "3004" : "Unexpected Token: ", # + Token
    "3005" : "Missing Number: ", # + Given Problem
    "3006" : "Missing ')': ", # + Given Problem
    "3007" : "Result is not a finite number: ", # + Result
    "3008" : "Expression nested too deeply: ", # + Given Problem


    "5501" : "Settings could not be saved: ", # + Error


    "9999" : "Unexpected Error: " #+error
}
