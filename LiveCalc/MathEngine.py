# MathEngine.py
"""""
Safe evaluator for the LiveCalc expression buffer.

Pipeline
--------
1) Normalizer: maps display glyphs (×, ÷, −, –, —) onto ASCII operators.
2) Percent rewrite: every "N%" becomes "(N/100)" (textual, not percent-of-previous).
3) Whitelist: the rewritten text may only contain digits, + - * / ( ) . and whitespace.
4) Tokenizer: converts the string into a flat list of Decimal literals, operators and parens.
5) Parser (AST): recursive descent, precedence aware (* / before + -, unary +/-).
6) Evaluator: walks the AST with Decimal arithmetic and rejects non-finite results.

Nothing here executes code; the grammar is closed over numbers, + - * / ( ).
"""""

import logging
import re
from decimal import Decimal, getcontext, DecimalException

from . import error as E

logger = logging.getLogger(__name__)

# Supported binary operators (kept as a simple list for quick membership checks)
Operations = ["+", "-", "*", "/"]

# Display glyph -> operator the parser understands
GLYPHS = {
    "×": "*",
    "÷": "/",
    "−": "-",
    "–": "-",
    "—": "-",
}

PERCENT_PATTERN = re.compile(r"(\d+(\.\d+)?)%")
ALLOWED_PATTERN = re.compile(r"[0-9+\-*/().\s%]+")

# Working precision for all arithmetic in this module
PRECISION = 50
getcontext().prec = PRECISION


# -----------------------------
# Utilities / small helpers
# -----------------------------

def isOp(zeichen):
    """Return index of a known basic operator or -1 if unknown."""
    try:
        return Operations.index(zeichen)
    except ValueError:
        return -1


def normalize_glyphs(problem):
    """Replace every display glyph with its ASCII operator."""
    for glyph, operator in GLYPHS.items():
        problem = problem.replace(glyph, operator)
    return problem


def expand_percent(problem):
    """Rewrite "50%" as "(50/100)"; a '%' not preceded by a number is left alone."""
    return PERCENT_PATTERN.sub(r"(\1/100)", problem)


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST node for numeric literal backed by Decimal."""
    def __init__(self, value):
        # Always normalize input to Decimal via string to avoid float artifacts
        if not isinstance(value, Decimal):
            value = str(value)
        self.value = Decimal(value)

    def evaluate(self):
        return self.value

    def __repr__(self):
        return f"Number({self.value})"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self):
        """Evaluate both subtrees and apply the binary operator."""
        left_value = self.left.evaluate()
        right_value = self.right.evaluate()

        if self.operator == '+':
            return left_value + right_value
        elif self.operator == '-':
            return left_value - right_value
        elif self.operator == '*':
            return left_value * right_value
        elif self.operator == '/':
            if right_value == 0:
                raise E.InvalidExpression(f"{self}", code="3003")
            return left_value / right_value
        else:
            raise E.InvalidExpression(f"{self.operator}", code="3004")

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


class Negate:
    """AST node for unary minus applied to a sub-expression."""
    def __init__(self, operand):
        self.operand = operand

    def evaluate(self):
        return -self.operand.evaluate()

    def __repr__(self):
        return f"Negate({self.operand})"


# -----------------------------
# Tokenizer
# -----------------------------

def translator(problem):
    """Convert a whitelisted string into a token list (Decimal numbers, operators, parens).

    Notes:
    - "5." and ".5" are complete numbers, a lone "." is not.
    - Whitespace separates tokens and is otherwise dropped.
    """
    full_problem = []
    b = 0

    while b < len(problem):
        current_char = problem[b]

        # --- Numbers: digits and decimal separator ---
        if current_char.isdigit() or current_char == ".":
            str_number = current_char
            hat_schon_komma = current_char == "."  # Only one dot allowed in a numeric literal

            while (b + 1 < len(problem)) and (problem[b + 1].isdigit() or problem[b + 1] == "."):
                if problem[b + 1] == ".":
                    if hat_schon_komma:
                        raise E.InvalidExpression(f"{str_number}.", code="3002")
                    hat_schon_komma = True

                b += 1
                str_number += problem[b]

            if str_number == ".":
                raise E.InvalidExpression(problem, code="3005")
            full_problem.append(Decimal(str_number))

        # --- Operators ---
        elif isOp(current_char) != -1:
            full_problem.append(current_char)

        # --- Parentheses ---
        elif current_char in ("(", ")"):
            full_problem.append(current_char)

        # --- Whitespace (ignored) ---
        elif current_char.isspace():
            pass

        # --- Anything else (e.g. a '%' the percent rewrite could not attach) ---
        else:
            raise E.InvalidExpression(current_char, code="3004")

        b += 1

    return full_problem


# -----------------------------
# Parser (recursive descent)
# -----------------------------

def ast(problem):
    """Parse a whitelisted expression string into an AST.
    Implements precedence via nested functions: factor → unary → term → sum.
    """
    analysed = translator(problem)
    logger.debug("Tokens: %s", analysed)

    if not analysed:
        raise E.InvalidExpression(problem, code="3005")

    # ---- Parsing functions in precedence order ----

    def parse_factor(tokens):
        """Numbers and sub-expressions in '()'."""
        if not tokens:
            raise E.InvalidExpression(problem, code="3005")
        token = tokens.pop(0)

        # Parenthesized sub-expression
        if token == "(":
            baum_in_der_klammer = parse_sum(tokens)
            if not tokens or tokens.pop(0) != ')':
                raise E.InvalidExpression(problem, code="3006")
            return baum_in_der_klammer

        elif isinstance(token, Decimal):
            return Number(token)
        else:
            raise E.InvalidExpression(f"{token}", code="3004")

    def parse_unary(tokens):
        """Handle leading '+'/'-'."""
        if tokens and tokens[0] in ('+', '-'):
            operator = tokens.pop(0)
            operand = parse_unary(tokens)

            if operator == '-':
                # Fold literal: -Number -> Number(-value)
                if isinstance(operand, Number):
                    return Number(-operand.evaluate())
                return Negate(operand)
            return operand
        return parse_factor(tokens)

    def parse_term(tokens):
        """Multiplication and division."""
        aktueller_baum = parse_unary(tokens)
        while tokens and tokens[0] in ("*", "/"):
            operator = tokens.pop(0)
            rechtes_teil = parse_unary(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechtes_teil)
        return aktueller_baum

    def parse_sum(tokens):
        """Addition and subtraction."""
        aktueller_baum = parse_term(tokens)
        while tokens and tokens[0] in ("+", "-"):
            operator = tokens.pop(0)
            rechte_seite = parse_term(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechte_seite)
        return aktueller_baum

    finaler_baum = parse_sum(analysed)

    # Anything left over ("2)3", "(2)(3)", a stray ')') is a syntax error
    if analysed:
        raise E.InvalidExpression(f"{analysed[0]}", code="3004")

    logger.debug("Final AST: %s", finaler_baum)
    return finaler_baum


# -----------------------------
# Public entry point
# -----------------------------

def evaluate(raw):
    """Main API: normalize → percent → whitelist → parse → compute.

    Returns a finite Decimal; raises E.InvalidExpression for anything that
    cannot be computed safely. Empty or whitespace-only input is 0.
    """
    if not raw or not raw.strip():
        return Decimal(0)

    getcontext().prec = PRECISION

    problem = expand_percent(normalize_glyphs(raw))
    if not ALLOWED_PATTERN.fullmatch(problem):
        raise E.InvalidExpression(raw, code="3001", equation=raw)

    try:
        ergebnis = ast(problem).evaluate()

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = raw
        raise e
    # Decimal overflow / invalid operation on extreme values
    except DecimalException as e:
        raise E.InvalidExpression(f"{e}", code="3007", equation=raw) from e
    # Thousands of nested parentheses exhaust the parser's stack
    except RecursionError as e:
        raise E.InvalidExpression(raw, code="3008", equation=raw) from e

    if not ergebnis.is_finite():
        raise E.InvalidExpression(f"{ergebnis}", code="3007", equation=raw)

    return ergebnis


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem: ")
    problem = input()
    try:
        print(evaluate(problem))
    except E.MathError as e:
        print(e.describe())


if __name__ == "__main__":
    test_main()
