# InputEngine.py
"""""
Editing rules for the expression buffer.

Every function here is pure: it receives the current buffer (and, where it
matters, the "just evaluated" flag) and returns the new values. The
Calculator object owns the state and decides when to call which rule.

Token rules (first match wins)
------------------------------
1) After a commit, a digit or '.' starts a fresh expression; an operator
   continues from the committed result.
2) '.': ignored if the trailing number already has one, "0." if there is no
   trailing number.
3) '+', '*' and '/' cannot open an empty buffer ('-' can, as a sign).
4) An operator replaces any trailing run of operators/whitespace.
5) Everything else is appended as typed.
"""""

import logging
import re

from . import MathEngine as MathEngine

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
Operations = MathEngine.Operations
PARENTHESES = "()"

# Trailing number for the decimal-point rule: "12", "12.", "12.5" or ".5"
TRAILING_NUMBER = re.compile(r"(\d*\.\d*|\d+)$")
# Trailing run of operators and whitespace, replaced by the next operator
TRAILING_OPERATORS = re.compile(r"[+\-*/\s]+$")
# Trailing signed number for the sign toggle; a bare '-' only counts as a sign
# at the start of the buffer or right after an operator or '('
TRAILING_SIGNED_NUMBER = re.compile(r"^(.*?)((?:(?<![\d.)%])-)?\d+(?:\.\d+)?|\(-?\d+(?:\.\d+)?\))$")


def is_token(token):
    return token in DIGITS or token == "." or token in Operations or token in PARENTHESES


def append_token(expression, just_evaluated, token):
    """Apply one typed token; returns (expression, just_evaluated)."""
    token = MathEngine.GLYPHS.get(token, token)

    if len(token) != 1 or not is_token(token):
        logger.debug("Ignored unknown token %r", token)
        return expression, just_evaluated

    # --- 1. Fresh expression after a commit ---
    if just_evaluated and (token in DIGITS or token == "."):
        expression = ""
        just_evaluated = False

    # --- 2. Decimal point ---
    if token == ".":
        trailing = TRAILING_NUMBER.search(expression)
        if trailing and "." in trailing.group(0):
            return expression, just_evaluated
        if not trailing:
            return expression + "0.", False

    if token in Operations:
        # --- 3. Leading operator guard ---
        if expression == "" and token != "-":
            return expression, just_evaluated

        # --- 4. Consecutive operators: last one wins ---
        if TRAILING_OPERATORS.search(expression):
            stripped = TRAILING_OPERATORS.sub("", expression)
            if stripped == "" and token != "-":
                # "-" followed by "*" would leave "*" as the first character
                return expression, just_evaluated
            return stripped + token, False

    # --- 5. Default ---
    return expression + token, False


def add_percent(expression):
    """Append '%' when the buffer ends in a digit, otherwise leave it alone."""
    if expression and expression[-1] in DIGITS:
        return expression + "%"
    return expression


def toggle_sign(expression):
    """Flip the sign of the trailing number: "12" <-> "(-12)".

    Without a trailing number the whole buffer gets (or loses) a leading minus.
    """
    if not expression:
        return expression

    treffer = TRAILING_SIGNED_NUMBER.match(expression)
    if not treffer:
        if expression.startswith("-"):
            return expression[1:]
        return "-" + expression

    prefix, zahl = treffer.group(1), treffer.group(2)
    if zahl.startswith("(") and zahl.endswith(")"):
        zahl = zahl[1:-1]

    if zahl.startswith("-"):
        return prefix + zahl[1:]
    # Parenthesized so "3*" + "(-5)" never reads as "3*-5"
    return prefix + "(-" + zahl + ")"


def backspace(expression, just_evaluated):
    """Drop the last character; returns (expression, just_evaluated, clear_all).

    Right after a commit the buffer only holds the result, so backspace
    clears everything instead (clear_all is True).
    """
    if just_evaluated:
        return "", False, True
    return expression[:-1], just_evaluated, False
