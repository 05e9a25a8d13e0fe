# DisplayEngine.py
"""""
Preview policy and number formatting for the result area.

The live preview must never show an error while the user is still typing:
a "pending" buffer (ending in an operator, whitespace, '.' or '(') is not
evaluated at all, and a buffer that fails to evaluate falls back to the last
committed result (or 0).
"""""

import logging
import re
from decimal import Decimal, getcontext, ROUND_HALF_UP

from . import config_manager as config_manager
from . import error as E
from . import MathEngine as MathEngine

logger = logging.getLogger(__name__)

ERROR_TEXT = "Error"
EMPTY_EXPRESSION = "\xa0"  # keeps the expression line from collapsing

PENDING_PATTERN = re.compile(r"[+\-*/\s.(]$")


def is_pending(expression):
    """True if the buffer ends in an operator, whitespace, a decimal point or '('."""
    return bool(PENDING_PATTERN.search(expression))


def format_number(ergebnis, decimal_places=None):
    """Render a number the way the result area shows it.

    Integers print without a decimal point; everything else is rounded to
    `decimal_places` digits after the point (setting "decimal_places" when not
    given) and stripped of trailing zeros. None renders as "0".
    """
    if ergebnis is None:
        return "0"

    if decimal_places is None:
        decimal_places = config_manager.load_setting_value("decimal_places")

    if not isinstance(ergebnis, Decimal):
        ergebnis = Decimal(str(ergebnis))

    if ergebnis == 0:
        # Covers -0 as well
        return "0"

    if ergebnis == ergebnis.to_integral_value():
        return f"{ergebnis.to_integral_value():f}"

    # quantize() needs room for every integer digit plus the requested decimals
    getcontext().prec = max(128, ergebnis.adjusted() + decimal_places + 2)
    try:
        gerundetes_ergebnis = ergebnis.quantize(Decimal(1).scaleb(-decimal_places), rounding=ROUND_HALF_UP)
    finally:
        getcontext().prec = MathEngine.PRECISION

    ausgabe_string = f"{gerundetes_ergebnis:f}"
    if "." in ausgabe_string:
        ausgabe_string = ausgabe_string.rstrip("0").rstrip(".")
    if ausgabe_string in ("-0", ""):
        return "0"
    return ausgabe_string


def current_display(expression, last_result, decimal_places=None):
    """Text for the result area while the user is editing `expression`."""
    fallback = format_number(last_result, decimal_places)

    if not expression:
        return "0"

    if is_pending(expression):
        return fallback

    try:
        preview = MathEngine.evaluate(expression)
    except E.InvalidExpression as e:
        # A half-typed expression like "(3" is normal while editing
        logger.debug("No preview for %r: %s", expression, e.describe())
        return fallback

    return format_number(preview, decimal_places)


def expression_text(expression):
    """Text for the expression line; a non-breaking space when empty."""
    return expression or EMPTY_EXPRESSION
