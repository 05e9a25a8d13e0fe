# Calculator.py
"""""
Expression state machine.

One Calculator instance owns the three pieces of state
(expression buffer, last committed result, "just evaluated" flag) and is the
only place that mutates them. Every command runs to completion under a lock
and finishes by recomputing the result text, so readers always see a
consistent triple.

Commands
--------
- digits, '.', '+', '-', '*', '/', '(', ')'  → InputEngine.append_token
- "clear"      → reset everything
- "neg"        → InputEngine.toggle_sign
- "percent"    → InputEngine.add_percent
- "backspace"  → InputEngine.backspace
- "enter"      → evaluate_expression (commit)
"""""

import logging
import threading

from . import config_manager as config_manager
from . import DisplayEngine as DisplayEngine
from . import error as E
from . import InputEngine as InputEngine
from . import MathEngine as MathEngine

logger = logging.getLogger(__name__)


class Calculator:

    def __init__(self, decimal_places=None):
        if decimal_places is None:
            decimal_places = config_manager.load_setting_value("decimal_places")
        self.decimal_places = decimal_places

        self.expression = ""
        self.last_result = None
        self.just_evaluated = False
        self.result_text = "0"
        self._lock = threading.Lock()

    # --- Display outputs ---
    @property
    def expression_text(self):
        return DisplayEngine.expression_text(self.expression)

    def update_display(self):
        """Recompute the live preview for the current buffer."""
        self.result_text = DisplayEngine.current_display(self.expression, self.last_result,
                                                         self.decimal_places)
        logger.debug("expr=%r result=%r just_evaluated=%s",
                     self.expression, self.result_text, self.just_evaluated)

    # --- Command dispatch ---
    def apply_action(self, action):
        """Process one button/keyboard action and return the new result text."""
        with self._lock:
            self._apply_action(action)
            return self.result_text

    def type_text(self, text):
        """Feed every character of `text` through the token rules (used for paste).

        The whole paste is one command: no other action can land in between.
        """
        with self._lock:
            for zeichen in text:
                if zeichen == "%":
                    self._apply_action("percent")
                elif zeichen == "=":
                    self._apply_action("enter")
                else:
                    self._apply_action(zeichen)
            return self.result_text

    def _apply_action(self, action):
        # Caller holds self._lock
        if action == "clear":
            self._clear()
        elif action == "neg":
            self.expression = InputEngine.toggle_sign(self.expression)
            self.update_display()
        elif action == "percent":
            self.expression = InputEngine.add_percent(self.expression)
            self.update_display()
        elif action == "backspace":
            self.expression, self.just_evaluated, clear_all = InputEngine.backspace(
                self.expression, self.just_evaluated)
            if clear_all:
                self.last_result = None
            self.update_display()
        elif action == "enter":
            self._evaluate_expression()
        else:
            # default: treat as raw token (digit, operator, '.', parens)
            self.expression, self.just_evaluated = InputEngine.append_token(
                self.expression, self.just_evaluated, action)
            self.update_display()

    def clear(self):
        with self._lock:
            self._clear()

    def evaluate_expression(self):
        with self._lock:
            return self._evaluate_expression()

    def _clear(self):
        self.expression = ""
        self.last_result = None
        self.just_evaluated = False
        self.update_display()

    def _evaluate_expression(self):
        # "=" on an empty buffer only resets the result area
        if not self.expression:
            self.result_text = "0"
            return self.result_text

        try:
            ergebnis = MathEngine.evaluate(self.expression)
        except E.InvalidExpression as e:
            logger.info("Cannot evaluate %r: %s", self.expression, e.describe())
            self.result_text = DisplayEngine.ERROR_TEXT
            self.just_evaluated = False
            return self.result_text

        ausgabe_string = DisplayEngine.format_number(ergebnis, self.decimal_places)
        logger.info("%s = %s", self.expression, ausgabe_string)
        self.result_text = ausgabe_string
        self.last_result = ergebnis
        self.expression = ausgabe_string
        self.just_evaluated = True
        return self.result_text

    def set_decimal_places(self, decimal_places):
        with self._lock:
            self.decimal_places = decimal_places
            self.update_display()

    # --- Debug / introspection ---
    def get_state(self):
        with self._lock:
            return {
                "buffer": self.expression,
                "last_result": self.last_result,
                "just_evaluated": self.just_evaluated,
            }

    def set_expr(self, expression):
        """Force the buffer (testing aid); the flag is left as it is."""
        with self._lock:
            self.expression = str(expression)
            self.update_display()
