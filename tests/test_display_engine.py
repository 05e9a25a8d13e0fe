"""Tests for number formatting and the live preview policy."""

from decimal import Decimal

import pytest

from LiveCalc import DisplayEngine, MathEngine, config_manager


# --- format_number ---

@pytest.mark.parametrize("value, expected", [
    (None, "0"),
    (Decimal("19"), "19"),
    (Decimal("19.000"), "19"),
    (Decimal("1E+3"), "1000"),
    (Decimal("-7"), "-7"),
    (Decimal("-0"), "0"),
    (Decimal("0.5"), "0.5"),
    (Decimal("2.50"), "2.5"),
    (Decimal("-0.125"), "-0.125"),
    (7, "7"),
    (0.1 + 0.2, "0.3"),
])
def test_format_number(value, expected):
    assert DisplayEngine.format_number(value) == expected


def test_format_number_rounds_to_twelve_places():
    assert DisplayEngine.format_number(Decimal(1) / Decimal(3)) == "0.333333333333"
    assert DisplayEngine.format_number(Decimal(2) / Decimal(3)) == "0.666666666667"


def test_format_number_rounding_to_integer():
    assert DisplayEngine.format_number(Decimal(1) / Decimal(3) * 3) == "1"


def test_format_number_tiny_value_is_zero():
    assert DisplayEngine.format_number(Decimal("-1E-20")) == "0"


def test_format_number_explicit_places():
    assert DisplayEngine.format_number(Decimal("3.14159"), decimal_places=2) == "3.14"


def test_format_number_uses_setting(isolated_settings):
    config_manager.save_setting({"decimal_places": 3})
    assert DisplayEngine.format_number(Decimal("3.14159")) == "3.142"


def test_format_number_large_non_integer():
    assert DisplayEngine.format_number(Decimal("123456789012345678901234567890.5")) == \
        "123456789012345678901234567890.5"


@pytest.mark.parametrize("text", ["42", "-3", "0.5", "1234.125", "0.333333333333"])
def test_format_evaluate_round_trip(text):
    assert DisplayEngine.format_number(MathEngine.evaluate(text)) == text


# --- is_pending ---

@pytest.mark.parametrize("expression", ["3+", "3-", "3*", "3/", "3 ", "3.", "(", "3*("])
def test_pending_buffers(expression):
    assert DisplayEngine.is_pending(expression)


@pytest.mark.parametrize("expression", ["3", "3.5", "(3)", "50%"])
def test_not_pending(expression):
    assert not DisplayEngine.is_pending(expression)


# --- current_display ---

def test_empty_buffer_shows_zero():
    assert DisplayEngine.current_display("", None) == "0"
    assert DisplayEngine.current_display("", Decimal("19")) == "0"


@pytest.mark.parametrize("expression", ["3+", "12.", "(", "5*("])
def test_pending_buffer_matches_empty_buffer(expression):
    assert DisplayEngine.current_display(expression, None) == DisplayEngine.current_display("", None)


def test_pending_buffer_shows_last_result():
    assert DisplayEngine.current_display("19+", Decimal("19")) == "19"


def test_pending_buffer_is_never_evaluated(monkeypatch):
    def fail(raw):
        raise AssertionError("evaluate called for a pending buffer")

    monkeypatch.setattr(MathEngine, "evaluate", fail)
    assert DisplayEngine.current_display("7*", Decimal("2.5")) == "2.5"


def test_live_preview():
    assert DisplayEngine.current_display("12+7", None) == "19"
    assert DisplayEngine.current_display("1/3", None) == "0.333333333333"


def test_unparsable_buffer_falls_back():
    assert DisplayEngine.current_display("(3", None) == "0"
    assert DisplayEngine.current_display("(3", Decimal("8")) == "8"
    assert DisplayEngine.current_display("3/0", Decimal("8")) == "8"


def test_expression_text_placeholder():
    assert DisplayEngine.expression_text("") == "\xa0"
    assert DisplayEngine.expression_text("1+2") == "1+2"


# --- very many decimal places ---

def test_format_number_more_places_than_default_precision():
    value = Decimal(1) / Decimal(3)
    assert DisplayEngine.format_number(value, decimal_places=130) == f"{value:f}"
    assert DisplayEngine.format_number(value, decimal_places=200) == f"{value:f}"


def test_format_number_long_integer_part_with_many_places():
    value = Decimal("1" * 100 + ".5")
    assert DisplayEngine.format_number(value, decimal_places=60) == "1" * 100 + ".5"


def test_format_number_at_maximum_setting():
    maximum = config_manager.MAXIMUM_VALUES["decimal_places"]
    assert DisplayEngine.format_number(Decimal(2) / Decimal(3), decimal_places=maximum).startswith("0.6666")


def test_setting_bounds_contain_defaults():
    for key, minimum in config_manager.MINIMUM_VALUES.items():
        assert minimum <= config_manager.DEFAULT_SETTINGS[key] <= config_manager.MAXIMUM_VALUES[key]
