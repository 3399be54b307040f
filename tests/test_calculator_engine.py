import logging

import pytest

from calculator_engine import CalculatorEngine
from expression_state import ExpressionState


def _press_all(engine, keys):
    for key in keys:
        engine.press(key)
    return engine


@pytest.fixture
def engine():
    return CalculatorEngine()


def test_initial_display(engine):
    assert engine.expression_text == ""
    assert engine.result_text == "0"


def test_live_preview_updates(engine):
    _press_all(engine, "2+3")
    assert engine.expression_text == "2+3"
    assert engine.result_text == "5"
    engine.operator("*")
    assert engine.result_text == "0"
    engine.digit(4)
    assert engine.result_text == "14"


def test_preview_of_division_by_zero_is_neutral(engine):
    _press_all(engine, "5/0")
    assert engine.result_text == "0"
    assert engine.expression_text == "5/0"


def test_preview_with_only_sign_is_zero(engine):
    engine.operator("-")
    assert engine.result_text == "0"


def test_equals_seeds_next_expression(engine):
    _press_all(engine, "2+2")
    assert engine.equals() is True
    assert engine.expression_text == "4"
    assert engine.state.is_evaluated
    _press_all(engine, "+3")
    assert engine.expression_text == "4+3"


def test_digit_after_equals_discards_result(engine):
    _press_all(engine, "2+2=5")
    assert engine.expression_text == "5"


def test_equals_on_error_keeps_expression(engine, caplog):
    _press_all(engine, "5/0")
    with caplog.at_level(logging.INFO, logger="calculator_engine"):
        assert engine.equals() is False
    assert engine.expression_text == "5/0"
    assert engine.result_text == CalculatorEngine.ERROR_TEXT
    assert engine.has_error
    assert "5/0" in caplog.text


def test_error_marker_cleared_by_next_input(engine):
    _press_all(engine, "2+=")
    assert engine.result_text == CalculatorEngine.ERROR_TEXT
    engine.digit("1")
    assert not engine.has_error
    assert engine.result_text == "3"


def test_equals_on_empty_is_noop(engine):
    assert engine.equals() is False
    assert engine.expression_text == ""
    assert not engine.has_error


def test_percent_flow(engine):
    _press_all(engine, "50%+10=")
    assert engine.expression_text == "10.5"


def test_glyph_operators(engine):
    _press_all(engine, "6×7−2÷2")
    assert engine.expression_text == "6*7-2/2"
    assert engine.result_text == "41"


def test_leading_minus_flow(engine):
    _press_all(engine, "-5")
    assert engine.expression_text == "-5"
    assert engine.result_text == "-5"


def test_parentheses(engine):
    engine.paren_open()
    _press_all(engine, "1+2")
    engine.paren_close()
    _press_all(engine, "*3")
    assert engine.expression_text == "(1+2)*3"
    assert engine.result_text == "9"


def test_delete_and_clear(engine):
    _press_all(engine, "123")
    engine.delete()
    assert engine.expression_text == "12"
    engine.clear()
    assert engine.expression_text == ""
    assert engine.result_text == "0"


def test_repeated_delete_until_empty(engine):
    _press_all(engine, "98")
    results = [engine.delete() for _ in range(5)]
    assert results == [True, True, False, False, False]
    assert engine.expression_text == ""


def test_result_continues_with_decimal_result(engine):
    _press_all(engine, "1/4=*2=")
    assert engine.expression_text == "0.5"


def test_large_result_can_be_reused(engine):
    _press_all(engine, "99999999999*99999999999=")
    first = engine.expression_text
    assert "e+" in first
    _press_all(engine, "*2=")
    assert float(engine.expression_text) == pytest.approx(float(first) * 2, rel=1e-11)


@pytest.mark.parametrize("key", ["x", "", "Tab", "^"])
def test_unknown_keys_are_ignored(engine, key):
    _press_all(engine, "7")
    assert engine.press(key) is False
    assert engine.expression_text == "7"


@pytest.mark.parametrize("key", ["Return", "KP_Enter", "Enter", "="])
def test_enter_keys_compute(engine, key):
    _press_all(engine, "6*7")
    assert engine.press(key) is True
    assert engine.expression_text == "42"


def test_keyboard_edit_keys(engine):
    _press_all(engine, "12")
    engine.press("BackSpace")
    assert engine.expression_text == "1"
    engine.press("Escape")
    assert engine.expression_text == ""


def test_custom_state_bound():
    engine = CalculatorEngine(ExpressionState(max_length=4))
    _press_all(engine, "123456")
    assert engine.expression_text == "1234"


def test_seventeen_digit_result_keeps_plain_digits(engine):
    _press_all(engine, "1234567890*10000000=")
    assert engine.expression_text == "12345678900000000"


def test_result_longer_than_bound_is_stored_whole():
    engine = CalculatorEngine(ExpressionState(max_length=5))
    _press_all(engine, "1/3=")
    assert engine.expression_text == "0.3333333333333333"
    assert engine.state.is_evaluated
    engine.digit("7")
    assert engine.expression_text == "7"
