import pytest

from formula_evaluator import (
    EvaluationError,
    FormulaEvaluator,
    MalformedExpressionError,
    NonFiniteResultError,
    OversizeInputError,
)


@pytest.fixture
def evaluator():
    return FormulaEvaluator()


@pytest.mark.parametrize("expression, expected", [
    ("3×4÷2", "3*4/2"),
    ("7−2", "7-2"),
    ("50%", "(50/100)"),
    ("12.5%+1", "(12.5/100)+1"),
    ("5.%", "(5./100)"),
    ("(2+3)%", "(2+3)"),
    ("%5", "5"),
    ("1 + 2", "1+2"),
    ("2a$b3", "23"),
    ("1e+20*2", "1e+20*2"),
])
def test_normalize(evaluator, expression, expected):
    assert evaluator.normalize(expression) == expected


def test_percent_applies_to_nearest_literal_only(evaluator):
    assert evaluator.normalize("2+50%") == "2+(50/100)"
    assert evaluator.normalize("10*5%") == "10*(5/100)"


@pytest.mark.parametrize("expression, expected", [
    ("2+2", 4),
    ("2+3*4", 14),
    ("(2+3)*4", 20),
    ("10-4-3", 3),
    ("12/3/2", 2),
    ("50%+10", 10.5),
    ("200*10%", 20),
    ("-5", -5),
    ("5*-3", -15),
    ("5+-3", 2),
    ("-(2+3)", -5),
    ("0.5+.25", 0.75),
    ("007+1", 8),
    ("1e+3/4", 250),
])
def test_evaluate(evaluator, expression, expected):
    assert evaluator.evaluate(expression) == pytest.approx(expected)


def test_empty_expression_is_zero(evaluator):
    assert evaluator.evaluate("") == 0
    assert evaluator.evaluate("abc") == 0


@pytest.mark.parametrize("expression", ["5/0", "0/0", "1/(2-2)", "1e308*10"])
def test_non_finite_results_raise(evaluator, expression):
    with pytest.raises(NonFiniteResultError):
        evaluator.evaluate(expression)


@pytest.mark.parametrize("expression", [
    "2+", "5*", "(2+3", "2+3)", "()", ".", "1.2.3", "2(3)", "-", "*5",
])
def test_malformed_expressions_raise(evaluator, expression):
    with pytest.raises(MalformedExpressionError):
        evaluator.evaluate(expression)


def test_oversize_expression_raises(evaluator):
    with pytest.raises(OversizeInputError):
        evaluator.evaluate("1+" * 100 + "1")


def test_length_bound_counts_normalized_text():
    evaluator = FormulaEvaluator(max_length=10)
    # "5%" se convierte en "(5/100)": 7 caracteres
    assert evaluator.evaluate("5%") == pytest.approx(0.05)
    with pytest.raises(OversizeInputError):
        evaluator.evaluate("5%+5%")


def test_deep_nesting_is_malformed_not_fatal():
    evaluator = FormulaEvaluator(max_length=10_000)
    with pytest.raises(EvaluationError):
        evaluator.evaluate("(" * 3000 + "1" + ")" * 3000)


def test_errors_are_value_errors(evaluator):
    with pytest.raises(ValueError):
        evaluator.evaluate("5/0")


def test_no_code_execution(evaluator):
    assert evaluator.normalize("__import__('os')") == "()"
    with pytest.raises(MalformedExpressionError):
        evaluator.evaluate("__import__('os')")
