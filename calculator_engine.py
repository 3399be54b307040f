"""
Motor de la calculadora: eventos de entrada y salidas de pantalla.

Este módulo provee la clase CalculatorEngine, que recibe los eventos
discretos de la capa de entrada (teclado o botones), los aplica sobre
ExpressionState y calcula los textos que la interfaz debe pintar.

Contrato de interfaz:
    - eventos: digit(d), dot(), operator(op), percent(), paren_open(),
      paren_close(), equals(), delete(), clear(), press(key)
    - salidas: expression_text, result_text
"""

import logging

from display_format import format_for_display
from expression_state import DIGITS, ExpressionState
from formula_evaluator import EvaluationError, FormulaEvaluator

logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Conecta el estado de la expresión con el evaluador."""

    ERROR_TEXT = "Error"
    EMPTY_RESULT = "0"

    _GLYPHS = {"×": "*", "÷": "/", "−": "-"}

    def __init__(self, state: ExpressionState | None = None,
                 evaluator: FormulaEvaluator | None = None):
        self._state = state if state is not None else ExpressionState()
        self._evaluator = evaluator if evaluator is not None else FormulaEvaluator()
        self._error = False

    # ── Salidas de pantalla ──────────────────────────────────────

    @property
    def state(self) -> ExpressionState:
        return self._state

    @property
    def expression_text(self) -> str:
        return self._state.snapshot()

    @property
    def result_text(self) -> str:
        if self._error:
            return self.ERROR_TEXT
        return self.preview()

    @property
    def has_error(self) -> bool:
        return self._error

    def preview(self) -> str:
        """Resultado provisional de la expresión actual; nunca lanza."""
        expression = self._state.snapshot()
        normalized = self._evaluator.normalize(expression)
        if not any(ch.isdigit() for ch in normalized):
            return self.EMPTY_RESULT

        try:
            value = self._evaluator.evaluate(expression)
        except EvaluationError as exc:
            logger.debug("Sin vista previa para %r: %s", expression, exc)
            return self.EMPTY_RESULT
        return format_for_display(value)

    # ── Eventos de entrada ───────────────────────────────────────

    def digit(self, d) -> bool:
        self._error = False
        return self._state.push_digit_or_dot(str(d))

    def dot(self) -> bool:
        self._error = False
        return self._state.push_digit_or_dot(".")

    def operator(self, op: str) -> bool:
        self._error = False
        return self._state.push_operator(self._GLYPHS.get(op, op))

    def percent(self) -> bool:
        self._error = False
        return self._state.push_percent()

    def paren_open(self) -> bool:
        self._error = False
        return self._state.push_paren_open()

    def paren_close(self) -> bool:
        self._error = False
        return self._state.push_paren_close()

    def delete(self) -> bool:
        self._error = False
        return self._state.delete_last()

    def clear(self):
        self._error = False
        self._state.clear()

    def equals(self) -> bool:
        """Cálculo final: el resultado pasa a ser la nueva expresión.

        Si la evaluación falla la expresión queda intacta y result_text
        muestra ERROR_TEXT hasta la siguiente entrada.
        """
        expression = self._state.snapshot()
        if not expression:
            return False

        try:
            value = self._evaluator.evaluate(expression)
        except EvaluationError as exc:
            logger.info("No se pudo evaluar %r: %s", expression, exc)
            self._error = True
            return False

        self._error = False
        self._state.load_result(format_for_display(value))
        return True

    def press(self, key: str) -> bool:
        """Despacha un valor de tecla o botón al evento correspondiente.

        Returns:
            bool: False si la tecla no corresponde a ningún evento.
        """
        if len(key) == 1 and key in DIGITS:
            self.digit(key)
        elif key == ".":
            self.dot()
        elif key in ("+", "-", "*", "/") or key in self._GLYPHS:
            self.operator(key)
        elif key == "%":
            self.percent()
        elif key == "(":
            self.paren_open()
        elif key == ")":
            self.paren_close()
        elif key in ("=", "Enter", "Return", "KP_Enter"):
            self.equals()
        elif key in ("BackSpace", "Backspace", "Delete", "⌫"):
            self.delete()
        elif key in ("Escape", "AC", "C"):
            self.clear()
        else:
            return False
        return True
