"""Normalización y evaluación segura de expresiones aritméticas."""

import math
import re


class EvaluationError(ValueError):
    """Base de los errores de evaluación de la calculadora."""


class OversizeInputError(EvaluationError):
    """La expresión normalizada supera la longitud permitida."""


class MalformedExpressionError(EvaluationError):
    """La expresión no se puede analizar (operador colgante, paréntesis...)."""


class NonFiniteResultError(EvaluationError):
    """El resultado no es un número real finito (p. ej. división por cero)."""


class FormulaEvaluator:
    """Transforma expresiones de UI y evalúa su valor numérico.

    No ejecuta código: la expresión se tokeniza y se evalúa con un
    analizador descendente recursivo que solo conoce números, los
    operadores ``+ - * /`` y paréntesis.
    """

    MAX_LENGTH = 200

    _GLYPHS = {"×": "*", "÷": "/", "−": "-"}
    _SAFE_CHARS = frozenset("0123456789.+-*/()")
    # Literal numérico: entero, con fracción opcional o solo fracción,
    # más un exponente opcional (resultados como "1e+20").
    _NUMBER = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+\-]?\d+)?")

    def __init__(self, max_length: int | None = None):
        self._max_length = max_length if max_length is not None else self.MAX_LENGTH

    def normalize(self, expression: str) -> str:
        """Devuelve la forma estrictamente aritmética de la expresión.

        Pasos, en este orden:
            1. símbolos decorativos (×, ÷, −) a ``*``, ``/``, ``-``
            2. ``N%`` a ``(N/100)``, solo sobre el literal inmediatamente
               anterior; un '%' tras un paréntesis se descarta
            3. se eliminan los caracteres fuera del alfabeto aritmético
        """
        for glyph, plain in self._GLYPHS.items():
            expression = expression.replace(glyph, plain)

        parts = []
        i = 0
        n = len(expression)
        while i < n:
            match = self._NUMBER.match(expression, i)
            if match:
                literal = match.group(0)
                i = match.end()
                if i < n and expression[i] == "%":
                    parts.append(f"({literal}/100)")
                    i += 1
                else:
                    parts.append(literal)
                continue

            ch = expression[i]
            if ch in self._SAFE_CHARS:
                parts.append(ch)
            i += 1

        return "".join(parts)

    def evaluate(self, expression: str) -> float:
        """Evalúa la expresión y devuelve un float finito.

        Raises:
            OversizeInputError: expresión normalizada demasiado larga.
            MalformedExpressionError: sintaxis inválida.
            NonFiniteResultError: división por cero o desbordamiento.
        """
        normalized = self.normalize(expression)
        if not normalized:
            return 0.0
        if len(normalized) > self._max_length:
            raise OversizeInputError("Expresión demasiado larga")

        tokens = self._tokenize(normalized)
        try:
            value = _Parser(tokens).parse()
        except RecursionError as exc:
            raise MalformedExpressionError("Anidamiento excesivo") from exc

        if not math.isfinite(value):
            raise NonFiniteResultError("Resultado no finito")
        return value

    def _tokenize(self, normalized: str) -> list:
        tokens = []
        i = 0
        n = len(normalized)
        while i < n:
            match = self._NUMBER.match(normalized, i)
            if match:
                tokens.append(("NUM", float(match.group(0))))
                i = match.end()
                continue

            ch = normalized[i]
            if ch in "+-*/":
                tokens.append(("OP", ch))
            elif ch == "(":
                tokens.append(("LPAREN", ch))
            elif ch == ")":
                tokens.append(("RPAREN", ch))
            else:
                raise MalformedExpressionError(f"Símbolo inválido: {ch!r}")
            i += 1

        tokens.append(("EOF", None))
        return tokens


class _Parser:
    """Analizador descendente recursivo con precedencia convencional.

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('+' | '-') unary | primary
    primary := NUM | '(' expr ')'
    """

    def __init__(self, tokens: list):
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> float:
        value = self._expr()
        kind, text = self._peek()
        if kind != "EOF":
            raise MalformedExpressionError(f"Símbolo inesperado: {text}")
        return value

    def _peek(self):
        return self._tokens[self._pos]

    def _advance(self):
        tok = self._tokens[self._pos]
        if tok[0] != "EOF":
            self._pos += 1
        return tok

    def _expr(self) -> float:
        value = self._term()
        while self._peek() in (("OP", "+"), ("OP", "-")):
            _, op = self._advance()
            right = self._term()
            value = value + right if op == "+" else value - right
        return value

    def _term(self) -> float:
        value = self._unary()
        while self._peek() in (("OP", "*"), ("OP", "/")):
            _, op = self._advance()
            right = self._unary()
            if op == "*":
                value = value * right
            elif right == 0:
                raise NonFiniteResultError("División por cero")
            else:
                value = value / right
        return value

    def _unary(self) -> float:
        if self._peek() in (("OP", "+"), ("OP", "-")):
            _, op = self._advance()
            operand = self._unary()
            return -operand if op == "-" else operand
        return self._primary()

    def _primary(self) -> float:
        kind, value = self._advance()
        if kind == "NUM":
            return value
        if kind == "LPAREN":
            inner = self._expr()
            if self._advance()[0] != "RPAREN":
                raise MalformedExpressionError("Falta ')'")
            return inner
        if kind == "EOF":
            raise MalformedExpressionError("Expresión incompleta")
        raise MalformedExpressionError(f"Símbolo inesperado: {value}")
