"""
Estado editable de la expresión de la calculadora.

ExpressionState guarda el texto que el usuario está componiendo y la
marca de "recién evaluado". Toda mutación pasa por sus operaciones, que
aplican las reglas de validez de forma incremental:

    - un solo punto decimal por número (".5" se guarda como "0.5")
    - operadores consecutivos se colapsan en el último tecleado,
      salvo un '-' tras otro operador ("5*-3")
    - la expresión puede empezar por '-', nunca por '*', '/' o '+'
    - longitud máxima acotada (MAX_LENGTH)
"""

import re

OPERATORS = "+-*/"
DIGITS = "0123456789"


class ExpressionState:
    """Texto de la expresión en edición y bandera de resultado previo."""

    MAX_LENGTH = 60

    _TRAILING_OPERATORS = re.compile(r"[+\-*/]+$")
    _TRAILING_NUMBER = re.compile(r"[\d.]+$")
    _TRAILING_TOKEN = re.compile(r"[^+\-*/]+$")

    def __init__(self, max_length: int | None = None):
        self._max_length = max_length if max_length is not None else self.MAX_LENGTH
        self._text = ""
        self._evaluated = False

    # ── Consultas ────────────────────────────────────────────────

    @property
    def is_evaluated(self) -> bool:
        return self._evaluated

    @property
    def max_length(self) -> int:
        return self._max_length

    def snapshot(self) -> str:
        return self._text

    def __len__(self):
        return len(self._text)

    def last_char(self) -> str:
        return self._text[-1:]

    def trailing_token(self) -> str:
        """Sufijo sin operadores (número, posiblemente con % o paréntesis)."""
        match = self._TRAILING_TOKEN.search(self._text)
        return match.group(0) if match else ""

    def trailing_number(self) -> str:
        """Último número (sufijo de dígitos y punto) de la expresión."""
        match = self._TRAILING_NUMBER.search(self._text)
        return match.group(0) if match else ""

    # ── Entrada ──────────────────────────────────────────────────

    def push_digit_or_dot(self, token: str) -> bool:
        """Añade un dígito o un punto decimal.

        Tras una evaluación, el resultado anterior se descarta y se empieza
        una expresión nueva.

        Returns:
            bool: True si la entrada se aceptó.
        """
        if len(token) != 1 or token not in DIGITS + ".":
            raise ValueError(f"Token numérico inválido: {token!r}")

        if self._evaluated:
            self._text = ""
            self._evaluated = False

        addition = token
        if token == ".":
            if "." in self.trailing_token():
                return False
            # "(" o "%" no cuentan como cifras: ".5" tras ellos es "0.5"
            if not self.trailing_number():
                addition = "0."

        return self._append(addition)

    def push_operator(self, op: str) -> bool:
        """Añade un operador binario aplicando la regla de colapso."""
        if op not in OPERATORS or len(op) != 1:
            raise ValueError(f"Operador inválido: {op!r}")

        if not self._text:
            if op != "-":
                return False
            self._text = "-"
            self._evaluated = False
            return True

        last = self.last_char()
        if last in OPERATORS:
            if op == "-" and last != "-":
                if not self._append("-"):
                    return False
            else:
                run = self._TRAILING_OPERATORS.search(self._text).group(0)
                # Un operador al inicio solo puede ser el signo negativo
                if len(run) == len(self._text) and op != "-":
                    return False
                self._text = self._text[: -len(run)] + op
        elif not self._append(op):
            return False

        self._evaluated = False
        return True

    def push_percent(self) -> bool:
        return self.push_token("%")

    def push_paren_open(self) -> bool:
        return self.push_token("(")

    def push_paren_close(self) -> bool:
        return self.push_token(")")

    def push_token(self, token: str) -> bool:
        """Añade '%', '(' o ')' sin validar; la sintaxis se comprueba al evaluar."""
        if token not in ("%", "(", ")"):
            raise ValueError(f"Token inválido: {token!r}")
        return self._append(token)

    # ── Edición ──────────────────────────────────────────────────

    def delete_last(self) -> bool:
        if not self._text:
            return False
        self._text = self._text[:-1]
        return True

    def clear(self):
        self._text = ""
        self._evaluated = False

    def load_result(self, text: str):
        """Sustituye la expresión por un resultado ya formateado.

        El límite de longitud solo rige lo que se añade tecleando; el
        resultado se guarda completo.
        """
        self._text = text
        self._evaluated = True

    # ── Internos ─────────────────────────────────────────────────

    def _append(self, text: str) -> bool:
        if len(self._text) + len(text) > self._max_length:
            return False
        self._text += text
        self._evaluated = False
        return True
