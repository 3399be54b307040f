"""Formato de resultados para la pantalla de la calculadora."""

import math
import re
from decimal import Decimal

from mpmath import mp

PLAIN_MAX_CHARS = 18
SIGNIFICANT_DIGITS = 12

# Rango en el que el texto plano se escribe sin exponente
PLAIN_MIN_ABS = 1e-6
PLAIN_MAX_ABS = 1e21

_NUMBER_RE = re.compile(r"^(?P<mantissa>[+-]?[\d.]+)(?:[eE](?P<exponent>[+-]?\d+))?$")


def format_for_display(value: float) -> str:
    """Convierte un resultado en el texto que se muestra y se reutiliza.

    Se usa la representación decimal más corta del float, sin exponente
    entre PLAIN_MIN_ABS y PLAIN_MAX_ABS; si supera
    PLAIN_MAX_CHARS caracteres se redondea a SIGNIFICANT_DIGITS cifras
    significativas. En ambos casos se recortan los ceros sobrantes.
    """
    if math.isnan(value):
        return "NaN"
    if value == float("inf"):
        return "∞"
    if value == float("-inf"):
        return "-∞"
    if value == 0:
        return "0"

    text = plain_text(value)
    if len(text) > PLAIN_MAX_CHARS:
        text = mp.nstr(mp.mpf(value), SIGNIFICANT_DIGITS)
    return trim_trailing_zeros(text)


def plain_text(value: float) -> str:
    """Dígitos más cortos del float; en notación fija dentro del rango plano."""
    text = repr(float(value))
    if PLAIN_MIN_ABS <= abs(value) < PLAIN_MAX_ABS:
        text = format(Decimal(text), "f")
    return text


def trim_trailing_zeros(text: str) -> str:
    """'2.500' -> '2.5', '4.0' -> '4', '1.50e+20' -> '1.5e+20'."""
    match = _NUMBER_RE.match(text)
    if match is None:
        return text

    mantissa = match.group("mantissa")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")

    exponent = match.group("exponent")
    if exponent is None:
        return mantissa
    power = int(exponent)
    if power == 0:
        return mantissa
    sign = "+" if power > 0 else "-"
    return f"{mantissa}e{sign}{abs(power)}"
