"""Punto de entrada de la calculadora."""

import logging
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp
from expression_state import ExpressionState


LOG_LEVEL = logging.WARNING
MAX_EXPRESSION_LENGTH = ExpressionState.MAX_LENGTH


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    root = tk.Tk()
    root.geometry("360x540")
    root.minsize(320, 500)
    engine = CalculatorEngine(ExpressionState(max_length=MAX_EXPRESSION_LENGTH))
    CalculatorApp(root, engine=engine)
    root.mainloop()


if __name__ == "__main__":
    main()
