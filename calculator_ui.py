"""
Interfaz gráfica de la calculadora.

Usa tkinter. La interfaz solo traduce botones y teclas a eventos de
CalculatorEngine y pinta sus salidas; todo corre en el bucle de eventos
de tk, incluido el borrado continuo al mantener pulsado ⌫.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine


class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
        "error_fg":   "#F38BA8",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, tipo_color); el texto es también
    #  la tecla que se pasa a CalculatorEngine.press().

    KEYPAD = [
        [("AC", "special"), ("⌫", "special"),
         ("(", "func"), (")", "func")],

        [("7", "num"), ("8", "num"), ("9", "num"), ("÷", "op")],

        [("4", "num"), ("5", "num"), ("6", "num"), ("×", "op")],

        [("1", "num"), ("2", "num"), ("3", "num"), ("−", "op")],

        [("0", "num"), (".", "num"), ("%", "func"), ("+", "op")],

        [("=", "equals")],
    ]

    DELETE_KEY = "⌫"

    # Borrado continuo: primera repetición tras REPEAT_DELAY_MS, luego
    # una cada REPEAT_INTERVAL_MS mientras el botón siga pulsado.
    REPEAT_DELAY_MS = 500
    REPEAT_INTERVAL_MS = 90

    _KEYSYMS = {"Return", "KP_Enter", "BackSpace", "Escape"}

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.engine = engine if engine is not None else CalculatorEngine()
        self._repeat_id = None

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=16)
        self._f_result = tkfont.Font(family="Consolas", size=24, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # Expresión en edición (solo lectura: se edita con el teclado)
        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, anchor="e",
            font=self._f_expr, bg=self.C["display_bg"],
            fg=self.C["expr_fg"],
        ).pack(fill="x", pady=(4, 0))

        # Fila del resultado + botón copiar
        row = tk.Frame(frame, bg=self.C["display_bg"])
        row.pack(fill="x", pady=(2, 4))

        tk.Button(
            row, text="Copiar", font=self._f_small,
            bg=self.C["func"], fg=self.C["func_fg"],
            activebackground=self.C["special"], relief="flat",
            cursor="hand2", command=self._copy_result, padx=8,
        ).pack(side="right", padx=(6, 0))

        self.result_var = tk.StringVar(value=CalculatorEngine.EMPTY_RESULT)
        self.result_label = tk.Label(
            row, textvariable=self.result_var, anchor="e",
            font=self._f_result, bg=self.C["display_bg"],
            fg=self.C["result_fg"],
        )
        self.result_label.pack(side="right", fill="x", expand=True)

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                )
                if text == self.DELETE_KEY:
                    btn.bind("<ButtonPress-1>", self._on_delete_press)
                    btn.bind("<ButtonRelease-1>", self._cancel_repeat)
                    btn.bind("<Leave>", self._cancel_repeat)
                else:
                    btn.config(command=lambda k=text: self._on_key(k))
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        key = event.keysym if event.keysym in self._KEYSYMS else event.char
        if not key:
            return None
        if self.engine.press(key):
            self._refresh()
            return "break"
        return None

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, key: str):
        self.engine.press(key)
        self._refresh()

    def _on_delete_press(self, _event):
        self._cancel_repeat()
        self._on_key(self.DELETE_KEY)
        self._repeat_id = self.root.after(self.REPEAT_DELAY_MS, self._repeat_delete)

    def _repeat_delete(self):
        self._on_key(self.DELETE_KEY)
        self._repeat_id = self.root.after(self.REPEAT_INTERVAL_MS, self._repeat_delete)

    def _cancel_repeat(self, _event=None):
        if self._repeat_id is not None:
            self.root.after_cancel(self._repeat_id)
            self._repeat_id = None

    def _refresh(self):
        self.expr_var.set(self.engine.expression_text)
        self.result_var.set(self.engine.result_text)
        fg = self.C["error_fg"] if self.engine.has_error else self.C["result_fg"]
        self.result_label.config(fg=fg)

    # ── Copiar resultado ─────────────────────────────────────────

    def _copy_result(self):
        self.root.clipboard_clear()
        self.root.clipboard_append(self.result_var.get())
