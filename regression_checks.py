from calculator_engine import CalculatorEngine
from expression_state import ExpressionState
import sys


def _walk(keys: str, *, max_length: int = ExpressionState.MAX_LENGTH):
	"""Pulsa cada carácter de keys y registra (expresión, resultado) tras cada tecla."""
	engine = CalculatorEngine(ExpressionState(max_length=max_length))
	states = []

	for key in keys:
		engine.press(key)
		states.append((engine.expression_text, engine.result_text))

	return engine, states


def inspect_key_sequence(keys: str, *, show: int = 0) -> None:
	"""Imprime la evolución de la pantalla al pulsar la secuencia de teclas."""
	engine, states = _walk(keys)

	print("Key sequence inspection")
	print(f"keys:           {keys}")
	print(f"total states:   {len(states)}")

	limit = len(states) if show <= 0 else show
	print("states:")
	for i, (key, (expr, result)) in enumerate(zip(keys, states[:limit]), start=1):
		print(f"  {i}. {key!r:6} expr={expr!r:24} result={result}")

	print(f"final expr:     {engine.expression_text}")
	print(f"final result:   {engine.result_text}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	engine, _ = _walk("2+2=")
	expected_actual.append(("2+2=", "4", engine.expression_text))
	checks.append(("equals seeds the next expression", engine.state.is_evaluated))

	engine, _ = _walk("2+2=+3")
	expected_actual.append(("2+2=+3", "4+3", engine.expression_text))

	engine, _ = _walk("2+2=5")
	expected_actual.append(("2+2=5", "5", engine.expression_text))

	engine, _ = _walk("2+2=.")
	expected_actual.append(("2+2=.", "0.", engine.expression_text))

	engine, _ = _walk("5*-3")
	expected_actual.append(("5*-3", "5*-3", engine.expression_text))
	checks.append(("5*-3 preview is -15", engine.result_text == "-15"))

	engine, _ = _walk("5**")
	expected_actual.append(("5**", "5*", engine.expression_text))

	engine, _ = _walk("5*-+")
	expected_actual.append(("5*-+", "5+", engine.expression_text))

	engine, _ = _walk("*/+-5")
	expected_actual.append(("*/+-5", "-5", engine.expression_text))

	engine, _ = _walk("-*")
	checks.append(("leading '*' after '-' is rejected", engine.expression_text == "-"))

	engine, _ = _walk("1.2.3")
	expected_actual.append(("1.2.3", "1.23", engine.expression_text))

	engine, _ = _walk("7+.")
	expected_actual.append(("7+.", "7+0.", engine.expression_text))

	engine, states = _walk("50%+10")
	expected_actual.append(("50%+10 preview", "10.5", engine.result_text))
	checks.append((
		"trailing operator keeps previous text and shows 0",
		states[3] == ("50%+", "0"),
	))

	engine, _ = _walk("5/0=")
	checks.append(("5/0= shows the error marker", engine.result_text == CalculatorEngine.ERROR_TEXT))
	checks.append(("5/0= keeps the expression", engine.expression_text == "5/0"))
	engine.press("⌫")
	checks.append((
		"input after an error clears the marker",
		(engine.expression_text, engine.result_text) == ("5/", "0"),
	))

	engine, _ = _walk("(2+3)*4=")
	expected_actual.append(("(2+3)*4=", "20", engine.expression_text))

	engine, _ = _walk(".1+.2=")
	expected_actual.append((".1+.2=", "0.3", engine.expression_text))

	engine, _ = _walk("1" * 10 + "+" + "2" * 10, max_length=12)
	expected_actual.append(("max length 12", "1111111111+2", engine.expression_text))

	engine, _ = _walk("12=⌫⌫⌫")
	checks.append(("delete never goes below empty", engine.expression_text == ""))
	checks.append(("empty expression previews 0", engine.result_text == "0"))

	failed = [name for name, ok in checks if not ok]
	failed += [label for label, expected, actual in expected_actual if expected != actual]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "2+2=+3"
	#   python regression_checks.py --inspect "50%+10" --show 3
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --inspect")

		def _read_int(flag: str, default: int) -> int:
			if flag not in sys.argv:
				return default
			idx = sys.argv.index(flag)
			try:
				return int(sys.argv[idx + 1])
			except (ValueError, IndexError):
				raise SystemExit(f"Invalid value for {flag}")

		inspect_key_sequence(keys, show=_read_int("--show", 0))
	else:
		run_regressions()
