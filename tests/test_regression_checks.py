from regression_checks import inspect_key_sequence, run_regressions


def test_regression_script_passes(capsys):
    run_regressions()
    assert "All regression checks passed." in capsys.readouterr().out


def test_inspect_key_sequence_prints_states(capsys):
    inspect_key_sequence("2+2=+3")
    out = capsys.readouterr().out
    assert "total states:   6" in out
    assert "final expr:     4+3" in out
