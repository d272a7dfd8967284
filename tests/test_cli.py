import json
import subprocess
import sys
from pathlib import Path

import pytest

from rydsim.cli import main, parse_expr, parse_params

ROOT = Path(__file__).resolve().parent.parent


def run_cli(capsys, *argv):
    main(list(argv))
    return json.loads(capsys.readouterr().out)


def test_cli_blockade(capsys):
    out = run_cli(capsys, "run", "blockade", "-n", "3")
    assert [p["label"] for p in out["probabilities"]] == ["000", "111"]
    assert out["circuitGates"] == [
        {"gate": "H", "targets": [0]},
        {"gate": "CX", "targets": [0, 1]},
        {"gate": "CX", "targets": [1, 2]},
    ]
    assert out["entanglementPairs"] == [[0, 1], [1, 2]]
    assert "expectationValue" not in out


def test_cli_tweezer_params(capsys):
    out = run_cli(capsys, "run", "tweezer", "-n", "2", "-p", "0.3,")
    assert [g["gate"] for g in out["circuitGates"]] == ["RY(0.30)", "RY(0.79)", "CRZ"]
    assert abs(sum(p["probability"] for p in out["probabilities"]) - 1.0) < 1e-9


def test_cli_variational_seed(capsys):
    a = run_cli(capsys, "run", "variational", "-n", "3", "--seed", "5")
    b = run_cli(capsys, "run", "variational", "-n", "3", "--seed", "5")
    assert a == b
    assert -1.0 <= a["expectationValue"] <= 1.0
    assert len(a["probabilities"]) == 8


def test_cli_circuit_expr(capsys):
    out = run_cli(capsys, "circuit", "H0,CX0-1")
    probs = [p["probability"] for p in out["probabilities"]]
    assert probs == pytest.approx([0.5, 0.0, 0.0, 0.5], abs=1e-9)
    assert out["circuitGates"][1] == {"gate": "CX", "targets": [0, 1]}


def test_cli_errors(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["run", "blockade", "-n", "0"])
    assert exc.value.code == 2
    assert "num_qubits" in capsys.readouterr().err
    with pytest.raises(SystemExit):
        main(["circuit", "H0,FOO1"])


def test_parse_expr_tokens():
    circ = parse_expr("h0, ry1:0.5 ,CRZ0-2:1.0,x2")
    assert circ.num_qubits == 3
    assert [e.gate for e in circ.trace()] == ["H", "RY(0.50)", "CRZ", "X"]
    assert parse_expr("H0", num_qubits=4).num_qubits == 4
    with pytest.raises(ValueError):
        parse_expr("CX0")
    with pytest.raises(ValueError):
        parse_expr("RY0")
    with pytest.raises(ValueError):
        parse_expr("H0:0.3")


def test_parse_params():
    assert parse_params(None) == []
    assert parse_params("0.1,,0.3") == [0.1, None, 0.3]


def test_cli_module_entrypoint():
    cmd = [sys.executable, "-m", "rydsim.cli", "run", "blockade", "-n", "2"]
    out = subprocess.check_output(cmd, text=True, cwd=ROOT)
    labels = [p["label"] for p in json.loads(out)["probabilities"]]
    assert labels == ["00", "11"]
