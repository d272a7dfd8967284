import pytest

from rydsim import GateLogEntry, QuantumCircuit


def test_trace_records_labels_and_targets():
    circ = QuantumCircuit(3).h(0).ry(1, 0.785398).cx(0, 1).crz(1, 2, 1.9635)
    assert len(circ) == 4
    assert circ.trace() == (
        GateLogEntry("H", (0,)),
        GateLogEntry("RY(0.79)", (1,)),
        GateLogEntry("CX", (0, 1)),
        GateLogEntry("CRZ", (1, 2)),
    )


def test_simulate_starts_fresh_each_time():
    circ = QuantumCircuit(2).x(0)
    first = circ.simulate(device="cpu").probabilities()
    second = circ.simulate(device="cpu").probabilities()
    assert first.tolist() == second.tolist() == [0.0, 0.0, 1.0, 0.0]


def test_insertion_validation():
    with pytest.raises(ValueError):
        QuantumCircuit(0)
    circ = QuantumCircuit(2)
    with pytest.raises(IndexError):
        circ.h(2)
    with pytest.raises(ValueError):
        circ.cx(1, 1)
    assert len(circ) == 0
