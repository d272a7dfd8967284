import math

import pytest
import torch

from rydsim import Gate, InvalidQubitCount, QuantumCircuit, StateVector


def test_bell_state_probabilities():
    circ = QuantumCircuit(2)
    circ.h(0).cx(0, 1)
    probs = circ.simulate(device="cpu").probabilities()
    expected = torch.tensor([0.5, 0.0, 0.0, 0.5], dtype=probs.dtype)
    assert torch.allclose(probs, expected, atol=1e-9)


def test_gate_methods_rebind_tensor():
    sv = StateVector(2, device="cpu")
    initial = sv.tensor
    sv.h(0).cx(0, 1)
    assert initial[0].item() == 1.0
    assert sv.tensor is not initial
    assert sv.norm() == pytest.approx(1.0, abs=1e-12)


def test_invalid_num_qubits():
    with pytest.raises(InvalidQubitCount):
        StateVector(0)
    with pytest.raises(InvalidQubitCount):
        StateVector(5, max_qubits=4)


def test_rx_gradient():
    theta = torch.tensor(0.3, dtype=torch.float64, requires_grad=True)
    sv = StateVector(1, device="cpu")
    sv.rx(0, theta)
    prob1 = sv.probabilities()[1]
    prob1.backward()
    assert theta.grad.item() == pytest.approx(0.5 * math.sin(0.3), abs=1e-9)


def test_pauli_expectations():
    sv = StateVector(2, device="cpu")
    sv.x(1)  # |01⟩
    assert sv.exp_z(0).item() == pytest.approx(1.0)
    assert sv.exp_z(1).item() == pytest.approx(-1.0)
    assert sv.exp_z_string([0, 1]).item() == pytest.approx(-1.0)


def test_counts_big_endian_labels():
    sv = StateVector(2, device="cpu")
    sv.h(0)
    cnts = sv.counts(1000, generator=torch.Generator().manual_seed(0))
    assert sum(cnts.values()) == 1000
    # H на кубит 0 (старший бит) → только "00" и "10"
    assert set(cnts) <= {"00", "10"}


def test_apply_gate_dispatch_matches_methods():
    a = StateVector(3, device="cpu")
    a.apply_gate(Gate.ry(0.4), [0]).apply_gate(Gate.cx(), [0, 2]).apply_gate(Gate.crz(1.1), [2, 1])
    b = StateVector(3, device="cpu")
    b.ry(0, 0.4).cx(0, 2).crz(2, 1, 1.1)
    assert torch.equal(a.tensor, b.tensor)
    with pytest.raises(ValueError):
        a.apply_gate(Gate.cx(), [0])


def test_copy_is_independent():
    sv = StateVector(1, device="cpu").h(0)
    other = sv.copy()
    other.x(0)
    assert torch.allclose(sv.tensor, other.tensor)  # X|+⟩ = |+⟩
    other.rz(0, 0.5)
    assert not torch.allclose(sv.tensor, other.tensor)
