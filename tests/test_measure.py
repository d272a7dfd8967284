import pytest
import torch

from rydsim.measure import (
    counts,
    expectation_z_string,
    get_labels,
    probability_entries,
    sample,
    top_k,
)
from rydsim.result import ProbabilityEntry


def test_labels_zero_padded_ascending():
    assert get_labels(1) == ["0", "1"]
    assert get_labels(3) == ["000", "001", "010", "011", "100", "101", "110", "111"]
    labels = get_labels(5)
    assert all(int(label, 2) == i for i, label in enumerate(labels))


def test_expectation_z_string():
    # p(00)=0.5, p(01)=0.25, p(11)=0.25
    probs = torch.tensor([0.5, 0.25, 0.0, 0.25], dtype=torch.float64)
    assert expectation_z_string(probs, [0], 2).item() == pytest.approx(0.5)
    assert expectation_z_string(probs, [1], 2).item() == pytest.approx(0.0)
    assert expectation_z_string(probs, [0, 1], 2).item() == pytest.approx(0.5)
    # повторённый кубит: Z² = I
    assert expectation_z_string(probs, [0, 0], 2).item() == pytest.approx(1.0)


def test_probability_entries_filter():
    probs = torch.tensor([0.5, 1e-7, 1e-6, 0.5 - 1.1e-6], dtype=torch.float64)
    labels = get_labels(2)
    assert [e.label for e in probability_entries(probs, labels)] == labels
    kept = probability_entries(probs, labels, epsilon=1e-6)
    assert [e.label for e in kept] == ["00", "11"]


def test_top_k_descending_with_index_tiebreak():
    entries = [
        ProbabilityEntry("00", 0.1),
        ProbabilityEntry("01", 0.4),
        ProbabilityEntry("10", 0.1),
        ProbabilityEntry("11", 0.4),
    ]
    assert [e.label for e in top_k(entries, 8)] == ["01", "11", "00", "10"]
    assert [e.label for e in top_k(entries, 3)] == ["01", "11", "00"]


def test_sample_and_counts_reproducible():
    probs = torch.tensor([0.5, 0.0, 0.0, 0.5], dtype=torch.float64)
    a = sample(probs, 200, generator=torch.Generator().manual_seed(1))
    b = sample(probs, 200, generator=torch.Generator().manual_seed(1))
    assert torch.equal(a, b)
    assert set(a.tolist()) <= {0, 3}
    cnts = counts(probs, 2, 500, generator=torch.Generator().manual_seed(2))
    assert sum(cnts.values()) == 500
    assert set(cnts) <= {"00", "11"}


def test_sample_rejects_zero_shots():
    with pytest.raises(ValueError):
        sample(torch.tensor([1.0, 0.0]), 0)
