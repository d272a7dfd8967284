from __future__ import annotations

from typing import Iterable, Sequence

import torch

from .complexops import squared_norm
from .engine import qubit_mask
from .result import ProbabilityEntry

__all__: Sequence[str] = (
    "get_probabilities",
    "get_labels",
    "expectation_z_string",
    "probability_entries",
    "top_k",
    "sample",
    "counts",
)


def get_probabilities(state: torch.Tensor) -> torch.Tensor:
    """Распределение |ψᵢ|² в виде 1-D вещественного тензора."""
    return squared_norm(state)


def get_labels(num_qubits: int) -> list[str]:
    """Метки базисных состояний: ``i`` в двоичном виде, ширина ``num_qubits``."""
    return [format(i, f"0{num_qubits}b") for i in range(1 << num_qubits)]


def expectation_z_string(
    probs: torch.Tensor,
    qubits: Iterable[int],
    num_qubits: int,
) -> torch.Tensor:
    """⟨Z_{q1} Z_{q2} …⟩ по распределению ``probs``.

    Собственное значение индекса — произведение (+1, если бит кубита 0,
    иначе -1) по всем ``qubits``. Повторённый кубит даёт (±1)² = 1.
    """
    idx = torch.arange(probs.numel(), device=probs.device)
    sign = torch.ones_like(probs)
    for q in qubits:
        m = qubit_mask(q, num_qubits)
        sign = sign * (1 - 2 * ((idx & m) != 0).to(probs.dtype))
    return (sign * probs).sum()


def probability_entries(
    probs: torch.Tensor,
    labels: Sequence[str],
    epsilon: float | None = None,
) -> tuple[ProbabilityEntry, ...]:
    """Пары (метка, вероятность) по возрастанию индекса.

    При заданном ``epsilon`` записи с ``probability <= epsilon`` отбрасываются.
    """
    entries = (ProbabilityEntry(label, p) for label, p in zip(labels, probs.tolist()))
    if epsilon is None:
        return tuple(entries)
    return tuple(e for e in entries if e.probability > epsilon)


def top_k(entries: Iterable[ProbabilityEntry], k: int) -> tuple[ProbabilityEntry, ...]:
    """``k`` наиболее вероятных записей по убыванию вероятности.

    Сортировка устойчивая: при равных вероятностях сохраняется исходный
    порядок (возрастание индекса).
    """
    ranked = sorted(entries, key=lambda e: e.probability, reverse=True)
    return tuple(ranked[:k])


# ---------------------------------------------------------------------
# Сэмплы и статистика
# ---------------------------------------------------------------------
def sample(
    probs: torch.Tensor,
    shots: int = 1024,
    *,
    generator: torch.Generator | None = None,
) -> torch.Tensor:
    """Вернуть ``shots`` индексов базисных состояний (1-D тензор ``int64``)."""
    if shots <= 0:
        raise ValueError("shots должно быть ≥ 1")
    weights = probs.detach().to(torch.float64).cpu()
    return torch.multinomial(weights, shots, replacement=True, generator=generator)


def counts(
    probs: torch.Tensor,
    num_qubits: int,
    shots: int = 1024,
    *,
    generator: torch.Generator | None = None,
) -> dict[str, int]:
    """Словарь метка → частота (метки big-endian, как в :func:`get_labels`)."""
    labels = get_labels(num_qubits)
    freq: dict[str, int] = {}
    for i in sample(probs, shots, generator=generator).tolist():
        freq[labels[i]] = freq.get(labels[i], 0) + 1
    return freq
