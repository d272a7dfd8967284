"""Три фиксированные программы-схемы для визуализации атомного массива.

Каждая программа строит ``QuantumCircuit``, прогоняет его на свежем
|0...0⟩ и упаковывает ``SimResult``. Проверка ``n`` выполняется при
создании вектора состояния (``InvalidQubitCount``); короткий вектор
параметров ошибкой не является.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import torch

from .circuit import QuantumCircuit
from .config import DEFAULT_CONFIG, SimConfig
from .engine import check_num_qubits
from .measure import expectation_z_string, probability_entries, top_k
from .params import random_angle, resolve_angles
from .result import SimResult

__all__: Sequence[str] = (
    "chain_pairs",
    "simulate_rydberg_blockade",
    "simulate_optical_tweezer",
    "simulate_variational",
)

logger = logging.getLogger(__name__)

Params = Sequence[Optional[float]]


def chain_pairs(num_qubits: int) -> tuple[tuple[int, int], ...]:
    """Линейная цепочка (0,1), (1,2), …, (n-2,n-1)."""
    return tuple((i, i + 1) for i in range(num_qubits - 1))


def _run(circ: QuantumCircuit, config: SimConfig):
    sv = circ.simulate(dtype=config.dtype, device=config.device, max_qubits=config.max_qubits)
    return sv.probabilities(), sv.labels()


def simulate_rydberg_blockade(num_qubits: int, *, config: SimConfig | None = None) -> SimResult:
    """Распространение блокады: H на кубит 0, затем цепочка CX(i, i+1).

    Для n ≥ 2 получается GHZ-состояние (|0…0⟩ + |1…1⟩)/√2. Вероятности
    не выше ``config.probability_epsilon`` отбрасываются.
    """
    config = config or DEFAULT_CONFIG
    check_num_qubits(num_qubits, config.max_qubits)
    logger.info("rydberg blockade: n=%d", num_qubits)

    circ = QuantumCircuit(num_qubits).h(0)
    for i in range(num_qubits - 1):
        circ.cx(i, i + 1)

    probs, labels = _run(circ, config)
    return SimResult(
        probabilities=probability_entries(probs, labels, epsilon=config.probability_epsilon),
        entanglement_pairs=chain_pairs(num_qubits),
        circuit_gates=circ.trace(),
    )


def simulate_optical_tweezer(
    num_qubits: int,
    params: Params = (),
    *,
    config: SimConfig | None = None,
) -> SimResult:
    """Оптический пинцет: RY(params[i]) на каждый кубит, затем цепочка CRZ.

    Угол CRZ = π / (1.5 + 0.1) одинаков для всех соседних пар: 1.5 —
    фиксированное условное расстояние, а не геометрия массива.
    Недостающие углы RY равны ``config.tweezer_default_angle`` (π/4).
    """
    config = config or DEFAULT_CONFIG
    check_num_qubits(num_qubits, config.max_qubits)
    logger.info("optical tweezer: n=%d, %d params", num_qubits, len(params))

    angles = resolve_angles(params, 0, num_qubits, config.tweezer_default_angle)
    circ = QuantumCircuit(num_qubits)
    for qubit, angle in enumerate(angles):
        circ.ry(qubit, angle.value)
    for i in range(num_qubits - 1):
        circ.crz(i, i + 1, config.crz_angle)

    probs, labels = _run(circ, config)
    return SimResult(
        probabilities=probability_entries(probs, labels),
        entanglement_pairs=chain_pairs(num_qubits),
        circuit_gates=circ.trace(),
        defaulted=tuple(a.index for a in angles if a.defaulted),
    )


def simulate_variational(
    num_qubits: int,
    params: Params = (),
    *,
    generator: torch.Generator | None = None,
    config: SimConfig | None = None,
) -> SimResult:
    """Вариационный анзац: RX-кодирование, CX-цепочка, RY-слой.

    ``params[0:n]`` — углы RX, ``params[n:2n]`` — углы RY. Недостающие углы
    берутся случайно из [0, π) через ``generator`` (для воспроизводимости
    передайте засеянный ``torch.Generator``).

    Возвращает ⟨Z₀⊗Z_{n-1}⟩ и ``config.top_k`` самых вероятных состояний
    по убыванию вероятности; при равенстве — по возрастанию индекса.
    """
    config = config or DEFAULT_CONFIG
    check_num_qubits(num_qubits, config.max_qubits)
    logger.info("variational ansatz: n=%d, %d params", num_qubits, len(params))

    draw = random_angle(generator)
    encoding = resolve_angles(params, 0, num_qubits, draw)
    circ = QuantumCircuit(num_qubits)
    for qubit, angle in enumerate(encoding):
        circ.rx(qubit, angle.value)
    for i in range(num_qubits - 1):
        circ.cx(i, i + 1)
    variational = resolve_angles(params, num_qubits, num_qubits, draw)
    for qubit, angle in enumerate(variational):
        circ.ry(qubit, angle.value)

    probs, labels = _run(circ, config)
    expectation = float(expectation_z_string(probs, (0, num_qubits - 1), num_qubits))
    logger.info("variational ansatz: <Z0 Z%d> = %.6f", num_qubits - 1, expectation)

    return SimResult(
        probabilities=top_k(probability_entries(probs, labels), config.top_k),
        entanglement_pairs=chain_pairs(num_qubits),
        circuit_gates=circ.trace(),
        expectation_value=expectation,
        defaulted=tuple(a.index for a in encoding + variational if a.defaulted),
    )
