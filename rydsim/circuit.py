from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import torch

from .config import MAX_QUBITS
from .gates import Gate
from .result import GateLogEntry
from .statevector import StateVector

__all__ = ["QuantumCircuit"]

logger = logging.getLogger(__name__)


class QuantumCircuit:
    """Простейшая реализация квантовой схемы поверх ``StateVector``.

    Схема хранит список операций (``Gate``, кубиты), которые затем
    последовательно применяются к вектору состояния. Тот же список даёт
    журнал гейтов (``trace``).
    """

    def __init__(self, num_qubits: int) -> None:
        if num_qubits <= 0:
            raise ValueError("num_qubits должно быть ≥ 1")
        self.num_qubits = num_qubits
        self._ops: List[Tuple[Gate, Tuple[int, ...]]] = []

    # ------------------------------------------------------------------
    # Добавление гейтов в схему
    # ------------------------------------------------------------------
    def append(self, gate: Gate, *qubits: int) -> "QuantumCircuit":
        if len(qubits) != gate.arity:
            raise ValueError(f"{gate.label} ожидает {gate.arity} кубит(а), получено {len(qubits)}")
        for q in qubits:
            if not (0 <= q < self.num_qubits):
                raise IndexError(f"Неверный индекс кубита: {q}")
        if gate.arity == 2 and qubits[0] == qubits[1]:
            raise ValueError("control и target должны различаться")
        self._ops.append((gate, tuple(qubits)))
        return self

    def h(self, qubit: int) -> "QuantumCircuit":
        return self.append(Gate.h(), qubit)

    def x(self, qubit: int) -> "QuantumCircuit":
        return self.append(Gate.x(), qubit)

    def rx(self, qubit: int, theta: float) -> "QuantumCircuit":
        return self.append(Gate.rx(theta), qubit)

    def ry(self, qubit: int, theta: float) -> "QuantumCircuit":
        return self.append(Gate.ry(theta), qubit)

    def rz(self, qubit: int, theta: float) -> "QuantumCircuit":
        return self.append(Gate.rz(theta), qubit)

    def cx(self, control: int, target: int) -> "QuantumCircuit":
        return self.append(Gate.cx(), control, target)

    def crz(self, control: int, target: int, theta: float) -> "QuantumCircuit":
        return self.append(Gate.crz(theta), control, target)

    # ------------------------------------------------------------------
    # Симуляция
    # ------------------------------------------------------------------
    def simulate(
        self,
        *,
        dtype: torch.dtype | None = None,
        device: str | torch.device | None = None,
        max_qubits: int = MAX_QUBITS,
    ) -> StateVector:
        """Выполнить схему на свежем |0...0⟩ и вернуть итоговый ``StateVector``."""
        sv = StateVector(self.num_qubits, dtype=dtype, device=device, max_qubits=max_qubits)
        for gate, qubits in self._ops:
            logger.debug("apply %s on %s", gate.label, list(qubits))
            sv.apply_gate(gate, qubits)
        return sv

    def trace(self) -> Tuple[GateLogEntry, ...]:
        """Журнал гейтов в порядке применения."""
        return tuple(GateLogEntry.from_gate(gate, qubits) for gate, qubits in self._ops)

    # ------------------------------------------------------------------
    # Удобства
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._ops)

    def __repr__(self) -> str:  # pragma: no cover
        lines = [f"QuantumCircuit(num_qubits={self.num_qubits})"]
        for i, (gate, qubits) in enumerate(self._ops):
            lines.append(f"  {i}: {gate.label}{qubits}")
        return "\n".join(lines)
