from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence, Tuple

from .gates import Gate

__all__: Sequence[str] = ("ProbabilityEntry", "GateLogEntry", "SimResult")


@dataclass(frozen=True)
class ProbabilityEntry:
    label: str
    probability: float

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "probability": self.probability}


@dataclass(frozen=True)
class GateLogEntry:
    """Запись журнала гейтов: отображаемое имя и кубиты ([control, target])."""

    gate: str
    targets: Tuple[int, ...]

    @classmethod
    def from_gate(cls, gate: Gate, targets: Sequence[int]) -> "GateLogEntry":
        return cls(gate.label, tuple(targets))

    def to_dict(self) -> dict[str, Any]:
        return {"gate": self.gate, "targets": list(self.targets)}


@dataclass(frozen=True)
class SimResult:
    """Результат одного запуска программы-схемы.

    ``entanglement_pairs`` — подсказка для визуализации: пары кубитов,
    связанные двухкубитными гейтами схемы, а не вычисленная мера
    запутанности. ``defaulted`` — индексы параметров, взятых по умолчанию.
    """

    probabilities: Tuple[ProbabilityEntry, ...]
    entanglement_pairs: Tuple[Tuple[int, int], ...]
    circuit_gates: Tuple[GateLogEntry, ...]
    expectation_value: float | None = None
    defaulted: Tuple[int, ...] = field(default=())

    def probability_of(self, label: str) -> float:
        for entry in self.probabilities:
            if entry.label == label:
                return entry.probability
        return 0.0

    def to_dict(self) -> dict[str, Any]:
        """Внешний JSON-формат (ключи в camelCase)."""
        out: dict[str, Any] = {
            "probabilities": [p.to_dict() for p in self.probabilities],
            "entanglementPairs": [list(pair) for pair in self.entanglement_pairs],
            "circuitGates": [g.to_dict() for g in self.circuit_gates],
        }
        if self.expectation_value is not None:
            out["expectationValue"] = self.expectation_value
        return out
