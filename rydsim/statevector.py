from __future__ import annotations

from typing import Sequence

import torch

from . import engine, measure
from .config import MAX_QUBITS, resolve_device
from .gates import Gate, hadamard, pauli_x, rx, ry, rz

__all__: Sequence[str] = ("StateVector",)


class StateVector:
    """Класс-обёртка над ``torch.Tensor`` для хранения n-кубитного чистого
    состояния.

    Гейты не изменяют текущий тензор на месте: движок возвращает новый
    тензор, и ``self.tensor`` перепривязывается к нему. Ранее полученные
    ссылки на ``tensor`` остаются прежними.

    Параметры
    ----------
    num_qubits:
        Количество кубитов (1 ≤ n ≤ ``max_qubits``).
    dtype:
        Тип данных ``torch`` (по умолчанию ``torch.complex128``).
    device:
        Устройство PyTorch (``"cuda"`` или ``"cpu"``).
    max_qubits:
        Верхняя граница ``num_qubits``; вектор занимает 2ⁿ амплитуд.
    """

    def __init__(
        self,
        num_qubits: int,
        *,
        dtype: torch.dtype | None = None,
        device: torch.device | str | None = None,
        max_qubits: int = MAX_QUBITS,
    ) -> None:
        self.num_qubits = num_qubits
        self.dtype: torch.dtype = dtype or torch.complex128
        self.device = resolve_device(device)
        # |0...0⟩ состояние
        self.tensor: torch.Tensor = engine.create_state_vector(
            num_qubits, dtype=self.dtype, device=self.device, max_qubits=max_qubits
        )

    # ---------------------------------------------------------------------
    # Однокубитные гейты
    # ---------------------------------------------------------------------
    def apply(self, gate: torch.Tensor, qubit: int) -> "StateVector":
        """Применить произвольный 2×2 матричный гейт к ``qubit``."""
        self.tensor = engine.apply_single_gate(self.tensor, gate, qubit, self.num_qubits)
        return self

    def h(self, qubit: int) -> "StateVector":
        """Hadamard гейт."""
        return self.apply(hadamard(dtype=self.dtype, device=self.device), qubit)

    def x(self, qubit: int) -> "StateVector":
        return self.apply(pauli_x(dtype=self.dtype, device=self.device), qubit)

    def rx(self, qubit: int, theta: torch.Tensor | float) -> "StateVector":
        """Поворот вокруг X-оси на угол ``theta`` (рад)."""
        return self.apply(rx(theta, dtype=self.dtype, device=self.device), qubit)

    def ry(self, qubit: int, theta: torch.Tensor | float) -> "StateVector":
        """Поворот вокруг Y-оси."""
        return self.apply(ry(theta, dtype=self.dtype, device=self.device), qubit)

    def rz(self, qubit: int, theta: torch.Tensor | float) -> "StateVector":
        """Поворот вокруг Z-оси."""
        return self.apply(rz(theta, dtype=self.dtype, device=self.device), qubit)

    # ---------------------------------------------------------------------
    # Двухкубитные гейты
    # ---------------------------------------------------------------------
    def cx(self, control: int, target: int) -> "StateVector":
        """Контролируемый X (CNOT)."""
        self.tensor = engine.apply_cnot(self.tensor, control, target, self.num_qubits)
        return self

    def crz(self, control: int, target: int, theta: torch.Tensor | float) -> "StateVector":
        """Контролируемый RZ(theta)."""
        self.tensor = engine.apply_crz(self.tensor, control, target, theta, self.num_qubits)
        return self

    def apply_gate(self, gate: Gate, targets: Sequence[int]) -> "StateVector":
        """Применить :class:`Gate` к ``targets`` (``[control, target]`` для CX/CRZ)."""
        if len(targets) != gate.arity:
            raise ValueError(f"{gate.label} ожидает {gate.arity} кубит(а), получено {len(targets)}")
        if gate.arity == 1:
            return self.apply(gate.matrix(dtype=self.dtype, device=self.device), targets[0])
        control, target = targets
        if gate.theta is None:
            return self.cx(control, target)
        return self.crz(control, target, gate.theta)

    # ---------------------------------------------------------------------
    # API вспомогательные
    # ---------------------------------------------------------------------
    def probabilities(self) -> torch.Tensor:
        """Вернуть распределение вероятностей |ψ|² в виде 1-D тензора."""
        return measure.get_probabilities(self.tensor)

    def labels(self) -> list[str]:
        return measure.get_labels(self.num_qubits)

    def norm(self) -> float:
        """Σ|ψᵢ|²; для унитарной эволюции равно 1 с точностью округления."""
        return float(self.probabilities().sum())

    def exp_z(self, qubit: int) -> torch.Tensor:
        """⟨Z₍q₎⟩."""
        return self.exp_z_string([qubit])

    def exp_z_string(self, qubits: Sequence[int]) -> torch.Tensor:
        """Ожидание тензорного произведения ZᵢZⱼ…"""
        return measure.expectation_z_string(self.probabilities(), qubits, self.num_qubits)

    def sample(self, shots: int = 1024, *, generator: torch.Generator | None = None) -> torch.Tensor:
        """Вернуть ``shots`` сэмплов измерений всех кубитов (индексы базиса)."""
        return measure.sample(self.probabilities(), shots, generator=generator)

    def counts(self, shots: int = 1024, *, generator: torch.Generator | None = None) -> dict[str, int]:
        """Возвращает словарь bitstring → частота."""
        return measure.counts(self.probabilities(), self.num_qubits, shots, generator=generator)

    def copy(self) -> "StateVector":
        other = StateVector.__new__(StateVector)
        other.num_qubits = self.num_qubits
        other.dtype = self.dtype
        other.device = self.device
        other.tensor = self.tensor.clone()
        return other

    def __repr__(self) -> str:  # pragma: no cover
        return f"StateVector(num_qubits={self.num_qubits}, dtype={self.dtype}, device={self.device})"
