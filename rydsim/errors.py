from __future__ import annotations

__all__ = ["InvalidQubitCount"]


class InvalidQubitCount(ValueError):
    """Недопустимое число кубитов: ``n < 1`` или больше разрешённого предела.

    Вектор состояния занимает 2ⁿ комплексных амплитуд, поэтому ``n``
    ограничено сверху (см. ``SimConfig.max_qubits``).
    """

    def __init__(self, num_qubits: int, max_qubits: int) -> None:
        self.num_qubits = num_qubits
        self.max_qubits = max_qubits
        super().__init__(
            f"num_qubits должно быть в диапазоне [1, {max_qubits}], получено {num_qubits}"
        )
