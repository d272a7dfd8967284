from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

import torch

__all__ = ["SimConfig", "DEFAULT_CONFIG", "MAX_QUBITS", "resolve_device"]

# 2**20 амплитуд complex128 ≈ 16 МиБ
MAX_QUBITS = 20


def resolve_device(device: torch.device | str | None) -> torch.device:
    return torch.device(device or ("cuda" if torch.cuda.is_available() else "cpu"))


@dataclass(frozen=True)
class SimConfig:
    """Параметры симулятора и программ-схем.

    Параметры
    ----------
    dtype:
        Комплексный тип амплитуд (по умолчанию ``torch.complex128``).
    device:
        Устройство PyTorch; ``None`` — ``"cuda"``, если доступно, иначе ``"cpu"``.
    max_qubits:
        Верхняя граница числа кубитов.
    probability_epsilon:
        Порог отсечения малых вероятностей в программе blockade.
    top_k:
        Сколько базисных состояний возвращает вариационная программа.
    tweezer_default_angle:
        Угол RY для кубитов без параметра в программе optical tweezer.
    placeholder_distance, distance_offset:
        Угол CRZ = π / (placeholder_distance + distance_offset). Расстояние
        одинаково для всех пар и не вычисляется из геометрии атомов.
    """

    dtype: torch.dtype = torch.complex128
    device: torch.device | str | None = None
    max_qubits: int = MAX_QUBITS
    probability_epsilon: float = 1e-6
    top_k: int = 8
    tweezer_default_angle: float = math.pi / 4
    placeholder_distance: float = 1.5
    distance_offset: float = 0.1

    @property
    def crz_angle(self) -> float:
        return math.pi / (self.placeholder_distance + self.distance_offset)

    def replace(self, **changes) -> "SimConfig":
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = SimConfig()
