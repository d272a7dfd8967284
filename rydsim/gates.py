from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Sequence

import torch

from .complexops import make

__all__: Sequence[str] = (
    "GateKind",
    "Gate",
    "hadamard",
    "pauli_x",
    "rx",
    "ry",
    "rz",
    "format_angle",
)

_DEFAULT_DTYPE = torch.complex128


def _real_dtype(dtype: torch.dtype) -> torch.dtype:
    return torch.zeros((), dtype=dtype).real.dtype


def _half_angle(theta, dtype, device) -> torch.Tensor:
    theta_t = torch.as_tensor(theta, dtype=_real_dtype(dtype), device=device)
    return theta_t / 2


def _matrix(rows, dtype) -> torch.Tensor:
    return torch.stack([torch.stack(list(row)) for row in rows]).to(dtype)


# ---------------------------------------------------------------------
# Матрицы 2×2
# ---------------------------------------------------------------------
def hadamard(*, dtype: torch.dtype = _DEFAULT_DTYPE, device=None) -> torch.Tensor:
    """Hadamard: (1/√2)·[[1, 1], [1, -1]]."""
    inv_sqrt2 = 1.0 / math.sqrt(2.0)
    return torch.tensor([[1, 1], [1, -1]], dtype=dtype, device=device) * inv_sqrt2


def pauli_x(*, dtype: torch.dtype = _DEFAULT_DTYPE, device=None) -> torch.Tensor:
    return torch.tensor([[0, 1], [1, 0]], dtype=dtype, device=device)


def ry(theta: torch.Tensor | float, *, dtype: torch.dtype = _DEFAULT_DTYPE, device=None) -> torch.Tensor:
    """RY(θ) = [[cos(θ/2), -sin(θ/2)], [sin(θ/2), cos(θ/2)]].

    ``theta`` может быть ``float`` или вещественным ``torch.Tensor``
    (градиенты проходят через элементы матрицы).
    """
    half = _half_angle(theta, dtype, device)
    cos, sin = torch.cos(half), torch.sin(half)
    return _matrix([[make(cos), make(-sin)], [make(sin), make(cos)]], dtype)


def rx(theta: torch.Tensor | float, *, dtype: torch.dtype = _DEFAULT_DTYPE, device=None) -> torch.Tensor:
    """RX(θ) = [[cos(θ/2), -i·sin(θ/2)], [-i·sin(θ/2), cos(θ/2)]]."""
    half = _half_angle(theta, dtype, device)
    cos, sin = torch.cos(half), torch.sin(half)
    isin = make(0.0, -sin)
    return _matrix([[make(cos), isin], [isin, make(cos)]], dtype)


def rz(theta: torch.Tensor | float, *, dtype: torch.dtype = _DEFAULT_DTYPE, device=None) -> torch.Tensor:
    """RZ(θ) = [[e^{-iθ/2}, 0], [0, e^{iθ/2}]]."""
    half = _half_angle(theta, dtype, device)
    cos, sin = torch.cos(half), torch.sin(half)
    zero = make(torch.zeros_like(cos))
    return _matrix([[make(cos, -sin), zero], [zero, make(cos, sin)]], dtype)


def format_angle(theta: torch.Tensor | float) -> str:
    """Угол с двумя знаками после запятой; половинные значения округляются
    от нуля (0.125 → "0.13", -0.375 → "-0.38"), а не к чётному.
    """
    # -0.0 + 0.0 == 0.0, иначе получилось бы "-0.00"
    value = Decimal(float(theta) + 0.0)
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------
# Тегированный вариант гейта
# ---------------------------------------------------------------------
class GateKind(str, Enum):
    H = "H"
    X = "X"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    CX = "CX"
    CRZ = "CRZ"


_PARAMETRIZED = {GateKind.RX, GateKind.RY, GateKind.RZ, GateKind.CRZ}
_CONTROLLED = {GateKind.CX, GateKind.CRZ}


@dataclass(frozen=True)
class Gate:
    """Гейт схемы: вид + (для поворотов) связанный угол.

    Конкретная матрица строится только в момент применения (``matrix``),
    а ``label`` даёт строку для журнала гейтов.
    """

    kind: GateKind
    theta: float | None = None

    def __post_init__(self) -> None:
        if self.kind in _PARAMETRIZED and self.theta is None:
            raise ValueError(f"{self.kind.value} требует угол theta")
        if self.kind not in _PARAMETRIZED and self.theta is not None:
            raise ValueError(f"{self.kind.value} не принимает угол")

    @classmethod
    def h(cls) -> "Gate":
        return cls(GateKind.H)

    @classmethod
    def x(cls) -> "Gate":
        return cls(GateKind.X)

    @classmethod
    def rx(cls, theta: float) -> "Gate":
        return cls(GateKind.RX, theta)

    @classmethod
    def ry(cls, theta: float) -> "Gate":
        return cls(GateKind.RY, theta)

    @classmethod
    def rz(cls, theta: float) -> "Gate":
        return cls(GateKind.RZ, theta)

    @classmethod
    def cx(cls) -> "Gate":
        return cls(GateKind.CX)

    @classmethod
    def crz(cls, theta: float) -> "Gate":
        return cls(GateKind.CRZ, theta)

    @property
    def arity(self) -> int:
        return 2 if self.kind in _CONTROLLED else 1

    @property
    def label(self) -> str:
        """Строка для журнала: ``"RY(0.79)"``; у H, X, CX, CRZ — только имя."""
        if self.kind in _CONTROLLED or self.theta is None:
            return self.kind.value
        return f"{self.kind.value}({format_angle(self.theta)})"

    def matrix(self, *, dtype: torch.dtype = _DEFAULT_DTYPE, device=None) -> torch.Tensor:
        """2×2 матрица, действующая на целевой кубит (для CX/CRZ — при control=1)."""
        if self.kind is GateKind.H:
            return hadamard(dtype=dtype, device=device)
        if self.kind in (GateKind.X, GateKind.CX):
            return pauli_x(dtype=dtype, device=device)
        if self.kind is GateKind.RX:
            return rx(self.theta, dtype=dtype, device=device)
        if self.kind is GateKind.RY:
            return ry(self.theta, dtype=dtype, device=device)
        return rz(self.theta, dtype=dtype, device=device)
