"""Минимальная комплексная арифметика движка.

Функции работают как с обычными ``complex``, так и поэлементно с комплексными
``torch.Tensor`` (0-d элемент матрицы гейта × 1-d срез амплитуд).
"""
from __future__ import annotations

from typing import Union

import torch

__all__ = ["make", "multiply", "add", "squared_norm"]

Scalar = Union[complex, float, int, torch.Tensor]


def _pack(real, imag):
    if isinstance(real, torch.Tensor) or isinstance(imag, torch.Tensor):
        ref = real if isinstance(real, torch.Tensor) else imag
        real_t = torch.as_tensor(real, dtype=ref.dtype, device=ref.device)
        imag_t = torch.as_tensor(imag, dtype=ref.dtype, device=ref.device)
        real_t, imag_t = torch.broadcast_tensors(real_t, imag_t)
        return torch.complex(real_t, imag_t)
    return complex(real, imag)


def make(real: Scalar, imag: Scalar = 0.0) -> complex | torch.Tensor:
    """Собрать комплексное число ``real + i·imag``."""
    return _pack(real, imag)


def multiply(a: Scalar, b: Scalar) -> complex | torch.Tensor:
    re = a.real * b.real - a.imag * b.imag
    im = a.real * b.imag + a.imag * b.real
    return _pack(re, im)


def add(a: Scalar, b: Scalar) -> complex | torch.Tensor:
    return _pack(a.real + b.real, a.imag + b.imag)


def squared_norm(a: Scalar) -> float | torch.Tensor:
    """|a|² = re² + im² (вещественный результат)."""
    return a.real * a.real + a.imag * a.imag
