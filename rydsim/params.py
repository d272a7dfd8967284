"""Разрешение параметров схем с допустимыми значениями по умолчанию.

Недостающий параметр (за концом вектора или ``None``) не является ошибкой:
он заменяется значением по умолчанию, а факт замены фиксируется в
:class:`Angle`.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, NamedTuple, Optional, Sequence, Union

import torch

__all__ = ["Angle", "resolve_angles", "random_angle"]

logger = logging.getLogger(__name__)

Default = Union[float, Callable[[], float]]


class Angle(NamedTuple):
    index: int
    value: float
    defaulted: bool


def random_angle(generator: torch.Generator | None = None) -> Callable[[], float]:
    """Источник случайных углов в [0, π) на основе ``torch.Generator``.

    При ``generator=None`` используется глобальный ГСЧ torch.
    """

    def draw() -> float:
        u = torch.rand((), dtype=torch.float64, generator=generator)
        return float(u) * math.pi

    return draw


def resolve_angles(
    params: Sequence[Optional[float]],
    offset: int,
    count: int,
    default: Default,
) -> list[Angle]:
    """Взять ``count`` углов из ``params`` начиная с ``offset``.

    ``default`` — число или функция без аргументов (вызывается на каждый
    недостающий индекс).
    """
    angles: list[Angle] = []
    for i in range(offset, offset + count):
        value = params[i] if i < len(params) else None
        if value is not None:
            angles.append(Angle(i, float(value), False))
            continue
        fallback = default() if callable(default) else float(default)
        logger.debug("parameter %d missing, using %.4f", i, fallback)
        angles.append(Angle(i, fallback, True))
    return angles
