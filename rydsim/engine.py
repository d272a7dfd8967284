"""Применение гейтов к вектору состояния прямой адресацией амплитуд.

Соглашение о порядке битов: кубит 0 — старший бит индекса. Кубиту ``q``
в ``n``-кубитной системе соответствует маска ``1 << (n - 1 - q)``.

Все функции чистые: вход не изменяется, возвращается новый тензор.
"""
from __future__ import annotations

from typing import Sequence

import torch

from .complexops import add, multiply
from .config import MAX_QUBITS, resolve_device
from .errors import InvalidQubitCount
from .gates import rz

__all__: Sequence[str] = (
    "qubit_mask",
    "check_num_qubits",
    "create_state_vector",
    "apply_single_gate",
    "apply_cnot",
    "apply_crz",
)


def qubit_mask(qubit: int, num_qubits: int) -> int:
    """Битовая маска кубита (big-endian)."""
    return 1 << (num_qubits - qubit - 1)


def check_num_qubits(num_qubits: int, max_qubits: int = MAX_QUBITS) -> None:
    if not (1 <= num_qubits <= max_qubits):
        raise InvalidQubitCount(num_qubits, max_qubits)


def create_state_vector(
    num_qubits: int,
    *,
    dtype: torch.dtype | None = None,
    device: torch.device | str | None = None,
    max_qubits: int = MAX_QUBITS,
) -> torch.Tensor:
    """Вернуть |0...0⟩: тензор длины 2ⁿ, амплитуда 0 равна 1, остальные 0."""
    check_num_qubits(num_qubits, max_qubits)
    state = torch.zeros(1 << num_qubits, dtype=dtype or torch.complex128, device=resolve_device(device))
    state[0] = 1.0 + 0.0j
    return state


# ---------------------------------------------------------------------
# Проверки аргументов
# ---------------------------------------------------------------------
def _check_state(state: torch.Tensor, num_qubits: int) -> None:
    if state.dim() != 1 or state.numel() != (1 << num_qubits):
        raise ValueError(
            f"длина вектора состояния {state.numel()} не равна 2**{num_qubits}"
        )


def _check_qubit(qubit: int, num_qubits: int) -> None:
    if not (0 <= qubit < num_qubits):
        raise IndexError(f"Неверный индекс кубита: {qubit}")


def _check_pair(control: int, target: int, num_qubits: int) -> None:
    if control == target:
        raise ValueError("control и target должны различаться")
    _check_qubit(control, num_qubits)
    _check_qubit(target, num_qubits)


def _pair_indices(
    state: torch.Tensor,
    target: int,
    num_qubits: int,
    control: int | None = None,
) -> tuple[torch.Tensor, torch.Tensor]:
    """Пары (i, partner): бит ``target`` у ``i`` равен 0, у ``partner`` — 1.

    Если задан ``control``, остаются только индексы с единичным битом контроля.
    Каждая неупорядоченная пара встречается ровно один раз.
    """
    target_mask = qubit_mask(target, num_qubits)
    idx = torch.arange(state.numel(), device=state.device)
    cond = (idx & target_mask) == 0
    if control is not None:
        cond &= (idx & qubit_mask(control, num_qubits)) != 0
    zero = idx[cond]
    return zero, zero | target_mask


def _rotate_pairs(
    out: torch.Tensor,
    state: torch.Tensor,
    gate: torch.Tensor,
    zero: torch.Tensor,
    one: torch.Tensor,
) -> torch.Tensor:
    a0 = state[zero]
    a1 = state[one]
    out[zero] = add(multiply(gate[0, 0], a0), multiply(gate[0, 1], a1))
    out[one] = add(multiply(gate[1, 0], a0), multiply(gate[1, 1], a1))
    return out


# ---------------------------------------------------------------------
# Гейты
# ---------------------------------------------------------------------
def apply_single_gate(
    state: torch.Tensor,
    gate: torch.Tensor,
    target: int,
    num_qubits: int,
) -> torch.Tensor:
    """Применить 2×2 матрицу ``gate`` к кубиту ``target``.

    Для пары (i, partner) с нулевым битом ``target`` у ``i``::

        new[i]       = g00·s[i] + g01·s[partner]
        new[partner] = g10·s[i] + g11·s[partner]
    """
    _check_state(state, num_qubits)
    _check_qubit(target, num_qubits)
    if tuple(gate.shape) != (2, 2):
        raise ValueError(f"ожидалась матрица 2×2, получено {tuple(gate.shape)}")

    zero, one = _pair_indices(state, target, num_qubits)
    out = torch.zeros_like(state)
    return _rotate_pairs(out, state, gate.to(state), zero, one)


def apply_cnot(
    state: torch.Tensor,
    control: int,
    target: int,
    num_qubits: int,
) -> torch.Tensor:
    """Контролируемый X (CNOT): перестановка амплитуд.

    Там, где бит ``control`` равен 1, амплитуды ``i`` и ``i ^ target_mask``
    меняются местами, каждая пара — ровно один раз (``i < partner``).
    """
    _check_state(state, num_qubits)
    _check_pair(control, target, num_qubits)

    zero, one = _pair_indices(state, target, num_qubits, control=control)
    out = state.clone()
    out[zero] = state[one]
    out[one] = state[zero]
    return out


def apply_crz(
    state: torch.Tensor,
    control: int,
    target: int,
    angle: torch.Tensor | float,
    num_qubits: int,
) -> torch.Tensor:
    """Контролируемый RZ(angle).

    Пары с единичным битом ``control`` обновляются как в
    :func:`apply_single_gate`, остальные амплитуды копируются без изменений.
    """
    _check_state(state, num_qubits)
    _check_pair(control, target, num_qubits)

    gate = rz(angle, dtype=state.dtype, device=state.device)
    zero, one = _pair_indices(state, target, num_qubits, control=control)
    out = state.clone()
    return _rotate_pairs(out, state, gate, zero, one)
