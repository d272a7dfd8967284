import argparse
import json
import logging
import re
import sys

import torch

from . import QuantumCircuit
from .config import DEFAULT_CONFIG
from .programs import simulate_optical_tweezer, simulate_rydberg_blockade, simulate_variational

_TOKEN = re.compile(
    r"^(?P<name>CRZ|CX|RX|RY|RZ|H|X)(?P<q0>\d+)(?:-(?P<q1>\d+))?(?::(?P<theta>[-+0-9.eE]+))?$",
    re.IGNORECASE,
)
_DTYPES = {"c64": torch.complex64, "c128": torch.complex128}


def _tokens(expr: str) -> list[str]:
    return [tok.strip() for tok in expr.split(",") if tok.strip()]


def parse_expr(expr: str, num_qubits: int | None = None) -> QuantumCircuit:
    """Парсит строку вида "H0,CX0-1,RY1:0.3,CRZ0-1:0.5" и возвращает QuantumCircuit.

    Количество кубитов — ``num_qubits`` или максимальный индекс + 1.
    """
    ops = []
    max_q = 0
    for tok in _tokens(expr):
        m = _TOKEN.match(tok)
        if m is None:
            raise ValueError(f"Неизвестный токен '{tok}'")
        name = m["name"].upper()
        qubits = [int(m["q0"])] + ([int(m["q1"])] if m["q1"] is not None else [])
        two_qubit = name in {"CX", "CRZ"}
        if two_qubit != (len(qubits) == 2):
            raise ValueError(f"Неверное число кубитов в токене '{tok}'")
        needs_theta = name in {"RX", "RY", "RZ", "CRZ"}
        if needs_theta != (m["theta"] is not None):
            raise ValueError(f"Неверный угол в токене '{tok}'")
        args = qubits + ([float(m["theta"])] if needs_theta else [])
        ops.append((name.lower(), args))
        max_q = max(max_q, *qubits)

    circ = QuantumCircuit(num_qubits if num_qubits is not None else max_q + 1)
    for name, args in ops:
        getattr(circ, name)(*args)
    return circ


def parse_params(text: str | None) -> list[float | None]:
    """"0.1,,0.3" → [0.1, None, 0.3]; пустая позиция берёт значение по умолчанию."""
    if not text:
        return []
    return [float(tok) if tok.strip() else None for tok in text.split(",")]


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    level = logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="rydsim", description="rydsim CLI")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v INFO, -vv DEBUG")
    parser.add_argument("-d", "--device", default="cpu")
    parser.add_argument("--dtype", choices=sorted(_DTYPES), default="c128", help="complex dtype (c64/c128)")
    sub = parser.add_subparsers(dest="cmd")

    run_p = sub.add_parser("run", help="запустить программу-схему")
    run_p.add_argument("program", choices=["blockade", "tweezer", "variational"])
    run_p.add_argument("-n", "--qubits", type=int, required=True, help="количество кубитов")
    run_p.add_argument("-p", "--params", help="углы через запятую, напр. '0.1,0.2,,0.4'")
    run_p.add_argument("--seed", type=int, help="seed для случайных углов вариационной программы")

    circ_p = sub.add_parser("circuit", help="выполнить схему из строки")
    circ_p.add_argument("expr", help="строка c операциями, напр. 'H0,CX0-1,RY1:0.3'")
    circ_p.add_argument("-n", "--qubits", type=int, help="количество кубитов (по умолчанию max индекс + 1)")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    config = DEFAULT_CONFIG.replace(dtype=_DTYPES[args.dtype], device=args.device)

    try:
        if args.cmd == "run":
            params = parse_params(args.params)
            if args.program == "blockade":
                result = simulate_rydberg_blockade(args.qubits, config=config)
            elif args.program == "tweezer":
                result = simulate_optical_tweezer(args.qubits, params, config=config)
            else:
                generator = None
                if args.seed is not None:
                    generator = torch.Generator().manual_seed(args.seed)
                result = simulate_variational(args.qubits, params, generator=generator, config=config)
            print(json.dumps(result.to_dict()))
        elif args.cmd == "circuit":
            circ = parse_expr(args.expr, args.qubits)
            sv = circ.simulate(dtype=config.dtype, device=config.device)
            out = {
                "probabilities": [
                    {"label": label, "probability": p}
                    for label, p in zip(sv.labels(), sv.probabilities().tolist())
                ],
                "circuitGates": [entry.to_dict() for entry in circ.trace()],
            }
            print(json.dumps(out))
        else:
            parser.print_help()
    except (ValueError, IndexError) as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
