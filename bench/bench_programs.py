import argparse
import os
import sys
import time

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)))

import torch
from rydsim import SimConfig, simulate_optical_tweezer, simulate_rydberg_blockade, simulate_variational


def _bytes_for_state(n_qubits: int, dtype: torch.dtype = torch.complex128) -> int:
    """Сколько байт занимает statevector 2**n комплексных значений."""
    itemsize = 16 if dtype == torch.complex128 else 8  # complex128 = 16B, complex64 = 8B
    return (1 << n_qubits) * itemsize


def bench(program: str, n_qubits: int, config: SimConfig, repeats: int, seed: int) -> float:
    gen = torch.Generator().manual_seed(seed)
    start = time.time()
    for _ in range(repeats):
        if program == "blockade":
            simulate_rydberg_blockade(n_qubits, config=config)
        elif program == "tweezer":
            simulate_optical_tweezer(n_qubits, config=config)
        else:
            simulate_variational(n_qubits, generator=gen, config=config)
    if config.device is not None and torch.device(config.device).type == "cuda":
        torch.cuda.synchronize()
    return (time.time() - start) / repeats


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--min-qubits", type=int, default=2)
    parser.add_argument("--max-qubits", type=int, default=12)
    parser.add_argument("-r", "--repeats", type=int, default=20, help="повторов на точку")
    parser.add_argument("--programs", default="blockade,tweezer,variational", help="список программ через запятую")
    parser.add_argument("-d", "--device", default="cpu")
    parser.add_argument("--dtype", choices=["c64", "c128"], default="c128", help="complex dtype (c64/c128)")
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    dtype = torch.complex64 if args.dtype == "c64" else torch.complex128
    config = SimConfig(dtype=dtype, device=args.device, max_qubits=max(args.max_qubits, 1))
    programs = [p.strip() for p in args.programs.split(",") if p.strip()]
    print(f"Qubits={args.min_qubits}..{args.max_qubits}, repeats={args.repeats}, dtype={args.dtype}, device={args.device}\n")

    print(f"{'n':>3s} {'state':>10s} " + " ".join(f"{p:>12s}" for p in programs))
    for n in range(args.min_qubits, args.max_qubits + 1):
        kib = _bytes_for_state(n, dtype) / 1024
        times = [bench(p, n, config, args.repeats, args.seed) for p in programs]
        print(f"{n:3d} {kib:8.1f}Ki " + " ".join(f"{t * 1e3:10.3f}ms" for t in times))


if __name__ == "__main__":
    main()
