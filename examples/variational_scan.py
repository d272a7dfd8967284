import math

import torch

from rydsim import simulate_variational


def energy(n_qubits: int, params: list[float]) -> float:
    """⟨Z₀ Z_{n-1}⟩ вариационного анзаца."""
    return simulate_variational(n_qubits, params).expectation_value


if __name__ == "__main__":
    n = 4
    gen = torch.Generator().manual_seed(0)
    best_params: list[float] = []
    best = math.inf

    # случайный поиск по 2n углам в [0, π)
    for step in range(200):
        params = (torch.rand(2 * n, dtype=torch.float64, generator=gen) * math.pi).tolist()
        value = energy(n, params)
        if value < best:
            best, best_params = value, params
        if step % 20 == 0:
            print(f"step {step:3d}: energy={value:.6f}, best={best:.6f}")

    result = simulate_variational(n, best_params)
    print("Final energy:", best)
    for entry in result.probabilities:
        print(f"  {entry.label}: {entry.probability:.4f}")
