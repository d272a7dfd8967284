import torch

from rydsim.complexops import add, make, multiply, squared_norm


def test_scalar_ops():
    a = make(1.0, 2.0)
    b = make(3.0, -1.0)
    assert multiply(a, b) == complex(5.0, 5.0)
    assert add(a, b) == complex(4.0, 1.0)
    assert squared_norm(a) == 5.0
    assert make(0.5) == complex(0.5, 0.0)


def test_tensor_broadcast_matches_builtin():
    g = torch.tensor(0.3 - 0.4j, dtype=torch.complex128)
    v = torch.tensor([1 + 1j, -2 + 0.5j, 0j], dtype=torch.complex128)
    assert torch.allclose(multiply(g, v), g * v)
    assert torch.allclose(add(v, v), 2 * v)
    assert torch.allclose(squared_norm(v), v.abs() ** 2)


def test_make_from_tensor_keeps_precision():
    re = torch.tensor([0.1, 0.2], dtype=torch.float64)
    z = make(re, 0.5)
    assert z.dtype == torch.complex128
    assert torch.allclose(z.imag, torch.full_like(re, 0.5))
