__all__ = [
    "QuantumCircuit",
    "StateVector",
    "Gate",
    "GateKind",
    "SimConfig",
    "SimResult",
    "GateLogEntry",
    "ProbabilityEntry",
    "InvalidQubitCount",
    "create_state_vector",
    "apply_single_gate",
    "apply_cnot",
    "apply_crz",
    "get_probabilities",
    "get_labels",
    "simulate_rydberg_blockade",
    "simulate_optical_tweezer",
    "simulate_variational",
    "__version__",
]

__version__ = "0.1.0"

from .circuit import QuantumCircuit  # noqa: E402
from .config import SimConfig  # noqa: E402
from .engine import apply_cnot, apply_crz, apply_single_gate, create_state_vector  # noqa: E402
from .errors import InvalidQubitCount  # noqa: E402
from .gates import Gate, GateKind  # noqa: E402
from .measure import get_labels, get_probabilities  # noqa: E402
from .programs import (  # noqa: E402
    simulate_optical_tweezer,
    simulate_rydberg_blockade,
    simulate_variational,
)
from .result import GateLogEntry, ProbabilityEntry, SimResult  # noqa: E402
from .statevector import StateVector  # noqa: E402
