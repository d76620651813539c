"""
Entangle - a state-vector simulator for small quantum circuits.

Circuits are lists of instructions (gates, measurements in any basis,
sub-circuits and measurement-conditioned instructions). An Experiment runs
a circuit from given initial qubit states; repeated runs estimate the
distribution of measurement outcomes.

Modules:
    tensor        - Kronecker products, gate application, normalization
    gates         - Basis states and gate matrices (H, X, Y, Z, CNOT, ...)
    instructions  - Instruction types
    lowering      - Flattening of nested circuits and basis measurements
    experiment    - Execution engine and Monte Carlo aggregation
    factor        - Tensor factorization of states
    circuits      - Entanglement, teleportation, Deutsch, Bell game

Quick Start:
    >>> from entangle import *
    >>> experiment = Experiment([ZERO, ZERO], [
    ...     Gate(HADAMARD, 0), Gate(CNOT, 0), Measure(0), Measure(1),
    ... ])
    >>> print(experiment.average_out_pretty(1000))  # only 00 and 11 occur
"""

# Tensor algebra
from .tensor import (
    tensor_product_vector,
    tensor_product_matrix,
    apply_gate,
    normalize,
    magnitude,
    probabilities,
    is_from_one,
    peek_qubit,
    allclose_up_to_global_phase,
    state_fidelity,
)

# Gates
from .gates import (
    # States
    ZERO,
    ONE,
    PLUS,
    MINUS,
    # Single-qubit gates
    IDENTITY,
    PAULI_X,
    PAULI_Y,
    PAULI_Z,
    HADAMARD,
    S_GATE,
    T_GATE,
    phase_gate,
    rx_gate,
    ry_gate,
    rz_gate,
    # Multi-qubit gates
    controlled,
    CNOT,
    CZ,
    SWAP,
    TOFFOLI,
)

# Instructions
from .instructions import (
    Measure,
    MeasureAtAngle,
    MeasureAtSpinVector,
    Circuit,
    Gate,
    Dependent,
    Measurement,
)

from .lowering import simplify

from .experiment import Experiment, RunResult, Outcome

from .factor import tensor_factor

from .formatting import (
    format_state,
    format_matrix,
    format_measurements,
)

from .errors import (
    SimulationError,
    DimensionMismatch,
    ExhaustedDistribution,
    OutOfRangeReference,
    FactorizationInconsistency,
)

from .config import Settings, get_settings

# Circuits
from .circuits import (
    ENTANGLE,
    TELEPORT,
    DEUTSCH_ORACLES,
    deutsch,
    bell_game,
)

__version__ = "0.1.0"
__all__ = [
    # Tensor
    "tensor_product_vector",
    "tensor_product_matrix",
    "apply_gate",
    "normalize",
    "magnitude",
    "probabilities",
    "is_from_one",
    "peek_qubit",
    "allclose_up_to_global_phase",
    "state_fidelity",
    # Gates
    "ZERO",
    "ONE",
    "PLUS",
    "MINUS",
    "IDENTITY",
    "PAULI_X",
    "PAULI_Y",
    "PAULI_Z",
    "HADAMARD",
    "S_GATE",
    "T_GATE",
    "phase_gate",
    "rx_gate",
    "ry_gate",
    "rz_gate",
    "controlled",
    "CNOT",
    "CZ",
    "SWAP",
    "TOFFOLI",
    # Instructions
    "Measure",
    "MeasureAtAngle",
    "MeasureAtSpinVector",
    "Circuit",
    "Gate",
    "Dependent",
    "Measurement",
    "simplify",
    # Experiment
    "Experiment",
    "RunResult",
    "Outcome",
    "tensor_factor",
    # Formatting
    "format_state",
    "format_matrix",
    "format_measurements",
    # Errors
    "SimulationError",
    "DimensionMismatch",
    "ExhaustedDistribution",
    "OutOfRangeReference",
    "FactorizationInconsistency",
    # Config
    "Settings",
    "get_settings",
    # Circuits
    "ENTANGLE",
    "TELEPORT",
    "DEUTSCH_ORACLES",
    "deutsch",
    "bell_game",
]
