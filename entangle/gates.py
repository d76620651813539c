"""
Basis states and gate matrices.

Every constant is a read-only complex128 array built once at import time.
Multi-qubit gates act on contiguous qubits, the first listed qubit being
the most significant (for CNOT: control first, target second).
"""

import numpy as np


def _frozen(rows) -> np.ndarray:
    array = np.array(rows, dtype=complex)
    array.setflags(write=False)
    return array


# =============================================================================
# Single-qubit states
# =============================================================================

ZERO = _frozen([1, 0])                           # |0⟩
ONE = _frozen([0, 1])                            # |1⟩
PLUS = _frozen(np.array([1, 1]) / np.sqrt(2))    # |+⟩
MINUS = _frozen(np.array([1, -1]) / np.sqrt(2))  # |−⟩


# =============================================================================
# Single-qubit gates
# =============================================================================

IDENTITY = _frozen([[1, 0],
                    [0, 1]])

PAULI_X = _frozen([[0, 1],     # NOT
                   [1, 0]])

PAULI_Y = _frozen([[ 0, -1j],
                   [1j,   0]])

PAULI_Z = _frozen([[1,  0],
                   [0, -1]])

HADAMARD = _frozen(np.array([[1,  1],
                             [1, -1]]) * np.sqrt(1/2))

S_GATE = _frozen([[1,  0],     # P(π/2)
                  [0, 1j]])

T_GATE = _frozen([[1,                    0],   # P(π/4)
                  [0, np.exp(1j * np.pi / 4)]])


def phase_gate(phi: float) -> np.ndarray:
    """Phase shift P(φ) = diag(1, e^{iφ})"""
    return _frozen([[1,                0],
                    [0, np.exp(1j * phi)]])


def rx_gate(theta: float) -> np.ndarray:
    """X rotation Rx(θ)"""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return _frozen([[c,       -1j * s],
                    [-1j * s,       c]])


def ry_gate(theta: float) -> np.ndarray:
    """Y rotation Ry(θ)"""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return _frozen([[c, -s],
                    [s,  c]])


def rz_gate(theta: float) -> np.ndarray:
    """Z rotation Rz(θ)"""
    return _frozen([[np.exp(-1j * theta / 2),                      0],
                    [                      0, np.exp(1j * theta / 2)]])


# =============================================================================
# Multi-qubit gates
# =============================================================================

def controlled(gate) -> np.ndarray:
    """
    Add a control qubit in front of a gate.

    The result acts on one more qubit than `gate`: the first qubit is the
    control, `gate` is applied to the rest when the control is |1⟩.
    """
    gate = np.asarray(gate, dtype=complex)
    n = gate.shape[0]
    result = np.eye(2 * n, dtype=complex)
    result[n:, n:] = gate
    return _frozen(result)


CNOT = controlled(PAULI_X)

CZ = controlled(PAULI_Z)

SWAP = _frozen([[1, 0, 0, 0],
                [0, 0, 1, 0],
                [0, 1, 0, 0],
                [0, 0, 0, 1]])

TOFFOLI = controlled(CNOT)
