"""
Complex tensor algebra over amplitude vectors.

A state of n qubits is a flat complex vector of length 2^n. Basis index k
is read big-endian: qubit 0 is the most significant bit of k.

All functions return new arrays and leave their inputs untouched.
"""

from functools import reduce
from typing import Sequence, Tuple

import numpy as np

from .errors import DimensionMismatch


def as_vector(vector) -> np.ndarray:
    """Return vector as a flat complex128 array."""
    return np.asarray(vector, dtype=complex).reshape(-1)


def as_matrix(matrix) -> np.ndarray:
    """Return matrix as a square complex128 array."""
    matrix = np.asarray(matrix, dtype=complex)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {matrix.shape}")
    return matrix


# =============================================================================
# Kronecker products
# =============================================================================

def tensor_product_vector(vectors: Sequence) -> np.ndarray:
    """
    Kronecker product of amplitude vectors, left to right.

    Args:
        vectors: Non-empty sequence of amplitude vectors

    Returns:
        Vector whose length is the product of the input lengths. The first
        vector's index varies slowest.
    """
    if len(vectors) == 0:
        raise ValueError("Need at least one vector")
    return reduce(np.kron, (as_vector(v) for v in vectors))


def tensor_product_matrix(matrices: Sequence) -> np.ndarray:
    """Kronecker product of square matrices, left to right."""
    if len(matrices) == 0:
        raise ValueError("Need at least one matrix")
    return reduce(np.kron, (as_matrix(m) for m in matrices))


# =============================================================================
# State operations
# =============================================================================

def apply_gate(state, matrix) -> np.ndarray:
    """
    Apply a gate matrix to a full state vector.

    Computes result[i] = Σ_j state[j] * matrix[i][j].

    Args:
        state: Amplitude vector of length N
        matrix: N×N gate matrix covering the whole system

    Raises:
        DimensionMismatch: if the matrix is not N×N
    """
    state = as_vector(state)
    matrix = np.asarray(matrix, dtype=complex)
    if matrix.shape != (state.shape[0], state.shape[0]):
        raise DimensionMismatch(
            f"Gate of shape {matrix.shape} cannot act on a state of length {state.shape[0]}"
        )
    return matrix @ state


def magnitude(state) -> float:
    """Euclidean norm of a state."""
    return float(np.sqrt(np.sum(probabilities(state))))


def normalize(state) -> np.ndarray:
    """Scale a state to unit norm. A zero vector comes back as NaNs."""
    state = as_vector(state)
    with np.errstate(invalid="ignore", divide="ignore"):
        return state / magnitude(state)


def probabilities(state) -> np.ndarray:
    """Squared magnitude of each amplitude."""
    state = as_vector(state)
    return state.real ** 2 + state.imag ** 2


# =============================================================================
# Qubit addressing
# =============================================================================

def is_from_one(qubit: int, index: int, length: int) -> bool:
    """
    Check whether basis state `index` has qubit `qubit` set to one.

    Args:
        qubit: Qubit position (0 = most significant)
        index: Basis index into a vector of `length` amplitudes
        length: Length of the state vector (a power of two)
    """
    return index % (length >> qubit) >= length >> (qubit + 1)


def one_mask(qubit: int, length: int) -> np.ndarray:
    """Boolean mask over all basis indices where `qubit` reads one."""
    indices = np.arange(length)
    return indices % (length >> qubit) >= length >> (qubit + 1)


def peek_qubit(state, qubit: int) -> Tuple[float, float]:
    """
    Get the probabilities of one qubit without collapsing the state.

    Args:
        state: Full amplitude vector
        qubit: Qubit position

    Returns:
        Tuple (P(|0⟩), P(|1⟩))
    """
    prob = probabilities(state)
    mask = one_mask(qubit, prob.shape[0])
    return (float(prob[~mask].sum()), float(prob[mask].sum()))


# =============================================================================
# State comparison
# =============================================================================

def allclose_up_to_global_phase(v, w, atol: float = 1e-9) -> bool:
    """
    Check if two states are equal up to a global phase.

    Args:
        v: First state (array-like)
        w: Second state (array-like)
        atol: Absolute tolerance for comparison
    """
    v = as_vector(v)
    w = as_vector(w)

    # Pivot on the largest amplitude of w
    idx = np.argmax(np.abs(w))
    if np.abs(w[idx]) < atol:
        return np.allclose(v, w, atol=atol)

    phase = v[idx] / w[idx]
    return np.allclose(v, phase * w, atol=atol)


def state_fidelity(v, w) -> float:
    """Fidelity |⟨v|w⟩|² between two pure states, in [0, 1]."""
    return float(np.abs(np.vdot(as_vector(v), as_vector(w))) ** 2)
