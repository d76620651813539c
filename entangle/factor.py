"""
Tensor factorization of amplitude vectors.

Splits a state into a product of independent factors, e.g. the 3-qubit
state (|00⟩ + |11⟩) ⊗ |0⟩ into the Bell pair and |0⟩. Entangled parts stay
together in one factor.
"""

import logging
from typing import List, Optional

import numpy as np

from .config import get_settings
from .errors import FactorizationInconsistency
from .formatting import format_state
from .tensor import as_vector, normalize, tensor_product_vector

logger = logging.getLogger(__name__)


def reference_index(matrix: np.ndarray):
    """Position (a0, b0) of the largest-magnitude entry of a matrix."""
    return np.unravel_index(int(np.argmax(np.abs(matrix))), matrix.shape)


def is_separable(matrix: np.ndarray, atol: float) -> bool:
    """
    Check whether a reshaped state is a product of its row and column parts.

    The matrix has rank one when every entry scaled by a reference entry
    r = M[a0, b0] equals the product of its column and row through r:
    M[a, b] r == M[a, b0] M[a0, b].
    """
    a0, b0 = reference_index(matrix)
    r = matrix[a0, b0]
    return np.allclose(matrix * r, np.outer(matrix[:, b0], matrix[a0, :]),
                       rtol=0, atol=atol)


def tensor_factor(vector, atol: Optional[float] = None) -> List[np.ndarray]:
    """
    Factor a state into a tensor product of smaller states.

    Tries factor sizes 2, 4, 8, ... from the most significant qubits down.
    Whenever the state splits, the leading factor is recorded and the
    search restarts on what remains. The last element is the part that
    could not be split further.

    Only magnitudes are guaranteed to match the factors one would write by
    hand; a global phase may move between factors.

    Args:
        vector: Amplitude vector whose length is a power of two. It is
                normalized before factoring.
        atol: Tolerance for the separability test (defaults to settings.atol)

    Returns:
        List of normalized factors whose Kronecker product is the input

    Raises:
        FactorizationInconsistency: if the factors do not reproduce the input
    """
    settings = get_settings()
    atol = settings.atol if atol is None else atol

    original = as_vector(vector)
    length = len(original)
    if length < 2 or length & (length - 1):
        raise ValueError(f"Vector length must be a power of two >= 2, got {length}")
    if not np.any(np.abs(original) > atol):
        raise ValueError("Cannot factor a zero vector")
    original = normalize(original)

    factors: List[np.ndarray] = []
    remainder = original
    size = 2

    while size < len(remainder):
        inner = len(remainder) // size
        matrix = remainder.reshape(size, inner)

        if not is_separable(matrix, atol):
            size *= 2
            continue

        # Divide out the largest amplitude r = M[a0, b0]
        a0, b0 = reference_index(matrix)
        r = matrix[a0, b0]
        scale = np.abs(r)

        factor = normalize(matrix[:, b0] / scale)
        remainder = normalize(matrix[a0, :] * np.conj(r) / scale ** 2)
        factors.append(factor)
        logger.debug("Split off factor %s", format_state(factor))
        size = 2

    factors.append(remainder)

    reconstructed = tensor_product_vector(factors)
    if not np.allclose(reconstructed, original, rtol=0, atol=settings.display_tolerance):
        raise FactorizationInconsistency(
            "Tensor factors do not reproduce the input: "
            + " ⊗ ".join(format_state(f) for f in factors)
            + f" = {format_state(reconstructed)} != {format_state(original)}"
        )
    return factors
