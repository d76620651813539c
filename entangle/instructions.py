"""
Circuit instructions.

A circuit is a list of instructions. Qubit indices are positions in the
experiment's qubit list (0 = first qubit = most significant bit), relative
to the offset of any enclosing Circuit.

MeasureAtAngle, MeasureAtSpinVector and nested Circuits are convenience
forms: lowering rewrites them into plain Gate and Measure instructions
before anything runs.
"""

from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from .formatting import (
    format_angle,
    format_matrix_inline,
    format_measurement,
    format_state,
)
from .tensor import as_matrix, as_vector


def _check_index(name: str, value: int):
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


def _readonly(array: np.ndarray) -> np.ndarray:
    array = array.copy()
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class Measure:
    """Measure one qubit in the computational basis."""
    qubit: int
    display: bool = True

    def __post_init__(self):
        _check_index("qubit", self.qubit)

    def __str__(self):
        return f"{{Measure {self.qubit} @ |1⟩}}"


@dataclass(frozen=True)
class MeasureAtAngle:
    """Measure one qubit in a basis rotated by `angle` radians."""
    angle: float
    qubit: int
    display: bool = True

    def __post_init__(self):
        _check_index("qubit", self.qubit)

    def __str__(self):
        return f"{{Measure {self.qubit} @ {format_angle(self.angle)}}}"


@dataclass(frozen=True, eq=False)
class MeasureAtSpinVector:
    """Measure one qubit along the basis state given by a two-amplitude spinor."""
    spin_vector: np.ndarray
    qubit: int
    display: bool = True

    def __post_init__(self):
        spin_vector = as_vector(self.spin_vector)
        if spin_vector.shape != (2,):
            raise ValueError(f"Spin vector needs 2 amplitudes, got {spin_vector.shape[0]}")
        _check_index("qubit", self.qubit)
        object.__setattr__(self, "spin_vector", _readonly(spin_vector))

    def __eq__(self, other):
        if not isinstance(other, MeasureAtSpinVector):
            return NotImplemented
        return (self.qubit == other.qubit and self.display == other.display
                and np.array_equal(self.spin_vector, other.spin_vector))

    __hash__ = None

    def __str__(self):
        return f"{{Measure {self.qubit} @ {format_state(self.spin_vector)}}}"


@dataclass(frozen=True, eq=False)
class Gate:
    """Apply `matrix` to the qubits starting at `qubit`."""
    matrix: np.ndarray
    qubit: int

    def __post_init__(self):
        matrix = as_matrix(self.matrix)
        size = matrix.shape[0]
        if size < 2 or size & (size - 1):
            raise ValueError(f"Gate dimension must be a power of two >= 2, got {size}")
        _check_index("qubit", self.qubit)
        object.__setattr__(self, "matrix", _readonly(matrix))

    @property
    def span(self) -> int:
        """Number of qubits the gate acts on."""
        return self.matrix.shape[0].bit_length() - 1

    def __eq__(self, other):
        if not isinstance(other, Gate):
            return NotImplemented
        return self.qubit == other.qubit and np.array_equal(self.matrix, other.matrix)

    __hash__ = None

    def __str__(self):
        return f"{{Gate: {format_matrix_inline(self.matrix)} @ {self.qubit}}}"


@dataclass(frozen=True)
class Circuit:
    """A sub-circuit whose qubit indices are relative to `offset`."""
    instructions: Sequence["Instruction"]
    offset: int = 0

    def __post_init__(self):
        object.__setattr__(self, "instructions", tuple(self.instructions))
        _check_index("offset", self.offset)

    def __str__(self):
        body = ", ".join(str(instruction) for instruction in self.instructions)
        return f"{{circuit: [{body}] @ {self.offset}}}"


@dataclass(frozen=True)
class Dependent:
    """Run `instruction` only if measurement number `measurement` came out True.

    Measurements are numbered in execution order, starting at 0 for the
    enclosing circuit, whether or not they are displayed.
    """
    instruction: "Instruction"
    measurement: int

    def __post_init__(self):
        _check_index("measurement", self.measurement)

    def __str__(self):
        return f"{{{self.instruction} depending on measurement #{self.measurement}}}"


Instruction = Union[Measure, MeasureAtAngle, MeasureAtSpinVector, Circuit, Gate, Dependent]


@dataclass(frozen=True)
class Measurement:
    """Result of one measurement during a run."""
    qubit: int
    outcome: bool
    display: bool = field(default=True, compare=False)

    def __str__(self):
        return format_measurement(self.qubit, self.outcome)
