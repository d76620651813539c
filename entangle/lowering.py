"""
Circuit lowering.

Turns a nested instruction list into the flat form the engine executes:

- nested Circuits are inlined with their qubit offset applied,
- MeasureAtAngle becomes MeasureAtSpinVector,
- MeasureAtSpinVector becomes rotate, Measure, rotate back,
- Dependent instructions have their inner instruction lowered and their
  measurement reference rebased onto the global measurement numbering.

The engine only ever measures in the computational basis. Measuring along a
spinor |s⟩ = a|0⟩ + b|1⟩ is done by rotating |s⟩ onto |1⟩, measuring, and
applying the inverse rotation.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .instructions import (
    Circuit,
    Dependent,
    Gate,
    Instruction,
    Measure,
    MeasureAtAngle,
    MeasureAtSpinVector,
)

logger = logging.getLogger(__name__)


def angle_to_spin_vector(angle: float) -> np.ndarray:
    """Spinor of the basis state at `angle` radians in the real plane."""
    return np.array([np.sin(angle / 2), np.cos(angle / 2)], dtype=complex)


def basis_rotation(spin_vector) -> Tuple[np.ndarray, np.ndarray]:
    """
    Rotation taking a spinor onto |1⟩, and its inverse.

    Args:
        spin_vector: Two amplitudes [a, b]

    Returns:
        (rotate, unrotate) where rotate = [[b, -a], [a*, b*]] and
        unrotate = [[b*, a], [-a*, b]]
    """
    a, b = np.asarray(spin_vector, dtype=complex)
    a_, b_ = np.conj(a), np.conj(b)
    rotate = np.array([[b, -a],
                       [a_, b_]])
    unrotate = np.array([[b_, a],
                         [-a_, b]])
    return rotate, unrotate


def lower(instructions: Sequence[Instruction],
          measurements: int = 0,
          vertical_shift: int = 0) -> Tuple[List[Instruction], int]:
    """
    Lower an instruction list.

    Args:
        instructions: Instructions to lower (not modified)
        measurements: Number of measurements taken before this list
        vertical_shift: Qubit offset added to every qubit index

    Returns:
        (flat instruction list, number of unconditional measurements in it)
    """
    result: List[Instruction] = []
    count = 0

    for instruction in instructions:
        if isinstance(instruction, Circuit):
            inner, inner_count = lower(instruction.instructions,
                                       measurements + count,
                                       vertical_shift + instruction.offset)
            result.extend(inner)
            count += inner_count

        elif isinstance(instruction, Measure):
            result.append(Measure(instruction.qubit + vertical_shift, instruction.display))
            count += 1

        elif isinstance(instruction, MeasureAtAngle):
            spin = MeasureAtSpinVector(angle_to_spin_vector(instruction.angle),
                                       instruction.qubit, instruction.display)
            inner, inner_count = lower([spin], measurements + count, vertical_shift)
            result.extend(inner)
            count += inner_count

        elif isinstance(instruction, MeasureAtSpinVector):
            qubit = instruction.qubit + vertical_shift
            rotate, unrotate = basis_rotation(instruction.spin_vector)
            result.append(Gate(rotate, qubit))
            result.append(Measure(qubit, instruction.display))
            result.append(Gate(unrotate, qubit))
            count += 1

        elif isinstance(instruction, Gate):
            result.append(Gate(instruction.matrix, instruction.qubit + vertical_shift))

        elif isinstance(instruction, Dependent):
            # Measurements inside a Dependent may never happen, so they do
            # not advance the unconditional count.
            inner, _ = lower([instruction.instruction], measurements + count, vertical_shift)
            result.append(Dependent(Circuit(inner, vertical_shift),
                                    measurements + instruction.measurement))

        else:
            raise TypeError(f"Unknown instruction: {instruction!r}")

    return result, count


def simplify(instructions: Sequence[Instruction],
             measurements: int = 0,
             vertical_shift: int = 0) -> List[Instruction]:
    """Lower an instruction list and return only the flat instructions."""
    flat, count = lower(instructions, measurements, vertical_shift)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Lowered %d instructions (%d measurements):", len(flat), count)
        for instruction in flat:
            logger.debug("    %s", instruction)
    return flat
