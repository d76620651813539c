"""
Human-readable text for states, matrices and measurements.

The text produced here is also what the aggregator uses as bucket keys, so
two results that print the same are counted as the same outcome.
"""

from typing import Iterable, Optional

import numpy as np

from .config import get_settings


def _precision(precision: Optional[int]) -> int:
    return get_settings().display_precision if precision is None else precision


def _number(x: float, precision: int) -> str:
    text = f"{x:.{precision}f}"
    # -0.000 prints as 0.000
    if text.startswith("-") and float(text) == 0:
        text = text[1:]
    return text


def format_amplitude(z: complex, precision: Optional[int] = None) -> str:
    """Format one complex amplitude, e.g. '0.707', '-0.5i' or '0.5 + 0.5i'."""
    precision = _precision(precision)
    zero = _number(0, precision)
    unit = _number(1, precision)
    re = _number(z.real, precision)
    im = _number(z.imag, precision)

    if re == zero and im == zero:
        return "0"
    if im == zero:
        return "1" if re == unit else re
    if re == zero:
        return "i" if im == unit else f"{im}i"
    if im.startswith("-"):
        return f"{re} - {im[1:]}i"
    return f"{re} + {im}i"


def format_state(vector, precision: Optional[int] = None) -> str:
    """
    Format an amplitude vector.

    Single-qubit basis states print as |0⟩ and |1⟩, everything else as a
    bracketed list of amplitudes.
    """
    vector = np.asarray(vector, dtype=complex).reshape(-1)
    amplitudes = [format_amplitude(z, precision) for z in vector]

    if amplitudes == ["1", "0"]:
        return "|0⟩"
    if amplitudes == ["0", "1"]:
        return "|1⟩"
    return "[" + ", ".join(amplitudes) + "]"


def format_matrix(matrix, precision: Optional[int] = None) -> str:
    """Format a matrix with one row per line."""
    rows = [format_state(row, precision) for row in np.asarray(matrix, dtype=complex)]
    return "[\n    " + ",\n    ".join(rows) + "\n]"


def format_matrix_inline(matrix, precision: Optional[int] = None) -> str:
    """Format a matrix on a single line."""
    rows = [format_state(row, precision) for row in np.asarray(matrix, dtype=complex)]
    return "[" + ", ".join(rows) + "]"


def format_angle(radians: float) -> str:
    """Format an angle in whole degrees."""
    return f"{np.degrees(radians):.0f}°"


def format_measurement(qubit: int, outcome: bool) -> str:
    """Format one measurement as '0:  true' or '1: false'."""
    return f"{qubit}: {str(bool(outcome)).lower():>5}"


def format_measurements(measurements: Iterable) -> str:
    """Format a list of measurement records as '[0:  true, 1: false]'."""
    return "[" + ", ".join(str(m) for m in measurements) + "]"
