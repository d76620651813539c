"""Tests for display text."""

import numpy as np

from entangle import (
    format_state, format_matrix, format_measurements,
    Measurement, Measure, MeasureAtAngle, Gate, Circuit, Dependent,
    ZERO, ONE, PLUS, HADAMARD, PAULI_X, PAULI_Y,
)
from entangle.formatting import format_amplitude, format_matrix_inline


class TestStates:
    """Tests for amplitude and state text."""

    def test_basis_states(self):
        assert format_state(ZERO) == "|0⟩"
        assert format_state(ONE) == "|1⟩"

    def test_superposition(self):
        assert format_state(PLUS) == "[0.707, 0.707]"

    def test_shorthands(self):
        assert format_state([0, 1, 1j, 0.5]) == "[0, 1, i, 0.500]"

    def test_complex_amplitudes(self):
        assert format_amplitude(0.5 + 0.25j) == "0.500 + 0.250i"
        assert format_amplitude(0.5 - 0.25j) == "0.500 - 0.250i"
        assert format_amplitude(-0.5j) == "-0.500i"

    def test_negative_zero(self):
        """Tiny negative values print as 0."""
        assert format_amplitude(-1e-9) == "0"
        assert format_state([-1e-9 + 1e-9j, -1]) == "[0, -1.000]"

    def test_precision(self):
        assert format_state(PLUS, precision=1) == "[0.7, 0.7]"


class TestMatrices:
    """Tests for matrix text."""

    def test_multiline(self):
        assert format_matrix(HADAMARD) == "[\n    [0.707, 0.707],\n    [0.707, -0.707]\n]"

    def test_inline(self):
        assert format_matrix_inline(PAULI_Y) == "[[0, -1.000i], [i, 0]]"


class TestMeasurements:
    """Tests for measurement text used as aggregation keys."""

    def test_single(self):
        assert str(Measurement(0, True)) == "0:  true"
        assert str(Measurement(12, False)) == "12: false"

    def test_list(self):
        measurements = [Measurement(0, True), Measurement(1, False)]
        assert format_measurements(measurements) == "[0:  true, 1: false]"
        assert format_measurements([]) == "[]"


class TestInstructions:
    """Tests for one-line instruction descriptions."""

    def test_measure(self):
        assert str(Measure(3)) == "{Measure 3 @ |1⟩}"

    def test_measure_at_angle(self):
        assert str(MeasureAtAngle(np.pi / 2, 0)) == "{Measure 0 @ 90°}"

    def test_gate(self):
        assert str(Gate(PAULI_X, 1)) == "{Gate: [|1⟩, |0⟩] @ 1}"

    def test_dependent(self):
        text = str(Dependent(Circuit([Measure(0)], 2), 1))
        assert text == "{{circuit: [{Measure 0 @ |1⟩}] @ 2} depending on measurement #1}"
