"""Tests for the circuit library: teleportation, Deutsch, Bell game."""

import numpy as np
import pytest

from entangle import (
    Experiment, Circuit, Measure, Measurement, MeasureAtAngle,
    ZERO, ONE, HADAMARD,
    TELEPORT, ENTANGLE, DEUTSCH_ORACLES, deutsch, bell_game,
    peek_qubit,
)
from entangle.circuits import bell_game_round


class TestTeleportation:
    """Tests for the teleportation circuit."""

    def test_teleport_one(self):
        """|1⟩ on qubit 0 always arrives as |1⟩ on qubit 2."""
        experiment = Experiment([ONE, ZERO, ZERO], [Circuit(TELEPORT, 0), Measure(2)], seed=1)
        outcomes = experiment.average_out(200)
        assert [o.key for o in outcomes] == ["[2:  true]"]

    def test_teleport_arbitrary_state(self):
        """Qubit 2 ends with the probabilities of the input qubit."""
        qubit = np.array([0.6, 0.8j])
        experiment = Experiment([qubit, ZERO, ZERO], TELEPORT, seed=2)
        for _ in range(20):
            state, measurements = experiment.run()
            assert measurements == []  # both Bell measurements are hidden
            p0, p1 = peek_qubit(state, 2)
            assert np.isclose(p0, 0.36) and np.isclose(p1, 0.64)

    def test_teleport_superposition_phase(self):
        """H|1⟩ = |−⟩ is teleported with its relative phase."""
        experiment = Experiment([HADAMARD @ ONE, ZERO, ZERO], [
            Circuit(TELEPORT, 0),
            Circuit([MeasureAtAngle(np.pi / 2, 0)], 2),
        ], seed=3)
        # |−⟩ is orthogonal to the 90° basis state |+⟩
        for _ in range(20):
            assert experiment.run().measurements == [Measurement(2, False)]

    def test_teleport_half_of_bell_pair(self):
        """Teleporting one half of a Bell pair keeps the correlation."""
        experiment = Experiment([ZERO] * 4, [
            Circuit(ENTANGLE, 0),
            Circuit(TELEPORT, 1),
            Measure(0),
            Measure(3),
        ], seed=4)
        for outcome in experiment.average_out(500):
            first, last = outcome.measurements
            assert first.outcome == last.outcome


class TestDeutsch:
    """Tests for Deutsch's algorithm."""

    @pytest.mark.parametrize("name, expected", [
        ("constant-0", "constant"),
        ("constant-1", "constant"),
        ("identity", "balanced"),
        ("negation", "balanced"),
    ])
    def test_oracles(self, name, expected):
        assert deutsch(DEUTSCH_ORACLES[name], seed=0) == expected


class TestBellGame:
    """Tests for the CHSH game."""

    def test_round_returns_two_answers(self):
        x, y = bell_game_round(True, False, np.random.default_rng(0))
        assert isinstance(x, bool) and isinstance(y, bool)

    def test_beats_classical_limit(self):
        """The entangled strategy wins about 85% of rounds, above 75%."""
        assert bell_game(2000, seed=123) > 0.78

    def test_invalid_rounds(self):
        with pytest.raises(ValueError):
            bell_game(0)
