"""
Ready-made circuits: entanglement, teleportation, Deutsch's algorithm and
the CHSH (Bell) game.

Run `python -m entangle.circuits` for a short demonstration.
"""

import logging
from typing import Dict, Optional, Tuple

import numpy as np

from .config import get_settings
from .experiment import Experiment
from .formatting import format_state
from .gates import CNOT, HADAMARD, ONE, PAULI_X, PAULI_Z, ZERO
from .instructions import Circuit, Dependent, Gate, Measure, MeasureAtAngle

logger = logging.getLogger(__name__)


# Bell pair (|00⟩ + |11⟩)/√2 from |00⟩ on qubits 0 and 1
ENTANGLE = (
    Gate(HADAMARD, 0),
    Gate(CNOT, 0),
)

# Teleport qubit 0 onto qubit 2 (qubits 1 and 2 start in |0⟩)
TELEPORT = (
    Circuit(ENTANGLE, 1),
    Gate(CNOT, 0),
    Gate(HADAMARD, 0),
    Measure(1, False),
    Measure(0, False),
    Dependent(Gate(PAULI_X, 2), 0),
    Dependent(Gate(PAULI_Z, 2), 1),
)


# =============================================================================
# Deutsch's algorithm
# =============================================================================

# Oracles for f: {0,1} → {0,1} acting as |x⟩|y⟩ → |x⟩|y ⊕ f(x)⟩
DEUTSCH_ORACLES: Dict[str, Circuit] = {
    "constant-0": Circuit([], 0),
    "constant-1": Circuit([Gate(PAULI_X, 1)], 0),
    "identity": Circuit([Gate(CNOT, 0)], 0),
    "negation": Circuit([Gate(CNOT, 0), Gate(PAULI_X, 1)], 0),
}


def deutsch(oracle: Circuit, seed: Optional[int] = None) -> str:
    """
    Decide with one oracle call whether f is constant or balanced.

    Args:
        oracle: Two-qubit oracle circuit (see DEUTSCH_ORACLES)
        seed: RNG seed (the result is deterministic anyway)

    Returns:
        "constant" or "balanced"
    """
    experiment = Experiment([ZERO, ZERO], [
        Gate(PAULI_X, 0),
        Gate(PAULI_X, 1),
        Gate(HADAMARD, 0),
        Gate(HADAMARD, 1),
        oracle,
        Gate(HADAMARD, 0),
        Gate(HADAMARD, 1),
        Measure(0),
        Measure(1),
    ], seed=seed)

    _, measurements = experiment.run()
    return "constant" if measurements[0].outcome else "balanced"


# =============================================================================
# CHSH game
# =============================================================================

# Measurement angles in degrees for each player's input bit
ALICE_ANGLES = {False: 0.0, True: 90.0}
BOB_ANGLES = {False: 215.0, True: 135.0}


def bell_game_round(a: bool, b: bool, rng: np.random.Generator) -> Tuple[bool, bool]:
    """
    Play one round of the CHSH game with a shared singlet.

    Args:
        a: Alice's input bit
        b: Bob's input bit
        rng: Source of measurement randomness

    Returns:
        (Alice's answer, Bob's answer)
    """
    experiment = Experiment([ONE, ONE], [
        Circuit(ENTANGLE, 0),
        MeasureAtAngle(np.radians(ALICE_ANGLES[a]), 0),
        MeasureAtAngle(np.radians(BOB_ANGLES[b]), 1),
    ], rng=rng)

    _, (x, y) = experiment.run()
    return x.outcome, y.outcome


def bell_game(rounds: int, seed: Optional[int] = None) -> float:
    """
    Play the CHSH game repeatedly with random inputs.

    The players win when (x != y) if both inputs are 1, and when (x == y)
    otherwise. No classical strategy wins more than 75% of rounds.

    Returns:
        Fraction of rounds won
    """
    if rounds < 1:
        raise ValueError(f"rounds must be >= 1, got {rounds}")

    rng = np.random.default_rng(seed)
    wins = 0
    for _ in range(rounds):
        a, b = bool(rng.integers(2)), bool(rng.integers(2))
        x, y = bell_game_round(a, b, rng)
        if (x != y) if (a and b) else (x == y):
            wins += 1

    logger.info("Bell game: won %d of %d rounds", wins, rounds)
    return wins / rounds


# =============================================================================
# Demo
# =============================================================================

def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    print("=" * 60)
    print("ENTANGLEMENT")
    print("=" * 60)
    experiment = Experiment([ZERO, ZERO], [
        Circuit(ENTANGLE, 0),
        Measure(0),
        Measure(1),
    ])
    print(experiment.average_out_pretty(10000))
    print()

    print("=" * 60)
    print("TELEPORTATION")
    print("=" * 60)
    qubit = np.array([0.6, 0.8])
    print(f"Input: {format_state(qubit)}")
    experiment = Experiment([qubit, ZERO, ZERO], [
        Circuit(TELEPORT, 0),
        Measure(2),
    ])
    print(experiment.average_out_pretty(10000))
    print()

    print("=" * 60)
    print("DEUTSCH")
    print("=" * 60)
    for name, oracle in DEUTSCH_ORACLES.items():
        print(f"  {name:>10} is {deutsch(oracle)}")
    print()

    print("=" * 60)
    print("BELL GAME")
    print("=" * 60)
    print(f"  win rate: {100 * bell_game(10000):.2f}% (classical limit 75%)")


if __name__ == "__main__":
    main()
