"""
State-vector execution of lowered circuits.

An Experiment is built once from the initial qubit states and a circuit.
Construction lowers the circuit; after that the experiment is read-only and
every call to run() starts again from the initial state, so runs are
independent trials.
"""

import logging
from collections import deque
from typing import Dict, List, NamedTuple, Optional, Sequence

import numpy as np

from .config import Settings, get_settings
from .errors import DimensionMismatch, ExhaustedDistribution, OutOfRangeReference
from .formatting import format_measurements
from .gates import IDENTITY
from .instructions import (
    Circuit,
    Dependent,
    Gate,
    Instruction,
    Measure,
    Measurement,
)
from .lowering import simplify
from .tensor import (
    apply_gate,
    as_vector,
    normalize,
    one_mask,
    probabilities,
    tensor_product_matrix,
    tensor_product_vector,
)

logger = logging.getLogger(__name__)


class RunResult(NamedTuple):
    state: np.ndarray
    measurements: List[Measurement]


class Outcome(NamedTuple):
    key: str
    state: np.ndarray
    measurements: List[Measurement]
    frequency: float


def choose_index(probs: np.ndarray, r: float) -> int:
    """
    Pick a basis index by inverse-CDF sampling.

    Args:
        probs: Probability of each basis index
        r: Uniform draw in [0, 1)

    Returns:
        First index whose cumulative probability exceeds r

    Raises:
        ExhaustedDistribution: if the probabilities sum to r or less
    """
    cumulative = np.cumsum(probs)
    index = int(np.searchsorted(cumulative, r, side="right"))
    if index >= len(probs):
        raise ExhaustedDistribution(
            f"Draw {r} exceeds total probability {cumulative[-1] if len(probs) else 0.0}"
        )
    return index


class Experiment:
    """
    A circuit together with the initial state of its qubits.

    Args:
        qubits: Initial amplitude vector of each qubit, in order (qubit 0
                first). Vectors are normalized; a vector of length 2^k
                counts as k qubits.
        instructions: The circuit
        seed: Seed for the measurement RNG (defaults to settings.seed)
        rng: A numpy Generator to draw from instead of seeding a new one
        settings: Overrides the process-wide settings
    """

    def __init__(self,
                 qubits: Sequence,
                 instructions: Sequence[Instruction],
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None,
                 settings: Optional[Settings] = None):
        if len(qubits) == 0:
            raise ValueError("An experiment needs at least one qubit")

        self.settings = settings or get_settings()
        self.qubits = []
        for qubit in qubits:
            size = len(as_vector(qubit))
            if size < 2 or size & (size - 1):
                raise ValueError(f"Qubit state length must be a power of two >= 2, got {size}")
            vector = normalize(as_vector(qubit))
            vector.setflags(write=False)
            self.qubits.append(vector)

        self.num_qubits = sum(len(q).bit_length() - 1 for q in self.qubits)
        self.instructions = tuple(simplify(instructions))

        if rng is None:
            rng = np.random.default_rng(self.settings.seed if seed is None else seed)
        self.rng = rng

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(num_qubits={self.num_qubits}, "
                f"instructions={len(self.instructions)})")

    # -------------------------------------------------------------------------
    # Single run
    # -------------------------------------------------------------------------

    def initial_state(self) -> np.ndarray:
        """Kronecker product of the initial qubit states."""
        return tensor_product_vector(self.qubits)

    def gate_matrix(self, gate: Gate) -> np.ndarray:
        """
        Expand a gate to a matrix over the whole system.

        The gate replaces the identity at its qubit and the identities of
        the following span-1 qubits it also covers.
        """
        if gate.qubit + gate.span > self.num_qubits:
            raise DimensionMismatch(
                f"{gate.span}-qubit gate at qubit {gate.qubit} does not fit "
                f"in {self.num_qubits} qubits"
            )
        matrices = [IDENTITY] * self.num_qubits
        matrices[gate.qubit:gate.qubit + gate.span] = [gate.matrix]
        return tensor_product_matrix(matrices)

    def measure(self, state: np.ndarray, qubit: int):
        """
        Measure a qubit and collapse the state.

        Returns:
            (outcome, collapsed and renormalized state)

        Raises:
            DimensionMismatch: if the qubit is past the last one
        """
        if qubit >= self.num_qubits:
            raise DimensionMismatch(
                f"Cannot measure qubit {qubit} of {self.num_qubits} qubits"
            )
        probs = probabilities(state)
        r = self.rng.random()
        index = choose_index(probs, r)

        mask = one_mask(qubit, len(state))
        outcome = bool(mask[index])
        collapsed = np.where(mask == outcome, state, 0)
        logger.debug("Measured qubit %d: draw %.6f -> basis %d -> %s",
                     qubit, r, index, outcome)
        return outcome, normalize(collapsed)

    def run(self) -> RunResult:
        """
        Execute the circuit once.

        Returns:
            RunResult(state, measurements) with the final state vector and
            the displayed measurements in the order they were taken
        """
        state = self.initial_state()
        history: List[Measurement] = []
        pending = deque(self.instructions)

        while pending:
            instruction = pending.popleft()
            logger.debug("Executing %s", instruction)

            if isinstance(instruction, Gate):
                state = apply_gate(state, self.gate_matrix(instruction))

            elif isinstance(instruction, Measure):
                outcome, state = self.measure(state, instruction.qubit)
                history.append(Measurement(instruction.qubit, outcome, instruction.display))

            elif isinstance(instruction, Circuit):
                # Only reached through a Dependent; already lowered
                pending.extendleft(reversed(instruction.instructions))

            elif isinstance(instruction, Dependent):
                if not 0 <= instruction.measurement < len(history):
                    raise OutOfRangeReference(
                        f"Measurement #{instruction.measurement} requested but only "
                        f"{len(history)} taken: {format_measurements(history)}"
                    )
                if history[instruction.measurement].outcome:
                    pending.appendleft(instruction.instruction)

            else:
                raise TypeError(f"Instruction was not lowered: {instruction}")

        return RunResult(state, [m for m in history if m.display])

    # -------------------------------------------------------------------------
    # Repeated runs
    # -------------------------------------------------------------------------

    def average_out(self, trials: int) -> List[Outcome]:
        """
        Run the experiment repeatedly and tabulate the outcomes.

        Runs are bucketed by the text of their displayed measurements. Each
        bucket keeps the state and measurements of its latest run.

        Args:
            trials: Number of runs (positive)

        Returns:
            One Outcome(key, state, measurements, frequency) per distinct
            result, in order of first appearance
        """
        if (isinstance(trials, bool) or not isinstance(trials, (int, np.integer))
                or trials < 1):
            raise ValueError(f"trials must be a positive integer, got {trials!r}")

        buckets: Dict[str, list] = {}
        for _ in range(trials):
            state, measurements = self.run()
            key = format_measurements(measurements)
            count = buckets[key][2] if key in buckets else 0
            buckets[key] = [state, measurements, count + 1]

        logger.info("%d trials, %d distinct outcomes", trials, len(buckets))
        return [Outcome(key, state, measurements, count / trials)
                for key, (state, measurements, count) in buckets.items()]

    def average_out_pretty(self, trials: int) -> str:
        """average_out() as text, one line per outcome with its percentage."""
        lines = []
        for outcome in self.average_out(trials):
            body = ", ".join(str(m) for m in outcome.measurements)
            lines.append(f"Measurements: [ {body} ] => {100 * outcome.frequency:.2f}%")
        return "\n".join(lines)
