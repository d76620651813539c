"""
Exceptions raised by the simulator.

Every condition here is fatal: it means the circuit, the supplied matrices
or the simulator itself is wrong, so nothing in the package catches them.
"""


class SimulationError(Exception):
    """Base class for all simulator failures."""


class DimensionMismatch(SimulationError, ValueError):
    """A gate matrix does not match the size of the state it is applied to."""


class ExhaustedDistribution(SimulationError, RuntimeError):
    """Sampling walked off the end of a probability distribution.

    Happens when the amplitudes no longer sum to ~1, e.g. after applying a
    non-unitary matrix.
    """


class OutOfRangeReference(SimulationError, IndexError):
    """A Dependent instruction refers to a measurement that was never taken."""


class FactorizationInconsistency(SimulationError, AssertionError):
    """The extracted tensor factors do not multiply back to the input."""
