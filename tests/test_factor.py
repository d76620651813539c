"""Tests for tensor factorization."""

import numpy as np
import pytest

from entangle import (
    tensor_factor, tensor_product_vector, allclose_up_to_global_phase, normalize,
    Experiment, Gate, ZERO, ONE, PLUS, MINUS, HADAMARD, ENTANGLE,
    FactorizationInconsistency,
)
from entangle.factor import is_separable, reference_index

BELL = np.array([1, 0, 0, 1]) / np.sqrt(2)


class TestSeparable:
    """Product states split into their factors."""

    def test_zero_plus(self):
        """|0⟩ ⊗ |+⟩ splits into |0⟩ and |+⟩."""
        factors = tensor_factor(tensor_product_vector([ZERO, PLUS]))
        assert len(factors) == 2
        assert allclose_up_to_global_phase(factors[0], ZERO)
        assert allclose_up_to_global_phase(factors[1], PLUS)

    def test_hadamard_basis_products(self):
        """H|a⟩ ⊗ |b⟩ factors and recomposes for all basis inputs."""
        for a in (ZERO, ONE):
            for b in (ZERO, ONE):
                product = tensor_product_vector([HADAMARD @ a, b])
                factors = tensor_factor(product)
                assert len(factors) == 2
                assert np.allclose(tensor_product_vector(factors), product)

    def test_three_qubit_product(self):
        """A product of three single-qubit states splits into three."""
        qubits = [MINUS, np.array([0.6, 0.8j]), ONE]
        product = tensor_product_vector(qubits)
        factors = tensor_factor(product)
        assert len(factors) == 3
        assert np.allclose(tensor_product_vector(factors), product)
        for factor, qubit in zip(factors, qubits):
            assert np.allclose(np.abs(factor), np.abs(qubit))

    def test_factors_normalized(self):
        """Every factor has unit norm."""
        for factor in tensor_factor(tensor_product_vector([PLUS, MINUS, PLUS])):
            assert np.isclose(np.linalg.norm(factor), 1)

    def test_tiny_leading_amplitude(self):
        """A first amplitude barely above tolerance does not spoil the factors."""
        qubit = np.array([1e-8, 1]) / np.hypot(1e-8, 1)
        product = tensor_product_vector([qubit, np.array([0.6, 0.8j])])
        factors = tensor_factor(product, atol=1e-9)
        assert len(factors) == 2
        assert np.allclose(tensor_product_vector(factors), product)
        assert np.allclose(np.abs(factors[1]), [0.6, 0.8])

    def test_unnormalized_input(self):
        """Input is normalized before factoring."""
        factors = tensor_factor([2, 2, 0, 0])
        assert np.allclose(tensor_product_vector(factors), [np.sqrt(0.5), np.sqrt(0.5), 0, 0])


class TestEntangled:
    """Entangled states are not split."""

    def test_bell_pair_stays_whole(self):
        """A Bell pair comes back as a single factor."""
        factors = tensor_factor(BELL)
        assert len(factors) == 1
        assert np.allclose(factors[0], BELL)

    def test_bell_pair_with_spectator(self):
        """(|00⟩ + |11⟩) ⊗ |0⟩ splits into the Bell pair and |0⟩."""
        state = np.array([1, 0, 0, 0, 0, 0, 1, 0]) / np.sqrt(2)
        factors = tensor_factor(state)
        assert len(factors) == 2
        assert np.allclose(factors[0], BELL)
        assert np.allclose(factors[1], ZERO)
        assert len(tensor_factor(factors[0])) == 1

    def test_spectator_in_front(self):
        """|1⟩ ⊗ Bell splits into |1⟩ and the Bell pair."""
        state = tensor_product_vector([ONE, BELL])
        factors = tensor_factor(state)
        assert len(factors) == 2
        assert np.allclose(factors[0], ONE)
        assert np.allclose(factors[1], BELL)

    def test_experiment_output(self):
        """The final state of an entangling circuit factors around the pair."""
        state, _ = Experiment([ZERO, ZERO, ONE], ENTANGLE).run()
        factors = tensor_factor(state)
        assert np.allclose(tensor_product_vector(factors), state)
        assert np.allclose(factors[-1], ONE)


class TestSeparabilityCheck:
    """Tests for the rank-1 check."""

    def test_rank_one(self):
        assert is_separable(np.outer([1, 2], [3, 4j]), 1e-9)

    def test_rank_two(self):
        assert not is_separable(np.eye(2), 1e-9)

    def test_zero_leading_row(self):
        """A zero first row does not hide the rank."""
        assert is_separable(np.outer([0, 1, 1j], [1, -1]), 1e-9)
        assert not is_separable(np.array([[0, 0], [1, 0], [0, 1]]), 1e-9)

    def test_reference_is_largest_entry(self):
        matrix = np.array([[1e-6, 0.1], [0.5j, -0.8]])
        assert reference_index(matrix) == (1, 1)

    def test_ten_qubit_product(self):
        """A 10-qubit product state splits into its ten qubits."""
        rng = np.random.default_rng(7)
        qubits = [rng.normal(size=2) + 1j * rng.normal(size=2) for _ in range(10)]
        product = tensor_product_vector(qubits)
        factors = tensor_factor(product)
        assert len(factors) == 10
        assert np.allclose(tensor_product_vector(factors), normalize(product))


class TestInvalidInput:
    """Inputs that cannot be factored."""

    def test_length_not_power_of_two(self):
        with pytest.raises(ValueError):
            tensor_factor([1, 0, 0])

    def test_zero_vector(self):
        with pytest.raises(ValueError):
            tensor_factor([0, 0, 0, 0])

    def test_inconsistency_is_assertion_error(self):
        """FactorizationInconsistency is an AssertionError."""
        assert issubclass(FactorizationInconsistency, AssertionError)
