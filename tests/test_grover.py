"""Tests for Grover iteration and search."""

import numpy as np
import pytest

from qkit import Circuit, COLLAPSE_BORN, OP_SPACE, grover_search, phase_oracle


class TestGroverIteration:
    """Tests for the single amplification step."""

    def test_uniform_state_is_fixed_point(self):
        """With nothing marked, one iteration keeps the probabilities uniform."""
        circuit = Circuit(2)
        reg = circuit.assign_qubits(2)
        reg.had_all()
        reg.grover()
        assert np.allclose(np.abs(circuit.state) ** 2, 0.25)

    def test_logs_space_marker(self):
        circuit = Circuit(2)
        reg = circuit.assign_qubits(2, "search")
        reg.grover()
        assert circuit.operations[0].op_name == OP_SPACE
        assert circuit.operations[0].register_name_string == "search"

    def test_empty_mask_does_nothing(self):
        circuit = Circuit(2)
        circuit.grover(0)
        assert circuit.operations == []

    def test_two_qubit_amplification_is_exact(self):
        """Oracle plus one iteration puts all amplitude on the marked item."""
        for target in range(4):
            circuit = Circuit(2)
            reg = circuit.assign_qubits(2)
            reg.had_all()
            phase_oracle(circuit, reg.qubits, target)
            reg.grover()
            assert np.abs(circuit.state[target]) ** 2 == pytest.approx(1.0)


class TestPhaseOracle:
    """Tests for the marking oracle."""

    def test_marks_only_target(self):
        circuit = Circuit(3)
        circuit.had(0b111)
        phase_oracle(circuit, 0b111, 5)
        signs = np.sign(circuit.state.real)
        expected = np.ones(8)
        expected[5] = -1
        assert np.allclose(signs, expected)

    def test_target_out_of_range_raises(self):
        with pytest.raises(ValueError):
            phase_oracle(Circuit(2), 0b11, 4)


class TestGroverSearch:
    """Tests for the complete search."""

    @pytest.mark.parametrize("target", range(4))
    def test_two_qubit_search_always_succeeds(self, target):
        assert grover_search(2, target, seed=target) == target

    def test_three_qubit_search_mostly_succeeds(self):
        """Two iterations on 8 items succeed with probability ~0.95."""
        hits = sum(grover_search(3, 6, seed=seed, collapse=COLLAPSE_BORN) == 6
                   for seed in range(20))
        assert hits >= 14

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            grover_search(0, 0)
        with pytest.raises(ValueError):
            grover_search(2, 4)
