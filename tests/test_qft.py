"""Tests for Quantum Fourier Transform."""

import numpy as np
import pytest

from qkit import Circuit, OP_HAD, OP_PHASE, OP_SWAP, allclose_up_to_global_phase, state_fidelity


def _arbitrary_state(circuit):
    circuit.rot_y(1, 0, 40)
    circuit.rot_x(2, 0, 70)
    circuit.had(4)
    circuit.phase(4, 1, 33)


class TestQFT:
    """Tests for QFT implementation."""

    def test_qft_zero_state_gives_uniform_superposition(self):
        """QFT(|000⟩) is the uniform superposition with zero phase."""
        circuit = Circuit(3)
        circuit.qft(0b111)
        assert np.allclose(circuit.state, np.full(8, 1 / np.sqrt(8)))

    def test_three_qubit_qft_of_one(self):
        """QFT(|1⟩) = Σₖ exp(-2πik/8)|k⟩/√8."""
        circuit = Circuit(3)
        circuit.not_(1)
        circuit.qft(0b111)
        k = np.arange(8)
        expected = np.exp(-2j * np.pi * k / 8) / np.sqrt(8)
        assert np.allclose(circuit.state, expected)

    def test_two_qubit_qft_matches_dft(self):
        """Every 2-qubit basis state maps to the matching DFT column."""
        k = np.arange(4)
        for j in range(4):
            circuit = Circuit(2)
            circuit.not_(j)
            circuit.qft(0b11)
            expected = np.exp(-2j * np.pi * j * k / 4) / 2
            assert np.allclose(circuit.state, expected)

    def test_periodic_state_gives_peaks(self):
        """Period 2 on 3 qubits gives peaks at 0 and 4 only."""
        circuit = Circuit(3)
        circuit.had(0b110)
        circuit.qft(0b111)
        probs = np.abs(circuit.state) ** 2
        assert np.allclose(probs, [0.5, 0, 0, 0, 0.5, 0, 0, 0])

    def test_qft_inverse_is_inverse(self):
        """QFT⁻¹(QFT(|ψ⟩)) = |ψ⟩."""
        circuit = Circuit(3)
        _arbitrary_state(circuit)
        original = circuit.state

        circuit.qft(0b111)
        circuit.inverse_qft(0b111)
        assert allclose_up_to_global_phase(circuit.state, original)
        assert state_fidelity(circuit.state, original) == pytest.approx(1.0)

    def test_inverse_then_qft(self):
        circuit = Circuit(3)
        _arbitrary_state(circuit)
        original = circuit.state

        circuit.inverse_qft(0b111)
        circuit.qft(0b111)
        assert np.allclose(circuit.state, original)

    def test_qft_on_register_leaves_other_qubits(self):
        """A QFT on a register does not touch qubits outside it."""
        circuit = Circuit(3)
        circuit.assign_qubits(1, "other")
        reg = circuit.assign_qubits(2, "fourier")
        reg.qft()
        assert circuit.probability(1) == pytest.approx((1.0, 0.0))
        assert reg.probability(1) == pytest.approx((0.5, 0.5))

    def test_operation_counts(self):
        """A 3-qubit QFT logs 3 H, 3 controlled P and 1 S."""
        circuit = Circuit(3)
        circuit.qft(0b111)
        names = [op.op_name for op in circuit.operations]
        assert names.count(OP_HAD) == 3
        assert names.count(OP_PHASE) == 3
        assert names.count(OP_SWAP) == 1
        phases = [op for op in circuit.operations if op.op_name == OP_PHASE]
        assert [op.options for op in phases] == [[-90.0], [-45.0], [-90.0]]
        assert all(op.control_qbits for op in phases)

    def test_single_qubit_qft_is_hadamard(self):
        circuit = Circuit(1)
        circuit.not_(1)
        circuit.qft(1)
        assert np.allclose(circuit.state, np.array([1, -1]) / np.sqrt(2))
