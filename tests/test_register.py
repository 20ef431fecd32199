"""Tests for Register, the local view of a slice of qubits."""

import numpy as np
import pytest

from qkit import Circuit, QubitMask


def _read(reg):
    return reg.read_all()


class TestAddressing:
    """Tests for local/global translation."""

    def test_to_global_and_back(self):
        circuit = Circuit(6)
        circuit.assign_qubits(4)
        reg = circuit.assign_qubits(2, "hi")
        assert reg.to_global(1) == QubitMask(0x10)
        assert reg.to_global(3) == QubitMask(0x30)
        assert reg.to_local(0x20) == 2

    def test_had_on_shifted_register(self):
        """had(1) on a register at shift 2 acts on global qubit 4."""
        circuit = Circuit(3)
        circuit.assign_qubits(2)
        reg = circuit.assign_qubits(1)
        reg.had(1)
        assert np.allclose(circuit.probability(4), (0.5, 0.5))
        assert np.allclose(circuit.probability(1), (1.0, 0.0))

    def test_value_outside_register_raises(self):
        """A local value wider than the register never reaches the next one."""
        circuit = Circuit(4, seed=0)
        a = circuit.assign_qubits(2, "a")
        b = circuit.assign_qubits(2, "b")
        with pytest.raises(ValueError):
            a.not_(4)
        with pytest.raises(ValueError):
            a.add(5)
        with pytest.raises(ValueError):
            a.to_global(8)
        assert circuit.operations == []
        assert b.read_all() == 0

    def test_repr_names_register(self):
        reg = Circuit(2).assign_qubits(2, "num")
        assert "num" in repr(reg)


class TestReadWrite:
    """Tests for register reads and writes in local values."""

    def test_write_read_shifted(self):
        circuit = Circuit(5, seed=4)
        low = circuit.assign_qubits(2, "low")
        high = circuit.assign_qubits(3, "high")
        high.write(6)
        low.write(1)
        assert _read(high) == 6
        assert _read(low) == 1
        assert circuit.read() == 0b11001

    def test_write_clears_other_bits(self):
        circuit = Circuit(3, seed=4)
        reg = circuit.assign_qubits(3)
        reg.write(7)
        reg.write(2)
        assert _read(reg) == 2

    def test_probability_local(self):
        circuit = Circuit(4, seed=4)
        circuit.assign_qubits(2)
        reg = circuit.assign_qubits(2)
        reg.write(2)
        assert reg.probability(2) == pytest.approx((0.0, 1.0))
        assert reg.probability(1) == pytest.approx((1.0, 0.0))


class TestGates:
    """Tests for register gate wrappers."""

    def test_not_all(self):
        circuit = Circuit(3, seed=0)
        circuit.assign_qubits(1)
        reg = circuit.assign_qubits(2)
        reg.not_all()
        assert circuit.read() == 0b110

    def test_rotations_preserve_norm(self):
        circuit = Circuit(3)
        reg = circuit.assign_qubits(3)
        reg.rot_x_all(20)
        reg.rot_y_all(-50)
        reg.rot_z_all(75)
        reg.rot_y(2, 1, 30)
        reg.phase_all(45)
        assert np.isclose(np.sum(np.abs(circuit.state) ** 2), 1.0)

    def test_rot_y_180_flips(self):
        circuit = Circuit(2, seed=0)
        circuit.assign_qubits(1)
        reg = circuit.assign_qubits(1)
        reg.rot_y(1, 0, 180)
        assert reg.read_all() == 1

    def test_swap_local(self):
        circuit = Circuit(3, seed=0)
        circuit.assign_qubits(1)
        reg = circuit.assign_qubits(2)
        reg.write(1)
        reg.swap(1, 2)
        assert _read(reg) == 2

    def test_shift_left(self):
        circuit = Circuit(4, seed=0)
        circuit.assign_qubits(1)
        reg = circuit.assign_qubits(3)
        reg.write(4)
        reg.shift_left()
        assert _read(reg) == 1


class TestArithmetic:
    """Tests for register add/subtract."""

    def test_add_on_shifted_register(self):
        """The added value is local to the register."""
        circuit = Circuit(5, seed=0)
        circuit.assign_qubits(2)
        a = circuit.assign_qubits(3)
        a.write(2)
        a.add(1)
        assert _read(a) == 3

    def test_add_negative_subtracts(self):
        circuit = Circuit(3, seed=0)
        a = circuit.assign_qubits(3)
        a.write(2)
        a.add(-3)
        assert _read(a) == 7
        a.subtract(-1)
        assert _read(a) == 0

    def test_add_register(self):
        """a(3 qubits)=2 plus b(2 qubits)=3 gives 5; subtracting b gives 2 back."""
        circuit = Circuit(5, seed=0)
        a = circuit.assign_qubits(3, "a")
        b = circuit.assign_qubits(2, "b")
        a.write(2)
        b.write(3)
        a.add_register(b)
        state = circuit.state
        assert np.argmax(np.abs(state)) == 5 | (3 << 3)
        a.subtract_register(b)
        assert _read(a) == 2
        assert _read(b) == 3

    def test_add_register_uses_each_bit(self):
        """Only the set bits of the other register are added."""
        circuit = Circuit(5, seed=0)
        a = circuit.assign_qubits(3, "a")
        b = circuit.assign_qubits(2, "b")
        a.write(2)
        b.write(2)
        a.add_register(b)
        assert _read(a) == 4

    def test_add_with_two_flags_needs_both(self):
        """A two-qubit control mask means both flags set, not one per bit."""
        circuit = Circuit(5, seed=0)
        a = circuit.assign_qubits(3, "a")
        flags = circuit.assign_qubits(2, "flags")
        flags.write(1)
        a.add(3, flags.qubits)
        assert np.argmax(np.abs(circuit.state)) == 1 << 3
        flags.write(3)
        a.add(3, flags.qubits)
        assert _read(a) == 3

    def test_add_wider_register(self):
        """Bits of the addend above this register's width wrap away."""
        circuit = Circuit(5, seed=0)
        a = circuit.assign_qubits(2, "a")
        b = circuit.assign_qubits(3, "b")
        a.write(1)
        b.write(7)
        a.add_register(b)
        assert _read(a) == 0

    def test_controlled_add_register(self):
        circuit = Circuit(5, seed=0)
        a = circuit.assign_qubits(2, "a")
        b = circuit.assign_qubits(2, "b")
        flag = circuit.assign_qubits(1, "flag")
        b.write(1)
        a.add_register(b, flag.to_global(1))
        assert np.argmax(np.abs(circuit.state)) == 1 << 2
        flag.not_all()
        a.add_register(b, flag.to_global(1))
        assert _read(a) == 1

    def test_controlled_add(self):
        circuit = Circuit(4, seed=0)
        a = circuit.assign_qubits(3)
        flag = circuit.assign_qubits(1)
        a.write(6)
        a.add(3, flag.to_global(1))
        assert np.argmax(np.abs(circuit.state)) == 6
        flag.not_all()
        a.add(3, flag.to_global(1))
        assert _read(a) == 1
