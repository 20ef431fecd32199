"""
Registers: named, contiguous slices of a circuit's qubits.

A register works in its own local bit space [0, 2^number_of_qubits), which
maps to the circuit's global qubit masks by a left shift. Targets passed to
register methods are local values; control masks are global, so that a gate
on one register can be conditioned on qubits of another.
"""

from .qubits import QubitMask


class Register:
    """
    A register does not own its circuit; it is created by
    Circuit.assign_qubits and lives as long as the circuit does.
    """

    def __init__(self, circuit, number_of_qubits: int, qubits: QubitMask, shift: int, name: str = ""):
        self.circuit = circuit
        self.number_of_qubits = number_of_qubits
        self.qubits = QubitMask.of(qubits)
        self.shift = shift
        self.name = name

    def __repr__(self):
        return (f"Register(name={self.name!r}, number_of_qubits={self.number_of_qubits}, "
                f"qubits={int(self.qubits):#x}, shift={self.shift})")

    def to_global(self, value) -> QubitMask:
        """
        Local value to global qubit mask, e.g. shift 4: 0x1 -> 0x10.

        Raises:
            ValueError: If value does not fit in the register
        """
        value = QubitMask.of(value)
        if int(value) >> self.number_of_qubits:
            raise ValueError(f"value {int(value):#x} is outside {self.name or 'register'!r} "
                             f"of {self.number_of_qubits} qubits")
        return value << self.shift

    def to_local(self, value) -> int:
        return int(value) >> self.shift

    # -------------------------------------------------------------------------
    # Measurement
    # -------------------------------------------------------------------------

    def read_all(self) -> int:
        """Measure every qubit of the register and return the local value."""
        return self.to_local(self.circuit.read_qubits(self.qubits))

    def read(self, value) -> int:
        """Measure the local qubits in value."""
        return self.to_local(self.circuit.read_qubits(self.to_global(value)))

    def write(self, value):
        """Set the whole register to the local value."""
        self.circuit.write(self.to_global(value), self.qubits)

    def probability(self, value):
        """Non-destructive (P(|0⟩), P(|1⟩)) of the single local qubit value."""
        return self.circuit.probability(self.to_global(value))

    # -------------------------------------------------------------------------
    # Gates
    # -------------------------------------------------------------------------

    def had_all(self):
        self.circuit.had(self.qubits)

    def had(self, value, control=0):
        self.circuit.had(self.to_global(value), control)

    def not_all(self):
        self.circuit.not_(self.qubits)

    def not_(self, value, control=0):
        self.circuit.not_(self.to_global(value), control)

    def x(self, value, control=0):
        self.circuit.x(self.to_global(value), control)

    def y(self, value, control=0):
        self.circuit.y(self.to_global(value), control)

    def z(self, value, control=0):
        self.circuit.z(self.to_global(value), control)

    def phase_all(self, deg: float):
        self.circuit.phase(self.qubits, 0, deg)

    def phase(self, value, control=0, deg: float = 0.0):
        self.circuit.phase(self.to_global(value), control, deg)

    def rot_x_all(self, deg: float):
        self.circuit.rot_x(self.qubits, 0, deg)

    def rot_y_all(self, deg: float):
        self.circuit.rot_y(self.qubits, 0, deg)

    def rot_z_all(self, deg: float):
        self.circuit.rot_z(self.qubits, 0, deg)

    def rot_x(self, value, control=0, deg: float = 0.0):
        self.circuit.rot_x(self.to_global(value), control, deg)

    def rot_y(self, value, control=0, deg: float = 0.0):
        self.circuit.rot_y(self.to_global(value), control, deg)

    def rot_z(self, value, control=0, deg: float = 0.0):
        self.circuit.rot_z(self.to_global(value), control, deg)

    def swap(self, target_value, swap_value, control=0):
        self.circuit.swap(self.to_global(target_value), self.to_global(swap_value), control)

    def shift_left(self, control=0, amount: int = 1):
        """Rotate the register's qubits left by amount, optionally controlled."""
        self.circuit.shift_left(self.qubits, control, amount)

    # -------------------------------------------------------------------------
    # Algorithms
    # -------------------------------------------------------------------------

    def qft(self):
        self.circuit.qft(self.qubits)

    def inverse_qft(self):
        self.circuit.inverse_qft(self.qubits)

    def grover(self):
        self.circuit.grover(self.qubits)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, value: int, control=0):
        """Add a local value, e.g. add(3). Negative values subtract."""
        value = int(value)
        if value < 0:
            self.subtract(-value, control)
            return
        self.circuit.add(self.qubits, self.to_global(value), control)

    def subtract(self, value: int, control=0):
        value = int(value)
        if value < 0:
            self.add(-value, control)
            return
        self.circuit.subtract(self.qubits, self.to_global(value), control)

    def _register_operand(self, other: "Register"):
        # bits of other above this register's width vanish mod 2^n
        width = min(self.number_of_qubits, other.number_of_qubits)
        return self.to_global((1 << width) - 1), other.qubits.bits()[:width]

    def add_register(self, other: "Register", control=0):
        """this += other; bit i of other conditions the addition of 2^i."""
        value, bit_controls = self._register_operand(other)
        self.circuit.add(self.qubits, value, control, bit_controls)

    def subtract_register(self, other: "Register", control=0):
        """this -= other"""
        value, bit_controls = self._register_operand(other)
        self.circuit.subtract(self.qubits, value, control, bit_controls)
