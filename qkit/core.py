"""
Core quantum simulation functionality.

This module provides the state-vector engine. A Circuit owns a vector of
2^N complex amplitudes, one per computational basis state, where basis state
i has qubit k set iff bit k of i is set. Qubits are addressed by bitmask (see
qkit.qubits), and every gate is a 2x2 unitary applied to the amplitude pairs
(i, i + m) that differ only in the target qubit m.

Control works the same way for every gate: a pair is transformed only when
all control bits are set in its lower index.

Every state-changing call is recorded in an append-only operation log, which
can be dumped as JSON together with the registers and amplitudes.
"""

import logging
from collections import deque
from typing import List, Optional, Tuple

import numpy as np

from .gates import H_gate, NOT_gate, X_gate, Y_gate, Z_gate, P_gate, Axis, Rotation
from .mat import Matrix, Vector
from .operations import (
    Operation, DumpDocument, DumpRegister,
    OP_SPACE, OP_READ, OP_WRITE, OP_HAD, OP_PHASE, OP_ROTATE, OP_NOT, OP_SWAP, OP_X, OP_Y, OP_Z,
)
from .qubits import QubitMask
from .register import Register

logger = logging.getLogger(__name__)

# Amplitudes at or below this magnitude count as zero when collapsing
ZERO_TOLERANCE = 1e-10

# Collapse rules for measure_qubit
COLLAPSE_UNIFORM = "uniform"
COLLAPSE_BORN = "born"

PRINT_POLAR = "polar"
PRINT_COMPLEX = "complex"


class Circuit:
    """
    A quantum circuit of a fixed number of qubits.

    Args:
        qubit_count: Number of qubits. The state vector has 2^qubit_count entries.
        seed: Seed for the measurement random generator
        rng: A numpy Generator to draw measurements from (overrides seed)
        collapse: COLLAPSE_UNIFORM (surviving amplitudes become equal with
                  zero phase) or COLLAPSE_BORN (surviving amplitudes are
                  rescaled by 1/sqrt(P), keeping their relative values)
    """

    def __init__(self, qubit_count: int, seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None, collapse: str = COLLAPSE_UNIFORM):
        if qubit_count < 1:
            raise ValueError(f"qubit_count must be >= 1, got {qubit_count}")
        if collapse not in (COLLAPSE_UNIFORM, COLLAPSE_BORN):
            raise ValueError(f"unknown collapse rule {collapse!r}")
        self.collapse = collapse
        self.qubit_count = qubit_count
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.reset()

    def reset(self):
        """Return to |0...0⟩ with an empty allocation, log and print buffer."""
        self.raw_qbits = Vector(1 << self.qubit_count)
        self.raw_qbits.set(0, 1)
        self._queue = deque(QubitMask.bit(i) for i in range(self.qubit_count))
        self._pairs = {}
        self.registers: List[Register] = []
        self.operations: List[Operation] = []
        self.message = ""

    @property
    def state(self) -> np.ndarray:
        """A copy of the amplitude vector."""
        return self.raw_qbits.data.copy()

    @property
    def all_qubits(self) -> QubitMask:
        return QubitMask.range(self.qubit_count)

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def assign_qubits(self, count: int, name: str = "") -> Register:
        """
        Assign the next `count` unallocated qubits to a new register.

        Raises:
            ValueError: If count < 1 or fewer than count qubits remain
        """
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        if count > len(self._queue):
            raise ValueError(f"cannot assign {count} qubits to {name!r}: "
                             f"only {len(self._queue)} of {self.qubit_count} remain")

        shift = self.qubit_count - len(self._queue)
        mask = QubitMask(0)
        for _ in range(count):
            mask |= self._queue.popleft()

        reg = Register(self, count, mask, shift, name)
        self.registers.append(reg)
        logger.debug("assigned register %r: %d qubits, mask %#x, shift %d", name, count, mask, shift)
        return reg

    def get_register(self, value) -> Optional[Register]:
        """The first register holding any of the qubits in value."""
        value = int(value)
        for reg in self.registers:
            if reg.qubits & value:
                return reg
        return None

    # -------------------------------------------------------------------------
    # Addressing
    # -------------------------------------------------------------------------

    def get_qubits(self, value) -> List[QubitMask]:
        """
        Single-qubit masks of the qubits set in value, lowest first.

        Raises:
            ValueError: If value names qubits outside this circuit
        """
        return self._check_mask(value).bits()

    def _check_mask(self, value) -> QubitMask:
        value = QubitMask.of(value)
        if value & ~int(self.all_qubits):
            raise ValueError(f"mask {int(value):#x} has qubits outside a {self.qubit_count}-qubit circuit")
        return value

    def qubit_pairs(self, target) -> Tuple[np.ndarray, np.ndarray]:
        """
        Index pairs affected by a gate on one qubit.

        Returns:
            (low, high) arrays: low holds every index with the target bit
            clear, ascending, and high = low + target

        Raises:
            ValueError: If target is not a single qubit of this circuit
        """
        target = QubitMask.of(target).require_single()
        if target > self.raw_qbits.n // 2:
            raise ValueError(f"qubit {int(target):#x} is outside a {self.qubit_count}-qubit circuit")

        if target not in self._pairs:
            m = int(target)
            idx = np.arange(self.raw_qbits.n)
            low = idx[(idx & m) == 0]
            self._pairs[target] = (low, low | m)
        return self._pairs[target]

    def get_qubit_pairs(self, target) -> List[Tuple[int, int]]:
        low, high = self.qubit_pairs(target)
        return list(zip(low.tolist(), high.tolist()))

    # -------------------------------------------------------------------------
    # Gate application
    # -------------------------------------------------------------------------

    def unitary(self, target, control, matrix: Matrix):
        """
        Apply a 2x2 unitary to every qubit in target.

        Args:
            target: Qubits to apply the matrix to, one after another
            control: Qubits that must all be |1⟩ (0 for no control)
            matrix: 2x2 gate matrix
        """
        control = int(self._check_mask(control))
        amps = self.raw_qbits.data
        for qubit in self.get_qubits(target):
            low, high = self.qubit_pairs(qubit)
            if control:
                selected = (low & control) == control
                low, high = low[selected], high[selected]
            if len(low) == 0:
                continue
            result = matrix.dot(np.vstack((amps[low], amps[high])))
            amps[low] = result[0]
            amps[high] = result[1]

    def had(self, target, control=0):
        """Hadamard gate"""
        self.unitary(target, control, H_gate())
        self._add_operation(OP_HAD, target, control)

    def not_(self, target, control=0):
        """NOT gate; with a control this is CNOT / Toffoli"""
        self.unitary(target, control, NOT_gate())
        self._add_operation(OP_NOT, target, control)

    def x(self, target, control=0):
        self.unitary(target, control, X_gate())
        self._add_operation(OP_X, target, control)

    def y(self, target, control=0):
        self.unitary(target, control, Y_gate())
        self._add_operation(OP_Y, target, control)

    def z(self, target, control=0):
        self.unitary(target, control, Z_gate())
        self._add_operation(OP_Z, target, control)

    def phase(self, target, control=0, deg: float = 0.0):
        """Phase shift of |1⟩ by deg degrees"""
        self.unitary(target, control, P_gate(deg))
        self._add_operation(OP_PHASE, target, control, options=[deg])

    def rotate(self, target, control, rotation: Rotation):
        self.unitary(target, control, rotation.matrix())
        self._add_operation(OP_ROTATE, target, control, options=rotation.degrees_xyz())

    def rot_x(self, target, control=0, deg: float = 0.0):
        self.rotate(target, control, Rotation(Axis.X, deg))

    def rot_y(self, target, control=0, deg: float = 0.0):
        self.rotate(target, control, Rotation(Axis.Y, deg))

    def rot_z(self, target, control=0, deg: float = 0.0):
        self.rotate(target, control, Rotation(Axis.Z, deg))

    def swap(self, target, swap, control=0):
        """
        Exchange two qubits using three CNOTs.

        Raises:
            ValueError: If target or swap is not a single qubit, or they are equal
        """
        target = QubitMask.of(target).require_single()
        swap = QubitMask.of(swap).require_single()
        if target == swap:
            raise ValueError("The same qubit cannot occur twice as an argument")
        control = QubitMask.of(control)

        not_gate = NOT_gate()
        self.unitary(target, control | swap, not_gate)
        self.unitary(swap, control | target, not_gate)
        self.unitary(target, control | swap, not_gate)

        self._add_operation(OP_SWAP, target, control, swap=swap)

    def shift_left(self, target, control=0, amount: int = 1):
        """
        Cyclically rotate the qubits of target towards the most significant
        end by amount positions. The top qubits wrap around to the bottom,
        so on an n-qubit range this multiplies by 2^amount mod (2^n - 1).
        """
        qubits = self.get_qubits(target)
        n = len(qubits)
        if n < 2:
            return
        for _ in range(amount % n):
            for i in range(n - 1, 0, -1):
                self.swap(qubits[i], qubits[i - 1], control)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _step_controls(self, bits: List[QubitMask], control, bit_controls) -> List[QubitMask]:
        control = QubitMask.of(control)
        if bit_controls is None:
            return [control] * len(bits)
        bit_controls = [QubitMask.of(c).require_single() for c in bit_controls]
        if len(bit_controls) != len(bits):
            raise ValueError(f"{len(bit_controls)} bit controls for a value of {len(bits)} bits")
        return [control | c for c in bit_controls]

    def _sub_range(self, range_value, bit: QubitMask) -> QubitMask:
        sub = QubitMask(0)
        for qubit in self.get_qubits(range_value):
            if qubit >= bit:
                sub |= qubit
        return sub

    def add(self, range_value, value: int, control=0, bit_controls=None):
        """
        Add value to the qubits of range_value (mod 2^len(range)).

        value is given in the same (global) bit space as range_value.

        Args:
            control: Qubits that must all be |1⟩ for the addition
            bit_controls: Optional single qubits, one per set bit of value,
                          lowest first; bit i of value is only added when
                          bit_controls[i] is |1⟩ (register + register)
        """
        value = int(value)
        if value < 0:
            self.subtract(range_value, -value, control, bit_controls)
            return

        bits = self.get_qubits(value)
        steps = self._step_controls(bits, control, bit_controls)
        for bit, step in zip(bits, steps):
            self._increment(self._sub_range(range_value, bit), step)

    def _increment(self, range_value: QubitMask, control: QubitMask):
        step_control = range_value | control
        for qubit in reversed(self.get_qubits(range_value)):
            step_control ^= qubit
            self.not_(qubit, step_control)

    def subtract(self, range_value, value: int, control=0, bit_controls=None):
        """Subtract value from the qubits of range_value (mod 2^len(range)); arguments as for add."""
        value = int(value)
        if value < 0:
            self.add(range_value, -value, control, bit_controls)
            return

        bits = self.get_qubits(value)
        steps = self._step_controls(bits, control, bit_controls)
        for bit, step in reversed(list(zip(bits, steps))):
            self._decrement(self._sub_range(range_value, bit), step)

    def _decrement(self, range_value: QubitMask, control: QubitMask):
        step_control = control
        for qubit in self.get_qubits(range_value):
            self.not_(qubit, step_control)
            step_control |= qubit

    # -------------------------------------------------------------------------
    # Algorithms
    # -------------------------------------------------------------------------

    def qft(self, value):
        from .qft import qft
        qft(self, value)

    def inverse_qft(self, value):
        from .qft import inverse_qft
        inverse_qft(self, value)

    def grover(self, value):
        from .grover import grover_iteration
        grover_iteration(self, value)

    # -------------------------------------------------------------------------
    # Measurement
    # -------------------------------------------------------------------------

    def _weights(self, target) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        low, high = self.qubit_pairs(target)
        amps = self.raw_qbits.data
        return low, high, np.abs(amps[low]) ** 2, np.abs(amps[high]) ** 2

    def probability(self, target) -> Tuple[float, float]:
        """
        Probabilities (P(|0⟩), P(|1⟩)) of one qubit, without collapsing it.
        """
        _, _, w0, w1 = self._weights(target)
        prob0 = w0.sum() / (w0.sum() + w1.sum())
        return float(prob0), float(1.0 - prob0)

    def measure_qubit(self, target) -> int:
        """
        Measure one qubit and collapse the state.

        The other half is zeroed. With COLLAPSE_UNIFORM the amplitudes of the
        observed half that were non-zero (above ZERO_TOLERANCE) are all set to
        1/sqrt(count) with zero phase; with COLLAPSE_BORN they are divided by
        the square root of the observed probability.

        Returns:
            0 or 1
        """
        low, high, w0, w1 = self._weights(target)
        prob0 = w0.sum() / (w0.sum() + w1.sum())

        if prob0 > self.rng.random():
            result, keep, drop = 0, low, high
        else:
            result, keep, drop = 1, high, low

        amps = self.raw_qbits.data
        amps[drop] = 0
        if self.collapse == COLLAPSE_BORN:
            amps[keep] /= np.sqrt(np.sum(np.abs(amps[keep]) ** 2))
        else:
            survivors = keep[np.abs(amps[keep]) > ZERO_TOLERANCE]
            if len(survivors) == 0:
                survivors = keep[np.abs(amps[keep]) > 0]
            amps[keep] = 0
            amps[survivors] = np.sqrt(1.0 / len(survivors))

        logger.debug("measured qubit %#x: P0=%.6f -> %d", int(target), prob0, result)
        return result

    def read_qubits(self, value) -> int:
        """Measure the qubits of value, lowest first, and return the bits read."""
        result = 0
        for qubit in self.get_qubits(value):
            bit = self.measure_qubit(qubit)
            if bit:
                result |= qubit
            self._add_operation(OP_READ, qubit, options=[float(bit)])
        return result

    def read(self) -> int:
        """Measure every qubit in the circuit."""
        return self.read_qubits(self.all_qubits)

    def write(self, value, qubits=None):
        """
        Force qubits into the classical value.

        Args:
            value: Bits to set to |1⟩
            qubits: Qubits to write (default: the bits of value). Qubits in
                    this set but not in value are forced to |0⟩.
        """
        value = QubitMask.of(value)
        qubits = value if qubits is None else QubitMask.of(qubits)
        if value & ~int(qubits):
            raise ValueError(f"value {int(value):#x} has bits outside qubits {int(qubits):#x}")

        flips = QubitMask(0)
        for qubit in self.get_qubits(qubits):
            if self.measure_qubit(qubit) != (qubit in value):
                flips |= qubit

        if flips:
            self.unitary(flips, 0, NOT_gate())
            self._add_operation(OP_WRITE, flips)

    # -------------------------------------------------------------------------
    # Operation log and output
    # -------------------------------------------------------------------------

    def _add_operation(self, op_name: str, target, control=0, swap=0,
                       options: Optional[List[float]] = None, register_value=None):
        reg = self.get_register(target if register_value is None else register_value)
        register_name = 1 << reg.shift if reg is not None else 0
        register_name_string = reg.name if reg is not None else ""
        controls = [int(c) for c in self.get_qubits(control)] or None
        options = list(options) if options is not None else None

        for t in self.get_qubits(target):
            self.operations.append(Operation(op_name, register_name, register_name_string,
                                             int(t), controls, int(swap), options))
        if op_name == OP_SPACE:
            self.operations.append(Operation(op_name, register_name, register_name_string,
                                             0, None, int(swap), options))

    def op_space(self, value=1):
        """Add a blank column to the operation log."""
        self._add_operation(OP_SPACE, 0, register_value=value)

    def print_buffer(self, text: str):
        self.message += text

    def print_bufferln(self, text: str = ""):
        self.print_buffer(text + "\n")

    def format_qbits(self, mode: str = PRINT_POLAR, start: int = -1, end: int = -1) -> str:
        """
        Render the amplitudes, 16 per line.

        Polar mode shows (magnitude, phase in degrees); complex mode shows
        the raw values. start/end restrict output to a slice of basis states.
        """
        if mode not in (PRINT_POLAR, PRINT_COMPLEX):
            raise ValueError(f"unknown print mode {mode!r}")

        lines = [f"printing in {mode} mode."]
        if start > end:
            start = end = -1
        if start >= 0 and end >= 0:
            lines.append(f"{start} to {end} vector elements")

        data = self.raw_qbits.data
        lo = max(start, 0)
        hi = end if end >= 0 else len(data)
        for row in range(lo, hi, 16):
            cells = []
            for e in data[row:min(row + 16, hi)]:
                if mode == PRINT_POLAR:
                    cells.append(f"({abs(e):.2f},{np.degrees(np.angle(e)):.2f})")
                else:
                    cells.append(f"{e.real:.2f}{e.imag:+.2f}j")
            lines.append(f"{row}: " + "".join(cells))
        if hi < len(data):
            lines.append(f"printed {lo} to {hi} vector elements. still more elements remain to display...")
        return "\n".join(lines)

    def print_qbits(self, mode: str = PRINT_POLAR, start: int = -1, end: int = -1):
        print(self.format_qbits(mode, start, end))

    def dump_document(self) -> DumpDocument:
        registers = []
        for i, reg in enumerate(self.registers):
            registers.append(DumpRegister(
                number_of_qbits=reg.number_of_qubits,
                qbits=[int(q) for q in self.get_qubits(reg.qubits)],
                shift=reg.shift,
                reg_name=reg.name or f"Reg{i + 1}",
            ))

        data = self.raw_qbits.data
        qbits = [[float(r), float(theta)] for r, theta in zip(np.abs(data), np.angle(data))]
        return DumpDocument(self.message, list(self.operations), registers, qbits)

    def dump_all(self) -> str:
        """Operations, registers, amplitudes and print buffer as indented JSON."""
        return self.dump_document().to_json()

    def file_dump_all(self, path: str):
        """Write dump_all() to path. I/O errors propagate to the caller."""
        with open(path, "w") as f:
            f.write(self.dump_all())
