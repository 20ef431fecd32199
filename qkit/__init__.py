"""
qkit - A quantum circuit simulator in Python.

This package provides a state-vector simulator addressed by qubit bitmasks,
registers that give groups of qubits their own local numbering, and
implementations of the QFT, Grover iteration and Shor's algorithm on top of
it. Every gate is recorded in an operation log that can be dumped as JSON.

Modules:
    mat        - Minimal complex vector/matrix types
    qubits     - QubitMask, the bitmask qubit address
    gates      - 2x2 gate matrices (H, X, Y, Z, phase, rotations)
    operations - Operation log records and the dump document
    core       - The Circuit state-vector engine
    register   - Register, a named slice of a circuit's qubits
    qft        - Quantum Fourier Transform and its inverse
    grover     - Grover iteration and search
    shor       - Shor's factoring algorithm
    utils      - State comparison and number theory helpers
    ml         - Variational quantum classifier

Quick Start:
    >>> from qkit import Circuit
    >>> qc = Circuit(1)
    >>> reg = qc.assign_qubits(1, "q")
    >>> reg.had_all()
    >>> print(reg.read_all())  # 0 or 1 with 50% probability each
"""

# Core functionality
from .core import (
    Circuit,
    ZERO_TOLERANCE,
    COLLAPSE_UNIFORM,
    COLLAPSE_BORN,
    PRINT_POLAR,
    PRINT_COMPLEX,
)
from .register import Register
from .qubits import QubitMask

# Linear algebra
from .mat import Vector, Matrix

# Gates
from .gates import (
    H_gate,
    X_gate,
    NOT_gate,
    Y_gate,
    Z_gate,
    P_gate,
    Rx_gate,
    Ry_gate,
    Rz_gate,
    Axis,
    Rotation,
)

# Operation log
from .operations import (
    Operation,
    DumpDocument,
    DumpRegister,
    OP_SPACE,
    OP_READ,
    OP_WRITE,
    OP_HAD,
    OP_PHASE,
    OP_ROTATE,
    OP_NOT,
    OP_SWAP,
    OP_X,
    OP_Y,
    OP_Z,
)

# QFT
from .qft import qft, inverse_qft

# Grover
from .grover import grover_iteration, phase_oracle, grover_search

# Shor
from .shor import (
    ShorResult,
    shor,
    shor_qpu,
    shor_logic,
    shor_no_qpu,
    shor_multiple_runs,
    estimate_num_spikes,
    check_result,
    value_register_bits,
)

# Utilities
from .utils import (
    allclose_up_to_global_phase,
    state_fidelity,
    gcd,
    is_coprime,
    round_half_away,
)

__version__ = "0.1.0"
__all__ = [
    # Core
    "Circuit",
    "ZERO_TOLERANCE",
    "COLLAPSE_UNIFORM",
    "COLLAPSE_BORN",
    "PRINT_POLAR",
    "PRINT_COMPLEX",
    "Register",
    "QubitMask",
    "Vector",
    "Matrix",
    # Gates
    "H_gate",
    "X_gate",
    "NOT_gate",
    "Y_gate",
    "Z_gate",
    "P_gate",
    "Rx_gate",
    "Ry_gate",
    "Rz_gate",
    "Axis",
    "Rotation",
    # Operation log
    "Operation",
    "DumpDocument",
    "DumpRegister",
    "OP_SPACE",
    "OP_READ",
    "OP_WRITE",
    "OP_HAD",
    "OP_PHASE",
    "OP_ROTATE",
    "OP_NOT",
    "OP_SWAP",
    "OP_X",
    "OP_Y",
    "OP_Z",
    # QFT
    "qft",
    "inverse_qft",
    # Grover
    "grover_iteration",
    "phase_oracle",
    "grover_search",
    # Shor
    "ShorResult",
    "shor",
    "shor_qpu",
    "shor_logic",
    "shor_no_qpu",
    "shor_multiple_runs",
    "estimate_num_spikes",
    "check_result",
    "value_register_bits",
    # Utils
    "allclose_up_to_global_phase",
    "state_fidelity",
    "gcd",
    "is_coprime",
    "round_half_away",
]
