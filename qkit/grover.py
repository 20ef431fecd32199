"""
Grover's search algorithm implementation.

One call to grover_iteration performs a single amplification step on a set
of qubits: Hadamard everything, NOT everything, flip the phase of the
all-ones pattern (a 180° phase on the most significant qubit controlled by
all the others), NOT everything again and Hadamard everything again. The
number of iterations is up to the caller; the optimum for one marked item
among N is about π√N/4, and overshooting it reduces the success
probability again.

Bit ordering convention:
    Qubits are masks; the measured integer has bit k set iff qubit 2^k read 1.
"""

from typing import Optional

import numpy as np

from .qubits import QubitMask


def grover_iteration(circuit, value):
    """
    One Grover iteration on the qubits of value.

    Args:
        circuit: The Circuit to act on
        value: Mask of the qubits to act on
    """
    qubits = circuit.get_qubits(value)
    if not qubits:
        return

    circuit.op_space(value)

    circuit.had(value)
    circuit.not_(value)

    control = QubitMask(0)
    for q in qubits[:-1]:
        control |= q
    circuit.phase(qubits[-1], control, 180)

    circuit.not_(value)
    circuit.had(value)


def phase_oracle(circuit, value, target: int):
    """
    Oracle marking one basis state of the qubits of value with a phase of -1.

    Args:
        circuit: The Circuit to act on
        value: Mask of the search qubits
        target: The marked pattern, in the local bit space of value
                (bit k of target is the k-th lowest qubit of value)
    """
    qubits = circuit.get_qubits(value)
    n = len(qubits)
    if not 0 <= target < (1 << n):
        raise ValueError(f"target {target} does not fit in {n} qubits")

    zeros = QubitMask(0)
    for i, q in enumerate(qubits):
        if not ((target >> i) & 1):
            zeros |= q

    if zeros:
        circuit.not_(zeros)
    control = QubitMask(0)
    for q in qubits[:-1]:
        control |= q
    circuit.phase(qubits[-1], control, 180)
    if zeros:
        circuit.not_(zeros)


def grover_search(n: int, target: int, num_iterations: Optional[int] = None,
                  seed: Optional[int] = None, verbose: bool = False,
                  collapse: Optional[str] = None) -> int:
    """
    Search for target among 2^n items.

    Prepares the uniform superposition, then repeats oracle + iteration.
    The iteration's own phase flip marks the all-ones pattern after the NOT
    layer, i.e. it reflects about the uniform superposition.

    Args:
        n: Width of the search register, at least 1
        target: The marked item, 0 <= target < 2^n
        num_iterations: Oracle + iteration rounds (default: max(1, floor(π√N/4)))
        seed: Seed for the measurement
        verbose: Print the iteration count and the result
        collapse: Collapse rule of the search circuit (default: COLLAPSE_BORN)

    Returns:
        The value read from the search register

    Raises:
        ValueError: For n < 1 or a target outside the register
    """
    from .core import Circuit, COLLAPSE_BORN

    if n < 1:
        raise ValueError(f"search register needs at least one qubit, got n={n}")
    N = 1 << n
    if not 0 <= target < N:
        raise ValueError(f"target {target} does not fit in {n} qubits")

    if num_iterations is None:
        num_iterations = max(1, int(np.pi / 4 * np.sqrt(N)))

    if verbose:
        print(f"searching {N} items for {target}: {num_iterations} iteration(s)")

    circuit = Circuit(n, seed=seed, collapse=collapse or COLLAPSE_BORN)
    reg = circuit.assign_qubits(n, "search")
    reg.had_all()

    for _ in range(num_iterations):
        phase_oracle(circuit, reg.qubits, target)
        reg.grover()

    result = reg.read_all()
    if verbose:
        print(f"read {result}" + ("" if result == target else " (miss)"))

    return result
