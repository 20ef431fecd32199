"""
Quantum Fourier Transform (QFT) implementation.

The QFT is the quantum analog of the discrete Fourier transform and is the
component of Shor's algorithm that turns a periodic amplitude pattern into
peaks at multiples of 2^n / period.

Both transforms are built from Hadamard, controlled-phase and SWAP gates on
the circuit, so every step appears in the operation log. This QFT uses
negative phase angles, |j⟩ → (1/√N) Σₖ exp(-2πijk/N) |k⟩; the inverse uses
positive ones. Either way peaks land on the same basis states.
"""


def qft(circuit, value):
    """
    Quantum Fourier Transform on the qubits of value.

    Starting from the most significant qubit: Hadamard, then a phase of
    -90°, -45°, ... controlled by each lower qubit in turn. Finally reverse
    the bit order with SWAPs.

    Args:
        circuit: The Circuit to act on
        value: Mask of the qubits to transform
    """
    qubits = circuit.get_qubits(value)
    n = len(qubits)

    for j in range(n - 1, -1, -1):
        circuit.had(qubits[j])
        deg = -90.0
        for i in range(j - 1, -1, -1):
            circuit.phase(qubits[j], qubits[i], deg)
            deg /= 2.0

    _reverse(circuit, qubits)


def inverse_qft(circuit, value):
    """
    Inverse Quantum Fourier Transform on the qubits of value.

    Mirror of qft: bit reversal first, then from the least significant qubit
    up, Hadamard followed by phases of +90°, +45°, ... controlled by each
    higher qubit.
    """
    qubits = circuit.get_qubits(value)
    n = len(qubits)

    _reverse(circuit, qubits)

    for j in range(n):
        circuit.had(qubits[j])
        deg = 90.0
        for i in range(j + 1, n):
            circuit.phase(qubits[j], qubits[i], deg)
            deg /= 2.0


def _reverse(circuit, qubits):
    n = len(qubits)
    for i in range(n // 2):
        circuit.swap(qubits[n - 1 - i], qubits[i])
