"""
Helpers shared by the algorithms and the tests.

State comparison ignores global phase, which no measurement can observe.
The integer helpers serve the classical half of Shor's algorithm.
"""

import math

import numpy as np


# =============================================================================
# State comparison
# =============================================================================

def allclose_up_to_global_phase(v, w, atol: float = 1e-9) -> bool:
    """
    True if v == e^{iφ} w for some φ, within atol.

    Comparing magnitudes alone would also accept states that differ by a
    relative phase, so the phase is taken from the largest entry of w and
    divided out.

    Args:
        v, w: Amplitude arrays of the same size (any shape)
        atol: Absolute tolerance per amplitude
    """
    a = np.asarray(v).ravel()
    b = np.asarray(w).ravel()

    pivot = int(np.argmax(np.abs(b)))
    if np.abs(b[pivot]) < atol:
        return bool(np.allclose(a, b, atol=atol))

    return bool(np.allclose(a, (a[pivot] / b[pivot]) * b, atol=atol))


def state_fidelity(v, w) -> float:
    """|⟨v|w⟩|², 1 for equal pure states and 0 for orthogonal ones."""
    overlap = np.vdot(np.asarray(v).ravel(), np.asarray(w).ravel())
    return float(abs(overlap) ** 2)


# =============================================================================
# Integers
# =============================================================================

def gcd(a: int, b: int) -> int:
    """Euclid's algorithm; gcd(a, 0) == a."""
    while b:
        a, b = b, a % b
    return a


def is_coprime(a: int, n: int) -> bool:
    return gcd(a, n) == 1


def round_half_away(x: float) -> float:
    """Round to nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return math.copysign(math.floor(abs(x) + 0.5), x)
