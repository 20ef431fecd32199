"""
Shor's factoring algorithm implementation.

The quantum part finds the repeat period of 2^x by phase estimation: a
precision register in uniform superposition controls repeated doublings of a
value register, and a QFT of the precision register turns the period into
evenly spaced peaks. The classical part estimates candidate periods from the
measured peak and turns them into factors with gcd(N, 2^(r/2) ± 1).

Restriction: there is no modular-exponentiation circuit. Doubling is done by
cyclically rotating the value register's qubits, which computes 2^x mod
(2^n - 1) for an n-qubit value register. That equals 2^x mod N only when N
divides 2^n - 1 (N = 15 with 4 qubits), and has the same period when
2^n - 1 is a multiple of N for the chosen width (N = 21 with 6 qubits).
For other N the circuit still runs but the period it finds is that of
2 mod (2^n - 1), and factoring will usually fail. The base is fixed at 2.

Values of N to try, with the precision they need:
    N = 15    precision_bits >= 4
    N = 21    precision_bits >= 5
    N = 35    precision_bits >= 6
    N = 123   precision_bits >= 7
    N = 341   precision_bits >= 8
    N = 451   precision_bits >= 9
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .core import Circuit, COLLAPSE_UNIFORM
from .register import Register
from .utils import gcd, round_half_away

logger = logging.getLogger(__name__)

SHOR_COPRIME = 2


@dataclass
class ShorResult:
    """
    Outcome of one run of Shor's algorithm.

    factors is None when no candidate period gave a non-trivial factor pair;
    error then says why.
    """

    circuit: Optional[Circuit]
    read_result: int
    repeat_periods: List[int] = field(default_factory=list)
    factors: Optional[Tuple[int, int]] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.factors is not None


# =============================================================================
# Quantum part
# =============================================================================

def value_register_bits(N: int) -> int:
    """Qubits for the value register: enough to hold N, plus a guard bit unless N == 15."""
    bits = 1
    while (1 << bits) < N:
        bits += 1
    if N != 15:
        bits += 1
    return bits


def _check_arguments(N: int, precision_bits: int, coprime: int):
    if N < 3:
        raise ValueError(f"N must be >= 3, got {N}")
    if precision_bits < 1:
        raise ValueError(f"precision_bits must be >= 1, got {precision_bits}")
    if coprime != SHOR_COPRIME:
        raise ValueError(f"only coprime={SHOR_COPRIME} is supported, got {coprime}")


def read_unsigned(reg: Register) -> int:
    """Measure a register and return its value as an unsigned integer."""
    value = reg.read_all()
    return value & ((1 << reg.number_of_qubits) - 1)


def shor_qpu(N: int, precision_bits: int, coprime: int = SHOR_COPRIME,
             seed: Optional[int] = None, rng: Optional[np.random.Generator] = None,
             verbose: bool = False, collapse: str = COLLAPSE_UNIFORM) -> Tuple[Circuit, int, List[int]]:
    """
    Quantum period finding for 2^x, without a modulus.

    Args:
        N: Number to factor
        precision_bits: Qubits in the precision register
        coprime: Base of the exponentiation, must be 2
        seed: Seed for the measurement
        rng: numpy Generator for the measurement (overrides seed)
        verbose: If True, print progress
        collapse: Collapse rule for the circuit, see Circuit

    Returns:
        (circuit, read_result, repeat_period_candidates)
    """
    _check_arguments(N, precision_bits, coprime)

    n_bits = value_register_bits(N)
    total_bits = n_bits + precision_bits

    if verbose:
        print(f"Shor's Algorithm: Factoring N={N} with a={coprime}")
        print(f"Using {precision_bits} precision qubits and {n_bits} value qubits")

    circuit = Circuit(total_bits, seed=seed, rng=rng, collapse=collapse)
    num = circuit.assign_qubits(n_bits, "num")
    precision = circuit.assign_qubits(precision_bits, "precision")

    num.write(1)
    precision.write(0)
    precision.had_all()

    # 2^x for every x in superposition: precision bit i doubles 2^i times
    for i in range(precision_bits):
        shifts = 1 << i
        condition = precision.to_global(shifts)
        shifts %= num.number_of_qubits
        if shifts == 0:
            continue
        if verbose:
            print(f"  precision qubit {i}: controlled rotate left by {shifts}")
        num.shift_left(condition, shifts)

    precision.qft()

    read_result = read_unsigned(precision)
    candidates = estimate_num_spikes(read_result, 1 << precision_bits)

    if verbose:
        print(f"Measurement result: {read_result} (phase ≈ {read_result}/{1 << precision_bits})")
        print(f"Repeat period candidates: {candidates}")
    logger.debug("shor N=%d: read %d, candidates %s", N, read_result, candidates)

    return circuit, read_result, candidates


def estimate_num_spikes(spike: int, range_: int) -> List[int]:
    """
    Candidate repeat periods from a measured QFT peak.

    Scans denominators and keeps each one where the approximation of
    spike/range_ by a fraction with that denominator hits a local minimum of
    error that is no worse than the best seen so far.

    Args:
        spike: The measured value
        range_: Size of the measured space, 2^precision_bits

    Returns:
        Candidate periods, in increasing order
    """
    if spike < range_ / 2.0:
        spike = range_ - spike

    best_error = 1.0
    e0 = e1 = e2 = 0.0
    actual = spike / range_
    candidates = []
    for denom in range(1, spike):
        numerator = round_half_away(denom * actual)
        estimated = numerator / denom
        error = abs(estimated - actual)
        e0, e1, e2 = e1, e2, error
        # the previous denominator is a local minimum that beats our best error
        if e1 <= best_error and e1 < e0 and e1 < e2:
            candidates.append(denom - 1)
            best_error = e1
    return candidates


# =============================================================================
# Classical part
# =============================================================================

def shor_logic(N: int, repeat_periods: List[int], coprime: int = SHOR_COPRIME) -> List[Tuple[int, int]]:
    """Factor candidates gcd(N, a^(r/2) - 1), gcd(N, a^(r/2) + 1) for each period r."""
    factor_candidates = []
    for r in repeat_periods:
        if r % 2 == 0:
            ar2 = coprime ** (r // 2)
        else:
            ar2 = int(coprime ** (r / 2.0))
        factor_candidates.append((gcd(N, ar2 - 1), gcd(N, ar2 + 1)))
    return factor_candidates


def check_result(N: int, factor_candidates: List[Tuple[int, int]]) -> Optional[Tuple[int, int]]:
    """The first candidate pair that multiplies to N with neither factor 1."""
    for f1, f2 in factor_candidates:
        if f1 * f2 == N and f1 != 1 and f2 != 1:
            return f1, f2
    return None


def shor_no_qpu(N: int, precision_bits: int, coprime: int = SHOR_COPRIME) -> List[int]:
    """Classical stand-in for shor_qpu: find the period of coprime^x mod N by search."""
    work = 1
    for i in range(1 << precision_bits):
        work = (work * coprime) % N
        if work == 1:
            return [i + 1]
    return []


def shor(N: int, precision_bits: int, coprime: int = SHOR_COPRIME,
         seed: Optional[int] = None, rng: Optional[np.random.Generator] = None,
         verbose: bool = False, collapse: str = COLLAPSE_UNIFORM) -> ShorResult:
    """
    Run Shor's algorithm once.

    Failure to factor is reported in the result, not raised: the measurement
    is random and some outcomes (for example 0) carry no period information.

    Raises:
        ValueError: For N < 3, precision_bits < 1 or coprime != 2
    """
    circuit, read_result, periods = shor_qpu(N, precision_bits, coprime, seed=seed, rng=rng,
                                             verbose=verbose, collapse=collapse)
    factors = check_result(N, shor_logic(N, periods, coprime))

    if factors is None:
        if verbose:
            print("✗ Found only trivial factors. Algorithm failed this run.")
        return ShorResult(circuit, read_result, periods, None,
                          "failure: no non-trivial factors were found")

    if verbose:
        print(f"✓ Success! Found factors: {factors[0]} × {factors[1]} = {N}")
    return ShorResult(circuit, read_result, periods, factors)


def shor_multiple_runs(N: int, precision_bits: int, coprime: int = SHOR_COPRIME,
                       num_runs: int = 10, seed: Optional[int] = None,
                       verbose: bool = False, collapse: str = COLLAPSE_UNIFORM) -> ShorResult:
    """
    Run Shor's algorithm until factors are found or num_runs is used up.

    Returns:
        The first successful result, or the last failed one

    Raises:
        ValueError: If num_runs < 1, or as for shor
    """
    if num_runs < 1:
        raise ValueError(f"num_runs must be >= 1, got {num_runs}")
    rng = np.random.default_rng(seed)
    result = None
    for run in range(num_runs):
        if verbose:
            print(f"\n{'=' * 40}")
            print(f"Run {run + 1}/{num_runs}")
            print('=' * 40)

        result = shor(N, precision_bits, coprime, rng=rng, verbose=verbose, collapse=collapse)
        if result.success:
            return result

    if verbose:
        print(f"\nFailed to find factors in {num_runs} runs")
    return result
