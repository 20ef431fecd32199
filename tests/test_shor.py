"""Tests for Shor's algorithm."""

import numpy as np
import pytest

from qkit import (
    ShorResult, shor, shor_qpu, shor_logic, shor_no_qpu, shor_multiple_runs,
    estimate_num_spikes, check_result, value_register_bits,
    gcd, is_coprime, round_half_away,
)


class TestNumberTheory:
    """Tests for the classical helpers."""

    def test_gcd(self):
        assert gcd(15, 12) == 3
        assert gcd(17, 5) == 1
        assert gcd(21, 0) == 21

    def test_is_coprime(self):
        assert is_coprime(2, 15)
        assert not is_coprime(6, 15)

    @pytest.mark.parametrize("x, expected", [(2.5, 3), (-2.5, -3), (2.4, 2), (0.5, 1), (-0.4, 0)])
    def test_round_half_away(self, x, expected):
        assert round_half_away(x) == expected


class TestClassicalPart:
    """Tests for period estimation and factor extraction."""

    def test_value_register_bits(self):
        assert value_register_bits(15) == 4
        assert value_register_bits(21) == 6
        assert value_register_bits(35) == 7

    @pytest.mark.parametrize("spike, expected", [
        (4, [4, 8]),
        (12, [4, 8]),
        (8, [2, 4, 6]),
        (0, []),
    ])
    def test_estimate_num_spikes(self, spike, expected):
        assert estimate_num_spikes(spike, 16) == expected

    def test_shor_logic(self):
        assert shor_logic(15, [4]) == [(3, 5)]
        assert shor_logic(15, [2]) == [(1, 3)]

    def test_check_result(self):
        assert check_result(15, [(1, 3), (3, 5)]) == (3, 5)
        assert check_result(15, [(1, 15), (1, 3)]) is None

    def test_shor_no_qpu(self):
        """Classical period search: 2^4 = 1 mod 15, 2^6 = 1 mod 21."""
        assert shor_no_qpu(15, 4) == [4]
        assert shor_no_qpu(21, 5) == [6]
        assert shor_no_qpu(21, 2) == []


class TestQuantumPart:
    """Tests for shor_qpu and the full algorithm."""

    def test_read_result_is_multiple_of_four(self):
        """For N=15 the period is 4, so 16 / 4 spaces the peaks by 4."""
        rng = np.random.default_rng(11)
        for _ in range(10):
            _, read_result, _ = shor_qpu(15, 4, rng=rng)
            assert read_result in (0, 4, 8, 12)

    def test_registers_are_named(self):
        circuit, _, _ = shor_qpu(15, 4, seed=1)
        assert [reg.name for reg in circuit.registers] == ["num", "precision"]
        assert [reg.number_of_qubits for reg in circuit.registers] == [4, 4]

    def test_factors_fifteen(self):
        """N=15 factors as {3, 5} within 20 runs."""
        result = shor_multiple_runs(15, 4, num_runs=20, seed=2024)
        assert result.success
        assert set(result.factors) == {3, 5}
        assert result.error is None

    def test_failed_run_reports_error(self):
        """One precision qubit reads 0 or 1, neither of which yields a period."""
        result = shor(15, 1, seed=3)
        assert isinstance(result, ShorResult)
        assert result.read_result in (0, 1)
        assert not result.success
        assert result.factors is None
        assert result.repeat_periods == []
        assert "failure" in result.error

    def test_multiple_runs_returns_last_failure(self):
        result = shor_multiple_runs(15, 1, num_runs=3, seed=0)
        assert isinstance(result, ShorResult)
        assert not result.success

    def test_multiple_runs_needs_a_run(self):
        with pytest.raises(ValueError):
            shor_multiple_runs(15, 4, num_runs=0)

    @pytest.mark.parametrize("kwargs", [
        dict(N=2, precision_bits=4),
        dict(N=15, precision_bits=0),
        dict(N=15, precision_bits=4, coprime=3),
    ])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            shor(**kwargs)
