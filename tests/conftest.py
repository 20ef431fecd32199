"""Pytest fixtures for qkit tests."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """A numpy Generator with a fixed seed."""
    return np.random.default_rng(1234)
