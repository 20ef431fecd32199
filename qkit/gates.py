"""
Quantum gate definitions.

Every gate here is a 2x2 unitary acting on the amplitude pair of one qubit;
controlled and multi-qubit behaviour comes from the control mask handled by
Circuit.unitary. Matrices are built fresh on every call, so callers may
mutate what they get back. Angles are in degrees.
"""

import enum
from dataclasses import dataclass

import numpy as np

from .mat import Matrix


def _deg2rad(deg: float) -> float:
    return deg * (np.pi / 180.0)


# =============================================================================
# Fixed gates
# =============================================================================

def H_gate() -> Matrix:
    """Hadamard gate"""
    return Matrix.from_rows(np.array([[1,  1],
                                      [1, -1]]) * np.sqrt(1/2))


def X_gate() -> Matrix:
    """Pauli X gate (NOT gate)"""
    return Matrix.from_rows([[0, 1],
                             [1, 0]])


NOT_gate = X_gate


def Y_gate() -> Matrix:
    """Pauli Y gate"""
    return Matrix.from_rows([[ 0, -1j],
                             [1j,   0]])


def Z_gate() -> Matrix:
    """Pauli Z gate = P(180)"""
    return Matrix.from_rows([[1,  0],
                             [0, -1]])


# =============================================================================
# Parameterised gates
# =============================================================================

def P_gate(deg: float) -> Matrix:
    """Phase shift gate P(φ) = diag(1, e^{iφ})"""
    phi = _deg2rad(deg)
    return Matrix.from_rows([[1,                0],
                             [0, np.exp(phi * 1j)]])


def Rx_gate(deg: float) -> Matrix:
    """X rotation gate Rx(θ)"""
    theta = _deg2rad(deg)
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return Matrix.from_rows([[c,      -1j * s],
                             [-1j * s,      c]])


def Ry_gate(deg: float) -> Matrix:
    """Y rotation gate Ry(θ)"""
    theta = _deg2rad(deg)
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return Matrix.from_rows([[c, -s],
                             [s,  c]])


def Rz_gate(deg: float) -> Matrix:
    """Z rotation gate Rz(θ)"""
    theta = _deg2rad(deg)
    return Matrix.from_rows([[np.exp(-1j * theta / 2),                     0],
                             [                      0, np.exp(1j * theta / 2)]])


# =============================================================================
# Rotation variant
# =============================================================================

class Axis(enum.Enum):
    X = "x"
    Y = "y"
    Z = "z"


@dataclass(frozen=True)
class Rotation:
    """A rotation by `degrees` about exactly one Bloch-sphere axis."""

    axis: Axis
    degrees: float

    @classmethod
    def from_degrees(cls, deg_x: float = 0.0, deg_y: float = 0.0, deg_z: float = 0.0) -> "Rotation":
        """
        Build a rotation from per-axis angles, of which at most one may be
        non-zero. All zeros gives the identity rotation about Z.

        Raises:
            ValueError: If more than one angle is non-zero
        """
        nonzero = [(axis, deg) for axis, deg in ((Axis.X, deg_x), (Axis.Y, deg_y), (Axis.Z, deg_z))
                   if deg != 0]
        if len(nonzero) > 1:
            raise ValueError(f"rotation about more than one axis is ambiguous: "
                             f"deg_x={deg_x}, deg_y={deg_y}, deg_z={deg_z}")
        if not nonzero:
            return cls(Axis.Z, 0.0)
        return cls(*nonzero[0])

    def degrees_xyz(self):
        """Angles as [deg_x, deg_y, deg_z], the layout used by the operation log."""
        return [self.degrees if self.axis is axis else 0.0 for axis in (Axis.X, Axis.Y, Axis.Z)]

    def matrix(self) -> Matrix:
        return _ROTATION_GATES[self.axis](self.degrees)


_ROTATION_GATES = {
    Axis.X: Rx_gate,
    Axis.Y: Ry_gate,
    Axis.Z: Rz_gate,
}
