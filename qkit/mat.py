"""
Minimal dense complex vector and matrix types.

These wrap numpy arrays with bounds-checked element access, so that an
out-of-range index fails immediately instead of wrapping around the way
negative numpy indices do.
"""

import numpy as np


def _check_index(i: int, n: int, what: str = "index"):
    if not 0 <= i < n:
        raise IndexError(f"{what} {i} out of range [0, {n})")


class Vector:
    """Complex column vector of fixed length."""

    def __init__(self, n: int):
        self.data = np.zeros(n, dtype=complex)

    @classmethod
    def from_values(cls, values) -> "Vector":
        values = np.asarray(values, dtype=complex).reshape(-1)
        v = cls(len(values))
        v.data[:] = values
        return v

    @property
    def n(self) -> int:
        return self.data.shape[0]

    def __len__(self) -> int:
        return self.n

    def at(self, i: int) -> complex:
        _check_index(i, self.n)
        return self.data[i]

    def set(self, i: int, value: complex):
        _check_index(i, self.n)
        self.data[i] = value

    def set_all(self, value: complex):
        self.data[:] = value

    def copy(self) -> "Vector":
        return Vector.from_values(self.data)

    def __repr__(self):
        return f"Vector({self.data!r})"


class Matrix:
    """Complex rows x cols matrix."""

    def __init__(self, rows: int, cols: int):
        self.data = np.zeros((rows, cols), dtype=complex)

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        m = cls(n, n)
        np.fill_diagonal(m.data, 1)
        return m

    @classmethod
    def from_rows(cls, rows) -> "Matrix":
        rows = np.asarray(rows, dtype=complex)
        m = cls(*rows.shape)
        m.data[:, :] = rows
        return m

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def cols(self) -> int:
        return self.data.shape[1]

    def at(self, r: int, c: int) -> complex:
        _check_index(r, self.rows, "row")
        _check_index(c, self.cols, "column")
        return self.data[r, c]

    def set(self, r: int, c: int, value: complex):
        _check_index(r, self.rows, "row")
        _check_index(c, self.cols, "column")
        self.data[r, c] = value

    def set_all(self, value: complex):
        self.data[:, :] = value

    def copy(self) -> "Matrix":
        return Matrix.from_rows(self.data)

    def row_exchange(self, r1: int, r2: int):
        """Swap two rows in place."""
        _check_index(r1, self.rows, "row")
        _check_index(r2, self.rows, "row")
        self.data[[r1, r2]] = self.data[[r2, r1]]

    def dot(self, x):
        """
        Matrix-vector product y[i] = sum_j M[i][j] * x[j].

        Args:
            x: A Vector of length cols, or a numpy array of shape (cols, k)
               holding k column vectors to transform at once.

        Returns:
            A Vector for Vector input, otherwise an array of shape (rows, k)
        """
        if isinstance(x, Vector):
            if x.n != self.cols:
                raise ValueError(f"cannot multiply {self.rows}x{self.cols} matrix by vector of length {x.n}")
            return Vector.from_values(self.data @ x.data)

        x = np.asarray(x)
        if x.shape[0] != self.cols:
            raise ValueError(f"cannot multiply {self.rows}x{self.cols} matrix by array of shape {x.shape}")
        return self.data @ x

    def __repr__(self):
        return f"Matrix({self.data!r})"
