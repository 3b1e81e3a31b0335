"""
Linear-algebra primitives used by the LTI core.

Every conversion and discretization routine takes an optional ``backend``
argument. Anything exposing the methods of ``NumpyBackend`` can be passed in,
which keeps the formulas testable independently of the numerical library.
"""

import numpy as np

from siras.exceptions import DimensionMismatchError, SingularMatrixError


class NumpyBackend:
    """Dense float64 matrix operations backed by numpy / LAPACK."""

    def identity(self, n):
        return np.eye(n, dtype=float)

    def zeros(self, shape):
        return np.zeros(shape, dtype=float)

    def hstack(self, blocks):
        return np.hstack(blocks)

    def vstack(self, blocks):
        return np.vstack(blocks)

    def solve(self, a, b):
        """
        Solves a @ x = b for x, where b may be a vector or a matrix.

        Raises:
            DimensionMismatchError: If a is not square or b does not conform.
            SingularMatrixError: If a is not invertible.
        """
        dtype = np.result_type(np.asarray(a), np.asarray(b), float)
        a = np.asarray(a, dtype=dtype)
        b = np.asarray(b, dtype=dtype)
        if a.ndim != 2 or a.shape[0] != a.shape[1]:
            raise DimensionMismatchError(f"solve requires a square matrix, got {a.shape}")
        if b.shape[0] != a.shape[0]:
            raise DimensionMismatchError(
                f"Right-hand side has {b.shape[0]} rows, expected {a.shape[0]}"
            )
        try:
            return np.linalg.solve(a, b)
        except np.linalg.LinAlgError as exc:
            raise SingularMatrixError(f"Matrix is not invertible: {exc}") from exc

    def eigvals(self, a):
        a = np.asarray(a, dtype=float)
        if a.ndim != 2 or a.shape[0] != a.shape[1]:
            raise DimensionMismatchError(
                f"eigvals requires a square matrix, got {a.shape}"
            )
        return np.linalg.eigvals(a)


DEFAULT_BACKEND = NumpyBackend()


def get_backend(backend=None):
    return DEFAULT_BACKEND if backend is None else backend
