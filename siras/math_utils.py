import numpy as np

from config import FILTER_DESIGN_PARAMS
from siras.exceptions import ComplexPolynomialError, MalformedModelError
from siras.linalg import get_backend


def as_coefficients(values, name="coefficients"):
    """
    Validates and converts a coefficient sequence into a 1-D float64 array.

    Raises:
        MalformedModelError: If the sequence is empty, not one-dimensional,
        or contains NaN/inf.
    """
    arr = np.atleast_1d(np.array(values, dtype=float))
    if arr.ndim != 1:
        raise MalformedModelError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise MalformedModelError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise MalformedModelError(f"{name} must be finite, got {arr}")
    return arr


def pad_left(coeffs, length):
    """Left-pads a coefficient vector with zeros up to the given length."""
    coeffs = np.asarray(coeffs, dtype=float)
    if len(coeffs) >= length:
        return coeffs.copy()
    return np.pad(coeffs, (length - len(coeffs), 0), "constant")


def pad_right(coeffs, length):
    """Right-pads with zeros; for z^-1 polynomials this keeps the value unchanged."""
    coeffs = np.asarray(coeffs, dtype=float)
    if len(coeffs) >= length:
        return coeffs.copy()
    return np.pad(coeffs, (0, length - len(coeffs)), "constant")


def normalize(num, den):
    """Divides num and den by the leading denominator coefficient."""
    den = np.asarray(den, dtype=float)
    if den[0] == 0.0:
        raise MalformedModelError("Leading denominator coefficient must be non-zero")
    return np.asarray(num, dtype=float) / den[0], den / den[0]


def poly_from_roots(roots, imag_tol=FILTER_DESIGN_PARAMS["imag_tol"]):
    """
    Expands prod(x - r) into polynomial coefficients, highest degree first.

    The product is built by convolving in one (x - r) factor at a time.
    Roots must be closed under complex conjugation (always true for the
    eigenvalues of a real matrix), so the result is real. Imaginary residue
    above imag_tol (relative to the largest coefficient) raises instead of
    being discarded.

    Raises:
        ComplexPolynomialError: If the expanded coefficients are not real.
    """
    roots = np.atleast_1d(np.asarray(roots, dtype=complex))
    coeffs = np.array([1.0 + 0.0j])
    for r in roots:
        coeffs = np.convolve(coeffs, np.array([1.0, -r]))
    return ensure_real(coeffs, imag_tol)


def ensure_real(coeffs, imag_tol=FILTER_DESIGN_PARAMS["imag_tol"]):
    """
    Returns the real part of a complex coefficient vector whose imaginary
    part is pure round-off.

    Raises:
        ComplexPolynomialError: If max|imag| exceeds imag_tol * max(1, max|coeffs|).
    """
    coeffs = np.asarray(coeffs, dtype=complex)
    scale = max(1.0, np.max(np.abs(coeffs)))
    residue = np.max(np.abs(coeffs.imag))
    if residue > imag_tol * scale:
        raise ComplexPolynomialError(
            f"Coefficients are not real: imaginary residue {residue:.3e}"
        )
    return coeffs.real.copy()


def characteristic_polynomial(matrix, backend=None):
    """det(xI - A) coefficients, highest degree first, from the eigenvalues of A."""
    matrix = np.atleast_2d(np.asarray(matrix, dtype=float))
    if matrix.size == 0:
        return np.array([1.0])
    return poly_from_roots(get_backend(backend).eigvals(matrix))


def companion_matrix(coeffs):
    """
    Companion matrix whose eigenvalues are the roots of the polynomial.
    The first row holds -coeffs[1:] / coeffs[0].
    """
    coeffs = as_coefficients(coeffs, "polynomial")
    if coeffs[0] == 0.0:
        raise MalformedModelError("Leading polynomial coefficient must be non-zero")
    n = len(coeffs) - 1
    C = np.zeros((n, n))
    if n == 0:
        return C
    C[0, :] = -coeffs[1:] / coeffs[0]
    for i in range(1, n):
        C[i, i - 1] = 1.0
    return C


def polynomial_roots(coeffs, backend=None):
    """Roots of a polynomial, computed as companion-matrix eigenvalues."""
    C = companion_matrix(coeffs)
    if C.size == 0:
        return np.array([], dtype=complex)
    return np.asarray(get_backend(backend).eigvals(C), dtype=complex)
