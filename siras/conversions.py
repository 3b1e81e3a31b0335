"""
Conversions between the transfer-function and state-space views of a SISO
LTI system.

    TF -> SS : controllable canonical realization (exact).
    SS -> TF : denominator from the eigenvalues of A, numerator recovered by
               sampling C (pI - A)^-1 B + D on a circle and interpolating.
"""

import logging

import numpy as np

from siras.exceptions import DimensionMismatchError, MalformedModelError
from siras.linalg import get_backend
from siras.math_utils import ensure_real, normalize, pad_left, pad_right, poly_from_roots
from siras.state_space import ContinuousStateSpace, DiscreteStateSpace
from siras.transfer_function import ContinuousTransferFunction, DiscreteTransferFunction

logger = logging.getLogger(__name__)


def controllable_canonical_form(num, den, backend=None):
    """
    Builds (A, B, C, D) in controllable canonical form from TF coefficients.

    After left-padding num to len(den) and normalizing by den[0]:
        A: first row -den[1:], ones on the sub-diagonal
        B: [1, 0, ..., 0]^T
        C: num[1:] - num[0] * den[1:]
        D: [[num[0]]]

    Raises:
        MalformedModelError: If den has degree 0 (a static gain has no state).
    """
    den = np.asarray(den, dtype=float)
    n = len(den) - 1
    if n == 0:
        raise MalformedModelError(
            "Static gain (denominator degree 0) has no state-space realization"
        )
    num, den = normalize(pad_left(num, len(den)), den)

    be = get_backend(backend)
    A = be.vstack(
        [
            -den[1:].reshape(1, n),
            be.hstack([be.identity(n - 1), be.zeros((n - 1, 1))]),
        ]
    )
    B = be.vstack([be.identity(1), be.zeros((n - 1, 1))])
    C = (num[1:] - num[0] * den[1:]).reshape(1, n)
    D = np.array([[num[0]]])
    return A, B, C, D


def to_state_space(tf, backend=None):
    """
    Converts a transfer function into its controllable canonical state-space
    form. Continuous TFs give a ContinuousStateSpace, discrete TFs a
    DiscreteStateSpace with the same dt.

    Discrete coefficients are in powers of z^-1, so both vectors are
    right-padded to a common length first; the realized order is then
    max(len(num), len(den)) - 1.
    """
    if isinstance(tf, DiscreteTransferFunction):
        length = max(len(tf.num), len(tf.den))
        A, B, C, D = controllable_canonical_form(
            pad_right(tf.num, length), pad_right(tf.den, length), backend=backend
        )
        ss = DiscreteStateSpace(A, B, C, D, tf.dt)
    elif isinstance(tf, ContinuousTransferFunction):
        A, B, C, D = controllable_canonical_form(tf.num, tf.den, backend=backend)
        ss = ContinuousStateSpace(A, B, C, D)
    else:
        raise TypeError(f"Expected a transfer function, got {type(tf).__name__}")

    logger.debug("Realized order-%d transfer function in canonical form", ss.n_states)
    return ss


def _sample_points(n_points, radius):
    # Roots of -radius^N: a conjugate-symmetric set of points on a circle
    angles = np.pi * (2.0 * np.arange(n_points) + 1.0) / n_points
    return radius * np.exp(1j * angles)


def to_transfer_function(ss, backend=None):
    """
    Converts a single-output state-space model into a transfer function.

    den is the characteristic polynomial of A (from its eigenvalues). The
    numerator is sampled as H(p) * den(p) at N = n + 1 points on a circle
    enclosing the spectrum of A and recovered exactly by an inverse DFT,
    which avoids the cancellation of the poly(A - BC) - den formulation
    when the gain is small.

    Raises:
        DimensionMismatchError: If the model has more than one output.
    """
    if ss.n_outputs != 1:
        raise DimensionMismatchError(
            f"Transfer function conversion requires one output, got {ss.n_outputs}"
        )

    be = get_backend(backend)
    eig = be.eigvals(ss.A)
    den = poly_from_roots(eig)

    # The circle encloses every eigenvalue, so no sample point is a pole
    n_points = ss.n_states + 1
    radius = 2.0 * max(1.0, float(np.max(np.abs(eig))))
    points = _sample_points(n_points, radius)

    values = ss._transfer_at(points, 0, be) * np.polyval(den, points)
    j = np.arange(n_points)
    scale = (radius * np.exp(1j * np.pi / n_points)) ** j
    ascending = np.fft.fft(values) / (n_points * scale)
    num = ensure_real(ascending[::-1])

    logger.debug("Recovered order-%d transfer function from state space", ss.n_states)

    if isinstance(ss, DiscreteStateSpace):
        return DiscreteTransferFunction(num, den, ss.dt)
    return ContinuousTransferFunction(num, den)
