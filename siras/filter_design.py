"""
Digital Butterworth and Bessel filter design.

A design runs through the whole LTI pipeline:

    prototype poles (cutoff = 1 rad/s)
        -> band transform + denormalization  -> ContinuousTransferFunction
        -> controllable canonical form       -> ContinuousStateSpace
        -> generalized bilinear transform    -> DiscreteStateSpace
        -> characteristic polynomial         -> DiscreteTransferFunction
        -> passband gain / stability check  (IllConditionedError)

No frequency pre-warping is applied: the discrete cutoff drifts below the
requested one as it approaches Nyquist.
"""

import logging
from enum import Enum

import numpy as np

from config import FILTER_DESIGN_PARAMS
from siras.conversions import to_state_space, to_transfer_function
from siras.discretization import to_discrete, validate_discretization
from siras.exceptions import IllConditionedError, InvalidParameterError
from siras.math_utils import normalize, poly_from_roots, polynomial_roots
from siras.transfer_function import ContinuousTransferFunction, DiscreteTransferFunction

logger = logging.getLogger(__name__)


class FilterType(Enum):
    LOWPASS = "lowpass"
    HIGHPASS = "highpass"


def _validate_order(order):
    if isinstance(order, bool) or not isinstance(order, (int, np.integer)):
        raise InvalidParameterError(f"Filter order must be an integer, got {order!r}")
    if order < 1:
        raise InvalidParameterError(f"Filter order must be positive, got {order}")


def _as_filter_type(filter_type):
    try:
        return FilterType(filter_type)
    except ValueError as exc:
        raise InvalidParameterError(f"Unknown filter type: {filter_type!r}") from exc


def butterworth_poles(order):
    """
    Poles of the normalized Butterworth prototype: N points equally spaced on
    the left half of the unit circle at angles pi/2 + (2k + 1) pi / (2N).
    """
    _validate_order(order)
    k = np.arange(order)
    return np.exp(1j * (np.pi / 2.0 + (2 * k + 1) * np.pi / (2.0 * order)))


def bessel_polynomial(order):
    """
    Coefficients (highest degree first) of the reverse Bessel polynomial
    theta_N(s), built from the recurrence

        theta_0 = 1
        theta_1 = s + 1
        theta_n = (2n - 1) theta_{n-1} + s^2 theta_{n-2}
    """
    prev, curr = np.array([1.0]), np.array([1.0, 1.0])
    if isinstance(order, (int, np.integer)) and not isinstance(order, bool) and order == 0:
        return prev
    _validate_order(order)
    for n in range(2, order + 1):
        shifted = np.concatenate([prev, [0.0, 0.0]])
        prev, curr = curr, np.polyadd((2 * n - 1) * curr, shifted)
    return curr


def bessel_poles(order):
    """
    Poles of the Bessel (Thomson) prototype: the roots of theta_N. The
    reverse Bessel polynomial has unit group delay at DC, which is the
    normalization kept here.
    """
    _validate_order(order)
    return polynomial_roots(bessel_polynomial(order))


PROTOTYPES = {
    "butterworth": butterworth_poles,
    "bessel": bessel_poles,
}


def analog_filter(poles, cutoff_freq, filter_type=FilterType.LOWPASS):
    """
    Maps normalized prototype poles to a continuous filter at cutoff_freq (Hz).

    LOWPASS  (s -> s / wc): poles wc * p, numerator prod(-wc * p) so the
             gain at DC is 1.
    HIGHPASS (s -> wc / s): poles wc / p, numerator s^N so the gain at
             infinite frequency is 1.

    Returns:
        ContinuousTransferFunction
    """
    filter_type = _as_filter_type(filter_type)
    if not np.isfinite(cutoff_freq) or cutoff_freq <= 0.0:
        raise InvalidParameterError(f"Cutoff frequency must be positive, got {cutoff_freq}")

    poles = np.atleast_1d(np.asarray(poles, dtype=complex))
    wc = 2.0 * np.pi * cutoff_freq

    if filter_type is FilterType.LOWPASS:
        den = poly_from_roots(wc * poles)
        num = np.array([den[-1]])
    else:
        den = poly_from_roots(wc / poles)
        num = np.zeros(len(poles) + 1)
        num[0] = 1.0

    return ContinuousTransferFunction(num, den)


def validate_design(order, cutoff_freq, dt, alpha):
    """
    Checks design parameters before any matrix work.

    Raises:
        InvalidParameterError: On a non-integer or non-positive order, a
        non-positive cutoff or dt, a cutoff at or above Nyquist (1 / (2 dt)),
        or alpha outside [0, 1].
    """
    _validate_order(order)
    validate_discretization(dt, alpha)
    if not np.isfinite(cutoff_freq) or cutoff_freq <= 0.0:
        raise InvalidParameterError(f"Cutoff frequency must be positive, got {cutoff_freq}")
    nyquist = 1.0 / (2.0 * dt)
    if cutoff_freq >= nyquist:
        raise InvalidParameterError(
            f"Cutoff frequency {cutoff_freq} Hz must be below Nyquist ({nyquist} Hz)"
        )


def check_realization(tf, discrete_ss, filter_type, backend=None):
    """
    Verifies that direct-form coefficients still describe the discrete
    state-space model they were recovered from.

    At a low cutoff-to-sample-rate ratio the poles cluster near z = 1 and
    float64 polynomial coefficients cannot resolve them. The passband gain
    (z = 1 for LOWPASS, z = -1 for HIGHPASS) of tf must match the model
    within FILTER_DESIGN_PARAMS["gain_rtol"], and every root of tf.den must
    lie strictly inside the unit circle.

    Raises:
        IllConditionedError: If either check fails.
    """
    # Frequencies in cycles per sample: 0 is z = 1, 0.5 is z = -1
    freq = 0.0 if filter_type is FilterType.LOWPASS else 0.5
    expected = discrete_ss.frequency_response([freq / discrete_ss.dt], backend=backend)[0]
    actual = tf.frequency_response([freq / tf.dt])[0]

    error = abs(actual - expected) / abs(expected)
    if not np.isfinite(error) or error > FILTER_DESIGN_PARAMS["gain_rtol"]:
        raise IllConditionedError(
            f"Filter coefficients are ill-conditioned: passband gain {abs(actual):.6g} "
            f"instead of {abs(expected):.6g}; lower the order or raise the cutoff"
        )

    radius = np.max(np.abs(polynomial_roots(tf.den, backend)), initial=0.0)
    if radius >= 1.0:
        raise IllConditionedError(
            f"Filter coefficients are ill-conditioned: pole radius {radius:.6g} >= 1"
        )


def design(
    order,
    cutoff_freq,
    dt,
    alpha=None,
    filter_type=FilterType.LOWPASS,
    prototype=None,
    backend=None,
):
    """
    Designs a digital filter ready to run.

    Args:
        order (int): Filter order N (>= 1).
        cutoff_freq (float): Cutoff frequency in Hz, 0 < cutoff_freq < 1/(2 dt).
        dt (float): Sample interval in seconds.
        alpha (float, optional): Bilinear interpolation factor.
            Defaults to FILTER_DESIGN_PARAMS["alpha"].
        filter_type (FilterType or str): LOWPASS or HIGHPASS.
        prototype (str, optional): Key of PROTOTYPES.
            Defaults to FILTER_DESIGN_PARAMS["prototype"].
        backend (optional): Linear-algebra backend.

    Returns:
        DiscreteTransferFunction: Order-N filter with den[0] == 1, zero state.

    Raises:
        InvalidParameterError: On invalid order, cutoff, dt, alpha, type or prototype.
        IllConditionedError: If the direct-form coefficients cannot represent
        the filter accurately (high order at a very low cutoff).
    """
    if alpha is None:
        alpha = FILTER_DESIGN_PARAMS["alpha"]
    if prototype is None:
        prototype = FILTER_DESIGN_PARAMS["prototype"]

    validate_design(order, cutoff_freq, dt, alpha)
    filter_type = _as_filter_type(filter_type)
    if prototype not in PROTOTYPES:
        raise InvalidParameterError(
            f"Unknown prototype {prototype!r}, expected one of {sorted(PROTOTYPES)}"
        )

    logger.debug(
        "Designing %s %s filter: order=%d cutoff=%.6g Hz dt=%.6g alpha=%.3g",
        prototype,
        filter_type.value,
        order,
        cutoff_freq,
        dt,
        alpha,
    )

    poles = PROTOTYPES[prototype](order)

    # The bilinear map only depends on dt*A, so the analog filter is built on
    # a per-sample time axis (dt = 1) to keep its coefficients well scaled.
    analog = analog_filter(poles, cutoff_freq * dt, filter_type)
    discrete_ss = to_discrete(to_state_space(analog, backend), 1.0, alpha, backend)
    tf = to_transfer_function(discrete_ss, backend)
    check_realization(tf, discrete_ss, filter_type, backend)

    num, den = normalize(tf.num, tf.den)
    return DiscreteTransferFunction(num, den, dt)


def butterworth(order, cutoff_freq, dt, alpha=None, filter_type=FilterType.LOWPASS):
    """Digital Butterworth filter (maximally flat magnitude)."""
    return design(order, cutoff_freq, dt, alpha, filter_type, prototype="butterworth")


def bessel(order, cutoff_freq, dt, filter_type=FilterType.LOWPASS, alpha=None):
    """Digital Bessel filter (maximally flat group delay)."""
    return design(order, cutoff_freq, dt, alpha, filter_type, prototype="bessel")
