"""
Sample-by-sample simulation of discrete LTI systems.

Works with any system exposing `step(sample)`, `run(signal)`, `reset()` and
`dt`, i.e. DiscreteTransferFunction and DiscreteStateSpace.
"""

import logging

import numpy as np

from config import FILTER_DESIGN_PARAMS
from siras.exceptions import DimensionMismatchError, InvalidParameterError

logger = logging.getLogger(__name__)


def _as_signal(values, name):
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise DimensionMismatchError(f"{name} must be one-dimensional, got shape {arr.shape}")
    return arr


def step(system, sample):
    """Advances a discrete system by one sample (causal)."""
    return system.step(sample)


def lsim(system, signal):
    """
    Runs a discrete system causally over a whole signal, continuing from its
    current state. Output has the same length as the input.
    """
    return system.run(_as_signal(signal, "signal"))


def _odd_extend(x, padlen):
    left = 2.0 * x[0] - x[padlen:0:-1]
    right = 2.0 * x[-1] - x[-2 : -padlen - 2 : -1]
    return np.concatenate([left, x, right])


def _check_time_base(time_base, dt):
    if len(time_base) < 2:
        return
    spacing = float(np.median(np.diff(time_base)))
    if not np.isclose(spacing, dt, rtol=FILTER_DESIGN_PARAMS["dt_mismatch_rtol"], atol=0.0):
        logger.warning(
            "Time base spacing %.6g s differs from the filter sample interval %.6g s",
            spacing,
            dt,
        )


def filtfilt(system, signal, time_base, padlen=0):
    """
    Zero-phase filtering: a forward pass, then a second pass over the
    time-reversed result, reversed back.

    The phase shifts of the two passes cancel and the magnitude response is
    squared. The filter state is reset before each pass and left at rest
    afterwards. Without padding, start-up transients of each pass are
    visible at both ends of the output.

    Args:
        system: Discrete filter (DiscreteTransferFunction or DiscreteStateSpace).
        signal (array-like): 1-D samples.
        time_base (array-like): Sample times, same length as signal.
        padlen (int, optional): Number of samples of odd reflection added at
            each end before filtering and stripped afterwards. Must be less
            than len(signal). Defaults to 0 (no padding).

    Returns:
        np.ndarray: Filtered signal, same length as the input.

    Raises:
        DimensionMismatchError: If signal/time_base are not 1-D or differ in length.
        InvalidParameterError: If padlen is negative or too long.
    """
    x = _as_signal(signal, "signal")
    t = _as_signal(time_base, "time_base")
    if x.shape != t.shape:
        raise DimensionMismatchError(
            f"signal and time_base lengths differ: {x.shape[0]} vs {t.shape[0]}"
        )
    if isinstance(padlen, bool) or not isinstance(padlen, (int, np.integer)) or padlen < 0:
        raise InvalidParameterError(f"padlen must be a non-negative integer, got {padlen!r}")
    if padlen > 0 and padlen >= len(x):
        raise InvalidParameterError(
            f"padlen ({padlen}) must be less than the signal length ({len(x)})"
        )

    _check_time_base(t, system.dt)

    ext = _odd_extend(x, padlen) if padlen > 0 else x

    system.reset()
    forward = system.run(ext)
    system.reset()
    backward = system.run(forward[::-1].copy())[::-1]
    system.reset()

    if padlen > 0:
        backward = backward[padlen:-padlen]
    return np.ascontiguousarray(backward)
