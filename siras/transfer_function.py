import numpy as np
from numba import njit

from siras.exceptions import InvalidParameterError, MalformedModelError
from siras.math_utils import as_coefficients


@njit(cache=True)
def _direct_form_step(num, den, inputs, outputs, head_in, head_out, u):
    """
    One Direct Form I update on ring-buffered registers.

    `head_in` / `head_out` index the newest sample of each register; the
    k-th most recent sample sits k slots behind the head (wrapping around).
    """
    n_in = inputs.shape[0]
    n_out = outputs.shape[0]

    head_in += 1
    if head_in == n_in:
        head_in = 0
    inputs[head_in] = u

    acc = 0.0
    idx = head_in
    for k in range(n_in):
        acc += num[k] * inputs[idx]
        idx -= 1
        if idx < 0:
            idx = n_in - 1

    head_out += 1
    if head_out == n_out:
        head_out = 0

    idx = head_out - 1
    if idx < 0:
        idx = n_out - 1
    for k in range(1, n_out):
        acc -= den[k] * outputs[idx]
        idx -= 1
        if idx < 0:
            idx = n_out - 1

    y = acc / den[0]
    outputs[head_out] = y
    return y, head_in, head_out


@njit(cache=True)
def _direct_form_run(num, den, inputs, outputs, head_in, head_out, signal):
    out = np.empty(signal.shape[0], dtype=np.float64)
    for i in range(signal.shape[0]):
        y, head_in, head_out = _direct_form_step(
            num, den, inputs, outputs, head_in, head_out, signal[i]
        )
        out[i] = y
    return out, head_in, head_out


def _newest_first(buffer, head):
    n = buffer.shape[0]
    return buffer[(head - np.arange(n)) % n]


def _freeze(arr):
    arr.flags.writeable = False
    return arr


class ContinuousTransferFunction:
    """
    Representation of a continuous-time SISO Transfer Function.
    G(s) = Num(s) / Den(s)

    Coefficients are ordered highest degree first. The system must be proper
    (len(den) >= len(num)); improper systems are rejected, never truncated.
    """

    def __init__(self, num, den):
        num = as_coefficients(num, "num")
        den = as_coefficients(den, "den")

        if len(num) > len(den):
            raise MalformedModelError(
                f"Transfer function is improper: len(num)={len(num)} > len(den)={len(den)}"
            )
        if den[0] == 0.0:
            raise MalformedModelError("Leading denominator coefficient must be non-zero")

        self.num = _freeze(num)
        self.den = _freeze(den)

    def __repr__(self):
        return f"ContinuousTransferFunction(num={self.num.tolist()}, den={self.den.tolist()})"

    @property
    def order(self):
        return len(self.den) - 1

    def evaluate(self, s):
        """Evaluates G(s) at a complex number s using Horner's method (via np.polyval)."""
        n_val = np.polyval(self.num, s)
        d_val = np.polyval(self.den, s)
        return n_val / d_val if d_val != 0 else np.inf

    def bode_response(self, omega_range):
        """Calculates Magnitude (dB) and Phase (deg) over a frequency range (rad/s)."""
        omega = np.asarray(omega_range, dtype=float)
        resp = np.array([self.evaluate(1j * w) for w in np.atleast_1d(omega)])
        mags = 20.0 * np.log10(np.abs(resp))
        phases = np.degrees(np.angle(resp))
        return mags, phases

    def to_state_space(self, backend=None):
        """Controllable canonical realization as a ContinuousStateSpace."""
        from siras.conversions import to_state_space

        return to_state_space(self, backend=backend)

    def to_discrete(self, dt, alpha=None, backend=None):
        """
        Discretizes through the state-space path:
        TF -> continuous SS -> discrete SS (generalized bilinear) -> discrete TF.
        """
        from siras.conversions import to_state_space, to_transfer_function
        from siras.discretization import to_discrete

        ss = to_state_space(self, backend=backend)
        dss = to_discrete(ss, dt, alpha=alpha, backend=backend)
        return to_transfer_function(dss, backend=backend)


class DiscreteTransferFunction:
    """
    Discrete-time SISO Transfer Function with Direct Form I simulation state.

        H(z) = (num[0] + num[1] z^-1 + ...) / (den[0] + den[1] z^-1 + ...)

    The last len(num) inputs and len(den) outputs are kept in fixed-capacity
    ring buffers. `step` is the only mutating operation; an instance is not
    safe to share between threads.

    Attributes:
        num (np.ndarray): Numerator coefficients (read-only).
        den (np.ndarray): Denominator coefficients (read-only).
        dt (float): Sample interval in seconds. Informational only.
    """

    def __init__(self, num, den, dt):
        num = as_coefficients(num, "num")
        den = as_coefficients(den, "den")

        if den[0] == 0.0:
            raise MalformedModelError("Leading denominator coefficient must be non-zero")
        if not np.isfinite(dt) or dt <= 0.0:
            raise InvalidParameterError(f"Sample interval dt must be positive, got {dt}")

        self.num = _freeze(num)
        self.den = _freeze(den)
        self.dt = float(dt)

        self._inputs = np.zeros(len(num))
        self._outputs = np.zeros(len(den))
        self._head_in = 0
        self._head_out = 0

    def __repr__(self):
        return (
            f"DiscreteTransferFunction(num={self.num.tolist()}, "
            f"den={self.den.tolist()}, dt={self.dt})"
        )

    @property
    def order(self):
        return len(self.den) - 1

    @property
    def inputs(self):
        """Last len(num) input samples, newest first."""
        return _newest_first(self._inputs, self._head_in)

    @property
    def outputs(self):
        """Last len(den) output samples, newest first."""
        return _newest_first(self._outputs, self._head_out)

    def reset(self):
        """Clears the input and output registers (restart from rest)."""
        self._inputs[:] = 0.0
        self._outputs[:] = 0.0
        self._head_in = 0
        self._head_out = 0

    def step(self, sample):
        """
        Advances the recurrence by one sample and returns the new output.

            y[k] = (sum(num[i] u[k-i]) - sum_{i>=1}(den[i] y[k-i])) / den[0]
        """
        y, self._head_in, self._head_out = _direct_form_step(
            self.num,
            self.den,
            self._inputs,
            self._outputs,
            self._head_in,
            self._head_out,
            float(sample),
        )
        return y

    def run(self, signal):
        """Steps through a whole signal, continuing from the current state."""
        signal = np.ascontiguousarray(signal, dtype=np.float64)
        out, self._head_in, self._head_out = _direct_form_run(
            self.num,
            self.den,
            self._inputs,
            self._outputs,
            self._head_in,
            self._head_out,
            signal,
        )
        return out

    def filtfilt(self, signal, time_base, padlen=0):
        """Zero-phase forward-backward filtering, see siras.simulation.filtfilt."""
        from siras.simulation import filtfilt

        return filtfilt(self, signal, time_base, padlen=padlen)

    def evaluate(self, z):
        """Evaluates H(z) at a complex number z."""
        z_inv = 1.0 / z
        n_val = np.polyval(self.num[::-1], z_inv)
        d_val = np.polyval(self.den[::-1], z_inv)
        return n_val / d_val if d_val != 0 else np.inf

    def frequency_response(self, freqs):
        """
        Complex response H(e^{j 2 pi f dt}) at the given frequencies (Hz).
        """
        freqs = np.atleast_1d(np.asarray(freqs, dtype=float))
        z = np.exp(1j * 2.0 * np.pi * freqs * self.dt)
        return np.array([self.evaluate(zk) for zk in z])

    def to_state_space(self, backend=None):
        """Controllable canonical realization as a DiscreteStateSpace."""
        from siras.conversions import to_state_space

        return to_state_space(self, backend=backend)
