import numpy as np

from siras.exceptions import DimensionMismatchError, InvalidParameterError
from siras.linalg import get_backend


def _as_column(M):
    # 1-D input and feedthrough vectors are taken as columns
    M = np.array(M, dtype=float)
    if M.ndim <= 1:
        return M.reshape(-1, 1)
    return M


class _StateSpaceBase:
    """
    Shared validation for single-input Linear Time-Invariant (LTI) systems.

    Attributes:
        A (np.ndarray): State matrix (n_states x n_states).
        B (np.ndarray): Input matrix (n_states x 1).
        C (np.ndarray): Output matrix (n_outputs x n_states).
        D (np.ndarray): Feedthrough matrix (n_outputs x 1).
        n_states (int): Number of state variables (system order).
        n_outputs (int): Number of outputs. Filtering uses exactly one.
    """

    def __init__(self, A, B, C, D):
        """
        Initializes the system and validates matrix dimensions.

        Raises:
            DimensionMismatchError: If A is not square, the system has no state,
            B is not a single column, or C/D do not match the state dimension.
        """
        A = np.atleast_2d(np.array(A, dtype=float))
        B = _as_column(B)
        C = np.atleast_2d(np.array(C, dtype=float))
        D = _as_column(D)

        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise DimensionMismatchError(f"A must be square, got {A.shape}")
        n = A.shape[0]
        if n == 0:
            raise DimensionMismatchError("State-space system must have at least one state")

        if B.shape != (n, 1):
            raise DimensionMismatchError(
                f"B must be a single column matching states, got {B.shape} (expected {n}x1)"
            )

        if C.ndim != 2 or C.shape[1] != n:
            raise DimensionMismatchError(
                f"C must match outputs/states, got {C.shape} (expected px{n})"
            )

        n_outputs = C.shape[0]
        if D.shape != (n_outputs, 1):
            raise DimensionMismatchError(
                f"D must match outputs/inputs, got {D.shape} (expected {n_outputs}x1)"
            )

        for M in (A, B, C, D):
            M.flags.writeable = False

        self.A = A
        self.B = B
        self.C = C
        self.D = D
        self.n_states = n
        self.n_outputs = n_outputs

    @property
    def order(self):
        return self.n_states

    def _transfer_at(self, points, output_idx, backend):
        be = get_backend(backend)
        I = be.identity(self.n_states)
        C_i = self.C[output_idx : output_idx + 1, :]
        D_i = self.D[output_idx, 0]

        resp = np.empty(len(points), dtype=complex)
        for k, p in enumerate(points):
            term = be.solve(p * I - self.A, self.B)
            resp[k] = (C_i @ term)[0, 0] + D_i
        return resp

    def to_transfer_function(self, backend=None):
        from siras.conversions import to_transfer_function

        return to_transfer_function(self, backend=backend)


class ContinuousStateSpace(_StateSpaceBase):
    """
    Continuous-time state-space model:
        dx/dt = Ax + Bu  (State Equation)
        y     = Cx + Du  (Output Equation)
    """

    def __repr__(self):
        return f"ContinuousStateSpace(n_states={self.n_states}, n_outputs={self.n_outputs})"

    def get_frequency_response(self, omega_range, output_idx=0, backend=None):
        """
        Computes H(jw) = C (jwI - A)^-1 B + D for one output over a range of
        frequencies (rad/s), solving (jwI - A)x = B rather than inverting.

        Returns:
            tuple: (magnitudes in dB, phases in degrees).
        """
        if not (0 <= output_idx < self.n_outputs):
            raise ValueError(f"Invalid output_idx {output_idx}")

        omega = np.atleast_1d(np.asarray(omega_range, dtype=float))
        resp = self._transfer_at(1j * omega, output_idx, backend)
        return 20.0 * np.log10(np.abs(resp)), np.degrees(np.angle(resp))

    def to_discrete(self, dt, alpha=None, backend=None):
        """Generalized bilinear discretization at sample interval dt."""
        from siras.discretization import to_discrete

        return to_discrete(self, dt, alpha=alpha, backend=backend)


class DiscreteStateSpace(_StateSpaceBase):
    """
    Discrete-time state-space model with simulation state:
        x[k+1] = A x[k] + B u[k]
        y[k]   = C x[k] + D u[k]

    The state vector `x` (n_states x 1) starts at zero and advances on every
    `step`; `reset` returns it to rest.
    """

    def __init__(self, A, B, C, D, dt):
        super().__init__(A, B, C, D)
        if not np.isfinite(dt) or dt <= 0.0:
            raise InvalidParameterError(f"Sample interval dt must be positive, got {dt}")
        self.dt = float(dt)
        self.x = np.zeros((self.n_states, 1))

    def __repr__(self):
        return (
            f"DiscreteStateSpace(n_states={self.n_states}, "
            f"n_outputs={self.n_outputs}, dt={self.dt})"
        )

    def step(self, sample):
        """
        Advances the simulation by one sample.

        The output is evaluated on the pre-update state, then the state
        transition is applied.
        """
        u = float(sample)
        y = self.C @ self.x + self.D * u
        self.x = self.A @ self.x + self.B * u

        if y.size == 1:
            return y.item()
        return y.flatten()

    def run(self, signal):
        """Steps through a whole signal, continuing from the current state."""
        return np.array([self.step(u) for u in np.asarray(signal, dtype=float)])

    def reset(self):
        self.x = np.zeros((self.n_states, 1))

    def frequency_response(self, freqs, output_idx=0, backend=None):
        """Complex response at z = e^{j 2 pi f dt} for frequencies in Hz."""
        if not (0 <= output_idx < self.n_outputs):
            raise ValueError(f"Invalid output_idx {output_idx}")
        freqs = np.atleast_1d(np.asarray(freqs, dtype=float))
        z = np.exp(1j * 2.0 * np.pi * freqs * self.dt)
        return self._transfer_at(z, output_idx, backend)
