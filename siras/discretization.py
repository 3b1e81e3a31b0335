import logging

import numpy as np

from config import FILTER_DESIGN_PARAMS
from siras.exceptions import InvalidParameterError
from siras.linalg import get_backend
from siras.state_space import ContinuousStateSpace, DiscreteStateSpace

logger = logging.getLogger(__name__)


def validate_discretization(dt, alpha):
    if not np.isfinite(dt) or dt <= 0.0:
        raise InvalidParameterError(f"Sample interval dt must be positive, got {dt}")
    if not np.isfinite(alpha) or not (0.0 <= alpha <= 1.0):
        raise InvalidParameterError(f"alpha must lie in [0, 1], got {alpha}")


def to_discrete(ss, dt, alpha=None, backend=None):
    """
    Discretizes a continuous state-space model with the generalized bilinear
    transform.

        M   = I - alpha*dt*A
        A_d = M^-1 (I + (1 - alpha)*dt*A)
        B_d = M^-1 (dt*B)
        C_d = (M^T^-1 C^T)^T
        D_d = D + alpha * C B_d

    alpha = 0 is forward Euler, 0.5 is Tustin (trapezoidal), 1 is backward
    Euler. C_d is obtained by solving the transposed system so a single
    "solve M X = Y" primitive suffices.

    Args:
        ss (ContinuousStateSpace): The continuous model.
        dt (float): Sample interval in seconds (> 0).
        alpha (float, optional): Interpolation factor in [0, 1].
            Defaults to FILTER_DESIGN_PARAMS["alpha"].
        backend (optional): Linear-algebra backend; numpy by default.

    Returns:
        DiscreteStateSpace: The discretized model, zero initial state.

    Raises:
        InvalidParameterError: If dt <= 0 or alpha is outside [0, 1].
        SingularMatrixError: If M is not invertible.
        TypeError: If ss is not a ContinuousStateSpace.
    """
    if not isinstance(ss, ContinuousStateSpace):
        raise TypeError(f"Expected a ContinuousStateSpace, got {type(ss).__name__}")
    if alpha is None:
        alpha = FILTER_DESIGN_PARAMS["alpha"]
    validate_discretization(dt, alpha)

    be = get_backend(backend)
    A, B, C, D = ss.A, ss.B, ss.C, ss.D
    I = be.identity(A.shape[0])

    M = I - alpha * dt * A
    Ad = be.solve(M, I + (1.0 - alpha) * dt * A)
    Bd = be.solve(M, dt * B)
    Cd = be.solve(M.T, C.T).T
    Dd = D + alpha * (C @ Bd)

    logger.debug(
        "Discretized order-%d system (dt=%.6g, alpha=%.3g)", A.shape[0], dt, alpha
    )
    return DiscreteStateSpace(Ad, Bd, Cd, Dd, dt)
