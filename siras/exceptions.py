class SirasError(Exception):
    """Base class for all exceptions in SIRAS."""

    pass


class MalformedModelError(ValueError, SirasError):
    """
    Raised when a model is structurally wrong (e.g., numerator longer than
    denominator, empty coefficient vector, zero leading denominator coefficient).
    Inherits from ValueError so callers validating input can catch it generically.
    """

    pass


class DimensionMismatchError(MalformedModelError):
    """
    Raised when matrix or vector dimensions are inconsistent with the
    mathematical operation (e.g., A matrix is not square, B doesn't match A).
    """

    pass


class SingularMatrixError(ArithmeticError, SirasError):
    """
    Raised when a matrix is singular and cannot be inverted or solved.
    """

    pass


class ComplexPolynomialError(ArithmeticError, SirasError):
    """
    Raised when a set of roots is not closed under complex conjugation, so the
    polynomial built from them would have non-real coefficients.
    """

    pass


class IllConditionedError(ArithmeticError, SirasError):
    """
    Raised when a designed filter's direct-form coefficients cannot represent
    its state-space model in float64 (e.g., poles clustered near z = 1 at a
    low cutoff-to-sample-rate ratio), so the recurrence would be inaccurate
    or unstable.
    """

    pass


class InvalidParameterError(ValueError, SirasError):
    """
    Raised when a design or discretization parameter is invalid
    (e.g., non-positive order, cutoff at or above Nyquist, alpha outside [0, 1]).
    """

    pass
