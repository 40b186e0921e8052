"""
Modes, status codes and the exception raised by the high level API.

The numeric values follow the FITPACK conventions for ``iopt`` and ``ier``
so that results can be compared one to one with compiled FITPACK.
"""

from enum import IntEnum


class FitMode(IntEnum):
    """Knot selection mode, the FITPACK ``iopt`` flag."""

    USE_FIXED_KNOTS = -1
    RESTART_AUTOMATIC = 0
    CONTINUE_AUTOMATIC = 1


class FitStatus(IntEnum):
    """
    Outcome of a fit or an evaluation, the FITPACK ``ier`` flag.

    Non-positive values are normal returns. Positive values signal an
    error. For 1, 2 and 3 a spline is still returned together with its
    actual residual sum of squares.
    """

    NORMAL = 0
    EXACT_INTERPOLATION = -1
    POLYNOMIAL_SUFFICIENT = -2
    STORAGE_EXHAUSTED = 1
    ROOT_SEARCH_CONTRADICTION = 2
    ITERATION_LIMIT_EXCEEDED = 3
    INVALID_INPUT = 10

    @property
    def is_error(self):
        return self.value > 0

    @property
    def message(self):
        return _MESSAGES[self.value]


# codes used only by the CurveSplineFit wrapper
WEIGHTS_SIZE = 203
CARDINAL_SPACING = 205

_MESSAGES = {
    -2: ("normal return for weighted least squares polynomial, "
         "fp is an upper bound for the smoothing factor"),
    -1: "normal return for interpolating spline",
    0: "normal return",
    1: ("out of storage space; nest too small (m/2) "
        "or s too small"),
    2: "smoothing spline error, s too small",
    3: ("reached iteration limit (20) for finding smoothing spline; "
        "s too small"),
    10: ("invalid input data; check that 1<=k<=5, m>k, nest>=2*k+2, "
         "w(i)>0, xb<=x(1)<x(2)<...<x(m)<=xe, and for fixed knots "
         "the Schoenberg-Whitney conditions"),
    WEIGHTS_SIZE: "wrong size for weights array",
    CARDINAL_SPACING: ("cardinal spline spacing too large: "
                       "select smaller interval"),
}


class FitpackError(Exception):
    """
    Error raised by the high level API for a positive status code.

    Attributes
    ----------
    status : int
        The FITPACK style error code.
    spline : Spline or None
        The degraded but usable spline for codes 1, 2 and 3.
    """

    def __init__(self, status, spline=None):
        self.status = int(status)
        self.spline = spline
        super().__init__(
            f"[ier={self.status}] {_MESSAGES.get(self.status, 'unknown error')}"
        )
