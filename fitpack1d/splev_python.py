"""
Evaluation of a spline in B spline representation, after FITPACK splev.
"""

import numpy as np

from ._bspl import basis_funs
from ._logging import get_logger
from ._status import FitStatus

logger = get_logger(__name__)


def splev_python(t, c, k, x):
    """
    Evaluate the spline (t, c, k) at the points x.

    Parameters
    ----------
    t : array_like, shape (n,)
        Knots.
    c : array_like
        B spline coefficients, at least n - k - 1 of them. Extra trailing
        entries are ignored.
    k : int
        Degree.
    x : array_like, shape (mx,)
        Nondecreasing query points.

    Returns
    -------
    values : ndarray, shape (mx,) or None
        Spline values, None on invalid input.
    status : FitStatus
        NORMAL or INVALID_INPUT.

    Notes
    -----
    Points outside [t[k], t[n-k-1]] are evaluated at the nearest end of
    that interval. The knot interval is located with a cursor that only
    moves forward, which is why x must be sorted.
    """
    t = np.asarray(t, dtype=float)
    c = np.asarray(c, dtype=float)
    x = np.atleast_1d(np.asarray(x, dtype=float))
    n = t.size
    nk1 = n - k - 1

    if x.ndim != 1 or x.size == 0:
        logger.warning("[splev] invalid input: no query points")
        return None, FitStatus.INVALID_INPUT
    if nk1 < k + 1 or c.size < nk1:
        logger.warning("[splev] invalid input: need n >= 2k+2 knots and "
                       "n-k-1 coefficients")
        return None, FitStatus.INVALID_INPUT
    if not np.all(np.diff(x) >= 0.0):
        logger.warning("[splev] invalid input: x should be nondecreasing")
        return None, FitStatus.INVALID_INPUT

    tb = t[k]
    te = t[nk1]
    values = np.empty(x.size, dtype=float)
    l = k
    for i, xi in enumerate(x):
        arg = min(max(xi, tb), te)
        while not (arg < t[l + 1] or l == nk1 - 1):
            l += 1
        h = basis_funs(t, k, arg, l)
        values[i] = np.dot(c[l - k:l + 1], h)
    return values, FitStatus.NORMAL
