"""
High level spline objects built on curfit_python and splev_python.

Unlike the low level functions these classes raise FitpackError for a
positive status. For the codes 1, 2 and 3 the degraded spline is still
available as ``err.spline``.
"""

import numpy as np
from scipy.interpolate import BSpline

from ._knots import open_clamped_knots
from ._status import (CARDINAL_SPACING, WEIGHTS_SIZE, FitMode, FitStatus,
                      FitpackError)
from .curfit_python import FitState, curfit_python
from .splev_python import splev_python


class Spline:
    """
    A fitted spline of degree k with knots t and coefficients c.

    Parameters
    ----------
    t, c : arrays
        Knots and B spline coefficients.
    k : int
        Degree.
    fp : float
        Weighted residual sum of squares of the fit.
    status : FitStatus
        Outcome of the fit.
    p : float
        Smoothing parameter, inf for a least squares spline.
    m : int or None
        Number of data points. If given, ``e_rms = sqrt(fp / m)``.
    """

    def __init__(self, t, c, k, fp=0.0, status=FitStatus.NORMAL, p=np.inf,
                 m=None):
        self.t = np.asarray(t, dtype=float)
        self.c = np.asarray(c, dtype=float)
        self.k = int(k)
        self.fp = float(fp)
        self.status = FitStatus(status)
        self.p = float(p)
        self.e_rms = None if not m else float(np.sqrt(self.fp / m))

    @classmethod
    def from_result(cls, result, m=None):
        return cls(result.t, result.c, result.k, fp=result.fp,
                   status=result.status, p=result.p, m=m)

    @property
    def tck(self):
        return self.t, self.c, self.k

    def __call__(self, x):
        """
        Evaluate the spline at x, in any order and of any shape.

        Raises
        ------
        FitpackError
            If x is empty.
        """
        x = np.asarray(x, dtype=float)
        flat = x.ravel()
        order = np.argsort(flat, kind="mergesort")
        values, status = splev_python(self.t, self.c, self.k, flat[order])
        if status.is_error:
            raise FitpackError(status)
        out = np.empty_like(flat)
        out[order] = values
        return out.reshape(x.shape)

    def to_bspline(self, extrapolate=True):
        """Return the spline as a scipy.interpolate.BSpline."""
        nk1 = self.t.size - self.k - 1
        return BSpline(self.t, self.c[:nk1], self.k, extrapolate=extrapolate)

    def __repr__(self):
        return (f"Spline(n={self.t.size}, k={self.k}, fp={self.fp:.6e}, "
                f"status={self.status.name})")


class CurveSplineFit:
    """
    Fitting session for one curve y(x).

    The object keeps the data and the FitState of the curve, so that a
    smoothing spline can be refined with smooth_more starting from the
    knots of the previous fit.

    Parameters
    ----------
    x, y : array_like, shape (m,)
        Data points, x strictly increasing.
    w : array_like or None
        Strictly positive weights. If None all ones are used.
    k : int
        Degree.
    nest : int or None
        Upper bound on the number of knots, see curfit_python.
    verbose : bool
        If True print progress logs.

    Examples
    --------
    >>> x = np.linspace(0.0, 10.0, 101)
    >>> fit = CurveSplineFit(x, np.sin(x))
    >>> spl = fit.smoothing_spline(rms=0.01)
    >>> finer = fit.smooth_more(rms=0.001)
    """

    def __init__(self, x, y, w=None, k=3, nest=None, verbose=False):
        self.x = np.asarray(x, dtype=float)
        self.y = np.asarray(y, dtype=float)
        self.k = k
        self.nest = nest
        self.verbose = verbose
        self.w = np.ones_like(self.x)
        if w is not None:
            self.set_weights(w)
        self.state = FitState()

    def set_weights(self, w):
        """
        Replace the weights.

        Raises
        ------
        FitpackError
            With status 203 when w and x differ in length.
        """
        w = np.asarray(w, dtype=float)
        if w.shape != self.x.shape:
            raise FitpackError(WEIGHTS_SIZE)
        self.w = w
        return self

    def _fit(self, **kwargs):
        result = curfit_python(self.x, self.y, self.w, k=self.k,
                               nest=self.nest, state=self.state,
                               verbose=self.verbose, **kwargs)
        if result.status == FitStatus.INVALID_INPUT:
            raise FitpackError(result.status)
        spline = Spline.from_result(result, self.x.size)
        if result.status.is_error:
            raise FitpackError(result.status, spline)
        return spline

    def interpolating_spline(self):
        """Spline through all data points, s = 0."""
        return self._fit(s=0.0, mode=FitMode.RESTART_AUTOMATIC)

    def smoothing_spline(self, rms):
        """
        Spline with few knots and a root mean square error close to rms.

        The knots are selected from scratch with s = m * rms**2.
        """
        s = self.x.size * rms ** 2
        return self._fit(s=s, mode=FitMode.RESTART_AUTOMATIC)

    def smooth_more(self, rms):
        """
        Refit with a new rms, starting from the knots of the last fit.

        Use a smaller rms than before; a larger one restarts from the
        least squares polynomial.
        """
        s = self.x.size * rms ** 2
        return self._fit(s=s, mode=FitMode.CONTINUE_AUTOMATIC)

    def lsq_spline(self, interior_knots):
        """Least squares spline for the given interior knots."""
        t = open_clamped_knots(self.x[0], self.x[-1], self.k, interior_knots)
        return self._fit(mode=FitMode.USE_FIXED_KNOTS, t=t)

    def cardinal_spline(self, dt):
        """
        Least squares spline with equidistant interior knots.

        The interior knots are the integer multiples of dt strictly
        inside (x[0], x[-1]).

        Raises
        ------
        FitpackError
            With status 205 when no multiple of dt lies inside.
        """
        x0 = self.x[0]
        x1 = self.x[-1]
        if not dt > 0.0:
            raise FitpackError(CARDINAL_SPACING)
        first = np.floor(x0 / dt) + 1.0
        last = np.ceil(x1 / dt) - 1.0
        interior = dt * np.arange(first, last + 1.0)
        interior = interior[(interior > x0) & (interior < x1)]
        if interior.size == 0:
            raise FitpackError(CARDINAL_SPACING)
        return self.lsq_spline(interior)
