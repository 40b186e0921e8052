#!/usr/bin/env python3
"""
CURFIT-style univariate smoothing B-spline (Givens, Python port)

This file contains a practical re-implementation of the FITPACK routines
curfit and fpcurf in plain NumPy. It fits a spline s(x) of degree k to
weighted data (x_i, y_i, w_i). The number and the position of the knots
are chosen automatically, and a smoothing parameter p balances closeness
of fit against smoothness so that the weighted residual sum of squares

    fp = sum_i (w_i * (y_i - s(x_i)))**2

is close to a target s.


-----------------------------------------------------------------------
Step-by-step algorithm
-----------------------------------------------------------------------

1) Choose the starting knots
   - s == 0: the knots of the interpolating spline, n = m + k + 1.
   - restart: no interior knots, n = nmin = 2*(k+1). The least squares
     spline is then the least squares polynomial of degree k.
   - continuation: the knots retained in a FitState from an earlier
     call, unless the polynomial residual fp0 stored there is <= s.

2) Knot selection (phase A)
   - Build the observation matrix row by row. Every row has k+1 nonzero
     B spline values. Reduce it to upper triangular band form with Givens
     rotations and accumulate fp from the rotated right hand sides.
   - Back substitute to get the least squares spline sinf(x), p = inf.
   - |fp - s| < tol*s: accept. fp < s: go to phase B. n == m+k+1: the
     spline interpolates. n == nest: storage exhausted.
   - Otherwise find nplus, the number of knots to add, from the decrease
     of fp in the previous pass. Sum the residuals per knot interval and
     insert nplus knots, each one in the interval with the largest sum.

3) Smoothing parameter search (phase B)
   - Only reached when fp(inf) < s < fp0, with fp0 the residual of the
     least squares polynomial. The knots are now fixed.
   - Compute the discontinuity jumps of the k th derivative at the
     interior knots. Rotate those rows, weighted by 1/p, into a copy of
     the phase A triangle and back substitute.
   - f(p) = fp(p) - s is convex and decreasing. Keep a bracket
     f(p1) > 0 > f(p3), starting with p1 = 0 and p3 = inf, and update p
     with a rational interpolation (fprati). The bracket is widened by
     the factor con4 when f(p) sits too close to one of its ends.


-----------------------------------------------------------------------
Which function does which step
-----------------------------------------------------------------------

- curfit_python(...): public entry point. Sets defaults, validates the
  input exhaustively and calls _fpcurf. Invalid input gives status
  INVALID_INPUT without touching the FitState.
- workspace_size(...): FITPACK buffer sizes for callers that interoperate
  with compiled FITPACK.
- _fpcurf(...): phases A and B.
- _lsq_system(...): least squares spline for fixed knots, keeps the
  triangle, right hand side and cached basis values for phase B.
- _search_p(...): phase B.
- _smoothing_coefficients(...): coefficients of the smoothing spline for
  one value of p.

Map to FITPACK:

- fpbspl -> fitpack1d._bspl.basis_funs
- fpgivs, fprota, fpback -> fitpack1d._banded
- fpdisc -> fitpack1d._disc.discontinuity_jumps
- fpchec, fpknot -> fitpack1d._knots
- fprati -> fitpack1d._rati.fprati_next
- fpcurf -> _fpcurf
- curfit -> curfit_python
"""

import logging

import numpy as np

from ._banded import TriangularBand
from ._bspl import basis_funs, data_spans, spline_at_data
from ._disc import discontinuity_jumps
from ._knots import (add_knot, check_knots, interpolation_knots,
                     interval_residuals, open_clamped_knots)
from ._logging import get_logger, report
from ._rati import fprati_next
from ._status import FitMode, FitStatus

TOL = 0.001
MAXIT = 20
CON1 = 0.1
CON4 = 0.04
CON9 = 0.9

logger = get_logger(__name__)


class FitState:
    """
    Knots and search history kept between calls for one curve.

    A FitState is owned by the caller and passed to every call of
    curfit_python that belongs to the same logical curve. With
    mode=FitMode.CONTINUE_AUTOMATIC the knots found by the previous call
    are the starting point of the next one.

    Attributes
    ----------
    t, c : ndarray or None
        Knots and coefficients of the last fit.
    k : int or None
        Degree of the last fit.
    fp : float
        Residual sum of squares of the last fit.
    fp0 : float
        Residual sum of squares of the least squares polynomial.
    fpold : float
        Residual sum of squares before the last knot insertion.
    nplus : int
        Number of knots added in the last insertion step.
    nrdata : ndarray of int or None
        Number of data points strictly inside every knot interval.
    status : FitStatus or None
        Status of the last fit.
    """

    def __init__(self):
        self.t = None
        self.c = None
        self.k = None
        self.fp = np.nan
        self.fp0 = 0.0
        self.fpold = 0.0
        self.nplus = 0
        self.nrdata = None
        self.status = None

    @property
    def n(self):
        return 0 if self.t is None else self.t.size


class CurfitResult:
    """
    Outcome of curfit_python.

    Attributes
    ----------
    t : ndarray or None
        Knots, length n.
    c : ndarray or None
        B spline coefficients, length n - k - 1.
    k : int
        Degree.
    fp : float
        Weighted residual sum of squares of the returned spline.
    status : FitStatus
        Outcome code.
    p : float
        Smoothing parameter of the returned spline. inf for a least
        squares spline.
    """

    def __init__(self, t, c, k, fp, status, p):
        self.t = t
        self.c = c
        self.k = k
        self.fp = fp
        self.status = status
        self.p = p

    @property
    def tck(self):
        return self.t, self.c, self.k

    def __repr__(self):
        n = 0 if self.t is None else self.t.size
        return (f"CurfitResult(n={n}, k={self.k}, fp={self.fp:.6e}, "
                f"status={self.status.name}, p={self.p:.6e})")


def workspace_size(m, k, nest):
    """
    Return the FITPACK work array sizes (lwrk, liwrk) for curfit.

    This implementation allocates its storage per call. The sizes are
    only useful to size the buffers of a compiled FITPACK curfit.
    """
    return m * (k + 1) + nest * (3 * k + 7), nest


def _lsq_system(x, y, w, t, k):
    """
    Least squares spline for the knots t.

    Returns
    -------
    a : TriangularBand
        The triangularized observation matrix, k+1 diagonals.
    z : ndarray
        The rotated right hand side.
    c : ndarray
        Coefficients of the least squares spline.
    fp : float
        Its weighted residual sum of squares.
    q : ndarray, shape (m, k+1)
        Unweighted nonzero basis values at every sample.
    spans : ndarray of int
        Knot interval of every sample.
    """
    m = x.size
    k1 = k + 1
    nk1 = t.size - k1
    spans = data_spans(x, t, k)
    q = np.empty((m, k1), dtype=float)
    a = TriangularBand(nk1, k1)
    z = np.zeros(nk1, dtype=float)
    fp = 0.0
    for it in range(m):
        l = spans[it]
        h = basis_funs(t, k, x[it], l)
        q[it] = h
        yi = a.rotate_row(h * w[it], l - k, y[it] * w[it], z)
        fp += yi * yi
    c = a.back_substitute(z)
    return a, z, c, fp, q, spans


def _smoothing_coefficients(a, z, b, p, k):
    """Coefficients of the smoothing spline for the parameter p."""
    g = a.widened(k + 2)
    c = z.copy()
    pinv = 1.0 / p
    for row in range(b.shape[0]):
        g.rotate_row(b[row] * pinv, row, 0.0, c)
    return g.back_substitute(c)


def _search_p(y, w, t, k, s, a, z, q, spans, fp0, fpinf, tol, maxit,
              verbose):
    """
    Find p so that fp(p) is close to s, for fixed knots.

    Parameters
    ----------
    y, w : ndarrays
        Data values and weights.
    t : ndarray
        Knots found in phase A.
    k : int
        Degree.
    s : float
        Target residual sum, fpinf < s < fp0.
    a, z : TriangularBand, ndarray
        Triangle and right hand side of the least squares spline.
    q, spans : ndarrays
        Cached basis values and knot intervals of the samples.
    fp0, fpinf : float
        fp of the least squares polynomial and spline.
    tol : float
        Relative tolerance on |fp - s|.
    maxit : int
        Iteration limit.
    verbose : bool
        If True print progress.

    Returns
    -------
    c : ndarray
    fp : float
    p : float
    status : FitStatus
        NORMAL, ROOT_SEARCH_CONTRADICTION or ITERATION_LIMIT_EXCEEDED.
        For the two error codes the iterate closest to s is returned.
    """
    acc = tol * s
    b = discontinuity_jumps(t, k)
    p1, f1 = 0.0, fp0 - s
    p3, f3 = np.inf, fpinf - s
    p = a.nrows / np.sum(a.diagonal())
    ich1 = False
    ich3 = False
    best = None
    status = FitStatus.NORMAL

    report(logger, verbose,
           f"[psearch] bracket f(0)={f1:+.3e} f(inf)={f3:+.3e} p={p:.3e}")

    for it in range(1, maxit + 1):
        c = _smoothing_coefficients(a, z, b, p, k)
        fp = float(np.sum((w * (spline_at_data(c, q, spans, k) - y)) ** 2))
        fpms = fp - s
        report(logger, verbose,
               f"[psearch] iter {it} p={p:.3e} fp={fp:.6e} fp-s={fpms:+.3e}")
        if best is None or abs(fpms) < abs(best[1] - s):
            best = (c, fp, p)
        if abs(fpms) < acc:
            return c, fp, p, FitStatus.NORMAL
        if it == maxit:
            status = FitStatus.ITERATION_LIMIT_EXCEEDED
            break

        p2, f2 = p, fpms
        if not ich3:
            if f2 - f3 <= acc:
                # p too large
                p3, f3 = p2, f2
                p = p * CON4
                if p <= p1:
                    p = p1 * CON9 + p2 * CON1
                continue
            if f2 < 0.0:
                ich3 = True
        if not ich1:
            if f1 - f2 <= acc:
                # p too small
                p1, f1 = p2, f2
                p = p / CON4
                if not np.isinf(p3) and p >= p3:
                    p = p2 * CON1 + p3 * CON9
                continue
            if f2 > 0.0:
                ich1 = True
        if f2 >= f1 or f2 <= f3:
            status = FitStatus.ROOT_SEARCH_CONTRADICTION
            break
        p, p1, f1, p3, f3 = fprati_next(p1, f1, p2, f2, p3, f3)

    report(logger, verbose, f"[psearch] stop: {status.message}")
    c, fp, p = best
    return c, fp, p, status


def _fpcurf(x, y, w, xb, xe, k, s, nest, mode, t, state, tol, maxit,
            verbose):
    """
    Knot selection and smoothing parameter search.

    The inputs are validated by curfit_python. Returns a CurfitResult
    and, if state is given, records the knots and the search history in
    it.
    """
    m = x.size
    k1 = k + 1
    nmin = 2 * k1
    nmax = m + k1
    acc = tol * s
    status = FitStatus.NORMAL
    fp0 = 0.0
    fpold = 0.0
    nplus = 0
    nrdata = None

    if mode == FitMode.USE_FIXED_KNOTS:
        t = np.array(t, dtype=float)
    elif s == 0.0:
        t = interpolation_knots(x, xb, xe, k)
    else:
        t = None
        if (mode == FitMode.CONTINUE_AUTOMATIC and state is not None
                and state.k == k and state.nrdata is not None
                and state.n > nmin):
            fp0 = state.fp0
            if fp0 > s:
                t = state.t.copy()
                fpold = state.fpold
                nplus = state.nplus
                nrdata = state.nrdata.copy()
        if t is None:
            t = open_clamped_knots(xb, xe, k)
            fpold = 0.0
            nplus = 0
            nrdata = np.array([m - 2])

    phase_b = False
    for _ in range(m):
        n = t.size
        if n == nmin:
            status = FitStatus.POLYNOMIAL_SUFFICIENT
        nrint = n - nmin + 1
        t[:k1] = xb
        t[n - k1:] = xe

        a, z, c, fp, q, spans = _lsq_system(x, y, w, t, k)
        if status == FitStatus.POLYNOMIAL_SUFFICIENT:
            fp0 = fp
        report(logger, verbose, f"[curfit] n={n} fp={fp:.6e} s={s:.6e}")

        if mode == FitMode.USE_FIXED_KNOTS:
            break
        fpms = fp - s
        if abs(fpms) < acc:
            break
        if fpms < 0.0:
            phase_b = True
            break
        if n == nmax:
            status = FitStatus.EXACT_INTERPOLATION
            break
        if n == nest:
            status = FitStatus.STORAGE_EXHAUSTED
            break

        if status == FitStatus.POLYNOMIAL_SUFFICIENT:
            nplus = 1
            status = FitStatus.NORMAL
        else:
            npl1 = nplus * 2
            if fpold - fp > acc:
                npl1 = int(nplus * fpms / (fpold - fp))
            nplus = min(nplus * 2, max(npl1, nplus // 2, 1))
        fpold = fp

        res2 = (w * (spline_at_data(c, q, spans, k) - y)) ** 2
        fpint = interval_residuals(res2, spans, k, nrint)
        inserted = 0
        for _ in range(nplus):
            grown = add_knot(x, t, k, fpint, nrdata)
            if grown is None:
                break
            t, fpint, nrdata = grown
            inserted += 1
            if t.size == nmax:
                t = interpolation_knots(x, xb, xe, k)
                break
            if t.size == nest:
                break
        if inserted == 0:
            # every interval with residual left is empty of data points
            status = FitStatus.STORAGE_EXHAUSTED
            break

    p = np.inf
    if phase_b and status != FitStatus.POLYNOMIAL_SUFFICIENT:
        c, fp, p, status = _search_p(y, w, t, k, s, a, z, q, spans, fp0, fp,
                                     tol, maxit, verbose)

    report(logger, verbose,
           f"[curfit] done n={t.size} fp={fp:.6e} status={status.name}")

    if state is not None:
        state.t = t.copy()
        state.c = c.copy()
        state.k = k
        state.fp = fp
        state.fp0 = fp0
        state.fpold = fpold
        state.nplus = nplus
        state.nrdata = None if nrdata is None else nrdata.copy()
        state.status = status

    return CurfitResult(t=t, c=c, k=k, fp=fp, status=status, p=p)


def _validate_samples(x, y, w, k):
    """Return the reason why the samples are rejected, or None."""
    if not 1 <= k <= 5:
        return "the degree k should be 1 <= k <= 5"
    if x.ndim != 1 or y.shape != x.shape or w.shape != x.shape:
        return "x, y and w should be 1-D arrays of a same length"
    if x.size <= k:
        return "the number of data points m should be larger than k"
    if not np.all(w > 0.0):
        return "the weights w should be strictly positive"
    if not np.all(np.diff(x) > 0.0):
        return "x should be strictly increasing"
    return None


def _validate_fit(x, xb, xe, k, s, nest, mode, t):
    """Return the reason why the fit options are rejected, or None."""
    m = x.size
    nmin = 2 * (k + 1)
    if nest < nmin:
        return f"nest should be at least 2*k+2 = {nmin}"
    if not (xb <= x[0] and x[-1] <= xe):
        return "the interval [xb, xe] should contain all x"
    if mode not in (FitMode.USE_FIXED_KNOTS, FitMode.RESTART_AUTOMATIC,
                    FitMode.CONTINUE_AUTOMATIC):
        return f"unknown mode {mode}"
    if mode == FitMode.USE_FIXED_KNOTS:
        if t is None:
            return "fixed knots mode needs a knot vector t"
        t = np.array(t, dtype=float)
        n = t.size
        if t.ndim != 1 or not nmin <= n <= nest:
            return f"the number of knots should be {nmin} <= n <= nest"
        t[:k + 1] = xb
        t[n - k - 1:] = xe
        if not check_knots(x, t, k):
            return "the knots violate the Schoenberg-Whitney conditions"
        return None
    if not s >= 0.0:
        return "the smoothing factor s should be s >= 0"
    if s == 0.0 and nest < m + k + 1:
        return f"interpolation (s=0) needs nest >= m+k+1 = {m + k + 1}"
    return None


def curfit_python(x, y, w=None, *, xb=None, xe=None, k=3, s=None,
                  nest=None, mode=FitMode.RESTART_AUTOMATIC, t=None,
                  state=None, tol=TOL, maxit=MAXIT, verbose=False):
    """
    Public entry point. Fit a smoothing or interpolating spline to data.

    Parameters
    ----------
    x, y : array_like, shape (m,)
        Data points, x strictly increasing.
    w : array_like or None
        Strictly positive weights. If None all ones are used.
    xb, xe : float or None
        Interval of the spline. If None x[0] and x[-1] are used.
    k : int
        Degree, 1 <= k <= 5. Cubic splines (k=3) are recommended.
    s : float or None
        Smoothing factor, the target of the weighted residual sum of
        squares. If None a default of m - sqrt(2 m) is used. s=0 gives
        the interpolating spline.
    nest : int or None
        Upper bound on the number of knots. If None max(m+k+1, 2k+3).
    mode : FitMode
        USE_FIXED_KNOTS computes the least squares spline for the knots t.
        RESTART_AUTOMATIC selects the knots from scratch.
        CONTINUE_AUTOMATIC starts from the knots kept in state.
    t : array_like or None
        Knots for USE_FIXED_KNOTS. The first and last k+1 entries are
        replaced by xb and xe.
    state : FitState or None
        Caller owned state of the curve. It is updated by every call
        except for invalid input. Continuation without a state restarts.
    tol : float
        Relative tolerance on |fp - s|.
    maxit : int
        Iteration limit of the smoothing parameter search.
    verbose : bool
        If True print progress logs.

    Returns
    -------
    result : CurfitResult
        Knots, coefficients, fp, status and p. On INVALID_INPUT t and c
        are None and fp is NaN.

    Notes
    -----
    This function never raises for bad data. Every outcome is reported
    through result.status, and the reason for INVALID_INPUT is logged.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    w = np.ones_like(x) if w is None else np.asarray(w, dtype=float)

    reason = _validate_samples(x, y, w, k)
    if reason is None:
        m = x.size
        if xb is None:
            xb = x[0]
        if xe is None:
            xe = x[-1]
        if s is None:
            s = max(0.0, float(m) - float(np.sqrt(2.0 * m)))
        if nest is None:
            nest = max(m + k + 1, 2 * k + 3)
        reason = _validate_fit(x, float(xb), float(xe), k, float(s), nest,
                               mode, t)

    if reason is not None:
        report(logger, verbose, f"[curfit] invalid input: {reason}",
               logging.WARNING)
        return CurfitResult(t=None, c=None, k=k, fp=np.nan,
                            status=FitStatus.INVALID_INPUT, p=np.nan)

    if mode == FitMode.CONTINUE_AUTOMATIC and state is None:
        report(logger, verbose, "[curfit] no state to continue from, restart")

    return _fpcurf(x=x, y=y, w=w, xb=float(xb), xe=float(xe), k=k,
                   s=float(s), nest=int(nest), mode=FitMode(mode), t=t,
                   state=state, tol=tol, maxit=maxit, verbose=verbose)
