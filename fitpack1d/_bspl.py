"""
B spline basis values and the knot intervals of sorted samples.

Map to FITPACK:

- fpbspl -> basis_funs
- the interval search loop of fpcurf -> data_spans
"""

import numpy as np


def basis_funs(t, k, x, l):
    """
    Evaluate the k+1 nonzero B spline basis functions at x.

    Parameters
    ----------
    t : array_like
        Nondecreasing knot vector of length n.
    k : int
        Spline degree.
    x : float
        Query location. It must already be clamped to [t[k], t[n-k-1]].
    l : int
        Knot interval index so that t[l] <= x < t[l+1], with
        k <= l <= n-k-2. At the right end x == t[l+1] is allowed.

    Returns
    -------
    h : ndarray, shape (k+1,)
        h[i] is the value at x of the B spline that belongs to
        coefficient l-k+i.

    Notes
    -----
    This is the stable recurrence of de Boor and Cox, as used by
    FITPACK fpbspl. Each step blends the previous degree with
    nonnegative weights built from local knot differences.
    """
    h = np.zeros(k + 1, dtype=float)
    hh = np.zeros(k, dtype=float)
    h[0] = 1.0
    for j in range(1, k + 1):
        hh[:j] = h[:j]
        h[0] = 0.0
        for i in range(j):
            li = l + i + 1
            lj = li - j
            f = hh[i] / (t[li] - t[lj])
            h[i] += f * (t[li] - x)
            h[i + 1] = f * (x - t[lj])
    return h


def data_spans(x, t, k):
    """
    Return the knot interval index of every sample.

    The search moves a cursor forward, so x must be nondecreasing.
    The last interval is closed on the right.
    """
    nk1 = len(t) - k - 1
    spans = np.empty(len(x), dtype=int)
    l = k
    for i, xi in enumerate(x):
        while not (xi < t[l + 1] or l == nk1 - 1):
            l += 1
        spans[i] = l
    return spans


def spline_at_data(c, q, spans, k):
    """
    Evaluate a spline at the samples from cached basis values.

    Parameters
    ----------
    c : ndarray
        B spline coefficients.
    q : ndarray, shape (m, k+1)
        Basis values of every sample, as returned by basis_funs.
    spans : ndarray of int, shape (m,)
        Knot interval index of every sample.
    k : int
        Degree.

    Returns
    -------
    values : ndarray, shape (m,)
    """
    first = spans - k
    values = np.zeros(q.shape[0], dtype=float)
    for j in range(k + 1):
        values += c[first + j] * q[:, j]
    return values
