"""
Knot vector helpers: construction, validation and adaptive insertion.

Map to FITPACK:

- fpchec -> check_knots
- fpknot -> add_knot
- interior knots for interpolation in fpcurf -> interpolation_knots
- residual sums per knot interval in fpcurf -> interval_residuals
"""

import numpy as np


def open_clamped_knots(a, b, k, interior=None):
    """
    Build an open clamped knot vector on [a, b].

    Parameters
    ----------
    a, b : float
        Domain bounds.
    k : int
        Degree of the spline.
    interior : array_like or None
        Interior knots, strictly increasing inside (a, b). None gives
        the knots of a polynomial, [a]*(k+1) + [b]*(k+1).

    Returns
    -------
    t : ndarray
        Knot vector of length 2*(k+1) + len(interior).
    """
    t0 = np.full(k + 1, a, dtype=float)
    t1 = np.full(k + 1, b, dtype=float)
    if interior is None:
        return np.concatenate([t0, t1])
    return np.concatenate([t0, np.asarray(interior, dtype=float), t1])


def interpolation_knots(x, xb, xe, k):
    """
    Knots of the interpolating spline, n = m + k + 1.

    For odd k the interior knots are the data points x[k//2 + 1], ...,
    x[m - k//2 - 2]. For even k they are the midpoints between
    consecutive data points in the same range.
    """
    m = x.size
    k3 = k // 2
    mk1 = m - k - 1
    if k % 2:
        interior = x[k3 + 1:k3 + 1 + mk1]
    else:
        interior = 0.5 * (x[k3 + 1:k3 + 1 + mk1] + x[k3:k3 + mk1])
    return open_clamped_knots(xb, xe, k, interior)


def check_knots(x, t, k):
    """
    Verify the number and the position of the knots against the data.

    Parameters
    ----------
    x : array_like, shape (m,)
        Strictly increasing data points.
    t : array_like, shape (n,)
        Knot vector.
    k : int
        Degree.

    Returns
    -------
    ok : bool
        True if all of the following hold:

        1) k+1 <= n-k-1 <= m
        2) t[0] <= ... <= t[k] and t[n-k-1] <= ... <= t[n-1]
        3) t[k] < t[k+1] < ... < t[n-k-1]
        4) t[k] <= x[i] <= t[n-k-1]
        5) Schoenberg-Whitney: there is a subset of data points y[j]
           with t[j] < y[j] < t[j+k+1] for j = 0, ..., n-k-2.

    Notes
    -----
    Condition 5 is checked with one forward scan that matches every
    basis function with the next data point that fits inside it.
    """
    x = np.asarray(x, dtype=float)
    t = np.asarray(t, dtype=float)
    m = x.size
    n = t.size
    k1 = k + 1
    nk1 = n - k1

    if nk1 < k1 or nk1 > m:
        return False
    for i in range(k):
        if t[i] > t[i + 1] or t[n - 1 - i] < t[n - 2 - i]:
            return False
    for i in range(k1, nk1 + 1):
        if t[i] <= t[i - 1]:
            return False
    if x[0] < t[k] or x[-1] > t[nk1]:
        return False

    if x[0] >= t[k1] or x[-1] <= t[nk1 - 1]:
        return False
    i = 0
    for j in range(1, nk1 - 1):
        tj = t[j]
        tl = t[j + k1]
        while True:
            i += 1
            if i >= m - 1:
                return False
            if x[i] > tj:
                break
        if x[i] >= tl:
            return False
    return True


def interval_residuals(res2, spans, k, nrint):
    """
    Sum the squared weighted residuals per knot interval.

    A data point where a new interval starts lies on (or just past) the
    separating knot. Its residual is split in equal halves between the
    two intervals.

    Returns
    -------
    fpint : ndarray, shape (nrint,)
    """
    fpint = np.zeros(nrint, dtype=float)
    fpart = 0.0
    for it, term in enumerate(res2):
        fpart += term
        if it and spans[it] != spans[it - 1]:
            store = 0.5 * term
            fpint[spans[it - 1] - k] = fpart - store
            fpart = store
    fpint[spans[-1] - k] = fpart
    return fpint


def add_knot(x, t, k, fpint, nrdata, istart=0):
    """
    Insert one knot in the knot interval with the largest residual.

    Parameters
    ----------
    x : ndarray, shape (m,)
        Data points.
    t : ndarray
        Current knot vector. Interval j is [t[j+k], t[j+k+1]].
    k : int
        Degree.
    fpint : ndarray, shape (nrint,)
        Residual sum of squares per knot interval.
    nrdata : ndarray of int, shape (nrint,)
        Number of data points strictly inside each knot interval.
    istart : int
        Index of the last data point that may not become a knot.
        The points inside interval 0 are x[istart+1 : istart+1+nrdata[0]].

    Returns
    -------
    t, fpint, nrdata : ndarrays or None
        The enlarged arrays, or None when no interval holds a data point
        with a positive residual sum.

    Notes
    -----
    The new knot coincides with the data point nearest to the middle of
    the interior points of the chosen interval. The residual sum of the
    interval is shared between the two halves in proportion to their
    number of data points. This mirrors FITPACK fpknot.
    """
    fpmax = 0.0
    number = None
    jbegin = istart
    for j, jpoint in enumerate(nrdata):
        if fpmax < fpint[j] and jpoint != 0:
            fpmax = fpint[j]
            number = j
            maxpt = jpoint
            maxbeg = jbegin
        jbegin += jpoint + 1
    if number is None:
        return None

    ihalf = maxpt // 2 + 1
    nrx = maxbeg + ihalf
    nxt = number + 1

    t = np.insert(t, nxt + k, x[nrx])
    fpint = np.insert(fpint, nxt, 0.0)
    nrdata = np.insert(nrdata, nxt, 0)

    nrdata[number] = ihalf - 1
    nrdata[nxt] = maxpt - ihalf
    fpint[number] = fpmax * nrdata[number] / maxpt
    fpint[nxt] = fpmax * nrdata[nxt] / maxpt
    return t, fpint, nrdata
