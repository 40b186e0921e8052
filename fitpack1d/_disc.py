"""
Jumps of the k th derivative at the interior knots.

The rows are the smoothness penalty of the smoothing spline.

Map to FITPACK:

- fpdisc -> discontinuity_jumps
"""

import numpy as np


def discontinuity_jumps(t, k):
    """
    Discontinuity jumps of the k th derivative of the B splines.

    Parameters
    ----------
    t : array_like
        Knot vector of length n with clamped ends.
    k : int
        Degree.

    Returns
    -------
    b : ndarray, shape (n - 2*k - 2, k + 2)
        Row r belongs to the interior knot t[r + k + 1]. b[r, j] is the
        jump at that knot of the k th derivative of the B spline with
        coefficient index r + j, times (-1)**(k+1) / (k! * fac**k) with
        fac = nrint / (t[n-k-1] - t[k]) and nrint the number of knot
        intervals.

    Notes
    -----
    This mirrors FITPACK fpdisc. The fac factor makes the penalty rows
    independent of the scale of x. The rows are the smoothness
    penalty that enters the observation system with weight 1/p.
    """
    t = np.asarray(t, dtype=float)
    n = t.size
    k1 = k + 1
    k2 = k + 2
    nk1 = n - k1
    nrint = nk1 - k
    fac = nrint / (t[nk1] - t[k])
    b = np.zeros((nk1 - k1, k2), dtype=float)
    h = np.zeros(2 * k1, dtype=float)
    for l in range(k1, nk1):
        row = l - k1
        for j in range(k1):
            h[j] = t[l] - t[l + j - k1]
            h[j + k1] = t[l] - t[l + j + 1]
        lp = row
        for j in range(k2):
            prod = h[j]
            for i in range(k):
                prod = prod * h[j + 1 + i] * fac
            b[row, j] = (t[lp + k1] - t[lp]) / prod
            lp += 1
    return b
