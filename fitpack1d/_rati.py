"""Rational interpolation for the smoothing parameter, FITPACK fprati."""

import numpy as np


def fprati_next(p1, f1, p2, f2, p3, f3):
    """
    Compute the next p from a rational model of f(p) = fp(p) - s.

    Parameters
    ----------
    p1, p2, p3 : float
        Three values of the smoothing parameter with p1 < p2 < p3.
        p3 may be np.inf, the least squares spline.
    f1, f2, f3 : float
        Values of fp - s at those p, with f1 > 0 and f3 < 0.

    Returns
    -------
    p : float
        The zero of r(p) = (u*p + v) / (p + w) through the three points.
    p1, f1, p3, f3 : float
        The updated bracket. (p2, f2) replaces (p1, f1) when f2 >= 0 and
        (p3, f3) otherwise, so that f1 > 0 and f3 < 0 still hold.

    Notes
    -----
    This is FITPACK fprati. f(p) is convex and strictly decreasing in p,
    which makes the rational model converge much faster than a secant or
    bisection step. When p3 is infinite, the limit of the three point
    formula is used, in which f3 plays the role of u.
    """
    if np.isinf(p3):
        p = (p1 * (f1 - f3) * f2 - p2 * (f2 - f3) * f1) / ((f1 - f2) * f3)
    else:
        h1 = f1 * (f2 - f3)
        h2 = f2 * (f3 - f1)
        h3 = f3 * (f1 - f2)
        p = -(p1 * p2 * h3 + p2 * p3 * h1 + p3 * p1 * h2) / (
            p1 * h1 + p2 * h2 + p3 * h3)
    if f2 < 0.0:
        p3, f3 = p2, f2
    else:
        p1, f1 = p2, f2
    return p, p1, f1, p3, f3
