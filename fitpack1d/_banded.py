"""
Givens rotations and the upper triangular band used by the curve fitter.

The observation matrix of a least squares spline has at most k+1 nonzero
entries per row. It is reduced to upper triangular form row by row with
Givens rotations, so that only the band has to be kept. Row i of the band
stores A[i, i], A[i, i+1], ..., A[i, i+width-1].

Map to FITPACK:

- fpgivs -> givens
- fprota -> rotate
- the row rotation loops of fpcurf -> TriangularBand.rotate_row
- fpback -> TriangularBand.back_substitute
"""

import numpy as np


def givens(piv, ww):
    """
    Compute the Givens rotation that annihilates piv against ww.

    Parameters
    ----------
    piv : float
        Entry of the incoming row to be zeroed.
    ww : float
        Current diagonal entry of the triangle, nonnegative.

    Returns
    -------
    cos, sin : float
        Rotation parameters.
    dd : float
        sqrt(ww**2 + piv**2), the new diagonal entry.

    Notes
    -----
    The square root is taken after dividing by the larger of the two
    magnitudes, which avoids overflow and underflow in the squares.
    """
    store = abs(piv)
    if store >= ww:
        if store == 0.0:
            return 1.0, 0.0, 0.0
        dd = store * np.sqrt(1.0 + (ww / piv) ** 2)
    else:
        dd = ww * np.sqrt(1.0 + (piv / ww) ** 2)
    return ww / dd, piv / dd, dd


def rotate(cos, sin, a, b):
    """
    Apply a Givens rotation to the pair (a, b).

    a belongs to the incoming row and b to the triangle. Returns the new
    (a, b) = (cos*a - sin*b, cos*b + sin*a).
    """
    return cos * a - sin * b, cos * b + sin * a


class TriangularBand:
    """
    Upper triangular band matrix built by Givens rotations.

    Parameters
    ----------
    nrows : int
        Order of the square matrix.
    width : int
        Number of stored diagonals, the main one included.

    Attributes
    ----------
    band : ndarray, shape (nrows, width)
        band[i, d] holds A[i, i+d].
    """

    def __init__(self, nrows, width):
        self.nrows = nrows
        self.width = width
        self.band = np.zeros((nrows, width), dtype=float)

    def diagonal(self):
        return self.band[:, 0]

    def widened(self, width):
        """Return a copy with extra zero diagonals on the right."""
        out = TriangularBand(self.nrows, width)
        out.band[:, :self.width] = self.band
        return out

    def rotate_row(self, h, start, yi, z):
        """
        Rotate one observation row into the triangle.

        Parameters
        ----------
        h : array_like
            Nonzero part of the row, at most ``width`` entries. It covers
            columns start, start+1, ...
        start : int
            Column of h[0].
        yi : float
            Right hand side of the row.
        z : ndarray
            Right hand side of the triangle, updated in place.

        Returns
        -------
        yi : float
            The rotated right hand side of the row. Its square is the
            contribution of this row to the residual sum of squares.

        Notes
        -----
        The row is held in a window of ``width`` entries that slides one
        column to the right after every rotation. Entries of the triangle
        beyond the original span of the row fill the window in, so the
        rotations go on until the window is zero or the last row of the
        triangle is reached.
        """
        band = self.band
        width = self.width
        win = np.zeros(width, dtype=float)
        win[:len(h)] = h
        for j in range(start, self.nrows):
            if not win.any():
                break
            piv = win[0]
            if piv != 0.0:
                cos, sin, band[j, 0] = givens(piv, band[j, 0])
                yi, z[j] = rotate(cos, sin, yi, z[j])
                for d in range(1, min(width, self.nrows - j)):
                    win[d], band[j, d] = rotate(cos, sin, win[d], band[j, d])
            win[:-1] = win[1:]
            win[-1] = 0.0
        return yi

    def back_substitute(self, z):
        """
        Solve A c = z by backward substitution.

        Parameters
        ----------
        z : array_like, shape (nrows,)
            Right hand side.

        Returns
        -------
        c : ndarray, shape (nrows,)
        """
        n = self.nrows
        band = self.band
        c = np.zeros(n, dtype=float)
        c[n - 1] = z[n - 1] / band[n - 1, 0]
        for i in range(n - 2, -1, -1):
            store = z[i]
            for d in range(1, min(self.width - 1, n - 1 - i) + 1):
                store -= c[i + d] * band[i, d]
            c[i] = store / band[i, 0]
        return c
