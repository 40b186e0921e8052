"""Tests for Givens rotations and the triangular band"""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.linalg import solve_triangular

from fitpack1d._banded import TriangularBand, givens, rotate


def _band_rows(rng, m, ncols, width, shuffle=False):
    """Random rows with width nonzeros, every column covered"""
    starts = np.concatenate([
        np.arange(ncols - width + 1),
        rng.integers(0, ncols - width + 1, m - (ncols - width + 1)),
    ])
    starts = np.sort(starts)
    if shuffle:
        rng.shuffle(starts)
    values = rng.uniform(0.5, 2.0, (m, width))
    rhs = rng.standard_normal(m)
    dense = np.zeros((m, ncols))
    for i, start in enumerate(starts):
        dense[i, start:start + width] = values[i]
    return starts, values, rhs, dense


class TestGivens:
    """Tests for givens and rotate"""

    def test_three_four_five(self):
        """Rotating 3 against 4 gives cos 0.8, sin 0.6 and diagonal 5"""
        cos, sin, dd = givens(3.0, 4.0)
        assert_allclose([cos, sin, dd], [0.8, 0.6, 5.0])

    def test_large_pivot(self):
        """A pivot larger than the diagonal is handled"""
        cos, sin, dd = givens(4.0, 3.0)
        assert_allclose([cos, sin, dd], [0.6, 0.8, 5.0])

    def test_zero_pair(self):
        """A zero pivot against a zero diagonal is the identity"""
        assert givens(0.0, 0.0) == (1.0, 0.0, 0.0)

    @pytest.mark.parametrize("scale", [1e-200, 1e200])
    def test_no_underflow_or_overflow(self, scale):
        """Tiny and huge pairs keep a finite nonzero diagonal"""
        cos, sin, dd = givens(3.0 * scale, 4.0 * scale)
        assert_allclose([cos, sin, dd / scale], [0.8, 0.6, 5.0])

    def test_rotation_annihilates_pivot(self):
        """The rotation moves the pivot into the diagonal"""
        cos, sin, dd = givens(3.0, 4.0)
        a, b = rotate(cos, sin, 3.0, 4.0)
        assert abs(a) < 1e-15
        assert_allclose(b, dd)

    def test_rotation_preserves_norm(self):
        """Rotations are orthogonal"""
        cos, sin, _ = givens(-1.5, 2.5)
        a, b = rotate(cos, sin, 0.7, -1.1)
        assert_allclose(a * a + b * b, 0.7 ** 2 + 1.1 ** 2)


class TestTriangularBand:
    """Tests for the band built by row rotations"""

    def _least_squares(self, shuffle):
        rng = np.random.default_rng(1234)
        m, ncols, width = 25, 7, 3
        starts, values, rhs, dense = _band_rows(rng, m, ncols, width,
                                                shuffle=shuffle)
        band = TriangularBand(ncols, width)
        z = np.zeros(ncols)
        fp = 0.0
        for start, row, yi in zip(starts, values, rhs):
            yi = band.rotate_row(row.copy(), start, yi, z)
            fp += yi * yi
        c = band.back_substitute(z)
        expected, residual, _, _ = np.linalg.lstsq(dense, rhs, rcond=None)
        return c, fp, expected, residual[0]

    def test_sorted_rows_solve_least_squares(self):
        """Rows rotated in column order solve the least squares problem"""
        c, fp, expected, residual = self._least_squares(shuffle=False)
        assert_allclose(c, expected, rtol=1e-10, atol=1e-12)
        assert_allclose(fp, residual, rtol=1e-10)

    def test_unsorted_rows_solve_least_squares(self):
        """Rows that fill in beyond their span are rotated to the end"""
        c, fp, expected, residual = self._least_squares(shuffle=True)
        assert_allclose(c, expected, rtol=1e-10, atol=1e-12)
        assert_allclose(fp, residual, rtol=1e-10)

    def test_back_substitute_matches_scipy(self):
        """Backward substitution agrees with solve_triangular"""
        rng = np.random.default_rng(7)
        n, width = 9, 4
        band = TriangularBand(n, width)
        band.band[:] = rng.uniform(0.5, 1.5, (n, width))
        dense = np.zeros((n, n))
        for i in range(n):
            for d in range(width):
                if i + d < n:
                    dense[i, i + d] = band.band[i, d]
        z = rng.standard_normal(n)
        assert_allclose(band.back_substitute(z),
                        solve_triangular(dense, z, lower=False),
                        rtol=1e-12)

    def test_widened_copies(self):
        """A widened band keeps the entries and adds zero diagonals"""
        band = TriangularBand(3, 2)
        band.band[:] = [[1.0, 2.0], [3.0, 4.0], [5.0, 0.0]]
        wide = band.widened(3)
        assert wide.band.shape == (3, 3)
        assert_allclose(wide.band[:, :2], band.band)
        assert np.all(wide.band[:, 2] == 0.0)
        wide.band[0, 0] = -1.0
        assert band.band[0, 0] == 1.0
        assert_allclose(wide.diagonal(), [-1.0, 3.0, 5.0])
