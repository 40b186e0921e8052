"""Tests for the discontinuity jumps of the k th derivative"""

from math import factorial

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.interpolate import BSpline

from fitpack1d import _disc
from fitpack1d._disc import discontinuity_jumps
from fitpack1d._knots import open_clamped_knots


def test_linear_hat_functions():
    """For k=1 on unit spacing the jumps are the second differences"""
    t = open_clamped_knots(0.0, 2.0, 1, [1.0])
    assert_allclose(discontinuity_jumps(t, 1), [[1.0, -2.0, 1.0]])


@pytest.mark.parametrize("k", [1, 2, 3, 4])
def test_rows_sum_to_zero(k):
    """The k th derivative of a constant has no jumps"""
    t = open_clamped_knots(0.0, 3.0, k, [0.5, 1.25, 2.0, 2.2])
    b = discontinuity_jumps(t, k)
    assert b.shape == (4, k + 2)
    assert_allclose(b.sum(axis=1), 0.0, atol=1e-9 * np.abs(b).max())


@pytest.mark.parametrize("k", [1, 2, 3])
def test_matches_scipy_derivative_jumps(k):
    """Rows are scaled jumps of the k th derivative of the B splines"""
    t = open_clamped_knots(0.0, 3.0, k, [0.5, 1.25, 2.0])
    n = t.size
    nk1 = n - k - 1
    fac = (nk1 - k) / (t[nk1] - t[k])
    scale = (-1.0) ** (k + 1) / (factorial(k) * fac ** k)
    b = discontinuity_jumps(t, k)
    for r in range(n - 2 * k - 2):
        tau = t[r + k + 1]
        left = 0.5 * (t[r + k] + tau)
        right = 0.5 * (tau + t[r + k + 2])
        for j in range(k + 2):
            e = np.zeros(nk1)
            e[r + j] = 1.0
            d = BSpline(t, e, k).derivative(k)
            jump = d(right) - d(left)
            assert_allclose(b[r, j], jump * scale, rtol=1e-10)


def test_module_names_fitpack_routine():
    """The module docstring maps discontinuity_jumps to fpdisc"""
    assert "fpdisc -> discontinuity_jumps" in _disc.__doc__
