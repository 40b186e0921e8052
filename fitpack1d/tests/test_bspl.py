"""Tests for B spline basis evaluation"""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.interpolate import BSpline

from fitpack1d import _bspl
from fitpack1d._bspl import basis_funs, data_spans, spline_at_data
from fitpack1d._knots import open_clamped_knots


@pytest.mark.parametrize("k", [1, 2, 3, 4, 5])
def test_partition_of_unity(k):
    """The nonzero basis functions sum to one"""
    t = open_clamped_knots(0.0, 1.0, k, [0.2, 0.5, 0.7])
    x = np.linspace(0.0, 1.0, 31)
    for xi, l in zip(x, data_spans(x, t, k)):
        h = basis_funs(t, k, xi, l)
        assert h.shape == (k + 1,)
        assert np.all(h >= -1e-15)
        assert_allclose(h.sum(), 1.0)


@pytest.mark.parametrize("k", [1, 2, 3, 5])
def test_basis_matches_scipy(k):
    """basis_funs agrees with scipy BSpline basis elements"""
    t = open_clamped_knots(-1.0, 2.0, k, [-0.4, 0.1, 0.3, 1.2])
    nk1 = t.size - k - 1
    x = np.linspace(-1.0, 2.0, 40)[1:-1]
    for xi, l in zip(x, data_spans(x, t, k)):
        h = basis_funs(t, k, xi, l)
        for i in range(k + 1):
            e = np.zeros(nk1)
            e[l - k + i] = 1.0
            assert_allclose(h[i], BSpline(t, e, k)(xi), atol=1e-13)


class TestDataSpans:
    """Tests for the knot interval search"""

    t = open_clamped_knots(0.0, 4.0, 3, [1.0, 2.0, 3.0])

    def test_interval_contains_point(self):
        """Every sample lies in its knot interval"""
        x = np.linspace(0.0, 3.99, 25)
        for xi, l in zip(x, data_spans(x, self.t, 3)):
            assert self.t[l] <= xi < self.t[l + 1]

    def test_knot_starts_new_interval(self):
        """A sample on an interior knot belongs to the interval on its right"""
        spans = data_spans(np.array([0.5, 1.0, 2.0]), self.t, 3)
        assert list(spans) == [3, 4, 5]

    def test_last_interval_closed(self):
        """The right end belongs to the last interval"""
        spans = data_spans(np.array([3.5, 4.0]), self.t, 3)
        assert list(spans) == [6, 6]


def test_spline_at_data_matches_scipy():
    """Cached basis values reproduce the spline"""
    k = 3
    t = open_clamped_knots(0.0, 5.0, k, [1.0, 2.5, 4.0])
    c = np.array([1.0, -2.0, 0.5, 3.0, 1.5, -1.0, 2.0])
    x = np.linspace(0.0, 5.0, 17)
    spans = data_spans(x, t, k)
    q = np.array([basis_funs(t, k, xi, l) for xi, l in zip(x, spans)])
    assert_allclose(spline_at_data(c, q, spans, k), BSpline(t, c, k)(x),
                    atol=1e-12)


def test_module_names_fitpack_routines():
    """The module docstring maps the functions to fpbspl"""
    assert "fpbspl -> basis_funs" in _bspl.__doc__
