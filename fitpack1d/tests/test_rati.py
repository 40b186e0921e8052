"""Tests for the rational root update of the smoothing parameter"""

import numpy as np
from numpy.testing import assert_allclose

from fitpack1d import _rati
from fitpack1d._rati import fprati_next


def f(p):
    """Convex decreasing rational function with its zero at p = 3"""
    return (-2.0 * p + 6.0) / (p + 1.0)


def test_exact_for_rational_function():
    """Three points of a rational function give its zero"""
    p, p1, f1, p3, f3 = fprati_next(0.0, f(0.0), 1.0, f(1.0), 10.0, f(10.0))
    assert_allclose(p, 3.0)
    assert (p1, f1) == (1.0, f(1.0))
    assert (p3, f3) == (10.0, f(10.0))


def test_infinite_upper_end():
    """With p3 = inf the limit of f is used"""
    p, p1, f1, p3, f3 = fprati_next(0.0, f(0.0), 1.0, f(1.0), np.inf, -2.0)
    assert_allclose(p, 3.0)
    assert (p1, f1) == (1.0, f(1.0))
    assert np.isinf(p3)


def test_negative_middle_value_moves_upper_end():
    """A negative f2 replaces the upper end of the bracket"""
    p, p1, f1, p3, f3 = fprati_next(0.0, f(0.0), 5.0, f(5.0), 10.0, f(10.0))
    assert_allclose(p, 3.0)
    assert (p1, f1) == (0.0, f(0.0))
    assert (p3, f3) == (5.0, f(5.0))
    assert f1 > 0.0 > f3


def test_module_names_fitpack_routine():
    """The module docstring names fprati"""
    assert "fprati" in _rati.__doc__
