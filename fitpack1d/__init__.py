"""
Univariate smoothing and interpolating B splines in the manner of FITPACK.

Low level functions report every outcome through a FitStatus code:

- curfit_python: fit a spline with automatic or fixed knots
- splev_python: evaluate a spline at sorted points
- workspace_size: FITPACK buffer sizes for curfit

High level objects raise FitpackError instead:

- CurveSplineFit: fitting session for one curve
- Spline: fitted spline, callable
"""

from ._logging import configure_logging, get_logger
from ._status import FitMode, FitpackError, FitStatus
from .curfit_python import (CurfitResult, FitState, curfit_python,
                            workspace_size)
from .curve_fit import CurveSplineFit, Spline
from .splev_python import splev_python

__all__ = [
    "CurfitResult",
    "CurveSplineFit",
    "FitMode",
    "FitState",
    "FitStatus",
    "FitpackError",
    "Spline",
    "configure_logging",
    "curfit_python",
    "get_logger",
    "splev_python",
    "workspace_size",
]

__version__ = "0.1.0"
