# -*- coding: utf-8 -*-
# Loftus/geometry/splines/kochanek.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
One-dimensional interpolating Kochanek–Bartels spline (local tension, bias and continuity
control) and the helper that builds the three longitudinal splines (x, y, z) through one
cross-section index of every profile.

Main Tasks
----------
    1. Collect (t, value) control points; keep them sorted by t.
    2. Fit cubic Hermite segments with Kochanek tangents, corrected for non-uniform
       spacing, and configurable end constraints.
    3. Evaluate the spline (scalar or vectorized), clamped to [t_first, t_last].
    4. `fit_longitudinal_splines`: x/y/z splines over (profile index, coord[index]).

End constraints
---------------
    0 CHORD            end tangent = difference of the two end values
    1 SLOPE            end tangent = value
    2 SECOND_DERIV     end second derivative = value (0 gives a natural end)
    3 SECOND_RATIO     end second derivative = value * second derivative at the first
                       interior node

Notes
-----
- With tension = bias = continuity = 0 interior tangents reduce to the Catmull–Rom
  average of the adjacent chords; with natural ends linear data stays exactly linear.
- Two control points give a straight line regardless of the constraints.
- Segment polynomials use the local parameter s = (t - t_i) / (t_{i+1} - t_i) in [0, 1].
"""

from typing import List, Sequence, Tuple
import numpy as np
from ..errors import InvalidInputSize

__all__ = [
    "CHORD", "SLOPE", "SECOND_DERIV", "SECOND_RATIO",
    "KochanekSpline", "fit_longitudinal_splines",
]

CHORD = 0
SLOPE = 1
SECOND_DERIV = 2
SECOND_RATIO = 3

_CONSTRAINTS = (CHORD, SLOPE, SECOND_DERIV, SECOND_RATIO)
_EPS = 1e-12


class KochanekSpline:
    """
    Interpolating Kochanek spline y(t).

    Parameters
    ----------
    tension, bias, continuity : float
        Shape controls applied at every interior node.
    left_constraint, right_constraint : int
        End conditions (CHORD, SLOPE, SECOND_DERIV or SECOND_RATIO).
    left_value, right_value : float
        Values used by the end conditions.

    Attributes
    ----------
    coefficients : np.ndarray or None
        (size, 4) cubic coefficients [c0, c1, c2, c3] per node after `fit()`.
    """

    def __init__(
        self,
        tension: float = 0.0,
        bias: float = 0.0,
        continuity: float = 0.0,
        *,
        left_constraint: int = SECOND_DERIV,
        left_value: float = 0.0,
        right_constraint: int = SECOND_DERIV,
        right_value: float = 0.0,
    ):
        if left_constraint not in _CONSTRAINTS or right_constraint not in _CONSTRAINTS:
            raise ValueError(
                "End constraints must be one of {}; got ({}, {}).".format(
                    _CONSTRAINTS, left_constraint, right_constraint
                )
            )
        self.tension = float(tension)
        self.bias = float(bias)
        self.continuity = float(continuity)
        self.left_constraint = int(left_constraint)
        self.left_value = float(left_value)
        self.right_constraint = int(right_constraint)
        self.right_value = float(right_value)

        self._t: List[float] = []
        self._y: List[float] = []
        self.coefficients = None

    # --------------------
    # Control points
    # --------------------
    @property
    def num_points(self) -> int:
        return len(self._t)

    def add_point(self, t: float, value: float) -> None:
        """Insert a control point; an existing point at the same t is replaced."""
        t = float(t)
        i = int(np.searchsorted(self._t, t)) if self._t else 0
        if i < len(self._t) and self._t[i] == t:
            self._y[i] = float(value)
        else:
            self._t.insert(i, t)
            self._y.insert(i, float(value))
        self.coefficients = None

    def remove_all_points(self) -> None:
        self._t = []
        self._y = []
        self.coefficients = None

    @property
    def knots(self) -> np.ndarray:
        return np.asarray(self._t, dtype=np.float64)

    # --------------------
    # Fitting
    # --------------------
    def fit(self) -> np.ndarray:
        """
        Compute per-node cubic coefficients.

        Raises
        ------
        InvalidInputSize
            If fewer than 2 control points were added.
        """
        size = self.num_points
        if size < 2:
            raise InvalidInputSize("Spline requires at least 2 points.", {"num_points": size})

        x = np.asarray(self._t, dtype=np.float64)
        y = np.asarray(self._y, dtype=np.float64)
        coef = np.zeros((size, 4), dtype=np.float64)

        if size == 2:
            coef[0] = (y[0], y[1] - y[0], 0.0, 0.0)
            coef[1] = (y[1], y[1] - y[0], 0.0, 0.0)
            self.coefficients = coef
            return coef

        N = size - 1
        tb, bb, cc = self.tension, self.bias, self.continuity

        # Interior tangents: [1] outgoing (destination), [2] incoming (source)
        for i in range(1, N):
            cs = y[i] - y[i - 1]
            cd = y[i + 1] - y[i]

            ds = (cs * ((1 - tb) * (1 - cc) * (1 + bb)) / 2.0
                  + cd * ((1 - tb) * (1 + cc) * (1 - bb)) / 2.0)
            dd = (cs * ((1 - tb) * (1 + cc) * (1 + bb)) / 2.0
                  + cd * ((1 - tb) * (1 - cc) * (1 - bb)) / 2.0)

            # non-uniform spacing
            n0 = x[i] - x[i - 1]
            n1 = x[i + 1] - x[i]
            ds *= 2.0 * n0 / (n0 + n1)
            dd *= 2.0 * n1 / (n0 + n1)

            coef[i, 0] = y[i]
            coef[i, 1] = dd
            coef[i, 2] = ds

        coef[0, 0] = y[0]
        coef[N, 0] = y[N]
        coef[0, 1] = self._left_tangent(y, coef)
        coef[N, 2] = self._right_tangent(y, coef, N)

        # c2 = -3P_i + 3P_i+1 - 2DD_i - DS_i+1 ; c3 = 2P_i - 2P_i+1 + DD_i + DS_i+1
        for i in range(N):
            coef[i, 2] = -3 * y[i] + 3 * y[i + 1] - 2 * coef[i, 1] - coef[i + 1, 2]
            coef[i, 3] = 2 * y[i] - 2 * y[i + 1] + coef[i, 1] + coef[i + 1, 2]

        self.coefficients = coef
        return coef

    def _left_tangent(self, y: np.ndarray, coef: np.ndarray) -> float:
        kind, value = self.left_constraint, self.left_value
        if kind == CHORD:
            return float(y[1] - y[0])
        if kind == SLOPE:
            return value
        if kind == SECOND_DERIV:
            return (6 * (y[1] - y[0]) - 2 * coef[1, 2] - value) / 4.0
        if abs(value + 2.0) > _EPS:
            return (3 * (1 + value) * (y[1] - y[0]) - (1 + 2 * value) * coef[1, 2]) / (2 + value)
        return 0.0

    def _right_tangent(self, y: np.ndarray, coef: np.ndarray, N: int) -> float:
        kind, value = self.right_constraint, self.right_value
        if kind == CHORD:
            return float(y[N] - y[N - 1])
        if kind == SLOPE:
            return value
        if kind == SECOND_DERIV:
            return (6 * (y[N] - y[N - 1]) - 2 * coef[N - 1, 1] + value) / 4.0
        if abs(value + 2.0) > _EPS:
            return (3 * (1 + value) * (y[N] - y[N - 1]) - (1 + 2 * value) * coef[N - 1, 1]) / (2 + value)
        return 0.0

    # --------------------
    # Evaluation
    # --------------------
    def evaluate(self, t):
        """
        Evaluate the spline at scalar or array `t`, clamped to the knot range.

        Returns a float for scalar input and an np.ndarray otherwise.
        """
        if self.coefficients is None:
            self.fit()
        x = self.knots
        coef = self.coefficients

        scalar = np.ndim(t) == 0
        tt = np.clip(np.atleast_1d(np.asarray(t, dtype=np.float64)), x[0], x[-1])

        idx = np.searchsorted(x, tt, side="right") - 1
        idx = np.clip(idx, 0, x.shape[0] - 2)
        s = (tt - x[idx]) / (x[idx + 1] - x[idx])

        c = coef[idx]
        out = ((c[:, 3] * s + c[:, 2]) * s + c[:, 1]) * s + c[:, 0]
        return float(out[0]) if scalar else out

    __call__ = evaluate


def fit_longitudinal_splines(
    profiles: Sequence[np.ndarray],
    index: int,
    config,
) -> Tuple[KochanekSpline, KochanekSpline, KochanekSpline]:
    """
    Build x, y, z splines through point `index` of every profile.

    Control points are (profile_number, profiles[profile_number][index, channel]) for
    profile_number = 0..len(profiles)-1. Shape controls and end constraints are read from
    `config` (a LoftConfig or any object with the same attributes).
    """
    splines = tuple(
        KochanekSpline(
            config.tension,
            config.bias,
            config.continuity,
            left_constraint=config.left_constraint,
            left_value=config.left_value,
            right_constraint=config.right_constraint,
            right_value=config.right_value,
        )
        for _ in range(3)
    )
    for n, profile in enumerate(profiles):
        pt = profile[index]
        for c in range(3):
            splines[c].add_point(n, pt[c])
    for sp in splines:
        sp.fit()
    return splines
