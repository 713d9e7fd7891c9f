# -*- coding: utf-8 -*-
# Loftus/geometry/ops/resample.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Piecewise-linear resampling of scalar series and 3D polylines. A curve is reparametrized
by cumulative arclength and each coordinate channel is interpolated independently at
evenly spaced parameter values, which yields points evenly spaced along the curve.

Main Tasks
----------
    1. `linear_interpolate`: 1D interpolation of (t, value) samples at t0 + k*dt with
       clamping to the boundary values outside the sampled domain.
    2. `linear_interpolate_curve`: arc-length-uniform resampling of an open or closed
       (N,3) polyline to a requested number of points.

Notes
-----
- Open curves: dt = L / (num_out - 1), so the first and last input points are kept.
- Closed curves: dt = L / num_out and a synthetic final sample (equal to the first point,
  at t = L) closes the parametrization; the output does not repeat the first point.
- Pure and deterministic; channels are independent.
"""

import numpy as np
from .basic import _assert_xyz, create_array, cumulative_arclength
from ..errors import InvalidInputSize, InterpolationRangeError

__all__ = ["linear_interpolate", "linear_interpolate_curve"]


def linear_interpolate(
    t: np.ndarray,
    values: np.ndarray,
    t0: float,
    dt: float,
    num_out: int,
) -> np.ndarray:
    """
    Interpolate samples (t_i, values_i) at t0 + k*dt, k = 0..num_out-1.

    Parameters
    ----------
    t : np.ndarray
        Non-decreasing sample parameters, shape (N,).
    values : np.ndarray
        Sample values, shape (N,).
    t0, dt : float
        First query parameter and query spacing.
    num_out : int
        Number of query points.

    Returns
    -------
    np.ndarray
        (num_out,) interpolated values. Queries at or before t[0] return values[0];
        queries at or after t[-1] return values[-1] (clamped, not extrapolated).

    Raises
    ------
    InvalidInputSize
        If there are no samples, the arrays differ in length, or num_out <= 0.
    InterpolationRangeError
        If a query inside the domain cannot be bracketed (NaN query or a decreasing
        parametrization).
    """
    t = np.asarray(t, dtype=np.float64)
    values = np.asarray(values, dtype=np.float64)
    n = t.shape[0]
    if n <= 0 or int(num_out) <= 0:
        raise InvalidInputSize(
            "Interpolation needs samples and at least one output point.",
            {"n": int(n), "num_out": int(num_out)},
        )
    if values.shape[0] != n:
        raise InvalidInputSize(
            "Parameter and value arrays differ in length.",
            {"n_t": int(n), "n_values": int(values.shape[0])},
        )
    if n > 1 and np.any(np.diff(t) < 0.0):
        raise InterpolationRangeError("Sample parameters must be non-decreasing.")

    q = t0 + dt * np.arange(int(num_out), dtype=np.float64)
    out = np.empty(int(num_out), dtype=np.float64)

    below = q <= t[0]
    above = (q >= t[-1]) & ~below
    inside = ~(below | above)

    out[below] = values[0]
    out[above] = values[-1]

    if np.any(inside):
        qi = q[inside]
        # first sample strictly greater than the query
        j = np.searchsorted(t, qi, side="right")
        bad = (j < 1) | (j >= n)
        if np.any(bad):
            k = int(np.flatnonzero(inside)[np.flatnonzero(bad)[0]])
            raise InterpolationRangeError(
                "Error interpolating point.",
                {"point": k, "t": float(q[k]), "t_first": float(t[0]), "t_last": float(t[-1])},
            )
        m = (values[j] - values[j - 1]) / (t[j] - t[j - 1])
        out[inside] = m * (qi - t[j - 1]) + values[j - 1]

    return out


def linear_interpolate_curve(
    points: np.ndarray,
    num_out_pts: int,
    closed: bool = False,
) -> np.ndarray:
    """
    Resample a 3D polyline to `num_out_pts` points evenly spaced in arclength.

    Parameters
    ----------
    points : np.ndarray
        (N,3) polyline, N >= 2.
    num_out_pts : int
        Number of output points, > 2.
    closed : bool, optional
        Treat the curve as closed (last point connects back to the first).

    Returns
    -------
    np.ndarray
        New (num_out_pts, 3) array.

    Raises
    ------
    InvalidInputSize
        If N <= 1 or num_out_pts <= 2.
    InterpolationRangeError
        Propagated from `linear_interpolate`.
    """
    _assert_xyz(points)
    n = points.shape[0]
    if n <= 1 or int(num_out_pts) <= 2:
        raise InvalidInputSize(
            "Linear curve interpolation needs N > 1 and num_out_pts > 2.",
            {"n": int(n), "num_out_pts": int(num_out_pts)},
        )
    num_out_pts = int(num_out_pts)

    t = cumulative_arclength(points, closed=closed)
    length = float(t[-1])
    if closed:
        samples = np.vstack((points, points[0]))
        dt = length / num_out_pts
    else:
        samples = points
        dt = length / (num_out_pts - 1)

    out = create_array(num_out_pts, 3)
    for c in range(3):
        out[:, c] = linear_interpolate(t, samples[:, c], t[0], dt, num_out_pts)
    return out
