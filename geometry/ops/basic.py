# -*- coding: utf-8 -*-
# Loftus/geometry/ops/basic.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Foundational 3D polyline utilities shared by the resampler, the spectral smoother and the
loft engine. Provide owned working buffers, robust checks for input shape, consecutive
duplicate removal, curve length and cumulative arc-length parametrization.

Main Tasks
----------
    1. Allocate zero-filled (rows, cols) float64 working buffers (`create_array`).
    2. Validate inputs as (N,3) arrays; lift (N,2) profiles to z=0 (`as_xyz`).
    3. Compute curve length and cumulative arclength for open/closed polylines.

Notes
-----
- Functions do not re-order points and never mutate their inputs.
- For closed curves the closing segment (last → first) is included in the length and
  the parametrization gets one synthetic final sample at t = length.
"""

from typing import Optional
import numpy as np
from ..errors import AllocationFailure, InvalidInputSize

__all__ = [
    "create_array",
    "as_xyz",
    "drop_consecutive_duplicates",
    "curve_length",
    "cumulative_arclength",
]


def create_array(rows: int, cols: int) -> np.ndarray:
    """
    Allocate a zero-filled, C-contiguous (rows, cols) float64 buffer.

    The buffer is owned by the caller (the pipeline stage that asked for it) and is never
    shared between stages.

    Raises
    ------
    AllocationFailure
        If the shape is negative or the allocation fails.
    """
    if int(rows) < 0 or int(cols) < 0:
        raise AllocationFailure(
            "Invalid buffer shape.", {"rows": int(rows), "cols": int(cols)}
        )
    try:
        return np.zeros((int(rows), int(cols)), dtype=np.float64)
    except MemoryError:
        raise AllocationFailure(
            "Buffer allocation failed.", {"rows": int(rows), "cols": int(cols)}
        )


def _assert_xyz(points: Optional[np.ndarray], check_finite: bool = False) -> None:
    """
    Ensure `points` is a NumPy array of shape (N, 3).

    Raises
    ------
    InvalidInputSize
        If `points` is None or does not have shape (N, 3).
    ValueError
        If `check_finite` is set and NaN/Inf values are present.
    """
    if points is None:
        raise InvalidInputSize("No curve provided (points is None).")
    if points.ndim != 2 or points.shape[1] != 3:
        raise InvalidInputSize(
            "Expected (N,3) float array for points, got shape {}.".format(points.shape)
        )
    if check_finite and not np.isfinite(points).all():
        bad = np.argwhere(~np.isfinite(points))
        raise ValueError("Non-finite coordinates detected at indices: {}".format(bad.tolist()))


def as_xyz(points, check_finite: bool = True) -> np.ndarray:
    """
    Return `points` as a new (N,3) float64 array.

    (N,2) input is lifted to the z=0 plane; any other width is rejected.
    """
    pts = np.array(points, dtype=np.float64, copy=True)
    if pts.ndim == 2 and pts.shape[1] == 2:
        pts = np.column_stack((pts, np.zeros(pts.shape[0])))
    _assert_xyz(pts, check_finite=check_finite)
    return pts


def drop_consecutive_duplicates(pts: np.ndarray, tol: float = 0.0) -> np.ndarray:
    """
    Remove exact (or tolerance-close) consecutive duplicates.

    Zero-length segments give repeated arc-length samples, which the linear
    resampler tolerates but which waste profile points.
    """
    _assert_xyz(pts)
    if pts.shape[0] <= 1:
        return pts
    keep = [0]
    for i in range(1, pts.shape[0]):
        if not np.allclose(pts[i], pts[i - 1], atol=tol, rtol=0.0):
            keep.append(i)
    return pts[np.array(keep, dtype=int)]


def _segment_lengths(points: np.ndarray, closed: bool) -> np.ndarray:
    seg = np.linalg.norm(points[1:] - points[:-1], axis=1)
    if closed:
        seg = np.append(seg, np.linalg.norm(points[0] - points[-1]))
    return seg


def curve_length(points: np.ndarray, closed: bool = False) -> float:
    """
    Length of a 3D polyline.

    Sums the Euclidean distances between consecutive points; if `closed`, the distance
    from the last point back to the first is added.

    Raises
    ------
    InvalidInputSize
        If the array is malformed or has fewer than 2 points.
    """
    _assert_xyz(points)
    if points.shape[0] <= 1:
        raise InvalidInputSize(
            "Curve length needs at least 2 points.", {"n": int(points.shape[0])}
        )
    return float(np.sum(_segment_lengths(points, closed)))


def cumulative_arclength(points: np.ndarray, closed: bool = False) -> np.ndarray:
    """
    Cumulative arclength parametrization of an open or closed polyline.

    Returns
    -------
    np.ndarray
        Open:   S of length N with S[0] = 0 and S[-1] = total length.
        Closed: S of length N+1; S[N] = total length is the synthetic sample that maps
                back onto the first point.
        S is non-decreasing (strictly increasing without repeated points).
    """
    _assert_xyz(points)
    if points.shape[0] <= 1:
        raise InvalidInputSize(
            "Arc-length parametrization needs at least 2 points.", {"n": int(points.shape[0])}
        )
    return np.concatenate(([0.0], np.cumsum(_segment_lengths(points, closed))))
