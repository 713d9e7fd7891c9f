# -*- coding: utf-8 -*-
# Loftus/geometry/profiles/prepare.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Bring raw closed profile curves into the shape the loft engine expects: the same number
of points on every profile, the same winding, and point i at the same relative position
on every cross-section.

Main Tasks
----------
    1. `resample_profile`: closed, arc-length-uniform resampling to a fixed point count.
    2. `profile_normal` / `orient_profile`: Newell normal of a closed polyline; reverse
       profiles wound clockwise about a reference normal (start point kept).
    3. `align_profile`: cyclic start-point shift that best matches a reference profile,
       by start-vector direction or by summed squared distance (optionally also trying
       the reversed order).
    4. `prepare_profiles`: resample → orient → align each profile to its predecessor.

Notes
-----
- Profiles are treated as closed; a repeated closing point is dropped before resampling.
- Alignment requires both profiles to have the same number of points.
"""

import logging
from typing import List, Optional, Sequence
import numpy as np
from ..errors import InvalidInputSize
from ..ops.basic import _assert_xyz, as_xyz, drop_consecutive_duplicates
from ..ops.resample import linear_interpolate_curve

__all__ = [
    "ALIGN_METHODS",
    "resample_profile",
    "profile_normal",
    "orient_profile",
    "align_profile",
    "prepare_profiles",
]

logger = logging.getLogger(__name__)

ALIGN_METHODS = ("vector", "distance")


def _open_ring(points: np.ndarray, tol: float = 1e-12) -> np.ndarray:
    pts = drop_consecutive_duplicates(points, tol=tol)
    if pts.shape[0] > 1 and np.allclose(pts[0], pts[-1], atol=tol, rtol=0.0):
        pts = pts[:-1]
    return pts


def resample_profile(points, num_pts: int) -> np.ndarray:
    """
    Resample a closed profile to `num_pts` points evenly spaced in arclength.

    The first output point is the first input point. Consecutive duplicates and a
    repeated closing point are removed first.

    Raises
    ------
    InvalidInputSize
        If fewer than 2 distinct points remain or num_pts <= 2.
    """
    pts = _open_ring(as_xyz(points))
    return linear_interpolate_curve(pts, int(num_pts), closed=True)


def profile_normal(points: np.ndarray) -> np.ndarray:
    """
    Area-weighted normal of a closed polyline (Newell's method), not normalized.

    Its direction follows the right-hand rule for the point order; its norm is twice the
    enclosed area for a planar profile.
    """
    _assert_xyz(points)
    c = points.mean(axis=0)
    p = points - c
    q = np.roll(p, -1, axis=0)
    return np.cross(p, q).sum(axis=0)


def orient_profile(points, normal) -> np.ndarray:
    """
    Return the profile wound counter-clockwise about `normal`.

    A clockwise profile is reversed while keeping its first point first
    ([p0, p_{n-1}, ..., p1]), so an existing start alignment survives.
    """
    pts = as_xyz(points)
    nrm = np.asarray(normal, dtype=np.float64).reshape(3)
    if float(np.dot(profile_normal(pts), nrm)) < 0.0:
        pts = np.vstack((pts[:1], pts[:0:-1]))
    return pts


def _best_shift_by_distance(reference: np.ndarray, ring: np.ndarray):
    n = reference.shape[0]
    scores = np.array([np.sum((reference - np.roll(ring, -k, axis=0)) ** 2) for k in range(n)])
    k = int(np.argmin(scores))
    return np.roll(ring, -k, axis=0), float(scores[k])


def _best_shift_by_vector(reference: np.ndarray, ring: np.ndarray) -> np.ndarray:
    u = reference[0] - reference.mean(axis=0)
    v = ring - ring.mean(axis=0)
    nu = np.linalg.norm(u)
    nv = np.linalg.norm(v, axis=1)
    if nu == 0.0 or np.any(nv == 0.0):
        # start vector undefined: fall back to the closest point
        k = int(np.argmin(np.linalg.norm(ring - reference[0], axis=1)))
    else:
        k = int(np.argmax(v @ u / (nv * nu)))
    return np.roll(ring, -k, axis=0)


def align_profile(reference, source, method: str = "distance", allow_flip: bool = False) -> np.ndarray:
    """
    Cyclically shift `source` so that its points line up with `reference`.

    Parameters
    ----------
    reference, source : array-like
        Closed profiles with the same number of points.
    method : {"vector", "distance"}
        "vector": the new start is the point whose centroid direction is closest to the
        centroid → reference[0] direction.
        "distance": the shift minimizing the summed squared distance to `reference`.
    allow_flip : bool
        With "distance", also try the reversed point order and keep the better one.

    Returns
    -------
    np.ndarray
        New (N, 3) array.

    Raises
    ------
    InvalidInputSize
        If the profiles differ in size.
    ValueError
        For an unknown method.
    """
    ref = as_xyz(reference)
    src = as_xyz(source)
    if ref.shape != src.shape:
        raise InvalidInputSize(
            "Aligned profiles must have the same number of points.",
            {"reference": int(ref.shape[0]), "source": int(src.shape[0])},
        )
    if method not in ALIGN_METHODS:
        raise ValueError("Unknown align method {!r}; expected one of {}.".format(method, ALIGN_METHODS))

    if method == "vector":
        return _best_shift_by_vector(ref, src)

    aligned, score = _best_shift_by_distance(ref, src)
    if allow_flip:
        flipped, score_flip = _best_shift_by_distance(ref, src[::-1].copy())
        if score_flip < score:
            return flipped
    return aligned


def prepare_profiles(
    profiles: Sequence,
    num_pts: int,
    align: Optional[str] = "distance",
    normal=None,
    allow_flip: bool = False,
) -> List[np.ndarray]:
    """
    Resample, orient and align a profile set for lofting.

    Parameters
    ----------
    profiles : sequence of array-like
        Closed profiles in sweep order.
    num_pts : int
        Points per prepared profile.
    align : {"vector", "distance"} or None
        Alignment method; None keeps the resampled start points.
    normal : array-like, optional
        Reference winding axis. Defaults to the Newell normal of the first profile, so
        every profile is wound like the first one.
    allow_flip : bool
        Passed to `align_profile`.

    Returns
    -------
    list of np.ndarray
        (num_pts, 3) profiles; profile k is aligned to profile k-1.
    """
    if profiles is None or len(profiles) == 0:
        raise InvalidInputSize("No profiles to prepare.")

    out: List[np.ndarray] = []
    ref_normal = None if normal is None else np.asarray(normal, dtype=np.float64)
    for k, prof in enumerate(profiles):
        try:
            pts = resample_profile(prof, num_pts)
        except InvalidInputSize as e:
            raise e.with_context(profile=k) from e
        if ref_normal is None:
            ref_normal = profile_normal(pts)
        pts = orient_profile(pts, ref_normal)
        if out and align is not None:
            pts = align_profile(out[-1], pts, method=align, allow_flip=allow_flip)
        out.append(pts)

    logger.info("[prepare_profiles] %d profiles prepared with %d points (align=%s)", len(out), int(num_pts), align)
    return out
