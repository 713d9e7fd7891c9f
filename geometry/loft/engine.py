# -*- coding: utf-8 -*-
# Loftus/geometry/loft/engine.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Drive the per-index loft loop: for every cross-section index, fit longitudinal splines
through that point of every profile, sample them along the sweep, optionally low-pass
the sampled curve and hand all curves to the mesh assembler.

Main Tasks
----------
    1. Validate the profile set against the config (>= 2 profiles, enough points each).
    2. Per index i: Kochanek x/y/z splines over (profile number, coord[i]).
    3. Sample directly at evenly spaced parameters in [0, num_profiles-1], or densely
       followed by an arc-length-uniform linear resample.
    4. Optional FFT smoothing of the open curve through its mirrored (doubled) sequence,
       with the end points pinned back and a final resample.
    5. Assemble the tube (`loft_profiles`).

Notes
-----
- Each stage failure aborts the loft; the raised LoftError keeps its type and gains
  `stage` ("spline", "sample", "resample", "smooth") and `index` context.
- No state survives a call; equal inputs give bit-identical outputs.
"""

import logging
from typing import Optional, Sequence
import numpy as np
from ..errors import InvalidInputSize, LoftError
from ..ops.basic import as_xyz, create_array
from ..ops.resample import linear_interpolate_curve
from ..ops.spectral import mirror_ring, smooth_curve
from ..splines.kochanek import fit_longitudinal_splines
from .assembler import LoftedSurface, assemble_surface
from .config import LoftConfig

__all__ = ["check_profiles", "sample_ring", "sample_rings", "loft_profiles"]

logger = logging.getLogger(__name__)


def check_profiles(profiles: Sequence, config: LoftConfig) -> list:
    """
    Return the profiles as (num_points_per_profile, 3) float64 arrays.

    Only the first `config.num_points_per_profile` points of every profile are kept.

    Raises
    ------
    InvalidInputSize
        If fewer than 2 profiles are given, a profile is not (M,2)/(M,3), or a profile
        has fewer than `num_points_per_profile` points.
    """
    if profiles is None or len(profiles) < 2:
        raise InvalidInputSize(
            "Lofting needs at least 2 profiles.",
            {"num_profiles": 0 if profiles is None else len(profiles)},
        )
    n_pts = config.num_points_per_profile
    out = []
    for k, prof in enumerate(profiles):
        try:
            pts = as_xyz(prof)
        except InvalidInputSize as e:
            raise e.with_context(profile=k) from e
        if pts.shape[0] < n_pts:
            raise InvalidInputSize(
                "Profile has fewer points than num_points_per_profile.",
                {"profile": k, "num_points": int(pts.shape[0]), "num_points_per_profile": n_pts},
            )
        out.append(pts[:n_pts])
    return out


def sample_ring(profiles: Sequence[np.ndarray], index: int, config: LoftConfig) -> np.ndarray:
    """
    Sample the longitudinal curve through point `index` of every profile.

    Returns
    -------
    np.ndarray
        (num_out_pts_along_length, 3) points along the sweep.
    """
    stage = "spline"
    try:
        splines = fit_longitudinal_splines(profiles, index, config)

        stage = "sample"
        t_end = float(len(profiles) - 1)
        if config.use_linear_sample_along_length:
            n_eval = config.num_linear_pts_along_length
        else:
            n_eval = config.num_out_pts_along_length
        t = np.linspace(0.0, t_end, n_eval)
        ring = create_array(n_eval, 3)
        for c in range(3):
            ring[:, c] = splines[c].evaluate(t)

        if config.use_linear_sample_along_length:
            stage = "resample"
            ring = linear_interpolate_curve(ring, config.num_out_pts_along_length, closed=False)

        if config.use_fft:
            stage = "smooth"
            ring = _smooth_open_ring(ring, config)
    except LoftError as e:
        raise e.with_context(stage=stage, index=int(index)) from e
    return ring


def _smooth_open_ring(ring: np.ndarray, config: LoftConfig) -> np.ndarray:
    # Doubled sequence ring + reversed ring is periodic; smooth it, keep the first half.
    n = ring.shape[0]
    doubled = mirror_ring(ring)
    smoothed = smooth_curve(
        doubled,
        config.num_modes,
        2 * n,
        closed=False,
        num_interp_pts=config.num_interp_pts,
    )
    smoothed[0] = ring[0]
    smoothed[n - 1] = ring[n - 1]
    return linear_interpolate_curve(smoothed[:n], n, closed=False)


def sample_rings(profiles: Sequence, config: Optional[LoftConfig] = None) -> np.ndarray:
    """
    Sample one longitudinal curve per cross-section index.

    Returns
    -------
    np.ndarray
        (num_points_per_profile, num_out_pts_along_length, 3) array.
    """
    config = config or LoftConfig()
    profiles = check_profiles(profiles, config)

    n_seg = config.num_points_per_profile
    out = np.empty((n_seg, config.num_out_pts_along_length, 3), dtype=np.float64)
    for i in range(n_seg):
        out[i] = sample_ring(profiles, i, config)
        logger.debug("[sample_rings] index %d sampled", i)
    return out


def loft_profiles(profiles: Sequence, config: Optional[LoftConfig] = None, **overrides) -> LoftedSurface:
    """
    Loft a surface through an ordered set of profiles.

    Parameters
    ----------
    profiles : sequence of array-like
        Ordered cross-sections, each (M,3) (or (M,2), lifted to z=0); point i must
        correspond across profiles.
    config : LoftConfig, optional
        Loft parameters; defaults to LoftConfig().
    **overrides
        Per-call parameter overrides (aliases allowed), applied on top of `config`.

    Returns
    -------
    LoftedSurface
        num_out_pts_along_length * num_points_per_profile points and
        2 * (num_out_pts_along_length - 1) * num_points_per_profile triangles.

    Raises
    ------
    InvalidInputSize, InterpolationRangeError, AllocationFailure
        From the failing stage; context carries `stage` and `index`.
    LoftConfigError
        For invalid overrides.
    """
    config = (config or LoftConfig()).replace(**overrides)
    logger.info(
        "[loft_profiles] %d profiles, %d segments x %d stations (linear=%s, fft=%s)",
        len(profiles) if profiles is not None else 0,
        config.num_points_per_profile,
        config.num_out_pts_along_length,
        config.use_linear_sample_along_length,
        config.use_fft,
    )
    rings = sample_rings(profiles, config)
    surface = assemble_surface(rings)
    logger.info(
        "[loft_profiles] surface: %d points, %d triangles",
        surface.num_points,
        surface.num_triangles,
    )
    return surface
