# -*- coding: utf-8 -*-
# Loftus/geometry/ops/__init__.py

"""
Project: Loftus
Date: 10/18/2026

Ops Subfolder:
--------------
Numerical 3D polyline utilities used by the loft engine and the profile preparation
helpers. Keeps stable import paths while organizing functionality into submodules.

Contents
--------
- basic:    Working buffers, (N,3) validation, duplicate removal, curve length and
            cumulative arclength for open/closed curves

- resample: Clamped 1D linear interpolation and arc-length-uniform curve resampling

- spectral: FFT mode truncation, truncated-series reconstruction, curve smoothing and
            the mirrored-ring helper for open curves
"""

from .basic import (
    create_array, as_xyz, drop_consecutive_duplicates,
    curve_length, cumulative_arclength,
)
from .resample import linear_interpolate, linear_interpolate_curve
from .spectral import (
    NUM_INTERP_PTS, is_power_of_two, fft_modes, inverse_fft,
    smooth_curve, mirror_ring,
)

__all__ = [
    # basic
    "create_array", "as_xyz", "drop_consecutive_duplicates",
    "curve_length", "cumulative_arclength",
    # resample
    "linear_interpolate", "linear_interpolate_curve",
    # spectral
    "NUM_INTERP_PTS", "is_power_of_two", "fft_modes", "inverse_fft",
    "smooth_curve", "mirror_ring",
]
