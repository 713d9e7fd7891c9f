# -*- coding: utf-8 -*-
# Loftus/geometry/loft/assembler.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Turn the longitudinal curves sampled by the loft engine into a triangulated tube: a flat
point array plus explicit triangle connectivity.

Main Tasks
----------
    1. Reorder points station-major: flat = station * num_segments + segment.
    2. Emit two triangles per quad between consecutive stations, wrapping the last
       segment back to the first (closed around the cross-section, open along the length).
    3. Wrap the result into `LoftedSurface`.

Notes
-----
- Input shape is (num_segments, num_stations, 3): one longitudinal curve per
  cross-section index, as returned by `sample_rings`.
- Quad (a_j, a_j+1, b_j+1, b_j) with a the current station and b the next one gives the
  triangles (a_j, a_j+1, b_j+1) and (b_j+1, b_j, a_j). For profiles wound
  counter-clockwise about the sweep direction the normals point outwards.
- No end caps are produced.
"""

from dataclasses import dataclass
from typing import Sequence, Union
import numpy as np
from ..errors import InvalidInputSize

__all__ = ["LoftedSurface", "assemble_surface", "tube_triangles"]


@dataclass
class LoftedSurface:
    """
    Triangulated loft output.

    Attributes
    ----------
    points : np.ndarray
        (num_rings * num_segments, 3) float64, station-major.
    triangles : np.ndarray
        (2 * (num_rings - 1) * num_segments, 3) int64 point indices.
    num_rings : int
        Longitudinal stations (num_out_pts_along_length).
    num_segments : int
        Points per station (num_points_per_profile).
    """
    points: np.ndarray
    triangles: np.ndarray
    num_rings: int
    num_segments: int

    @property
    def num_points(self) -> int:
        return int(self.points.shape[0])

    @property
    def num_triangles(self) -> int:
        return int(self.triangles.shape[0])

    def ring(self, k: int) -> np.ndarray:
        """Points of station `k`, shape (num_segments, 3)."""
        start = int(k) * self.num_segments
        return self.points[start:start + self.num_segments]


def tube_triangles(num_rings: int, num_segments: int) -> np.ndarray:
    """
    Connectivity of an open-ended tube with `num_rings` stations of `num_segments` points.

    Returns an (2 * (num_rings - 1) * num_segments, 3) int64 array.
    """
    if num_rings < 1 or num_segments < 1:
        raise InvalidInputSize(
            "Tube needs at least one station and one segment.",
            {"num_rings": int(num_rings), "num_segments": int(num_segments)},
        )
    j = np.arange(num_segments, dtype=np.int64)
    jn = (j + 1) % num_segments
    k = np.arange(num_rings - 1, dtype=np.int64)[:, None]

    a_j = k * num_segments + j
    a_jn = k * num_segments + jn
    b_j = a_j + num_segments
    b_jn = a_jn + num_segments

    tri = np.empty((num_rings - 1, num_segments, 2, 3), dtype=np.int64)
    tri[:, :, 0] = np.stack((a_j, a_jn, b_jn), axis=-1)
    tri[:, :, 1] = np.stack((b_jn, b_j, a_j), axis=-1)
    return tri.reshape(-1, 3)


def assemble_surface(rings: Union[np.ndarray, Sequence[np.ndarray]]) -> LoftedSurface:
    """
    Build a `LoftedSurface` from per-segment longitudinal curves.

    Parameters
    ----------
    rings : array-like
        (num_segments, num_stations, 3) array, or a sequence of (num_stations, 3) arrays
        (one per cross-section index).

    Raises
    ------
    InvalidInputSize
        If the curves differ in length, are not 3D, or there are none.
    """
    if isinstance(rings, np.ndarray):
        arr = rings
    else:
        curves = [np.asarray(r, dtype=np.float64) for r in rings]
        if not curves:
            raise InvalidInputSize("No rings to assemble.")
        sizes = sorted(set(c.shape for c in curves))
        if len(sizes) != 1:
            raise InvalidInputSize("Rings have unequal sizes.", {"shapes": sizes})
        arr = np.stack(curves, axis=0)

    if arr.ndim != 3 or arr.shape[2] != 3 or arr.shape[0] < 1 or arr.shape[1] < 1:
        raise InvalidInputSize(
            "Expected (num_segments, num_stations, 3) rings.", {"shape": tuple(arr.shape)}
        )
    num_segments, num_rings = int(arr.shape[0]), int(arr.shape[1])

    points = np.ascontiguousarray(arr.transpose(1, 0, 2), dtype=np.float64).reshape(-1, 3)
    triangles = tube_triangles(num_rings, num_segments)
    return LoftedSurface(points=points, triangles=triangles, num_rings=num_rings, num_segments=num_segments)
