# -*- coding: utf-8 -*-
# Loftus/mesh/stats.py

"""
Project: Loftus
Date: 10/18/2026

Purpose:
--------
Compute a compact summary of a lofted triangle surface: inventory, per-triangle geometry,
edge topology and triangle quality, returned as plain dictionaries ready for export
(CSV/JSON/Excel) or for the checks in `mesh.checks`.

Main Tasks:
-----------
    1) `inventory`: counts, bounding box, total area, rings/segments.
    2) `triangle_areas` / `triangle_normals`: per-triangle geometry in 3D.
    3) `edge_topology`: boundary / interior / non-manifold edges and orientation
       consistency (an interior edge must be used once in each direction).
    4) `triangle_quality`: min/max angle and aspect ratio statistics.
    5) `summarize`: all of the above in one nested dict.

Notes:
------
- Works on any object with `points (N,3)` and `triangles (T,3)`; `num_rings` and
  `num_segments` are reported when present.
- A lofted tube has 2 * num_segments boundary edges (the two open ends).
"""

from typing import Dict, Tuple
import numpy as np

__all__ = [
    "inventory",
    "triangle_areas",
    "triangle_normals",
    "edge_topology",
    "triangle_quality",
    "summarize",
]


def _stats(x: np.ndarray) -> dict:
    """Min/max/mean/std/p5/p95 of a 1D array (zeros when empty)."""
    if x.size == 0:
        return {"min": 0.0, "max": 0.0, "mean": 0.0, "std": 0.0, "p5": 0.0, "p95": 0.0}
    return {
        "min": float(np.min(x)),
        "max": float(np.max(x)),
        "mean": float(np.mean(x)),
        "std": float(np.std(x)),
        "p5": float(np.percentile(x, 5)),
        "p95": float(np.percentile(x, 95)),
    }


def _corners(surface) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    pts = np.asarray(surface.points, dtype=np.float64)
    tri = np.asarray(surface.triangles, dtype=np.int64)
    return pts[tri[:, 0]], pts[tri[:, 1]], pts[tri[:, 2]]


def triangle_normals(surface, normalize: bool = True) -> np.ndarray:
    """
    Per-triangle normals (right-hand rule on the stored vertex order).

    Degenerate triangles get a zero normal when `normalize` is set.
    """
    a, b, c = _corners(surface)
    n = np.cross(b - a, c - a)
    if normalize:
        length = np.linalg.norm(n, axis=1)
        ok = length > 0.0
        n[ok] /= length[ok, None]
        n[~ok] = 0.0
    return n


def triangle_areas(surface) -> np.ndarray:
    """Per-triangle areas, shape (T,)."""
    return 0.5 * np.linalg.norm(triangle_normals(surface, normalize=False), axis=1)


def inventory(surface) -> dict:
    """
    Global size inventory.

    Returns
    -------
    dict
        {"n_points", "n_triangles", "num_rings", "num_segments",
         "bbox": {"xmin","xmax","ymin","ymax","zmin","zmax"}, "area"}
    """
    pts = np.asarray(surface.points, dtype=np.float64)
    n_pts = int(pts.shape[0])
    n_tri = int(np.asarray(surface.triangles).shape[0])
    if n_pts:
        lo, hi = pts.min(axis=0), pts.max(axis=0)
    else:
        lo = hi = np.zeros(3)
    return {
        "n_points": n_pts,
        "n_triangles": n_tri,
        "num_rings": int(getattr(surface, "num_rings", 0)),
        "num_segments": int(getattr(surface, "num_segments", 0)),
        "bbox": {
            "xmin": float(lo[0]), "xmax": float(hi[0]),
            "ymin": float(lo[1]), "ymax": float(hi[1]),
            "zmin": float(lo[2]), "zmax": float(hi[2]),
        },
        "area": float(triangle_areas(surface).sum()) if n_tri else 0.0,
    }


def _directed_edges(triangles: np.ndarray) -> np.ndarray:
    tri = np.asarray(triangles, dtype=np.int64)
    return np.concatenate((tri[:, [0, 1]], tri[:, [1, 2]], tri[:, [2, 0]]), axis=0)


def edge_topology(surface) -> dict:
    """
    Edge usage counts and orientation consistency.

    Returns
    -------
    dict
        {
          "n_edges": int,            # unique undirected edges
          "boundary": int,           # used by exactly 1 triangle
          "interior": int,           # used by exactly 2 triangles
          "non_manifold": int,       # used by 3 or more triangles
          "inconsistent": int,       # interior edges traversed twice in the same direction
          "non_manifold_edges": [(u, v), ...],
          "inconsistent_edges": [(u, v), ...],
          "consistent": bool,
        }
    """
    directed = _directed_edges(surface.triangles)
    if directed.size == 0:
        return {
            "n_edges": 0, "boundary": 0, "interior": 0, "non_manifold": 0, "inconsistent": 0,
            "non_manifold_edges": [], "inconsistent_edges": [], "consistent": True,
        }

    undirected = np.sort(directed, axis=1)
    uniq, inverse, counts = np.unique(undirected, axis=0, return_inverse=True, return_counts=True)
    inverse = np.asarray(inverse).reshape(-1)

    # forward = stored as (min, max); interior edges need one forward and one backward use
    forward = (directed[:, 0] < directed[:, 1]).astype(np.int64)
    n_forward = np.bincount(inverse, weights=forward, minlength=uniq.shape[0]).astype(np.int64)

    interior = counts == 2
    bad_dir = interior & (n_forward != 1)
    nonman = counts >= 3

    return {
        "n_edges": int(uniq.shape[0]),
        "boundary": int(np.sum(counts == 1)),
        "interior": int(np.sum(interior)),
        "non_manifold": int(np.sum(nonman)),
        "inconsistent": int(np.sum(bad_dir)),
        "non_manifold_edges": [tuple(int(v) for v in e) for e in uniq[nonman]],
        "inconsistent_edges": [tuple(int(v) for v in e) for e in uniq[bad_dir]],
        "consistent": bool(not np.any(bad_dir)),
    }


def triangle_quality(surface) -> dict:
    """
    Triangle shape statistics.

    Returns
    -------
    dict
        {"n": int, "area": {...}, "min_angle": {...}, "max_angle": {...}, "aspect": {...}}
        Angles in degrees; aspect = max edge / min edge (inf for zero-length edges is
        dropped from the stats).
    """
    a, b, c = _corners(surface)
    la = np.linalg.norm(b - c, axis=1)
    lb = np.linalg.norm(c - a, axis=1)
    lc = np.linalg.norm(a - b, axis=1)

    with np.errstate(divide="ignore", invalid="ignore"):
        cos_a = (lb ** 2 + lc ** 2 - la ** 2) / (2.0 * lb * lc)
        cos_b = (la ** 2 + lc ** 2 - lb ** 2) / (2.0 * la * lc)
        cos_c = (la ** 2 + lb ** 2 - lc ** 2) / (2.0 * la * lb)
        ang = np.degrees(np.arccos(np.clip(np.stack((cos_a, cos_b, cos_c), axis=1), -1.0, 1.0)))
        edges = np.stack((la, lb, lc), axis=1)
        aspect = edges.max(axis=1) / edges.min(axis=1)

    ok = np.all(np.isfinite(ang), axis=1)
    asp = aspect[np.isfinite(aspect)]
    return {
        "n": int(a.shape[0]),
        "area": _stats(triangle_areas(surface)),
        "min_angle": _stats(ang[ok].min(axis=1) if np.any(ok) else np.empty(0)),
        "max_angle": _stats(ang[ok].max(axis=1) if np.any(ok) else np.empty(0)),
        "aspect": _stats(asp),
    }


def summarize(surface) -> Dict[str, dict]:
    """
    Nested summary: {"inventory", "topology", "quality"}.

    Edge lists are reduced to counts so the result stays small for export.
    """
    topo = edge_topology(surface)
    topo = {k: v for k, v in topo.items() if k not in ("non_manifold_edges", "inconsistent_edges")}
    return {
        "inventory": inventory(surface),
        "topology": topo,
        "quality": triangle_quality(surface),
    }
