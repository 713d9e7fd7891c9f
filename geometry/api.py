# -*- coding: utf-8 -*-
# Loftus/geometry/api.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Thin, import-only façade for Loftus workflows. Exposes three high-level helpers to
(1) load and prepare a set of profiles, (2) loft a surface through them, and (3) write the
surface plus an optional JSON sidecar with the loft parameters.

Main Tasks
----------
    1. `load_and_prepare` → read profile files, resample, orient and align them.
    2. `loft` → build a LoftConfig from keyword options and loft the profiles.
    3. `write_loft` → write the surface via meshio (+ optional provenance JSON).

Notes
-----
- Detailed behavior lives in `geometry.profiles`, `geometry.loft` and `mesh.io`.
- `loft` accepts the same option names as LoftConfig, including the legacy aliases
  (e.g., NumOutPtsAlongLength, UseFFT).
"""

import json
import os
from typing import Any, Dict, List, Optional, Sequence
import numpy as np

from .loft.config import LoftConfig
from .loft.engine import loft_profiles
from .loft.assembler import LoftedSurface
from .profiles.loaders import load_profiles
from .profiles.prepare import prepare_profiles
from mesh.io import write_surface

__all__ = [
    "load_and_prepare",
    "loft",
    "write_loft",
]


def load_and_prepare(
    paths: Sequence[str],
    num_pts: int,
    *,
    align: Optional[str] = "distance",
    allow_flip: bool = False,
    normal=None,
) -> List[np.ndarray]:
    """
    Load profile files in sweep order and prepare them for lofting.

    Args
    ----
    paths : Sequence[str]
        Profile files (.dat/.txt/.csv/.xyz/.npy).
    num_pts : int
        Points per prepared profile (use the loft's num_points_per_profile).
    align : {"vector", "distance"} or None, optional
        Start-point alignment method (default: "distance").
    allow_flip : bool, optional
        Allow reversed point order during "distance" alignment.
    normal : array-like, optional
        Winding axis; defaults to the first profile's normal.

    Returns
    -------
    list of np.ndarray
        (num_pts, 3) profiles.
    """
    raw = load_profiles(paths)
    return prepare_profiles(raw, num_pts, align=align, normal=normal, allow_flip=allow_flip)


def loft(
    profiles: Sequence,
    config: Optional[LoftConfig] = None,
    **options: Any,
) -> LoftedSurface:
    """
    Loft a surface through `profiles`.

    `options` override `config` (or the defaults) and may use any LoftConfig field name
    or alias.
    """
    return loft_profiles(profiles, config or LoftConfig(), **options)


def write_loft(
    surface: LoftedSurface,
    path: str,
    *,
    file_format: Optional[str] = None,
    config: Optional[LoftConfig] = None,
    provenance: Optional[Dict[str, object]] = None,
) -> str:
    """
    Write the surface and, when `config` or `provenance` is given, a JSON sidecar
    (`<path>.json`) with the loft parameters and surface sizes.

    Returns
    -------
    str
        Path to the written surface file.
    """
    out = write_surface(surface, path, file_format=file_format)
    if config is not None or provenance:
        meta: Dict[str, object] = {
            "surface": os.path.basename(out),
            "num_points": surface.num_points,
            "num_triangles": surface.num_triangles,
            "num_rings": surface.num_rings,
            "num_segments": surface.num_segments,
        }
        if config is not None:
            meta["loft"] = config.as_dict()
        if provenance:
            meta["provenance"] = dict(provenance)
        with open(out + ".json", "w", encoding="utf-8") as f:
            json.dump(meta, f, indent=2, ensure_ascii=False)
    return out
