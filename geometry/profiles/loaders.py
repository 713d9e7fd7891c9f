# -*- coding: utf-8 -*-
# Loftus/geometry/profiles/loaders.py

"""
Project: Loftus
Date: 10/18/2026

Purpose:
--------
Read profile curves from plain-text point files (`.dat`, `.txt`, `.csv`, `.xyz`) or NumPy `.npy`
files and return them as (M, 3) float64 arrays ready for lofting.

Main Features:
--------------
   1) Handles headers, blank lines, and mixed whitespace.
   2) Supports inline/full-line comments starting with '#' or '//' .
   3) Accepts comma- or whitespace-separated columns.
   4) Accepts 2 columns (x, y; lifted to z = 0) or 3 columns (x, y, z).

Notes:
------
   - This module does no resampling or alignment; see `prepare.py`.
   - A repeated closing point (last == first) is kept as read.
"""

import logging
import os
from typing import Iterable, List
import numpy as np
from ..ops.basic import as_xyz

__all__ = ["load_profile", "load_profiles", "SUPPORTED_EXTENSIONS"]

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".dat", ".txt", ".csv", ".xyz", ".npy")


def _parse_text(filename: str) -> np.ndarray:
    rows: List[List[float]] = []
    width = None
    with open(filename, "r", encoding="utf-8", errors="ignore") as f:
        for line in f:
            line = line.split("#", 1)[0]
            line = line.split("//", 1)[0]
            line = line.strip()
            if not line:
                continue
            # header lines ("x y z", "Profile 1", ...)
            if line[0] not in "0123456789-+.":
                continue
            parts = line.replace(",", " ").split()
            if width is None:
                width = min(len(parts), 3)
                if width < 2:
                    raise RuntimeError("Expected 2 or 3 columns, got {}.".format(len(parts)))
            if len(parts) < width:
                continue
            rows.append([float(p) for p in parts[:width]])

    if not rows:
        raise RuntimeError("No numeric data found after cleaning.")
    return np.asarray(rows, dtype=np.float64)


def load_profile(path: str) -> np.ndarray:
    """
    Load one profile curve into an (M, 3) float64 array.

    Parameters
    ----------
    path : str
        `.dat`/`.txt`/`.csv`/`.xyz` text file or `.npy` array file.

    Returns
    -------
    np.ndarray
        (M, 3) points; 2-column data gets z = 0.

    Raises
    ------
    RuntimeError
        If the file is missing, has an unsupported extension, cannot be parsed, or does
        not hold 2 or 3 finite columns.
    """
    ext = os.path.splitext(str(path))[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise RuntimeError(
            "[load_profile] Unsupported extension '{}' for {} (supported: {})".format(
                ext, path, ", ".join(SUPPORTED_EXTENSIONS)
            )
        )
    try:
        raw = np.load(path) if ext == ".npy" else _parse_text(str(path))
        pts = as_xyz(raw)
    except Exception as e:
        raise RuntimeError("[load_profile] Failed to load profile from {}: {}".format(path, e)) from e

    logger.debug("[load_profile] %s: %d points", path, pts.shape[0])
    return pts


def load_profiles(paths: Iterable[str]) -> List[np.ndarray]:
    """Load several profiles in the given (sweep) order."""
    profiles = [load_profile(p) for p in paths]
    logger.info("[load_profiles] Loaded %d profiles", len(profiles))
    return profiles
