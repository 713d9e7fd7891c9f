# -*- coding: utf-8 -*-
# Loftus/geometry/loft/__init__.py

"""
Project: Loftus
Date: 10/18/2026

Loft Subfolder:
---------------
Configuration, per-index sampling engine and tube assembly.

Contents
--------
- config:    LoftConfig (frozen, validated) plus the alias/range schema layer
- engine:    profile checks, per-index spline sampling, optional FFT smoothing, loft_profiles
- assembler: station-major point layout, tube connectivity, LoftedSurface
"""

from .config import LoftConfig, normalize_keys, validate
from .assembler import LoftedSurface, assemble_surface, tube_triangles
from .engine import check_profiles, sample_ring, sample_rings, loft_profiles

__all__ = [
    # config
    "LoftConfig", "normalize_keys", "validate",
    # assembler
    "LoftedSurface", "assemble_surface", "tube_triangles",
    # engine
    "check_profiles", "sample_ring", "sample_rings", "loft_profiles",
]
