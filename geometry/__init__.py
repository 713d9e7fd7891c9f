# -*- coding: utf-8 -*-
# Loftus/geometry/__init__.py

"""
Project: Loftus
Date: 10/18/2026

Modules:
--------
- ops:       curve length, arc-length resampling and FFT smoothing of 3D polylines.
- splines:   Kochanek (tension/bias/continuity) interpolating splines.
- loft:      loft configuration, ring sampling engine and surface assembly.
- profiles:  loading, resampling, orienting and aligning input profile curves.
- errors:    typed exceptions shared by the whole package.
- api:       high-level façade (load/prepare, loft, write).
"""

__all__ = ["ops", "splines", "loft", "profiles", "errors", "api"]
