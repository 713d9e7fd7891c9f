# -*- coding: utf-8 -*-
# Loftus/geometry/splines/__init__.py

"""
Project: Loftus
Date: 10/18/2026

Splines Subfolder:
------------------
- kochanek: interpolating Kochanek (tension/bias/continuity) spline and the x/y/z
            longitudinal spline builder used by the loft engine
"""

from .kochanek import (
    CHORD, SLOPE, SECOND_DERIV, SECOND_RATIO,
    KochanekSpline, fit_longitudinal_splines,
)

__all__ = [
    "CHORD", "SLOPE", "SECOND_DERIV", "SECOND_RATIO",
    "KochanekSpline", "fit_longitudinal_splines",
]
