# -*- coding: utf-8 -*-
# Loftus/geometry/profiles/__init__.py

"""
Project: Loftus
Date: 10/18/2026

Profiles Subfolder:
-------------------
- loaders: read profile point files (.dat/.txt/.csv/.xyz/.npy) into (M,3) arrays
- prepare: closed resampling, winding orientation, start-point alignment
"""

from .loaders import load_profile, load_profiles, SUPPORTED_EXTENSIONS
from .prepare import (
    ALIGN_METHODS, resample_profile, profile_normal, orient_profile,
    align_profile, prepare_profiles,
)

__all__ = [
    "load_profile", "load_profiles", "SUPPORTED_EXTENSIONS",
    "ALIGN_METHODS", "resample_profile", "profile_normal", "orient_profile",
    "align_profile", "prepare_profiles",
]
