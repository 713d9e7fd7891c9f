# -*- coding: utf-8 -*-
# Loftus/post/__init__.py

"""
Project: Loftus
Date: 10/18/2026

Modules:
--------
- plot_loft: matplotlib views of input profiles and lofted surfaces.
"""

__all__ = ["plot_loft"]
