# -*- coding: utf-8 -*-
# Loftus/mesh/__init__.py

"""
Project: Loftus
Date: 10/18/2026

Modules:
--------
- stats:   inventory, triangle geometry, edge topology and quality of lofted surfaces.
- checks:  validation rules with normalized findings (run_checks).
- io:      meshio-based surface writer/reader.
- export:  summary export to CSV, JSON and Excel.
"""

__all__ = ["stats", "checks", "io", "export"]
