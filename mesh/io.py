# -*- coding: utf-8 -*-
# Loftus/mesh/io.py

"""
Project: Loftus
Date: 10/18/2026

Purpose:
--------
Serialize lofted surfaces with `meshio` so they can be opened in ParaView, mesh generators
or CAD tools, and read triangle surfaces back into a `LoftedSurface`.

Main Tasks:
-----------
    1) `to_meshio`: LoftedSurface → meshio.Mesh with a single "triangle" cell block.
    2) `write_surface`: write by extension (.vtk, .vtu, .stl, .obj, .ply, ...) or an
       explicit meshio `file_format`; parent folders are created.
    3) `read_surface`: meshio file → LoftedSurface (triangle blocks concatenated).

Notes:
------
- STL stores unindexed facets; meshio merges coincident vertices on read, so point order
  does not survive an STL round-trip. VTK/VTU keep it.
"""

import logging
import os
from typing import Optional
import numpy as np
import meshio
from geometry.loft.assembler import LoftedSurface

__all__ = ["to_meshio", "write_surface", "read_surface"]

logger = logging.getLogger(__name__)


def to_meshio(surface: LoftedSurface) -> meshio.Mesh:
    """Wrap points and triangles into a meshio.Mesh."""
    return meshio.Mesh(
        points=np.asarray(surface.points, dtype=np.float64),
        cells=[("triangle", np.asarray(surface.triangles, dtype=np.int64))],
    )


def write_surface(surface: LoftedSurface, path: str, file_format: Optional[str] = None) -> str:
    """
    Write a lofted surface to disk.

    Parameters
    ----------
    surface : LoftedSurface
        Surface to write.
    path : str
        Output path; the extension selects the format unless `file_format` is given.
    file_format : str, optional
        meshio format name (e.g., "vtk", "stl", "obj", "ply").

    Returns
    -------
    str
        Written file path.
    """
    folder = os.path.dirname(os.path.abspath(path))
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)

    meshio.write(str(path), to_meshio(surface), file_format=file_format)
    logger.info("[write_surface] %d points, %d triangles written to %s",
                surface.num_points, surface.num_triangles, path)
    return str(path)


def read_surface(path: str, num_segments: Optional[int] = None) -> LoftedSurface:
    """
    Read a triangle surface into a LoftedSurface.

    Parameters
    ----------
    path : str
        Any meshio-readable file with triangle cells.
    num_segments : int, optional
        Points per ring, when the layout is known; otherwise 0 (unknown layout).

    Raises
    ------
    RuntimeError
        If the file holds no triangle cells.
    """
    m = meshio.read(str(path))
    blocks = [np.asarray(cb.data, dtype=np.int64) for cb in m.cells if cb.type == "triangle"]
    if not blocks:
        raise RuntimeError("[read_surface] No triangle cells found in {}".format(path))

    points = np.asarray(m.points, dtype=np.float64)
    if points.shape[1] == 2:
        points = np.column_stack((points, np.zeros(points.shape[0])))
    triangles = np.concatenate(blocks, axis=0)

    num_segments = int(num_segments or 0)
    num_rings = points.shape[0] // num_segments if num_segments else 0

    logger.info("[read_surface] %d points, %d triangles read from %s", points.shape[0], triangles.shape[0], path)
    return LoftedSurface(points=points, triangles=triangles, num_rings=int(num_rings), num_segments=num_segments)
