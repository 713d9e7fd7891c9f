# -*- coding: utf-8 -*-
# Loftus/post/plot_loft.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Quick 3D views of loft inputs and outputs with matplotlib.

Main Tasks
----------
    1) `plot_profiles`: input profiles as closed 3D polylines, start points marked.
    2) `plot_surface`: lofted surface via `plot_trisurf`, optionally with the input
       profiles overlaid.

Notes
-----
- The backend falls back to Agg when no display is available.
- With `ax` given, the plot is drawn into it and the figure is neither shown nor closed.
"""

import logging
import os
from typing import Optional, Sequence
import numpy as np

__all__ = ["plot_profiles", "plot_surface"]

logger = logging.getLogger(__name__)


def _get_pyplot():
    """
    Import matplotlib.pyplot with a headless-safe backend if needed.

    Raises
    ------
    RuntimeError
        If matplotlib cannot be imported.
    """
    try:
        import matplotlib
        if not os.environ.get("DISPLAY") and not os.environ.get("MPLBACKEND"):
            matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError("matplotlib is required for plotting: {}".format(e)) from e


def _new_axes(plt, ax):
    if ax is not None:
        return ax.figure, ax, False
    fig = plt.figure(figsize=(8, 8))
    return fig, fig.add_subplot(111, projection="3d"), True


def _equal_aspect(ax, pts: np.ndarray) -> None:
    lo, hi = pts.min(axis=0), pts.max(axis=0)
    span = max(float(np.max(hi - lo)), 1e-12)
    mid = 0.5 * (lo + hi)
    ax.set_xlim(mid[0] - span / 2, mid[0] + span / 2)
    ax.set_ylim(mid[1] - span / 2, mid[1] + span / 2)
    ax.set_zlim(mid[2] - span / 2, mid[2] + span / 2)


def _finish(plt, fig, owns_fig: bool, show: bool, save_path: Optional[str]) -> None:
    if save_path:
        folder = os.path.dirname(os.path.abspath(save_path))
        if folder and not os.path.exists(folder):
            os.makedirs(folder, exist_ok=True)
        fig.savefig(save_path, dpi=200, bbox_inches="tight")
        logger.info("[plot_loft] Plot saved to: %s", save_path)
    if not owns_fig:
        return
    backend = plt.get_backend().lower()
    if show and not backend.startswith("agg"):
        plt.show()
    else:
        plt.close(fig)


def _draw_profiles(ax, profiles) -> None:
    for k, prof in enumerate(profiles):
        p = np.asarray(prof, dtype=np.float64)
        closed = np.vstack((p, p[:1]))
        ax.plot(closed[:, 0], closed[:, 1], closed[:, 2], lw=1.2, label="profile {}".format(k))
        ax.scatter(p[0, 0], p[0, 1], p[0, 2], s=18, marker="o")


def plot_profiles(profiles: Sequence[np.ndarray], show: bool = True, save_path: Optional[str] = None, ax=None):
    """
    Plot profiles as closed 3D polylines; the first point of each is marked.

    Parameters
    ----------
    profiles : sequence of (M,3) arrays
        Profiles in sweep order.
    show : bool, optional
        Display the figure (ignored on non-GUI backends).
    save_path : str, optional
        Save the figure (PNG) to this path.
    ax : mpl_toolkits.mplot3d.Axes3D, optional
        Existing 3D axes to draw into.

    Returns
    -------
    Axes3D
        The axes drawn into.
    """
    plt = _get_pyplot()
    fig, ax, owns = _new_axes(plt, ax)
    _draw_profiles(ax, profiles)
    _equal_aspect(ax, np.vstack([np.asarray(p, dtype=np.float64) for p in profiles]))
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_zlabel("Z")
    ax.set_title("Profiles")
    _finish(plt, fig, owns, show, save_path)
    return ax


def plot_surface(
    surface,
    show: bool = True,
    save_path: Optional[str] = None,
    ax=None,
    *,
    profiles: Optional[Sequence[np.ndarray]] = None,
    alpha: float = 0.8,
    cmap: str = "viridis",
    edgecolor: Optional[str] = "k",
    linewidth: float = 0.1,
):
    """
    Plot a lofted surface with `plot_trisurf`.

    Parameters
    ----------
    surface : LoftedSurface
        Surface to draw (points (N,3), triangles (T,3)).
    show, save_path, ax
        As in `plot_profiles`.
    profiles : sequence of (M,3) arrays, optional
        Input profiles to overlay.
    alpha, cmap, edgecolor, linewidth
        Passed to `plot_trisurf`.

    Returns
    -------
    Axes3D
        The axes drawn into.
    """
    plt = _get_pyplot()
    fig, ax, owns = _new_axes(plt, ax)

    pts = np.asarray(surface.points, dtype=np.float64)
    tri = np.asarray(surface.triangles, dtype=np.int64)
    ax.plot_trisurf(
        pts[:, 0], pts[:, 1], pts[:, 2],
        triangles=tri,
        cmap=cmap,
        alpha=alpha,
        edgecolor=edgecolor,
        linewidth=linewidth,
    )
    if profiles is not None:
        _draw_profiles(ax, profiles)

    _equal_aspect(ax, pts)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_zlabel("Z")
    ax.set_title("Lofted surface ({} points, {} triangles)".format(pts.shape[0], tri.shape[0]))
    _finish(plt, fig, owns, show, save_path)
    return ax
