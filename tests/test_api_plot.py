import json
import os

import numpy as np
from numpy.testing import assert_allclose

from geometry.api import load_and_prepare, loft, write_loft
from geometry.loft import LoftConfig
from post.plot_loft import plot_profiles, plot_surface
from conftest import make_circle


def _write_profile(path, points):
    np.savetxt(str(path), points, header="x y z")
    return str(path)


def test_loft_accepts_aliases(cylinder_profiles):
    surface = loft(cylinder_profiles, num_out_pts_in_segs=16, NumOutPtsAlongLength=10)
    assert (surface.num_rings, surface.num_segments) == (10, 16)


def test_load_and_prepare_then_loft(tmp_path):
    paths = [
        _write_profile(tmp_path / "p{}.txt".format(k), make_circle(1.0, z=k, n=30, phase=0.2 * k))
        for k in range(3)
    ]
    profiles = load_and_prepare(paths, 20)
    assert len(profiles) == 3
    assert all(p.shape == (20, 3) for p in profiles)
    assert_allclose([p[0, 2] for p in profiles], [0.0, 1.0, 2.0])

    surface = loft(profiles, LoftConfig(num_points_per_profile=20, num_out_pts_along_length=12))
    assert surface.num_points == 240


def test_write_loft_with_sidecar(cylinder_profiles, tmp_path):
    cfg = LoftConfig(num_points_per_profile=16, num_out_pts_along_length=6)
    surface = loft(cylinder_profiles, cfg)
    out = write_loft(surface, str(tmp_path / "loft.vtk"), config=cfg, provenance={"source": "test"})
    assert os.path.isfile(out)
    with open(out + ".json", "r", encoding="utf-8") as f:
        meta = json.load(f)
    assert meta["surface"] == "loft.vtk"
    assert meta["num_triangles"] == surface.num_triangles
    assert meta["loft"]["num_out_pts_along_length"] == 6
    assert meta["provenance"] == {"source": "test"}


def test_write_loft_without_metadata_writes_no_sidecar(cylinder_profiles, tmp_path):
    surface = loft(cylinder_profiles, num_points_per_profile=16)
    out = write_loft(surface, str(tmp_path / "loft.stl"))
    assert os.path.isfile(out)
    assert not os.path.exists(out + ".json")


def test_plots_are_saved(cylinder_profiles, tmp_path):
    surface = loft(cylinder_profiles, num_points_per_profile=16, num_out_pts_along_length=8)

    p1 = tmp_path / "plots" / "profiles.png"
    ax = plot_profiles(cylinder_profiles, show=False, save_path=str(p1))
    assert ax is not None
    assert p1.is_file()

    p2 = tmp_path / "surface.png"
    plot_surface(surface, show=False, save_path=str(p2), profiles=cylinder_profiles)
    assert p2.is_file()


def test_plot_into_existing_axes(cylinder_profiles):
    import matplotlib.pyplot as plt

    fig = plt.figure()
    ax = fig.add_subplot(111, projection="3d")
    surface = loft(cylinder_profiles, num_points_per_profile=16, num_out_pts_along_length=4)
    assert plot_surface(surface, show=False, ax=ax) is ax
    assert plt.fignum_exists(fig.number)
    plt.close(fig)
