import json

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from geometry.loft import LoftConfig, LoftedSurface, loft_profiles
from mesh.checks import DEFAULTS, RULES_ORDER, run_checks
from mesh.export import flatten_summary, write_summary_csv, write_summary_excel, write_summary_json
from mesh.io import read_surface, to_meshio, write_surface
from mesh.stats import edge_topology, inventory, summarize, triangle_areas, triangle_quality


@pytest.fixture
def tube(cylinder_profiles):
    return loft_profiles(cylinder_profiles, LoftConfig(num_points_per_profile=16, num_out_pts_along_length=5))


def _copy(surface):
    return LoftedSurface(surface.points.copy(), surface.triangles.copy(),
                         surface.num_rings, surface.num_segments)


# ---- stats ----

def test_inventory_of_cylinder(tube):
    inv = inventory(tube)
    assert inv["n_points"] == 80
    assert inv["n_triangles"] == 128
    assert (inv["num_rings"], inv["num_segments"]) == (5, 16)
    assert inv["bbox"]["zmin"] == pytest.approx(0.0)
    assert inv["bbox"]["zmax"] == pytest.approx(2.0)
    # side area of a 16-gon prism, radius 1, height 2
    assert inv["area"] == pytest.approx(64.0 * np.sin(np.pi / 16))


def test_triangle_areas_are_positive(tube):
    areas = triangle_areas(tube)
    assert areas.shape == (128,)
    assert np.all(areas > 0.0)


def test_edge_topology_of_open_tube(tube):
    topo = edge_topology(tube)
    # 16 per ring (5 rings), 16 per band along z and 16 diagonals per band (4 bands)
    assert topo["n_edges"] == 5 * 16 + 4 * 16 + 4 * 16
    assert topo["boundary"] == 32
    assert topo["interior"] == topo["n_edges"] - 32
    assert topo["non_manifold"] == 0
    assert topo["consistent"]


def test_triangle_quality_reports_angles(tube):
    q = triangle_quality(tube)
    assert q["n"] == 128
    assert 0.0 < q["min_angle"]["min"] <= 60.0
    assert 60.0 <= q["max_angle"]["max"] < 180.0
    assert q["aspect"]["min"] >= 1.0


def test_summarize_drops_edge_lists(tube):
    s = summarize(tube)
    assert set(s) == {"inventory", "topology", "quality"}
    assert "non_manifold_edges" not in s["topology"]
    assert s["topology"]["n_edges"] > 0


# ---- checks ----

def test_lofted_tube_passes_checks(tube):
    report = run_checks(tube)
    assert report["ok"]
    assert list(report["rules"]) == RULES_ORDER
    assert report["meta"]["n_triangles"] == 128
    assert all(f["ok"] for f in report["rules"].values())


def test_non_finite_points_fail(tube):
    broken = _copy(tube)
    broken.points[3, 1] = np.nan
    report = run_checks(broken)
    assert not report["ok"]
    finding = report["rules"]["non_finite_points"]
    assert finding["count"] == 1
    assert finding["examples"] == [3]


def test_flipped_triangle_fails_orientation(tube):
    broken = _copy(tube)
    broken.triangles[10] = broken.triangles[10][::-1]
    report = run_checks(broken)
    assert not report["ok"]
    assert report["rules"]["inconsistent_orientation"]["count"] >= 1
    assert report["rules"]["non_manifold_edges"]["ok"]


def test_repeated_triangle_is_non_manifold(tube):
    broken = _copy(tube)
    broken.triangles = np.vstack((broken.triangles, broken.triangles[:1]))
    report = run_checks(broken)
    assert not report["ok"]
    assert not report["rules"]["non_manifold_edges"]["ok"]


def test_collapsed_surface_only_warns(circle):
    same = circle(1.0, n=8)
    surface = loft_profiles([same, same.copy()], num_points_per_profile=8, num_out_pts_along_length=4)
    report = run_checks(surface)
    assert report["ok"]
    deg = report["rules"]["degenerate_triangles"]
    assert not deg["ok"]
    assert deg["severity"] == "warn"
    assert deg["count"] == surface.num_triangles


def test_disabled_rule_is_skipped(tube):
    report = run_checks(tube, {"enabled": {"degenerate_triangles": False}})
    assert "degenerate_triangles" not in report["rules"]
    assert DEFAULTS["enabled"]["degenerate_triangles"] is True


# ---- io ----

def test_to_meshio_has_one_triangle_block(tube):
    m = to_meshio(tube)
    assert len(m.cells) == 1
    assert m.cells[0].type == "triangle"
    assert m.cells[0].data.shape == (128, 3)


def test_vtk_round_trip_keeps_layout(tube, tmp_path):
    path = write_surface(tube, str(tmp_path / "out" / "tube.vtk"))
    back = read_surface(path, num_segments=16)
    assert_allclose(back.points, tube.points)
    assert_array_equal(back.triangles, tube.triangles)
    assert (back.num_rings, back.num_segments) == (5, 16)


def test_stl_write_and_read(tube, tmp_path):
    path = write_surface(tube, str(tmp_path / "tube.stl"))
    back = read_surface(path)
    assert back.num_triangles == tube.num_triangles
    assert back.num_segments == 0
    assert_allclose(back.points[:, 2].max(), 2.0)


# ---- export ----

def test_flatten_summary_uses_dot_paths():
    rows = dict(flatten_summary({"a": {"b": np.int64(3), "c": [1, 2]}, "d": "x"}))
    assert rows == {"a.b": 3, "a.c": "[1, 2]", "d": "x"}


def test_export_csv_json_excel(tube, tmp_path):
    summary = summarize(tube)

    csv_path = write_summary_csv(summary, str(tmp_path / "reports" / "summary.csv"))
    df = pd.read_csv(csv_path)
    assert list(df.columns) == ["key", "value"]
    row = df.loc[df["key"] == "inventory.n_points", "value"]
    assert int(row.iloc[0]) == 80

    json_path = write_summary_json(summary, str(tmp_path / "summary.json"))
    with open(json_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    assert data["inventory"]["n_triangles"] == 128

    xlsx_path = write_summary_excel(summary, str(tmp_path / "summary.xlsx"))
    sheet = pd.read_excel(xlsx_path, sheet_name="summary")
    assert "topology.boundary" in set(sheet["key"])
