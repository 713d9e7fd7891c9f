import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from geometry.errors import InvalidInputSize, LoftConfigError, LoftError
from geometry.loft import (
    LoftConfig,
    LoftedSurface,
    assemble_surface,
    loft_profiles,
    sample_rings,
    tube_triangles,
)
from mesh.stats import edge_topology, triangle_normals
from conftest import make_circle


def _cylinder_config(**kw):
    return LoftConfig(num_points_per_profile=16).replace(**kw)


def test_two_squares_give_rectangular_tube(square):
    profiles = [square(1.0, z=0.0), square(1.0, z=1.0)]
    surface = loft_profiles(
        profiles,
        num_points_per_profile=4,
        num_out_pts_along_length=2,
        use_linear_sample_along_length=False,
        use_fft=False,
    )
    assert surface.points.shape == (8, 3)
    assert surface.triangles.shape == (8, 3)
    assert_allclose(surface.ring(0), profiles[0])
    assert_allclose(surface.ring(1), profiles[1])
    assert_array_equal(surface.triangles, [
        [0, 1, 5], [5, 4, 0],
        [1, 2, 6], [6, 5, 1],
        [2, 3, 7], [7, 6, 2],
        [3, 0, 4], [4, 7, 3],
    ])


@pytest.mark.parametrize("kw", [
    {},
    {"use_linear_sample_along_length": False},
    {"use_fft": True, "num_modes": 8},
    {"num_out_pts_along_length": 7, "tension": 0.3},
])
def test_point_and_triangle_counts(cylinder_profiles, kw):
    cfg = _cylinder_config(**kw)
    surface = loft_profiles(cylinder_profiles, cfg)
    n_out, n_seg = cfg.num_out_pts_along_length, cfg.num_points_per_profile
    assert surface.points.shape == (n_out * n_seg, 3)
    assert surface.triangles.shape == (2 * (n_out - 1) * n_seg, 3)
    assert surface.triangles.dtype == np.int64
    assert (surface.num_rings, surface.num_segments) == (n_out, n_seg)


def test_three_circles_give_a_cylinder(cylinder_profiles):
    surface = loft_profiles(cylinder_profiles, _cylinder_config())
    radius = np.linalg.norm(surface.points[:, :2], axis=1)
    assert_allclose(radius, 1.0, atol=1e-9)
    n_out = surface.num_rings
    for k in (0, 1, n_out // 2, n_out - 1):
        assert_allclose(surface.ring(k)[:, 2], 2.0 * k / (n_out - 1), atol=1e-9)
        assert_allclose(surface.ring(k)[:, :2], cylinder_profiles[0][:, :2], atol=1e-9)


def test_direct_sampling_uses_profile_parameter_range(cylinder_profiles):
    surface = loft_profiles(cylinder_profiles, _cylinder_config(
        use_linear_sample_along_length=False, num_out_pts_along_length=5))
    assert_allclose(surface.points[::16, 2], [0.0, 0.5, 1.0, 1.5, 2.0], atol=1e-12)


def test_fft_smoothing_keeps_cylinder_and_end_rings(cylinder_profiles):
    surface = loft_profiles(cylinder_profiles, _cylinder_config(use_fft=True, num_modes=10))
    assert np.all(np.isfinite(surface.points))
    radius = np.linalg.norm(surface.points[:, :2], axis=1)
    assert_allclose(radius, 1.0, atol=1e-9)
    assert_allclose(surface.ring(0), cylinder_profiles[0], atol=1e-9)
    assert_allclose(surface.ring(surface.num_rings - 1), cylinder_profiles[-1], atol=1e-9)


def test_sample_rings_shape(cylinder_profiles):
    rings = sample_rings(cylinder_profiles, _cylinder_config(num_out_pts_along_length=9))
    assert rings.shape == (16, 9, 3)


def test_loft_is_deterministic():
    profiles = [make_circle(1.0 + 0.2 * k, z=k, n=24, center=(0.1 * k, 0.0)) for k in range(4)]
    cfg = LoftConfig(num_points_per_profile=24, use_fft=True, num_modes=6, tension=0.1)
    a = loft_profiles(profiles, cfg)
    b = loft_profiles(profiles, cfg)
    assert_array_equal(a.points, b.points)
    assert_array_equal(a.triangles, b.triangles)


def test_single_profile_raises(circle):
    with pytest.raises(InvalidInputSize):
        loft_profiles([circle(1.0)], num_points_per_profile=16)


def test_short_profile_raises(cylinder_profiles):
    with pytest.raises(InvalidInputSize) as exc:
        loft_profiles(cylinder_profiles)  # default uses 30 points per profile
    assert exc.value.context["profile"] == 0


def test_only_leading_points_are_used(circle):
    profiles = [circle(1.0, z=0.0, n=20), circle(1.0, z=1.0, n=20)]
    surface = loft_profiles(profiles, num_points_per_profile=5)
    assert surface.num_segments == 5
    assert_allclose(surface.ring(0), profiles[0][:5], atol=1e-12)


def test_stage_failure_reports_stage_and_index(circle):
    same = circle(1.0, z=0.0, n=16)
    with pytest.raises(InvalidInputSize) as exc:
        loft_profiles([same, same.copy()], num_points_per_profile=16, use_fft=True)
    err = exc.value
    assert err.stage == "smooth"
    assert err.context["index"] == 0
    assert isinstance(err.__cause__, LoftError)
    assert "stage='smooth'" in str(err)


def test_invalid_override_raises(cylinder_profiles):
    with pytest.raises(LoftConfigError):
        loft_profiles(cylinder_profiles, _cylinder_config(), bogus=1)


def test_winding_is_consistent_and_normals_point_outwards(cylinder_profiles):
    surface = loft_profiles(cylinder_profiles, _cylinder_config(num_out_pts_along_length=6))
    topo = edge_topology(surface)
    assert topo["consistent"]
    assert topo["non_manifold"] == 0
    assert topo["boundary"] == 2 * surface.num_segments

    normals = triangle_normals(surface)
    centroids = surface.points[surface.triangles].mean(axis=1)
    radial = centroids.copy()
    radial[:, 2] = 0.0
    assert np.all(np.sum(normals * radial, axis=1) > 0.0)


# ---- assembler ----

def test_tube_triangles_wrap_last_segment():
    tri = tube_triangles(2, 3)
    assert_array_equal(tri[-2:], [[2, 0, 3], [3, 5, 2]])


def test_assemble_surface_from_sequence():
    curves = [np.column_stack((np.full(4, j), np.zeros(4), np.arange(4.0))) for j in range(3)]
    surface = assemble_surface(curves)
    assert isinstance(surface, LoftedSurface)
    assert (surface.num_rings, surface.num_segments) == (4, 3)
    assert_allclose(surface.ring(2)[:, 0], [0.0, 1.0, 2.0])
    assert_allclose(surface.ring(2)[:, 2], 2.0)


def test_assemble_surface_rejects_unequal_rings():
    with pytest.raises(InvalidInputSize):
        assemble_surface([np.zeros((3, 3)), np.zeros((4, 3))])


def test_assemble_surface_rejects_bad_shape():
    with pytest.raises(InvalidInputSize):
        assemble_surface(np.zeros((3, 4, 2)))
