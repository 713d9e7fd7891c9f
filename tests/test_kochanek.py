import numpy as np
import pytest
from numpy.testing import assert_allclose

from geometry.errors import InvalidInputSize
from geometry.loft.config import LoftConfig
from geometry.splines import (
    CHORD,
    SLOPE,
    KochanekSpline,
    fit_longitudinal_splines,
)


def _spline(values, **kwargs):
    sp = KochanekSpline(**kwargs)
    for t, y in enumerate(values):
        sp.add_point(t, y)
    return sp


def test_linear_data_stays_linear_with_natural_ends():
    sp = _spline([1.0, 3.0, 5.0, 7.0, 9.0])
    t = np.linspace(0.0, 4.0, 17)
    assert_allclose(sp.evaluate(t), 2.0 * t + 1.0, atol=1e-12)


def test_spline_interpolates_control_points():
    values = [0.0, 1.0, 0.0, 2.0, 1.0]
    sp = _spline(values, tension=0.2, bias=-0.1, continuity=0.3)
    assert_allclose(sp.evaluate(np.arange(5.0)), values, atol=1e-12)


def test_evaluate_clamps_to_knot_range():
    sp = _spline([2.0, -1.0, 4.0])
    assert sp.evaluate(-3.0) == pytest.approx(2.0)
    assert sp.evaluate(10.0) == pytest.approx(4.0)


def test_scalar_and_array_evaluation():
    sp = _spline([0.0, 1.0, 4.0])
    assert isinstance(sp.evaluate(0.5), float)
    assert sp.evaluate([0.5, 1.5]).shape == (2,)
    assert sp(1.0) == pytest.approx(1.0)


def test_two_points_give_a_straight_line():
    sp = _spline([1.0, 3.0], left_constraint=SLOPE, left_value=10.0)
    assert sp.evaluate(0.25) == pytest.approx(1.5)
    assert sp.evaluate(0.75) == pytest.approx(2.5)


def test_full_tension_flattens_interior_tangent():
    sp = _spline([0.0, 1.0, 2.0], tension=1.0)
    # natural left end: d0 = (6 - 0) / 4 = 1.5, interior tangent 0
    assert sp.evaluate(0.5) == pytest.approx(0.6875)
    assert sp.evaluate(1.5) == pytest.approx(2.0 - 0.6875)


def test_slope_constraint():
    sp = _spline([0.0, 1.0, 2.0], left_constraint=SLOPE, left_value=0.0)
    assert sp.evaluate(0.5) == pytest.approx(0.375)


def test_chord_constraint_on_linear_data():
    sp = _spline([0.0, 2.0, 4.0], left_constraint=CHORD, right_constraint=CHORD)
    assert_allclose(sp.evaluate([0.5, 1.5]), [1.0, 3.0], atol=1e-12)


def test_non_uniform_knots_reproduce_linear_data():
    sp = KochanekSpline()
    for t in (0.0, 0.5, 2.0, 2.5):
        sp.add_point(t, 3.0 * t)
    t = np.linspace(0.0, 2.5, 11)
    assert_allclose(sp.evaluate(t), 3.0 * t, atol=1e-12)


def test_add_point_sorts_and_replaces():
    sp = KochanekSpline()
    sp.add_point(2.0, 5.0)
    sp.add_point(0.0, 1.0)
    sp.add_point(1.0, 3.0)
    sp.add_point(1.0, 4.0)
    assert sp.num_points == 3
    assert_allclose(sp.knots, [0.0, 1.0, 2.0])
    assert sp.evaluate(1.0) == pytest.approx(4.0)


def test_fit_needs_two_points():
    sp = KochanekSpline()
    sp.add_point(0.0, 1.0)
    with pytest.raises(InvalidInputSize):
        sp.fit()


def test_invalid_constraint_rejected():
    with pytest.raises(ValueError):
        KochanekSpline(left_constraint=7)


def test_fit_longitudinal_splines_over_profile_index(cylinder_profiles):
    splines = fit_longitudinal_splines(cylinder_profiles, 0, LoftConfig(num_points_per_profile=16))
    assert len(splines) == 3
    t = np.linspace(0.0, 2.0, 9)
    assert_allclose(splines[0].evaluate(t), 1.0, atol=1e-12)
    assert_allclose(splines[1].evaluate(t), 0.0, atol=1e-12)
    assert_allclose(splines[2].evaluate(t), t, atol=1e-12)
