import numpy as np
import pytest
from numpy.testing import assert_allclose

from geometry.errors import InvalidInputSize
from geometry.ops import (
    NUM_INTERP_PTS,
    fft_modes,
    inverse_fft,
    is_power_of_two,
    linear_interpolate_curve,
    mirror_ring,
    smooth_curve,
)


def test_is_power_of_two():
    assert is_power_of_two(1)
    assert is_power_of_two(2048)
    assert not is_power_of_two(0)
    assert not is_power_of_two(1000)


def test_fft_modes_of_constant_signal_is_dc_only():
    t = np.linspace(0.0, 1.0, 9)
    terms = fft_modes(t, np.full(9, 3.5), 64, 8)
    assert terms.shape == (8,)
    assert terms[0].real == pytest.approx(3.5)
    assert_allclose(np.abs(terms[1:]), 0.0, atol=1e-12)


def test_fft_modes_recovers_a_single_harmonic():
    # x(t) = cos(2 pi t) + 0.5 sin(4 pi t) over one period
    n = 257
    t = np.linspace(0.0, 1.0, n)
    x = np.cos(2 * np.pi * t) + 0.5 * np.sin(4 * np.pi * t)
    terms = fft_modes(t, x, 1024, 4)
    assert terms[1].real == pytest.approx(1.0, abs=1e-3)
    assert terms[1].imag == pytest.approx(0.0, abs=1e-3)
    assert terms[2].real == pytest.approx(0.0, abs=1e-3)
    assert terms[2].imag == pytest.approx(0.5, abs=1e-3)


def test_inverse_fft_evaluates_series():
    terms = np.array([1.0 + 0.0j, 2.0 + 0.0j, 0.0 + 3.0j])
    omega = 2.0 * np.pi
    out = inverse_fft(terms, 0.0, 0.25, omega, 4)
    t = 0.25 * np.arange(4)
    expected = 1.0 + 2.0 * np.cos(omega * t) + 3.0 * np.sin(2 * omega * t)
    assert_allclose(out, expected, atol=1e-12)


def test_fft_modes_rejects_non_power_of_two():
    with pytest.raises(InvalidInputSize):
        fft_modes(np.linspace(0, 1, 5), np.zeros(5), 1000, 4)


def test_fft_modes_rejects_too_many_modes():
    with pytest.raises(InvalidInputSize):
        fft_modes(np.linspace(0, 1, 5), np.zeros(5), 64, 33)


def test_smooth_curve_without_truncation_matches_linear_resample(circle):
    pts = circle(1.0, z=0.5, n=64)
    smoothed = smooth_curve(pts, NUM_INTERP_PTS // 2, 32, closed=True)
    reference = linear_interpolate_curve(pts, 32, closed=True)
    assert_allclose(smoothed, reference, atol=1e-3)


def test_smooth_curve_with_one_mode_is_constant(circle):
    pts = circle(2.0, z=2.0, n=40, center=(1.0, -1.0))
    out = smooth_curve(pts, 1, 25, closed=True)
    assert out.shape == (25, 3)
    assert_allclose(out, np.tile(out[0], (25, 1)), atol=1e-12)
    assert_allclose(out[0], [1.0, -1.0, 2.0], atol=1e-4)


def test_smooth_curve_pins_end_points():
    t = np.linspace(0.0, 1.0, 30)
    pts = np.column_stack((t, t ** 2, np.zeros_like(t)))
    out = smooth_curve(pts, 3, 20, pin_endpoints=True)
    assert_allclose(out[0], pts[0])
    assert_allclose(out[-1], pts[-1])


def test_smooth_curve_preconditions():
    pts = np.eye(3)
    with pytest.raises(InvalidInputSize):
        smooth_curve(pts, 0, 10)
    with pytest.raises(InvalidInputSize):
        smooth_curve(pts, 2, 2)
    with pytest.raises(InvalidInputSize):
        smooth_curve(pts, 2, 10, num_interp_pts=100)
    with pytest.raises(InvalidInputSize):
        smooth_curve(np.zeros((4, 3)), 2, 10)


def test_mirror_ring_doubles_and_returns_to_start():
    ring = np.column_stack((np.arange(5.0), np.zeros(5), np.zeros(5)))
    doubled = mirror_ring(ring)
    assert doubled.shape == (10, 3)
    assert_allclose(doubled[0], doubled[-1])
    assert_allclose(doubled[4], doubled[5])
