# -*- coding: utf-8 -*-
# Loftus/geometry/ops/spectral.py

"""
Project: Loftus
Date: 10/18/2026

Purpose
-------
Spectral (Fourier) low-pass smoothing of 3D polylines. Each coordinate channel is
resampled to a uniform power-of-two grid, transformed, truncated to the first
`keep_modes` harmonics and reconstructed by evaluating the truncated Fourier series.

Main Tasks
----------
    1. `fft_modes`: uniform resampling + FFT + mode truncation for one channel.
    2. `inverse_fft`: evaluate a truncated series at evenly spaced parameters.
    3. `smooth_curve`: per-channel smoothing of an open or closed (N,3) curve.
    4. `mirror_ring`: append the reversed ring to emulate periodicity for open curves.

Notes
-----
- Truncation happens in the frequency domain; discarded coefficients are not used in
  the reconstruction at all (no zero-padded inverse transform).
- Coefficients follow the positive-exponent convention
  X_k = sum_n x_n * exp(+2*pi*i*k*n/N), so that
  x(t) ~= Re(c_0) + sum_j Re(c_j) cos(j*w*t) + Im(c_j) sin(j*w*t),
  with c_0 = X_0/N and c_j = 2*X_j/N.
- The series is periodic over one curve length; for open curves the reconstructed end
  points drift towards each other, so callers pin them back (see `pin_endpoints`).
"""

import math
import numpy as np
from .basic import _assert_xyz, create_array, cumulative_arclength
from .resample import linear_interpolate
from ..errors import InvalidInputSize

__all__ = ["NUM_INTERP_PTS", "is_power_of_two", "fft_modes", "inverse_fft", "smooth_curve", "mirror_ring"]

# Uniform samples per channel fed to the transform.
NUM_INTERP_PTS = 2048


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    n = int(n)
    return n > 0 and (n & (n - 1)) == 0


def fft_modes(t: np.ndarray, values: np.ndarray, num_interp_pts: int, keep_modes: int) -> np.ndarray:
    """
    Leading Fourier terms of a sampled channel.

    Parameters
    ----------
    t : np.ndarray
        Non-decreasing sample parameters (e.g., cumulative arclength), shape (N,).
    values : np.ndarray
        Channel values at `t`, shape (N,).
    num_interp_pts : int
        Length of the uniform grid over [t[0], t[-1]) (power of two).
    keep_modes : int
        Number of terms kept (1 <= keep_modes <= num_interp_pts // 2).

    Returns
    -------
    np.ndarray
        complex (keep_modes,) array: [c_0, c_1, ..., c_{keep_modes-1}].
    """
    t = np.asarray(t, dtype=np.float64)
    if t.shape[0] <= 0 or int(num_interp_pts) <= 0 or int(keep_modes) <= 0:
        raise InvalidInputSize(
            "FFT needs samples, a positive grid length and at least one mode.",
            {"n": int(t.shape[0]), "num_interp_pts": int(num_interp_pts), "keep_modes": int(keep_modes)},
        )
    if not is_power_of_two(num_interp_pts):
        raise InvalidInputSize(
            "FFT grid length must be a power of two.", {"num_interp_pts": int(num_interp_pts)}
        )
    if int(keep_modes) > int(num_interp_pts) // 2:
        raise InvalidInputSize(
            "Cannot keep more modes than half the FFT grid.",
            {"num_interp_pts": int(num_interp_pts), "keep_modes": int(keep_modes)},
        )
    n_grid = int(num_interp_pts)

    # Grid spans [t0, T) so that the last sample does not repeat the first period.
    t0 = float(t[0])
    dt = (float(t[-1]) - t0) / n_grid
    signal = linear_interpolate(t, values, t0, dt, n_grid)

    # Real input: conj(fft(x)) is the positive-exponent transform.
    spectrum = np.conj(np.fft.fft(signal))

    terms = np.empty(int(keep_modes), dtype=np.complex128)
    terms[0] = spectrum[0] / n_grid
    terms[1:] = 2.0 * spectrum[1:int(keep_modes)] / n_grid
    return terms


def inverse_fft(terms: np.ndarray, t0: float, dt: float, omega: float, num_out: int) -> np.ndarray:
    """
    Evaluate a truncated Fourier series at t = t0 + k*dt, k = 0..num_out-1.

    Only `terms` are used: the imaginary part of the DC term is ignored and each
    harmonic j contributes Re(c_j) cos(j*omega*t) + Im(c_j) sin(j*omega*t).
    """
    terms = np.asarray(terms, dtype=np.complex128)
    if terms.shape[0] < 1 or int(num_out) <= 0:
        raise InvalidInputSize(
            "Inverse FFT needs at least one term and one output point.",
            {"num_terms": int(terms.shape[0]), "num_out": int(num_out)},
        )
    omega_t = omega * (t0 + dt * np.arange(int(num_out), dtype=np.float64))
    out = np.full(int(num_out), terms[0].real, dtype=np.float64)
    if terms.shape[0] > 1:
        j = np.arange(1, terms.shape[0], dtype=np.float64)
        phase = np.outer(omega_t, j)
        out += np.cos(phase) @ terms[1:].real + np.sin(phase) @ terms[1:].imag
    return out


def smooth_curve(
    points: np.ndarray,
    keep_modes: int,
    num_out_pts: int,
    closed: bool = False,
    num_interp_pts: int = NUM_INTERP_PTS,
    pin_endpoints: bool = False,
) -> np.ndarray:
    """
    Low-pass a 3D polyline by Fourier mode truncation.

    Steps
    -----
    1) Cumulative arclength parametrization (closed curves get the closing sample).
    2) Per channel: uniform resample to `num_interp_pts`, FFT, keep `keep_modes` terms.
    3) Per channel: evaluate the truncated series at `num_out_pts` parameters over one
       period, omega = 2*pi / length; dt = L/(num_out_pts-1) (open) or L/num_out_pts
       (closed).
    4) Optionally pin the first/last output point to the first/last input point.

    Returns
    -------
    np.ndarray
        New (num_out_pts, 3) array.

    Raises
    ------
    InvalidInputSize
        If N <= 1, num_out_pts <= 2, keep_modes < 1, num_interp_pts is not a power of two,
        or the curve has zero length.
    """
    _assert_xyz(points)
    n = points.shape[0]
    if n <= 1 or int(num_out_pts) <= 2:
        raise InvalidInputSize(
            "Curve smoothing needs N > 1 and num_out_pts > 2.",
            {"n": int(n), "num_out_pts": int(num_out_pts)},
        )
    if int(keep_modes) < 1:
        raise InvalidInputSize("keep_modes must be >= 1.", {"keep_modes": int(keep_modes)})
    if not is_power_of_two(num_interp_pts):
        raise InvalidInputSize(
            "FFT grid length must be a power of two.", {"num_interp_pts": int(num_interp_pts)}
        )
    num_out_pts = int(num_out_pts)

    t = cumulative_arclength(points, closed=closed)
    length = float(t[-1])
    if not length > 0.0:
        raise InvalidInputSize("Cannot smooth a zero-length curve.", {"n": int(n)})

    if closed:
        samples = np.vstack((points, points[0]))
        dt = length / num_out_pts
    else:
        samples = points
        dt = length / (num_out_pts - 1)
    omega = 2.0 * math.pi / length

    out = create_array(num_out_pts, 3)
    for c in range(3):
        terms = fft_modes(t, samples[:, c], num_interp_pts, keep_modes)
        out[:, c] = inverse_fft(terms, 0.0, dt, omega, num_out_pts)

    if pin_endpoints:
        out[0] = points[0]
        out[-1] = points[-1]
    return out


def mirror_ring(ring: np.ndarray) -> np.ndarray:
    """
    Return the ring followed by its reverse, shape (2N, 3).

    The mirrored sequence starts and ends on the ring's first point, so a periodic
    transform sees no jump between the two ends of an open curve.
    """
    _assert_xyz(ring)
    return np.vstack((ring, ring[::-1]))
